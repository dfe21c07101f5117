# ==============================================================================
# REPOSITORIOS EN MEMORIA
# ==============================================================================
# Implementan las mismas interfaces que los repositorios JSON.
# Usados por los tests y para embeber el motor sin disco.
# ==============================================================================

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from app_caisse.models import PriceEntry, Product, SaleRecord


class InMemorySalesRepository:
    """Ventas en un diccionario {id: SaleRecord}."""

    def __init__(self, sales: Iterable[SaleRecord] = ()):
        self._rows: Dict[str, SaleRecord] = {}
        for sale in sales:
            self.insert(sale)

    def get_all(self, newest_first: bool = False) -> List[SaleRecord]:
        return sorted(self._rows.values(), key=lambda s: s.created_at, reverse=newest_first)

    def get_by_key(self, sale_id: str) -> Optional[SaleRecord]:
        return self._rows.get(sale_id)

    def insert(self, sale: SaleRecord) -> None:
        if sale.id in self._rows:
            raise KeyError(f"Sale {sale.id} already exists")
        self._rows[sale.id] = sale

    def update(self, sale: SaleRecord) -> bool:
        if sale.id not in self._rows:
            return False
        self._rows[sale.id] = sale
        return True

    def delete(self, sale_id: str) -> Optional[SaleRecord]:
        return self._rows.pop(sale_id, None)

    def clear(self) -> None:
        self._rows.clear()


class _ProductKeyedRepository:
    """Tabla en memoria con clave producto. Guarda copias para aislar al llamador."""

    def __init__(self, entries: Iterable = ()):
        self._rows: Dict[Product, object] = {}
        for entry in entries:
            self.insert(entry)

    def get_all(self) -> List:
        order = list(Product)
        return [replace(self._rows[p]) for p in sorted(self._rows, key=order.index)]

    def get_by_key(self, product: Product):
        row = self._rows.get(product)
        return replace(row) if row is not None else None

    def insert(self, entry) -> None:
        if entry.product in self._rows:
            raise KeyError(f"{entry.product.value} already exists")
        self._rows[entry.product] = replace(entry)

    def update(self, entry) -> bool:
        if entry.product not in self._rows:
            return False
        self._rows[entry.product] = replace(entry)
        return True

    def delete(self, product: Product):
        return self._rows.pop(product, None)

    def clear(self) -> None:
        self._rows.clear()


class InMemoryPriceRepository(_ProductKeyedRepository):
    """Tabla de precios en memoria."""

    def replace_all(self, entries: Iterable[PriceEntry]) -> None:
        self._rows = {e.product: replace(e) for e in entries}


class InMemoryStockRepository(_ProductKeyedRepository):
    """Stock en memoria. Las filas son StockEntry."""
