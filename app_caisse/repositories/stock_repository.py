# ==============================================================================
# REPOSITORIO DE STOCK
# ==============================================================================
# Encapsula todo el acceso a stock.json
# Una fila por producto: {"Shampoing": {"product": "Shampoing", "quantity": 3}}
# Las filas se crean en el primer ajuste; la box nunca tiene fila.
# ==============================================================================

import os
from typing import List, Optional

from app_caisse.models import Product, StockEntry
from app_caisse.repositories.base import DictRepository


class StockRepository(DictRepository):
    """Repositorio del stock por producto."""

    def __init__(self, base_path: str):
        file_path = os.path.join(base_path, 'stock.json')
        super().__init__(file_path)

    def get_all(self) -> List[StockEntry]:
        return [StockEntry.from_dict(raw) for raw in self._read_dict().values()]

    def get_by_key(self, product: Product) -> Optional[StockEntry]:
        raw = self._get_raw(product.value)
        return StockEntry.from_dict(raw) if raw else None

    def insert(self, entry: StockEntry) -> None:
        """
        Raises:
            KeyError: Si el producto ya tiene fila
        """
        if self._contains(entry.product.value):
            raise KeyError(f"Stock for {entry.product.value} already exists")
        self._put_raw(entry.product.value, entry.to_dict())

    def update(self, entry: StockEntry) -> bool:
        if not self._contains(entry.product.value):
            return False
        self._put_raw(entry.product.value, entry.to_dict())
        return True

    def delete(self, product: Product) -> Optional[StockEntry]:
        raw = self._pop_raw(product.value)
        return StockEntry.from_dict(raw) if raw else None
