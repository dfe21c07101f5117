# ==============================================================================
# REPOSITORIO DE PRECIOS
# ==============================================================================
# Encapsula todo el acceso a prices.json
# Una fila por producto: {"Shampoing": {"product": ..., "eur": ..., "fcfa": ...}}
# ==============================================================================

import os
from typing import Iterable, List, Optional

from app_caisse.models import PriceEntry, Product
from app_caisse.repositories.base import DictRepository


class PriceRepository(DictRepository):
    """
    Repositorio de la tabla de precios.

    Un precio null en el JSON significa "no configurado".
    """

    def __init__(self, base_path: str):
        file_path = os.path.join(base_path, 'prices.json')
        super().__init__(file_path)

    def get_all(self) -> List[PriceEntry]:
        """Toda la tabla, en el orden del catálogo."""
        data = self._read_dict()
        entries = [PriceEntry.from_dict(raw) for raw in data.values()]
        order = list(Product)
        entries.sort(key=lambda e: order.index(e.product))
        return entries

    def get_by_key(self, product: Product) -> Optional[PriceEntry]:
        raw = self._get_raw(product.value)
        return PriceEntry.from_dict(raw) if raw else None

    def insert(self, entry: PriceEntry) -> None:
        """
        Raises:
            KeyError: Si el producto ya tiene fila
        """
        if self._contains(entry.product.value):
            raise KeyError(f"Price for {entry.product.value} already exists")
        self._put_raw(entry.product.value, entry.to_dict())

    def update(self, entry: PriceEntry) -> bool:
        if not self._contains(entry.product.value):
            return False
        self._put_raw(entry.product.value, entry.to_dict())
        return True

    def delete(self, product: Product) -> Optional[PriceEntry]:
        raw = self._pop_raw(product.value)
        return PriceEntry.from_dict(raw) if raw else None

    def replace_all(self, entries: Iterable[PriceEntry]) -> None:
        """Reemplaza la tabla completa en una sola escritura."""
        self._write_raw({e.product.value: e.to_dict() for e in entries})
