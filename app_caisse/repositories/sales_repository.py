# ==============================================================================
# REPOSITORIO DE VENTAS
# ==============================================================================
# Encapsula todo el acceso a sales.json
# Las ventas se almacenan como lista: [{venta1}, {venta2}, ...]
# ==============================================================================

import os
from typing import List, Optional

from app_caisse.models import SaleRecord
from app_caisse.repositories.base import ListRepository


class SalesRepository(ListRepository):
    """
    Repositorio para gestión de ventas.

    Formato de datos en sales.json:
    [
        {
            "id": "5f0c...",
            "created_at": "2024-06-01T10:00:00+00:00",
            "product": "Shampoing",
            "quantity": 2,
            "payment_method": "Revolut",
            "currency": "EUR",
            "unit_price": 21.5,
            "total": 43.0,
            "amount_tendered": 43.0,
            "change_due": 0.0,
            "box_pricing": null
        }
    ]
    """

    def __init__(self, base_path: str):
        """
        Inicializa el repositorio de ventas.

        Args:
            base_path: Carpeta de datos
        """
        file_path = os.path.join(base_path, 'sales.json')
        super().__init__(file_path)

    def get_all(self, newest_first: bool = False) -> List[SaleRecord]:
        """
        Carga todas las ventas ordenadas por fecha de creación.

        Args:
            newest_first: True para la más reciente primero

        Returns:
            Lista de ventas
        """
        sales = [SaleRecord.from_dict(raw) for raw in self._read_list()]
        sales.sort(key=lambda s: s.created_at, reverse=newest_first)
        return sales

    def get_by_key(self, sale_id: str) -> Optional[SaleRecord]:
        """
        Busca una venta por su id.

        Returns:
            La venta o None
        """
        raw = self._find_raw('id', sale_id)
        return SaleRecord.from_dict(raw) if raw else None

    def insert(self, sale: SaleRecord) -> None:
        """
        Agrega una venta nueva.

        Raises:
            KeyError: Si ya existe una venta con ese id
        """
        if self._find_raw('id', sale.id) is not None:
            raise KeyError(f"Sale {sale.id} already exists")
        self._append_raw(sale.to_dict())

    def update(self, sale: SaleRecord) -> bool:
        """Reemplaza una venta existente. True si existía."""
        return self._replace_where('id', sale.id, sale.to_dict())

    def delete(self, sale_id: str) -> Optional[SaleRecord]:
        """Elimina una venta y la retorna, o None si no existía."""
        raw = self._remove_where('id', sale_id)
        return SaleRecord.from_dict(raw) if raw else None
