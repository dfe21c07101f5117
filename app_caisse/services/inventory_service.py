# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Contabilidad del stock disparada por ventas y por ediciones manuales.
#
# REGLAS:
# - El stock nunca baja de 0 (los ajustes se recortan en 0).
# - Un stock insuficiente NUNCA bloquea una venta: solo se registra para
#   que una persona lo revise en la pantalla de Stock.
# - La box no tiene stock propio: cada unidad vendida descuenta una unidad
#   de cada producto de BUNDLE_COMPOSITION.
# ==============================================================================

import logging
from typing import Dict, List

from app_caisse.models import (
    BUNDLE_COMPOSITION,
    Product,
    SaleRecord,
    STOCK_PRODUCTS,
    StockEntry,
)
from app_caisse.repositories.interfaces import IStockRepository


logger = logging.getLogger(__name__)

# Signo del efecto de una venta sobre el stock
SALE_CREATED = 1
SALE_DELETED = -1


class InventoryAdjuster:
    """
    Servicio de ajustes de stock.

    Responsabilidades:
    - Aplicar deltas (con expansión de productos compuestos)
    - Aplicar / revertir el efecto de una venta
    - Edición manual y reinicio del stock
    """

    def __init__(self, stock_repo: IStockRepository, low_stock_threshold: int = 5):
        """
        Args:
            stock_repo: Repositorio de stock
            low_stock_threshold: Debajo de este valor el stock es "low"
        """
        self.stock_repo = stock_repo
        self.low_stock_threshold = low_stock_threshold

    # =========================================================================
    # AJUSTES
    # =========================================================================

    def apply_delta(self, product: Product, delta: int) -> None:
        """
        Suma delta al stock de un producto.

        Si el producto es compuesto, el mismo delta se aplica a cada uno de
        sus componentes por separado.
        """
        components = BUNDLE_COMPOSITION.get(product)
        if components is not None:
            for component in components:
                self._apply_single(component, delta)
            return
        self._apply_single(product, delta)

    def _apply_single(self, product: Product, delta: int) -> int:
        """Ajusta una fila; una fila inexistente cuenta como 0."""
        current = self.stock_repo.get_by_key(product)
        before = current.quantity if current else 0
        after = max(0, before + delta)

        if before + delta < 0:
            logger.warning(
                "Stock insuficiente para %s: %d %+d (se deja en 0)",
                product.value, before, delta
            )

        entry = StockEntry(product, after)
        if current is None:
            self.stock_repo.insert(entry)
        else:
            self.stock_repo.update(entry)
        return after

    def apply_sale_effect(self, sale: SaleRecord, sign: int) -> None:
        """
        Aplica el efecto de una venta sobre el stock.

        Args:
            sale: Venta creada o eliminada
            sign: SALE_CREATED (+1, descuenta) o SALE_DELETED (-1, repone)
        """
        if sign not in (SALE_CREATED, SALE_DELETED):
            raise ValueError("sign must be +1 or -1")
        self.apply_delta(sale.product, -sign * sale.quantity)

    # =========================================================================
    # EDICIÓN MANUAL (pantalla de Stock)
    # =========================================================================

    def set_quantity(self, product: Product, quantity: int) -> StockEntry:
        """
        Fija el stock de un producto (recortado en 0).

        Raises:
            ValueError: Si el producto es compuesto
        """
        if product in BUNDLE_COMPOSITION:
            raise ValueError(f"{product.value} has no stock of its own")

        entry = StockEntry(product, quantity)
        if not self.stock_repo.update(entry):
            self.stock_repo.insert(entry)
        logger.info("Stock de %s fijado en %d", product.value, entry.quantity)
        return entry

    def get_quantity(self, product: Product) -> int:
        entry = self.stock_repo.get_by_key(product)
        return entry.quantity if entry else 0

    def reset_all(self) -> None:
        """Elimina todas las filas: todos los productos quedan en 0."""
        self.stock_repo.clear()
        logger.info("Stock reiniciado")

    def levels(self) -> List[StockEntry]:
        """Una entrada por producto con stock propio (0 si no hay fila)."""
        existing: Dict[Product, StockEntry] = {
            e.product: e for e in self.stock_repo.get_all()
        }
        return [existing.get(p, StockEntry(p, 0)) for p in STOCK_PRODUCTS]

    def level_report(self) -> List[Dict]:
        """Niveles listos para mostrar: cantidad y estado (empty/low/ok)."""
        return [
            {
                'product': e.product.value,
                'quantity': e.quantity,
                'level': e.level(self.low_stock_threshold),
            }
            for e in self.levels()
        ]
