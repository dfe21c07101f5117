# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con ventas:
#   create_sale   → fábrica pura: valida, pone precio y construye el registro
#   SalesService  → orquesta fábrica + persistencia + stock
#
# ORDEN DE EFECTOS:
# Primero se valida TODO (sin tocar nada). Solo con una venta válida se
# guarda el registro y después se ajusta el stock.
# ==============================================================================

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from app_caisse.models import (
    BoxPricing,
    CASH_METHOD,
    InvalidQuantity,
    PaymentMethod,
    PriceMissing,
    PriceNotConfigured,
    Product,
    SaleRecord,
    SaleRejection,
    currency_for,
    is_bundle,
)
from app_caisse.performance_logger import profile_function
from app_caisse.repositories.interfaces import ISalesRepository
from app_caisse.services.inventory_service import (
    InventoryAdjuster,
    SALE_CREATED,
    SALE_DELETED,
)
from app_caisse.services.pricing_service import (
    PriceTable,
    PricingService,
    requires_explicit_price,
    resolve_price,
)


logger = logging.getLogger(__name__)


def _new_sale_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# FÁBRICA DE VENTAS (pura, sin I/O)
# =============================================================================

def create_sale(
    product: Product,
    quantity: int,
    payment_method: PaymentMethod,
    amount_tendered: Optional[float],
    price_table: PriceTable,
    box_pricing: Optional[BoxPricing] = None,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = _new_sale_id
) -> Union[SaleRecord, SaleRejection]:
    """
    Valida una venta y construye su registro.

    El primer error encontrado gana:
    1. cantidad < 1                      → InvalidQuantity
    2. divisa según el método de pago
    3. precio no resoluble               → PriceNotConfigured / PriceMissing
    4. total = precio unitario * cantidad
    5. vuelto = monto entregado - total

    Fuera de Espèces no hay vuelto: el monto entregado se fija en el total
    sin importar lo que pase el llamador. En Espèces, None equivale a pagar
    el monto exacto.

    Args:
        product: Producto vendido
        quantity: Cantidad
        payment_method: Método de pago
        amount_tendered: Monto entregado por el cliente
        price_table: Tabla de precios vigente
        box_pricing: Tarifa de box (se ignora para otros productos)
        now: Fecha de creación (por defecto, ahora en UTC)
        id_factory: Generador de ids

    Returns:
        SaleRecord o el SaleRejection correspondiente
    """
    if quantity < 1:
        return InvalidQuantity(quantity)

    currency = currency_for(payment_method)

    unit_price = resolve_price(product, currency, price_table)
    if unit_price is None:
        if requires_explicit_price(product):
            return PriceNotConfigured(product)
        return PriceMissing(product, currency)

    total = unit_price * quantity

    if payment_method != CASH_METHOD or amount_tendered is None:
        amount_tendered = total
    change_due = amount_tendered - total

    return SaleRecord(
        id=id_factory(),
        created_at=now or datetime.now(timezone.utc),
        product=product,
        quantity=quantity,
        payment_method=payment_method,
        currency=currency,
        unit_price=unit_price,
        total=total,
        amount_tendered=amount_tendered,
        change_due=change_due,
        box_pricing=box_pricing if is_bundle(product) else None,
    )


# =============================================================================
# SERVICIO
# =============================================================================

class SalesService:
    """
    Servicio para gestión de ventas.

    Responsabilidades:
    - Registrar ventas (fábrica + persistencia + stock)
    - Eliminar ventas revirtiendo el stock
    - Reiniciar la jornada
    - Duplicar e importar ventas
    """

    def __init__(
        self,
        sales_repo: ISalesRepository,
        pricing_service: PricingService,
        inventory: InventoryAdjuster
    ):
        """
        Args:
            sales_repo: Repositorio de ventas
            pricing_service: Servicio de precios (fuente de la tabla)
            inventory: Ajustador de stock
        """
        self.sales_repo = sales_repo
        self.pricing_service = pricing_service
        self.inventory = inventory

    # =========================================================================
    # CREACIÓN Y ELIMINACIÓN
    # =========================================================================

    @profile_function(name="Registrar venta")
    def register_sale(
        self,
        product: Product,
        quantity: int,
        payment_method: PaymentMethod,
        amount_tendered: Optional[float] = None,
        box_pricing: Optional[BoxPricing] = None
    ) -> Dict[str, Any]:
        """
        Crea, guarda y descuenta del stock una venta.

        Returns:
            Dict con resultado:
            - ok: True/False
            - sale: SaleRecord creado (si ok)
            - error / code / rejection: detalle del rechazo (si no ok)
        """
        result = create_sale(
            product,
            quantity,
            payment_method,
            amount_tendered,
            self.pricing_service.get_table(),
            box_pricing=box_pricing,
        )

        if isinstance(result, SaleRejection):
            logger.info("Venta rechazada (%s): %s", result.code, result.message)
            return {
                'ok': False,
                'error': result.message,
                'code': result.code,
                'rejection': result,
            }

        self.sales_repo.insert(result)
        self.inventory.apply_sale_effect(result, SALE_CREATED)

        logger.info(
            "Venta %s registrada: %d x %s = %s %s (%s)",
            result.id, result.quantity, result.product.value,
            result.total, result.currency.value, result.payment_method.value
        )
        return {'ok': True, 'sale': result}

    @profile_function(name="Eliminar venta")
    def delete_sale(self, sale_id: str) -> Dict[str, Any]:
        """
        Elimina una venta y repone su stock.

        Returns:
            {'ok': True, 'sale': eliminada} o {'ok': False, 'error': ...}
        """
        removed = self.sales_repo.delete(sale_id)
        if removed is None:
            return {'ok': False, 'error': f'sale {sale_id} not found'}

        self.inventory.apply_sale_effect(removed, SALE_DELETED)
        logger.info("Venta %s eliminada, stock repuesto", sale_id)
        return {'ok': True, 'sale': removed}

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_sales(self, newest_first: bool = True) -> List[SaleRecord]:
        return self.sales_repo.get_all(newest_first=newest_first)

    def get_sale(self, sale_id: str) -> Optional[SaleRecord]:
        return self.sales_repo.get_by_key(sale_id)

    # =========================================================================
    # JORNADA, DUPLICADO E IMPORTACIÓN
    # =========================================================================

    def reset_day(self) -> int:
        """
        Borra todas las ventas de la jornada.
        El stock NO se repone: es un cierre de caja, no una anulación.

        Returns:
            Cantidad de ventas borradas
        """
        count = len(self.sales_repo.get_all())
        self.sales_repo.clear()
        logger.warning("Jornada reiniciada: %d ventas borradas", count)
        return count

    def duplicate_form(self, sale_id: str) -> Optional[Dict[str, Any]]:
        """
        Formulario precargado a partir de una venta existente.

        Solo en Espèces se conserva el monto entregado; en los demás
        métodos se recalcula al confirmar.
        """
        sale = self.sales_repo.get_by_key(sale_id)
        if sale is None:
            return None
        return {
            'product': sale.product.value,
            'quantity': sale.quantity,
            'payment_method': sale.payment_method.value,
            'amount_tendered': sale.amount_tendered if sale.payment_method == CASH_METHOD else 0,
            'box_pricing': sale.box_pricing.value if sale.box_pricing else None,
        }

    def import_sales(self, sales: Iterable[SaleRecord]) -> int:
        """
        Agrega ventas importadas cuyo id no exista todavía.
        No toca el stock: son registros históricos.

        Returns:
            Cantidad de ventas agregadas
        """
        added = 0
        for sale in sales:
            if self.sales_repo.get_by_key(sale.id) is not None:
                continue
            self.sales_repo.insert(sale)
            added += 1
        logger.info("Importación de ventas: %d agregadas", added)
        return added
