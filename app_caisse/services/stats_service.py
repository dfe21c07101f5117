# ==============================================================================
# SERVICIO DE ESTADÍSTICAS
# ==============================================================================
# Resume un conjunto de ventas: cantidades por producto, totales por método
# de pago y totales por divisa.
#
# REGLA PRINCIPAL: el total por divisa usa la divisa GUARDADA en cada venta,
# nunca se recalcula desde el producto o el método de pago.
# ==============================================================================

import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from app_caisse.models import (
    Currency,
    PAYMENT_CURRENCY,
    PaymentMethod,
    SaleRecord,
    Stats,
)


def aggregate(sales: Iterable[SaleRecord]) -> Stats:
    """
    Pliega las ventas en un Stats.

    El orden de entrada no cambia el resultado: los montos se juntan por
    grupo y se suman con math.fsum (suma exacta, redondeada una sola vez).
    Todos los productos y métodos de pago aparecen, en 0 si no hubo ventas.
    """
    stats = Stats()
    by_method: Dict[PaymentMethod, List[float]] = {m: [] for m in PaymentMethod}
    by_currency: Dict[Currency, List[float]] = {c: [] for c in Currency}

    for sale in sales:
        stats.sale_count += 1
        stats.total_quantity += sale.quantity
        stats.quantity_by_product[sale.product] += sale.quantity
        by_method[sale.payment_method].append(sale.total)
        by_currency[sale.currency].append(sale.total)

    stats.total_by_payment_method = {m: math.fsum(t) for m, t in by_method.items()}
    stats.total_eur = math.fsum(by_currency[Currency.EUR])
    stats.total_fcfa = math.fsum(by_currency[Currency.FCFA])
    return stats


def balances_by_payment_method(sales: Iterable[SaleRecord]) -> Dict[PaymentMethod, Dict[str, Any]]:
    """Saldo de caja por método de pago, con la divisa de cada método."""
    totals: Dict[PaymentMethod, List[float]] = {m: [] for m in PAYMENT_CURRENCY}
    for sale in sales:
        totals[sale.payment_method].append(sale.total)
    return {
        method: {'total': math.fsum(totals[method]), 'currency': currency}
        for method, currency in PAYMENT_CURRENCY.items()
    }


def filter_by_payment_method(sales: Iterable[SaleRecord], method: PaymentMethod) -> List[SaleRecord]:
    return [s for s in sales if s.payment_method == method]


class StatsService:
    """
    Servicio de estadísticas sobre las ventas persistidas.

    Las ventas se obtienen con un loader inyectado, así el servicio no
    depende del almacenamiento.
    """

    PERIODS = ('today', 'all', 'custom')

    def __init__(
        self,
        sales_loader: Callable[[], List[SaleRecord]] = None,
        tz: tzinfo = timezone.utc
    ):
        """
        Args:
            sales_loader: Función que retorna la lista de ventas
            tz: Zona horaria de la caja (define dónde empieza cada día)
        """
        self._sales_loader = sales_loader
        self.tz = tz

    def _load_sales(self) -> List[SaleRecord]:
        if self._sales_loader:
            return self._sales_loader()
        return []

    def _get_date_range(
        self,
        period: str,
        custom_start: str = None,
        custom_end: str = None,
        now: datetime = None
    ) -> Optional[Tuple[datetime, datetime]]:
        """
        Rango de fechas del período en la zona de la caja, o None para 'all'.

        Args:
            period: 'today', 'all' o 'custom'
            custom_start: Fecha inicio (YYYY-MM-DD) para 'custom'
            custom_end: Fecha fin (YYYY-MM-DD) para 'custom'

        Raises:
            ValueError: Período desconocido o fechas inválidas
        """
        now = (now or datetime.now(timezone.utc)).astimezone(self.tz)
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        if period == 'all':
            return None

        if period == 'today':
            return today_start, today_start + timedelta(days=1)

        if period == 'custom':
            if not custom_start or not custom_end:
                raise ValueError("custom period needs start and end dates")
            start = datetime.strptime(custom_start, '%Y-%m-%d').replace(tzinfo=self.tz)
            end = datetime.strptime(custom_end, '%Y-%m-%d').replace(tzinfo=self.tz)
            return start, end + timedelta(days=1)

        raise ValueError(f"unknown period {period!r}")

    def sales_for_period(
        self,
        period: str = 'all',
        custom_start: str = None,
        custom_end: str = None,
        now: datetime = None
    ) -> List[SaleRecord]:
        """Ventas cuyo created_at cae en el período [inicio, fin)."""
        sales = self._load_sales()
        date_range = self._get_date_range(period, custom_start, custom_end, now)
        if date_range is None:
            return list(sales)
        start, end = date_range
        return [s for s in sales if start <= s.created_at < end]

    def summary(
        self,
        period: str = 'all',
        custom_start: str = None,
        custom_end: str = None,
        now: datetime = None
    ) -> Dict[str, Any]:
        """
        Estadísticas y saldos del período, listos para serializar.

        Returns:
            {
                'period': str,
                'stats': {...Stats.to_dict()...},
                'balances': {método: {'total': float, 'currency': str}}
            }
        """
        sales = self.sales_for_period(period, custom_start, custom_end, now)
        balances = balances_by_payment_method(sales)
        return {
            'period': period,
            'stats': aggregate(sales).to_dict(),
            'balances': {
                method.value: {'total': b['total'], 'currency': b['currency'].value}
                for method, b in balances.items()
            },
        }
