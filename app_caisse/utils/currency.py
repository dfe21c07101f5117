# ==============================================================================
# FORMATO DE MONTOS
# ==============================================================================

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app_caisse.models import Currency


def format_currency(amount: float, currency: Currency) -> str:
    """
    Texto para mostrar un monto.

    EUR con dos decimales ("21.50 €"), FCFA entero redondeado ("14000 F CFA").
    """
    if currency == Currency.EUR:
        return f"{amount:.2f} €"
    rounded = Decimal(str(amount)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return f"{rounded} F CFA"


def parse_currency(value) -> float:
    """Convierte el texto de un formulario en monto; 0.0 si no es numérico."""
    if value is None:
        return 0.0
    try:
        parsed = Decimal(str(value).strip().replace(',', '.'))
    except InvalidOperation:
        return 0.0
    if not parsed.is_finite():
        return 0.0
    return float(parsed)
