# ==============================================================================
# RECHAZOS Y ERRORES DEL DOMINIO
# ==============================================================================
# Los rechazos de venta son VALORES que se devuelven, no excepciones.
# Un rechazo nunca deja estado modificado (ni venta ni stock).
# ==============================================================================

from dataclasses import dataclass
from typing import Any, Dict

from .entities import Product, Currency


@dataclass(frozen=True)
class SaleRejection:
    """Base de todos los rechazos de creación de venta."""

    code = 'REJECTED'

    @property
    def message(self) -> str:
        return 'sale rejected'

    def to_dict(self) -> Dict[str, Any]:
        return {'code': self.code, 'error': self.message}


@dataclass(frozen=True)
class InvalidQuantity(SaleRejection):
    """Cantidad menor a uno."""
    quantity: int

    code = 'INVALID_QUANTITY'

    @property
    def message(self) -> str:
        return 'quantity must be at least one'


@dataclass(frozen=True)
class PriceNotConfigured(SaleRejection):
    """El producto exige un precio explícito y no lo tiene."""
    product: Product

    code = 'PRICE_NOT_CONFIGURED'

    @property
    def message(self) -> str:
        return f'price must be configured for {self.product.value}'


@dataclass(frozen=True)
class PriceMissing(SaleRejection):
    """No existe precio para el producto en la divisa (falta de datos)."""
    product: Product
    currency: Currency

    code = 'PRICE_MISSING'

    @property
    def message(self) -> str:
        return f'missing price for {self.product.value} in {self.currency.value}'


class InvalidImportFile(ValueError):
    """El archivo de importación no es un JSON de ventas válido."""
    pass
