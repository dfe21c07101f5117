# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Beneficios:
#   - Type hints para mejor documentación y autocompletado
#   - Registros de venta inmutables (frozen)
#   - Fácil serialización/deserialización para JSON
#   - Independiente del mecanismo de persistencia
# ==============================================================================

from .entities import (
    # Catálogo
    Product,
    BoxPricing,

    # Pagos y divisas
    PaymentMethod,
    Currency,

    # Registros
    PriceEntry,
    SaleRecord,
    StockEntry,
    Stats,

    # Parsers
    parse_product,
    parse_payment_method,
)

from .catalog import (
    PAYMENT_CURRENCY,
    CASH_METHOD,
    REQUIRES_EXPLICIT_PRICE,
    BUNDLE_COMPOSITION,
    STOCK_PRODUCTS,
    currency_for,
    is_bundle,
    default_prices,
)

from .errors import (
    SaleRejection,
    InvalidQuantity,
    PriceNotConfigured,
    PriceMissing,
    InvalidImportFile,
)

__all__ = [
    # Catálogo
    'Product',
    'BoxPricing',
    'PAYMENT_CURRENCY',
    'CASH_METHOD',
    'REQUIRES_EXPLICIT_PRICE',
    'BUNDLE_COMPOSITION',
    'STOCK_PRODUCTS',
    'currency_for',
    'is_bundle',
    'default_prices',

    # Pagos
    'PaymentMethod',
    'Currency',

    # Registros
    'PriceEntry',
    'SaleRecord',
    'StockEntry',
    'Stats',
    'parse_product',
    'parse_payment_method',

    # Rechazos
    'SaleRejection',
    'InvalidQuantity',
    'PriceNotConfigured',
    'PriceMissing',
    'InvalidImportFile',
]
