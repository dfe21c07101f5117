# ==============================================================================
# CATÁLOGO - Datos estáticos del negocio
# ==============================================================================
# Tabla de precios por defecto, composición de la box y mapeo de divisas.
# Agregar o quitar productos de la box es un cambio de datos, no de lógica.
# ==============================================================================

from typing import Dict, List, Tuple

from .entities import Product, PaymentMethod, Currency, PriceEntry


# Método de pago → divisa (función pura, no configurable por venta)
PAYMENT_CURRENCY: Dict[PaymentMethod, Currency] = {
    PaymentMethod.REVOLUT: Currency.EUR,
    PaymentMethod.MOBILE_MONEY: Currency.FCFA,
    PaymentMethod.CASH: Currency.FCFA,
}

# Único método con monto entregado y vuelto
CASH_METHOD = PaymentMethod.CASH

# Incluidos gratis en la box: deben tener precio explícito si se venden solos
REQUIRES_EXPLICIT_PRICE = frozenset([
    Product.TOWEL,
    Product.SPRAYER,
    Product.MASSAGER,
])

# Producto compuesto → productos que descuenta del stock (uno por unidad)
BUNDLE_COMPOSITION: Dict[Product, Tuple[Product, ...]] = {
    Product.BOX: (
        Product.SHAMPOO,
        Product.MASK,
        Product.CREAM,
        Product.OIL,
        Product.TOWEL,
        Product.SPRAYER,
        Product.MASSAGER,
    ),
}

# Productos con stock propio (todos salvo los compuestos)
STOCK_PRODUCTS: Tuple[Product, ...] = tuple(
    p for p in Product if p not in BUNDLE_COMPOSITION
)


def currency_for(payment_method: PaymentMethod) -> Currency:
    """Divisa que corresponde a un método de pago."""
    return PAYMENT_CURRENCY[payment_method]


def is_bundle(product: Product) -> bool:
    return product in BUNDLE_COMPOSITION


def default_prices() -> List[PriceEntry]:
    """
    Tabla de precios inicial.

    Devuelve instancias nuevas en cada llamada para que nadie modifique
    los valores por defecto por accidente.
    """
    return [
        PriceEntry(Product.SHAMPOO, eur=21.50, fcfa=14000),
        PriceEntry(Product.MASK, eur=20.00, fcfa=13000),
        PriceEntry(Product.CREAM, eur=18.50, fcfa=12000),
        PriceEntry(Product.OIL, eur=22.99, fcfa=15000),
        PriceEntry(Product.BOX, eur=70.00, fcfa=45000),
        # Sin precio: incluidos en la box, se configuran si se venden solos
        PriceEntry(Product.TOWEL),
        PriceEntry(Product.SPRAYER),
        PriceEntry(Product.MASSAGER),
    ]
