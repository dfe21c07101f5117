# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio de la caja.
# Diseñadas para ser independientes del mecanismo de persistencia.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum
from datetime import datetime, timezone


# ==============================================================================
# ENUMERACIONES - Catálogo, métodos de pago y divisas
# ==============================================================================

class Product(str, Enum):
    """Productos del catálogo. El valor es la clave persistida."""
    SHAMPOO = "Shampoing"
    MASK = "Masque"
    CREAM = "Crème"          # Leave-in 300 ml
    OIL = "Huile"
    TOWEL = "Serviette"
    SPRAYER = "Vaporisateur"
    MASSAGER = "Masseur"
    MIRROR = "Miroir"
    BOX = "Gamme"            # Box DATCHÉ (producto compuesto)


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados."""
    REVOLUT = "Revolut"
    MOBILE_MONEY = "Mobile Money"
    CASH = "Espèces"


class Currency(str, Enum):
    """Divisas soportadas (sin conversión entre ellas)."""
    EUR = "EUR"
    FCFA = "FCFA"


class BoxPricing(str, Enum):
    """Etiqueta de tarifa de la box. Solo informativa."""
    LAUNCH = "Lancement"
    AFTER_LAUNCH = "Après lancement"


def _parse_enum(enum_cls, value):
    """Acepta tanto el miembro como su valor o su nombre."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        try:
            return enum_cls[str(value)]
        except KeyError:
            raise ValueError(f"{value!r} is not a valid {enum_cls.__name__}")


def parse_product(value) -> Product:
    return _parse_enum(Product, value)


def parse_payment_method(value) -> PaymentMethod:
    return _parse_enum(PaymentMethod, value)


def parse_currency(value) -> Currency:
    return _parse_enum(Currency, value)


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        ts = value
    else:
        ts = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


# ==============================================================================
# PRECIOS
# ==============================================================================

@dataclass
class PriceEntry:
    """
    Precio de un producto en ambas divisas.

    None significa "precio no configurado". Un precio en cero es un precio
    legítimo salvo para los productos que exigen precio explícito
    (ver catalog.REQUIRES_EXPLICIT_PRICE), donde se lee como no configurado.

    Attributes:
        product: Producto al que aplica
        eur: Precio unitario en EUR
        fcfa: Precio unitario en FCFA
    """
    product: Product
    eur: Optional[float] = None
    fcfa: Optional[float] = None

    def price_for(self, currency: Currency) -> Optional[float]:
        """Devuelve el campo correspondiente a la divisa."""
        return self.eur if currency == Currency.EUR else self.fcfa

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'product': self.product.value,
            'eur': self.eur,
            'fcfa': self.fcfa,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PriceEntry':
        """Crea instancia desde diccionario."""
        eur = data.get('eur')
        fcfa = data.get('fcfa')
        return cls(
            product=parse_product(data['product']),
            eur=float(eur) if eur is not None else None,
            fcfa=float(fcfa) if fcfa is not None else None,
        )


# ==============================================================================
# VENTAS
# ==============================================================================

@dataclass(frozen=True)
class SaleRecord:
    """
    Registro inmutable de una venta.

    El precio unitario es una foto del precio vigente al momento de la
    venta: editar la tabla de precios después no lo modifica.

    Attributes:
        id: Identificador único (uuid4)
        created_at: Fecha de creación (UTC)
        product: Producto vendido
        quantity: Cantidad (>= 1)
        payment_method: Método de pago
        currency: Divisa, derivada del método de pago
        unit_price: Precio unitario congelado
        total: unit_price * quantity
        amount_tendered: Monto entregado por el cliente
        change_due: amount_tendered - total
        box_pricing: Tarifa de box (opcional)
    """
    id: str
    created_at: datetime
    product: Product
    quantity: int
    payment_method: PaymentMethod
    currency: Currency
    unit_price: float
    total: float
    amount_tendered: float
    change_due: float
    box_pricing: Optional[BoxPricing] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia JSON."""
        return {
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'product': self.product.value,
            'quantity': self.quantity,
            'payment_method': self.payment_method.value,
            'currency': self.currency.value,
            'unit_price': self.unit_price,
            'total': self.total,
            'amount_tendered': self.amount_tendered,
            'change_due': self.change_due,
            'box_pricing': self.box_pricing.value if self.box_pricing else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SaleRecord':
        """
        Crea instancia desde diccionario.

        La divisa guardada se respeta tal cual (no se recalcula desde el
        método de pago) para no alterar registros históricos.
        """
        box_pricing = data.get('box_pricing')
        return cls(
            id=str(data['id']),
            created_at=_parse_timestamp(data['created_at']),
            product=parse_product(data['product']),
            quantity=int(data['quantity']),
            payment_method=parse_payment_method(data['payment_method']),
            currency=parse_currency(data['currency']),
            unit_price=float(data['unit_price']),
            total=float(data['total']),
            amount_tendered=float(data['amount_tendered']),
            change_due=float(data['change_due']),
            box_pricing=_parse_enum(BoxPricing, box_pricing) if box_pricing else None,
        )


# ==============================================================================
# STOCK
# ==============================================================================

@dataclass
class StockEntry:
    """
    Cantidad en stock de un producto.

    Attributes:
        product: Producto (nunca la box, que no tiene stock propio)
        quantity: Unidades disponibles (>= 0)
    """
    product: Product
    quantity: int = 0

    def __post_init__(self):
        self.quantity = max(0, int(self.quantity))

    def level(self, low_threshold: int = 5) -> str:
        """Nivel de stock: 'empty', 'low' u 'ok'."""
        if self.quantity == 0:
            return 'empty'
        if self.quantity < low_threshold:
            return 'low'
        return 'ok'

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {'product': self.product.value, 'quantity': self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StockEntry':
        """Crea instancia desde diccionario."""
        return cls(
            product=parse_product(data['product']),
            quantity=data.get('quantity', 0),
        )


# ==============================================================================
# ESTADÍSTICAS
# ==============================================================================

@dataclass
class Stats:
    """Resumen agregado de un conjunto de ventas."""
    sale_count: int = 0
    total_quantity: int = 0
    quantity_by_product: Dict[Product, int] = field(
        default_factory=lambda: {p: 0 for p in Product}
    )
    total_by_payment_method: Dict[PaymentMethod, float] = field(
        default_factory=lambda: {m: 0.0 for m in PaymentMethod}
    )
    total_eur: float = 0.0
    total_fcfa: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'sale_count': self.sale_count,
            'total_quantity': self.total_quantity,
            'quantity_by_product': {
                p.value: q for p, q in self.quantity_by_product.items()
            },
            'total_by_payment_method': {
                m.value: t for m, t in self.total_by_payment_method.items()
            },
            'total_eur': self.total_eur,
            'total_fcfa': self.total_fcfa,
        }
