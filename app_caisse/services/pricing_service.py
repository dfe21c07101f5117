# ==============================================================================
# SERVICIO DE PRECIOS
# ==============================================================================
# Resolución del precio unitario de un producto en una divisa y gestión de
# la tabla de precios (pantalla de Parámetros).
#
# REGLA DE NEGOCIO:
# Serviette / Vaporisateur / Masseur van gratis dentro de la box. Si se
# venden solos necesitan un precio explícito: sin precio, o con precio 0
# (formato antiguo), se consideran NO configurados.
# ==============================================================================

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Union

from app_caisse.models import (
    Currency,
    PriceEntry,
    Product,
    REQUIRES_EXPLICIT_PRICE,
    default_prices,
)
from app_caisse.repositories.interfaces import IPriceRepository


logger = logging.getLogger(__name__)

PriceTable = Union[Mapping[Product, PriceEntry], Iterable[PriceEntry]]

# Marca "no modificar" para update_price (None significa "sin precio")
_UNCHANGED = object()


def as_price_table(prices: PriceTable) -> Dict[Product, PriceEntry]:
    """Normaliza una lista de precios o un mapeo a {producto: entrada}."""
    if isinstance(prices, Mapping):
        return dict(prices)
    return {entry.product: entry for entry in prices}


def resolve_price(
    product: Product,
    currency: Currency,
    price_table: PriceTable
) -> Optional[float]:
    """
    Precio unitario aplicable, o None si no está definido.

    Args:
        product: Producto a vender
        currency: Divisa de la venta
        price_table: Tabla de precios (mapeo o lista de PriceEntry)

    Returns:
        El precio, o None si falta la fila, falta el campo de la divisa, o
        el producto exige precio explícito y vale exactamente 0.
    """
    entry = as_price_table(price_table).get(product)
    if entry is None:
        return None

    price = entry.price_for(currency)
    if price is None:
        return None

    if product in REQUIRES_EXPLICIT_PRICE and price == 0:
        return None

    return price


def requires_explicit_price(product: Product) -> bool:
    return product in REQUIRES_EXPLICIT_PRICE


class PricingService:
    """
    Servicio para la tabla de precios.

    Responsabilidades:
    - Leer la tabla vigente
    - Editar precios por producto y divisa
    - Sembrar / restaurar los precios por defecto
    """

    def __init__(self, price_repo: IPriceRepository):
        """
        Args:
            price_repo: Repositorio de precios
        """
        self.price_repo = price_repo

    def get_table(self) -> Dict[Product, PriceEntry]:
        """Tabla de precios como {producto: entrada}."""
        return as_price_table(self.price_repo.get_all())

    def list_prices(self) -> List[PriceEntry]:
        return self.price_repo.get_all()

    def resolve(self, product: Product, currency: Currency) -> Optional[float]:
        """Atajo de resolve_price sobre la tabla persistida."""
        return resolve_price(product, currency, self.get_table())

    def update_price(self, product: Product, eur=_UNCHANGED, fcfa=_UNCHANGED) -> PriceEntry:
        """
        Modifica el precio de un producto.

        Solo cambian los campos pasados; None deja el campo sin precio.
        Si el producto aún no tiene fila, se crea.

        Raises:
            ValueError: Si algún precio es negativo o no es finito (NaN, inf)
        """
        for value in (eur, fcfa):
            if value is _UNCHANGED or value is None:
                continue
            if not math.isfinite(value):
                raise ValueError("price must be a finite number")
            if value < 0:
                raise ValueError("price cannot be negative")

        current = self.price_repo.get_by_key(product)
        entry = current or PriceEntry(product)
        if eur is not _UNCHANGED:
            entry.eur = float(eur) if eur is not None else None
        if fcfa is not _UNCHANGED:
            entry.fcfa = float(fcfa) if fcfa is not None else None

        if current is None:
            self.price_repo.insert(entry)
        else:
            self.price_repo.update(entry)

        logger.info(
            "Precio actualizado: %s EUR=%s FCFA=%s",
            product.value, entry.eur, entry.fcfa
        )
        return entry

    def reset_to_defaults(self) -> List[PriceEntry]:
        """Borra la tabla y la reemplaza por los precios por defecto."""
        defaults = default_prices()
        self.price_repo.replace_all(defaults)
        logger.info("Tabla de precios restaurada a valores por defecto")
        return defaults

    def seed_if_empty(self) -> bool:
        """
        Siembra los precios por defecto si la tabla está vacía.

        Returns:
            True si se sembró
        """
        if self.price_repo.get_all():
            return False
        for entry in default_prices():
            self.price_repo.insert(entry)
        logger.info("Tabla de precios sembrada con valores por defecto")
        return True
