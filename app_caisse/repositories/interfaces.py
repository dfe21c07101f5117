# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Este archivo define las interfaces (protocolos) que todos los repositorios
# deben implementar. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Los servicios dependen de interfaces, NO de implementaciones concretas
#    - Hoy: JSON en disco y memoria. Mañana: cualquier otra tabla clave/valor
#
# 2. TESTING
#    - Los repositorios en memoria (memory.py) implementan estas interfaces
#    - Tests unitarios sin tocar archivos reales
#
# 3. DOCUMENTACIÓN
#    - Contratos claros de qué hace cada repositorio
#
# Las tres tablas lógicas son:
#   Ventas  → clave: id de venta, ordenable por fecha de creación
#   Precios → clave: producto (una fila por producto)
#   Stock   → clave: producto (una fila por producto)
#
# ==============================================================================

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from app_caisse.models import PriceEntry, Product, SaleRecord, StockEntry


@runtime_checkable
class IRepository(Protocol):
    """
    Interfaz base para todos los repositorios.
    Define las operaciones mínimas que cualquier repositorio debe soportar.
    """

    def clear(self) -> None:
        """Elimina todos los registros."""
        ...


@runtime_checkable
class ISalesRepository(IRepository, Protocol):
    """
    Interfaz para el repositorio de ventas.
    """

    def get_all(self, newest_first: bool = False) -> List[SaleRecord]:
        """Todas las ventas ordenadas por fecha de creación."""
        ...

    def get_by_key(self, sale_id: str) -> Optional[SaleRecord]:
        """Obtiene una venta por su id."""
        ...

    def insert(self, sale: SaleRecord) -> None:
        """Agrega una venta nueva."""
        ...

    def update(self, sale: SaleRecord) -> bool:
        """Reemplaza una venta existente."""
        ...

    def delete(self, sale_id: str) -> Optional[SaleRecord]:
        """Elimina una venta; retorna la eliminada o None."""
        ...


@runtime_checkable
class IPriceRepository(IRepository, Protocol):
    """
    Interfaz para el repositorio de precios.
    """

    def get_all(self) -> List[PriceEntry]:
        """Toda la tabla de precios."""
        ...

    def get_by_key(self, product: Product) -> Optional[PriceEntry]:
        """Precio de un producto."""
        ...

    def insert(self, entry: PriceEntry) -> None:
        """Agrega la fila de un producto."""
        ...

    def update(self, entry: PriceEntry) -> bool:
        """Reemplaza la fila de un producto."""
        ...

    def delete(self, product: Product) -> Optional[PriceEntry]:
        """Elimina la fila de un producto."""
        ...

    def replace_all(self, entries: Iterable[PriceEntry]) -> None:
        """Reemplaza la tabla completa."""
        ...


@runtime_checkable
class IStockRepository(IRepository, Protocol):
    """
    Interfaz para el repositorio de stock.
    """

    def get_all(self) -> List[StockEntry]:
        """Todas las filas de stock existentes."""
        ...

    def get_by_key(self, product: Product) -> Optional[StockEntry]:
        """Stock de un producto (None si nunca se ajustó)."""
        ...

    def insert(self, entry: StockEntry) -> None:
        """Crea la fila de un producto."""
        ...

    def update(self, entry: StockEntry) -> bool:
        """Reemplaza la fila de un producto."""
        ...

    def delete(self, product: Product) -> Optional[StockEntry]:
        """Elimina la fila de un producto."""
        ...
