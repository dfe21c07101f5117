# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (se pueden pasar repositorios en memoria)
#   - Cambiar de almacenamiento sin tocar servicios
# ==============================================================================

from typing import Optional

from app_caisse.config import load_settings, load_timezone

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia
# ═══════════════════════════════════════════════════════════════════════════════
from app_caisse.repositories import (
    IPriceRepository,
    ISalesRepository,
    IStockRepository,
    PriceRepository,
    SalesRepository,
    StockRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from app_caisse.services import (
    InventoryAdjuster,
    PricingService,
    SalesService,
    StatsService,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = AppContainer(base_path='/path/to/data')
        sales_service = container.sales_service

    En tests se pueden inyectar repositorios:
        container = AppContainer.build(sales_repo=InMemorySalesRepository(), ...)
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, base_path: str = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, base_path: str = None):
        """
        Inicializa el contenedor.

        Args:
            base_path: Carpeta de datos (donde están los JSON)
        """
        if self._initialized:
            return
        self._setup(base_path)

    def _setup(self, base_path: str = None, low_stock_threshold: int = None) -> None:
        settings = load_settings()
        self._base_path = base_path or settings.data_dir
        self._low_stock_threshold = (
            low_stock_threshold if low_stock_threshold is not None
            else settings.low_stock_threshold
        )
        self._tz = load_timezone(settings.tz_name)

        # Repositorios (lazy loading)
        self._sales_repo: Optional[ISalesRepository] = None
        self._price_repo: Optional[IPriceRepository] = None
        self._stock_repo: Optional[IStockRepository] = None

        # Servicios (lazy loading)
        self._pricing_service: Optional[PricingService] = None
        self._inventory: Optional[InventoryAdjuster] = None
        self._sales_service: Optional[SalesService] = None
        self._stats_service: Optional[StatsService] = None

        self._initialized = True

    @classmethod
    def build(
        cls,
        sales_repo: ISalesRepository = None,
        price_repo: IPriceRepository = None,
        stock_repo: IStockRepository = None,
        base_path: str = None,
        low_stock_threshold: int = None
    ) -> 'AppContainer':
        """
        Crea un contenedor independiente (no singleton) con repositorios
        opcionales ya construidos.
        """
        container = super().__new__(cls)
        container._setup(base_path, low_stock_threshold)
        container._sales_repo = sales_repo
        container._price_repo = price_repo
        container._stock_repo = stock_repo
        return container

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def sales_repo(self) -> ISalesRepository:
        """Repositorio de ventas (singleton)."""
        if self._sales_repo is None:
            self._sales_repo = SalesRepository(self._base_path)
        return self._sales_repo

    @property
    def price_repo(self) -> IPriceRepository:
        """Repositorio de precios (singleton)."""
        if self._price_repo is None:
            self._price_repo = PriceRepository(self._base_path)
        return self._price_repo

    @property
    def stock_repo(self) -> IStockRepository:
        """Repositorio de stock (singleton)."""
        if self._stock_repo is None:
            self._stock_repo = StockRepository(self._base_path)
        return self._stock_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def pricing_service(self) -> PricingService:
        """Servicio de precios (singleton)."""
        if self._pricing_service is None:
            self._pricing_service = PricingService(self.price_repo)
        return self._pricing_service

    @property
    def inventory(self) -> InventoryAdjuster:
        """Ajustador de stock (singleton)."""
        if self._inventory is None:
            self._inventory = InventoryAdjuster(
                self.stock_repo,
                low_stock_threshold=self._low_stock_threshold
            )
        return self._inventory

    @property
    def sales_service(self) -> SalesService:
        """Servicio de ventas (singleton)."""
        if self._sales_service is None:
            self._sales_service = SalesService(
                self.sales_repo,
                self.pricing_service,
                self.inventory
            )
        return self._sales_service

    @property
    def stats_service(self) -> StatsService:
        """Servicio de estadísticas (singleton)."""
        if self._stats_service is None:
            self._stats_service = StatsService(
                lambda: self.sales_repo.get_all(),
                tz=self._tz
            )
        return self._stats_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para recargar datos.
        """
        self._sales_repo = None
        self._price_repo = None
        self._stock_repo = None

        self._pricing_service = None
        self._inventory = None
        self._sales_service = None
        self._stats_service = None

    @classmethod
    def get_instance(cls, base_path: str = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            base_path: Carpeta de datos (solo se usa en primera llamada)
        """
        if cls._instance is None:
            return cls(base_path)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(base_path: str = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global.

    Args:
        base_path: Carpeta de datos
    """
    return AppContainer.get_instance(base_path)
