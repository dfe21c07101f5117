# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (JSON en disco).
# Los servicios solo conocen las interfaces; cambiar de almacenamiento
# no requiere tocar la lógica de negocio.
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos (contratos de las tres tablas)
# ├── base.py                → Clases base JSON (DictRepository, ListRepository)
# ├── sales_repository.py    → Acceso a sales.json
# ├── price_repository.py    → Acceso a prices.json
# ├── stock_repository.py    → Acceso a stock.json
# └── memory.py              → Implementaciones en memoria (tests)
# ==============================================================================

# Interfaces
from app_caisse.repositories.interfaces import (
    IRepository,
    ISalesRepository,
    IPriceRepository,
    IStockRepository,
)

# Clases base
from app_caisse.repositories.base import BaseRepository, DictRepository, ListRepository

# Implementaciones JSON
from app_caisse.repositories.sales_repository import SalesRepository
from app_caisse.repositories.price_repository import PriceRepository
from app_caisse.repositories.stock_repository import StockRepository

# Implementaciones en memoria
from app_caisse.repositories.memory import (
    InMemorySalesRepository,
    InMemoryPriceRepository,
    InMemoryStockRepository,
)

__all__ = [
    # Interfaces
    'IRepository',
    'ISalesRepository',
    'IPriceRepository',
    'IStockRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones JSON
    'SalesRepository',
    'PriceRepository',
    'StockRepository',

    # Implementaciones en memoria
    'InMemorySalesRepository',
    'InMemoryPriceRepository',
    'InMemoryStockRepository',
]
