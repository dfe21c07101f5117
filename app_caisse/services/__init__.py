# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la caja.
#
# PRINCIPIOS:
# 1. Las funciones del motor (resolve_price, create_sale, aggregate) son
#    puras: sin I/O, testeables sin repositorios
# 2. Los servicios orquestan el motor con los repositorios
# 3. Las rutas (main.py) solo llaman a servicios
# 4. Los servicios NO conocen el tipo de almacenamiento
#
# ESTRUCTURA:
# ├── pricing_service.py   → Resolución de precios, tabla de precios
# ├── sales_service.py     → Fábrica de ventas, registro y eliminación
# ├── inventory_service.py → Ajustes de stock (expansión de la box)
# ├── stats_service.py     → Estadísticas y saldos por método de pago
# └── export_service.py    → Exportación / importación JSON
# ==============================================================================

from app_caisse.services.pricing_service import PricingService, resolve_price
from app_caisse.services.inventory_service import (
    InventoryAdjuster,
    SALE_CREATED,
    SALE_DELETED,
)
from app_caisse.services.sales_service import SalesService, create_sale
from app_caisse.services.stats_service import (
    StatsService,
    aggregate,
    balances_by_payment_method,
    filter_by_payment_method,
)
from app_caisse.services.export_service import (
    export_filename,
    export_sales_json,
    import_sales_json,
)

__all__ = [
    'PricingService',
    'resolve_price',
    'InventoryAdjuster',
    'SALE_CREATED',
    'SALE_DELETED',
    'SalesService',
    'create_sale',
    'StatsService',
    'aggregate',
    'balances_by_payment_method',
    'filter_by_payment_method',
    'export_filename',
    'export_sales_json',
    'import_sales_json',
]
