import os
import sys
from datetime import datetime, timezone

import pytest

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from app_caisse.app_container import AppContainer
from app_caisse.models import (
    Currency,
    PaymentMethod,
    Product,
    SaleRecord,
    default_prices,
)
from app_caisse.repositories import (
    InMemoryPriceRepository,
    InMemorySalesRepository,
    InMemoryStockRepository,
)
from app_caisse.services import InventoryAdjuster, PricingService, SalesService


@pytest.fixture
def price_table():
    return {entry.product: entry for entry in default_prices()}


@pytest.fixture
def price_repo():
    return InMemoryPriceRepository(default_prices())


@pytest.fixture
def stock_repo():
    return InMemoryStockRepository()


@pytest.fixture
def sales_repo():
    return InMemorySalesRepository()


@pytest.fixture
def inventory(stock_repo):
    return InventoryAdjuster(stock_repo)


@pytest.fixture
def pricing(price_repo):
    return PricingService(price_repo)


@pytest.fixture
def sales_service(sales_repo, pricing, inventory):
    return SalesService(sales_repo, pricing, inventory)


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv('CAISSE_PROFILING', '0')
    monkeypatch.setenv('CAISSE_LOG_DIR', str(tmp_path / 'logs'))
    from app_caisse.main import create_app
    container = AppContainer.build(base_path=str(tmp_path / 'data'))
    return create_app(container)


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


def _build_sale(
    product=Product.SHAMPOO,
    quantity=1,
    payment_method=PaymentMethod.MOBILE_MONEY,
    currency=None,
    unit_price=14000.0,
    created_at=None,
    sale_id=None,
):
    """Registro de venta armado a mano para tests de agregación."""
    if currency is None:
        currency = Currency.EUR if payment_method == PaymentMethod.REVOLUT else Currency.FCFA
    total = unit_price * quantity
    return SaleRecord(
        id=sale_id or f"{product.name}-{quantity}-{payment_method.name}-{unit_price}",
        created_at=created_at or datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc),
        product=product,
        quantity=quantity,
        payment_method=payment_method,
        currency=currency,
        unit_price=unit_price,
        total=total,
        amount_tendered=total,
        change_due=0.0,
    )


@pytest.fixture
def make_sale():
    return _build_sale

