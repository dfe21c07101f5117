import json
from datetime import date

import pytest

from app_caisse.models import Currency, InvalidImportFile, PaymentMethod, Product
from app_caisse.services import export_filename, export_sales_json, import_sales_json
from app_caisse.utils import format_currency, parse_currency


def test_export_filename():
    assert export_filename('json', today=date(2024, 6, 1)) == 'datche-ventes-2024-06-01.json'
    assert export_filename('csv', today=date(2024, 12, 31)) == 'datche-ventes-2024-12-31.csv'


def test_export_then_import(make_sale):
    sales = [
        make_sale(sale_id='1', product=Product.CREAM, payment_method=PaymentMethod.CASH),
        make_sale(sale_id='2', product=Product.BOX, payment_method=PaymentMethod.REVOLUT, unit_price=70.0),
    ]
    content = export_sales_json(sales)
    # non-ASCII product names stay readable
    assert 'Crème' in content
    assert import_sales_json(content) == sales


def test_import_keeps_stored_currency(make_sale):
    sale = make_sale(payment_method=PaymentMethod.MOBILE_MONEY, currency=Currency.EUR)
    imported = import_sales_json(export_sales_json([sale]))[0]
    assert imported.currency == Currency.EUR


@pytest.mark.parametrize('content', [
    'not json',
    '{"id": "x"}',
    '[1, 2]',
    json.dumps([{'id': 'x', 'product': 'Shampoing'}]),
    json.dumps([{
        'id': 'x', 'created_at': '2024-06-01T10:00:00+00:00', 'product': 'Peigne',
        'quantity': 1, 'payment_method': 'Revolut', 'currency': 'EUR',
        'unit_price': 1, 'total': 1, 'amount_tendered': 1, 'change_due': 0,
    }]),
])
def test_import_rejects_invalid_content(content):
    with pytest.raises(InvalidImportFile):
        import_sales_json(content)


def test_format_currency():
    assert format_currency(21.5, Currency.EUR) == '21.50 €'
    assert format_currency(0, Currency.EUR) == '0.00 €'
    assert format_currency(14000, Currency.FCFA) == '14000 F CFA'
    assert format_currency(13999.5, Currency.FCFA) == '14000 F CFA'


@pytest.mark.parametrize('value,expected', [
    ('12,5', 12.5),
    (' 20000 ', 20000.0),
    (43, 43.0),
    ('abc', 0.0),
    ('', 0.0),
    (None, 0.0),
    ('nan', 0.0),
])
def test_parse_currency(value, expected):
    assert parse_currency(value) == expected


def _raw_sale(**overrides):
    raw = {
        'id': 'x', 'created_at': '2024-06-01T10:00:00+00:00', 'product': 'Huile',
        'quantity': 2, 'payment_method': 'Espèces', 'currency': 'FCFA',
        'unit_price': 15000, 'total': 30000, 'amount_tendered': 40000, 'change_due': 10000,
    }
    raw.update(overrides)
    return raw


def test_import_accepts_utf8_bytes():
    content = json.dumps([_raw_sale()], ensure_ascii=False).encode('utf-8')
    sales = import_sales_json(content)
    assert sales[0].payment_method == PaymentMethod.CASH
    assert sales[0].change_due == 10000


def test_import_rejects_non_utf8_bytes():
    with pytest.raises(InvalidImportFile):
        import_sales_json(b'\xff\xfe[]')


@pytest.mark.parametrize('overrides', [
    {'quantity': -3, 'total': -45000, 'amount_tendered': -45000, 'change_due': 0},
    {'quantity': 0, 'total': 0, 'amount_tendered': 0, 'change_due': 0},
    {'total': 99999},
    {'change_due': 5},
    {'unit_price': float('nan')},
])
def test_import_rejects_inconsistent_sales(overrides):
    with pytest.raises(InvalidImportFile):
        import_sales_json(json.dumps([_raw_sale(**overrides)]))
