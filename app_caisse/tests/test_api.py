import io
import json

from app_caisse.models import BUNDLE_COMPOSITION, Product

BOX_PARTS = BUNDLE_COMPOSITION[Product.BOX]


def stock_of(client):
    r = client.get('/api/stock')
    assert r.status_code == 200
    return {row['product']: row['quantity'] for row in r.get_json()['stock']}


def test_health(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.get_json() == {'ok': True}


def test_default_prices_are_seeded(client):
    r = client.get('/api/prices')
    prices = {p['product']: p for p in r.get_json()['prices']}
    assert prices['Shampoing'] == {'product': 'Shampoing', 'eur': 21.5, 'fcfa': 14000.0}
    assert prices['Serviette']['eur'] is None
    assert 'Miroir' not in prices


def test_create_sale(client):
    r = client.post('/api/sales', json={
        'product': 'Shampoing', 'quantity': 2, 'payment_method': 'Revolut', 'amount_tendered': 43.00,
    })
    assert r.status_code == 201
    sale = r.get_json()['sale']
    assert sale['currency'] == 'EUR'
    assert sale['total'] == 43.0
    assert sale['change_due'] == 0.0
    assert sale['total_display'] == '43.00 €'

    listed = client.get('/api/sales').get_json()['sales']
    assert [s['id'] for s in listed] == [sale['id']]


def test_cash_sale_reads_tendered_text(client):
    r = client.post('/api/sales', json={
        'product': 'Huile', 'quantity': 1, 'payment_method': 'Espèces', 'amount_tendered': '20000',
    })
    sale = r.get_json()['sale']
    assert sale['change_due'] == 5000
    assert sale['change_due_display'] == '5000 F CFA'


def test_rejected_sale(client):
    r = client.post('/api/sales', json={
        'product': 'Serviette', 'quantity': 1, 'payment_method': 'Mobile Money',
    })
    assert r.status_code == 400
    body = r.get_json()
    assert body['code'] == 'PRICE_NOT_CONFIGURED'
    assert body['error'] == 'price must be configured for Serviette'
    assert client.get('/api/sales').get_json()['sales'] == []

    r = client.post('/api/sales', json={
        'product': 'Shampoing', 'quantity': 0, 'payment_method': 'Revolut',
    })
    assert r.get_json()['code'] == 'INVALID_QUANTITY'


def test_bad_input(client):
    r = client.post('/api/sales', json={'product': 'Peigne', 'payment_method': 'Revolut'})
    assert r.status_code == 400
    r = client.post('/api/sales', json={'product': 'Masque', 'payment_method': 'Chèque'})
    assert r.status_code == 400
    r = client.post('/api/sales', json={'product': 'Masque', 'payment_method': 'Revolut', 'quantity': 'x'})
    assert r.status_code == 400


def test_configure_towel_price_then_sell(client):
    r = client.put('/api/prices/Serviette', json={'fcfa': 3000})
    assert r.status_code == 200
    assert r.get_json()['price'] == {'product': 'Serviette', 'eur': None, 'fcfa': 3000.0}

    r = client.post('/api/sales', json={
        'product': 'Serviette', 'quantity': 1, 'payment_method': 'Mobile Money',
    })
    assert r.status_code == 201

    client.post('/api/prices/reset')
    prices = {p['product']: p for p in client.get('/api/prices').get_json()['prices']}
    assert prices['Serviette']['fcfa'] is None


def test_negative_price_rejected(client):
    assert client.put('/api/prices/Huile', json={'eur': -1}).status_code == 400
    assert client.put('/api/prices/Huile', json={'eur': 'cher'}).status_code == 400


def test_box_sale_moves_every_part(client):
    for part in BOX_PARTS:
        r = client.put(f'/api/stock/{part.name}', json={'quantity': 3})
        assert r.status_code == 200

    r = client.post('/api/sales', json={
        'product': 'Gamme', 'quantity': 1, 'payment_method': 'Mobile Money', 'box_pricing': 'Lancement',
    })
    assert r.status_code == 201
    sale = r.get_json()['sale']
    assert sale['box_pricing'] == 'Lancement'
    stock = stock_of(client)
    assert all(stock[p.value] == 2 for p in BOX_PARTS)
    assert stock['Miroir'] == 0

    r = client.delete(f"/api/sales/{sale['id']}")
    assert r.status_code == 200
    stock = stock_of(client)
    assert all(stock[p.value] == 3 for p in BOX_PARTS)


def test_stock_endpoints(client):
    assert client.put('/api/stock/Gamme', json={'quantity': 3}).status_code == 400
    assert client.put('/api/stock/Miroir', json={}).status_code == 400

    client.put('/api/stock/Miroir', json={'quantity': 2})
    report = {row['product']: row for row in client.get('/api/stock').get_json()['stock']}
    assert report['Miroir']['level'] == 'low'
    assert 'Gamme' not in report

    client.post('/api/stock/reset')
    assert stock_of(client)['Miroir'] == 0


def test_delete_unknown_sale(client):
    r = client.delete('/api/sales/unknown')
    assert r.status_code == 404
    assert r.get_json()['ok'] is False


def test_duplicate_and_reset(client):
    sale = client.post('/api/sales', json={
        'product': 'Masque', 'quantity': 2, 'payment_method': 'Espèces', 'amount_tendered': 30000,
    }).get_json()['sale']

    form = client.get(f"/api/sales/{sale['id']}/duplicate").get_json()['form']
    assert form['amount_tendered'] == 30000
    assert form['quantity'] == 2
    assert client.get('/api/sales/unknown/duplicate').status_code == 404

    r = client.post('/api/sales/reset')
    assert r.get_json()['removed'] == 1
    assert client.get('/api/sales').get_json()['sales'] == []


def test_list_filtered_by_payment_method(client):
    client.post('/api/sales', json={'product': 'Masque', 'payment_method': 'Revolut'})
    client.post('/api/sales', json={'product': 'Crème', 'payment_method': 'Mobile Money'})
    r = client.get('/api/sales', query_string={'payment_method': 'Mobile Money'})
    sales = r.get_json()['sales']
    assert [s['product'] for s in sales] == ['Crème']
    assert client.get('/api/sales?payment_method=Bitcoin').status_code == 400


def test_stats(client):
    client.post('/api/sales', json={'product': 'Shampoing', 'quantity': 2, 'payment_method': 'Revolut'})
    client.post('/api/sales', json={'product': 'Gamme', 'quantity': 1, 'payment_method': 'Mobile Money'})

    body = client.get('/api/stats').get_json()
    assert body['stats']['sale_count'] == 2
    assert body['stats']['total_eur'] == 43.0
    assert body['stats']['total_fcfa'] == 45000
    assert body['balances']['Revolut'] == {'total': 43.0, 'currency': 'EUR'}

    assert client.get('/api/stats?period=today').get_json()['stats']['sale_count'] == 2
    assert client.get('/api/stats?period=week').status_code == 400
    r = client.get('/api/stats?period=custom&start=2000-01-01&end=2000-01-02')
    assert r.get_json()['stats']['sale_count'] == 0


def test_export_and_import(client):
    client.post('/api/sales', json={'product': 'Huile', 'payment_method': 'Revolut'})
    r = client.get('/api/export/json')
    assert r.status_code == 200
    assert 'attachment;filename=datche-ventes-' in r.headers['Content-Disposition']
    exported = r.get_data(as_text=True)
    assert len(json.loads(exported)) == 1

    # same ids: nothing new
    r = client.post('/api/import/json', data=exported, content_type='application/json')
    assert r.get_json() == {'ok': True, 'imported': 0, 'skipped': 1}

    client.post('/api/sales/reset')
    r = client.post(
        '/api/import/json',
        data={'file': (io.BytesIO(exported.encode('utf-8')), 'ventes.json')},
        content_type='multipart/form-data',
    )
    assert r.get_json()['imported'] == 1
    assert len(client.get('/api/sales').get_json()['sales']) == 1


def test_import_invalid_file(client):
    r = client.post('/api/import/json', data='oops', content_type='application/json')
    assert r.status_code == 400
    assert r.get_json()['ok'] is False


def test_unknown_route_is_json(client):
    r = client.get('/api/nothing')
    assert r.status_code == 404
    assert r.get_json()['ok'] is False


def test_import_upload_not_utf8(client):
    r = client.post(
        '/api/import/json',
        data={'file': (io.BytesIO(b'\xff\xfe[]'), 'ventes.json')},
        content_type='multipart/form-data',
    )
    assert r.status_code == 400
    assert r.get_json()['ok'] is False


def test_import_negative_quantity_rejected(client):
    client.put('/api/stock/Huile', json={'quantity': 5})
    bad = [{
        'id': 'neg', 'created_at': '2024-06-01T10:00:00+00:00', 'product': 'Huile',
        'quantity': -3, 'payment_method': 'Revolut', 'currency': 'EUR',
        'unit_price': 22.99, 'total': 22.99 * -3, 'amount_tendered': 22.99 * -3, 'change_due': 0.0,
    }]
    r = client.post('/api/import/json', data=json.dumps(bad), content_type='application/json')
    assert r.status_code == 400
    assert client.get('/api/sales').get_json()['sales'] == []
    assert client.delete('/api/sales/neg').status_code == 404
    assert stock_of(client)['Huile'] == 5


def test_quantity_must_be_a_whole_number(client):
    for quantity in (2.7, True, 'deux'):
        r = client.post('/api/sales', json={
            'product': 'Huile', 'payment_method': 'Revolut', 'quantity': quantity,
        })
        assert r.status_code == 400
    assert client.get('/api/sales').get_json()['sales'] == []

    r = client.post('/api/sales', json={'product': 'Huile', 'payment_method': 'Revolut', 'quantity': 2.0})
    assert r.status_code == 201
    assert r.get_json()['sale']['quantity'] == 2


def test_non_finite_price_rejected(client):
    for raw in ('{"eur": NaN}', '{"eur": Infinity}', '{"fcfa": -Infinity}'):
        r = client.put('/api/prices/Huile', data=raw, content_type='application/json')
        assert r.status_code == 400
    prices = {p['product']: p for p in client.get('/api/prices').get_json()['prices']}
    assert prices['Huile'] == {'product': 'Huile', 'eur': 22.99, 'fcfa': 15000.0}
