# ==============================================================================
# APLICACIÓN FLASK - API JSON de la caja
# ==============================================================================
# Las rutas solo traducen HTTP ⇄ servicios. Toda la lógica de negocio vive
# en services/ y se obtiene desde el contenedor de dependencias.
# ==============================================================================

import logging
import math

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from app_caisse.app_container import AppContainer, get_container
from app_caisse.config import load_settings, setup_logging
from app_caisse.models import (
    BoxPricing,
    InvalidImportFile,
    PaymentMethod,
    SaleRecord,
    parse_payment_method,
    parse_product,
)
from app_caisse.performance_logger import init_profiling
from app_caisse.services import (
    export_filename,
    export_sales_json,
    filter_by_payment_method,
    import_sales_json,
)
from app_caisse.utils import format_currency, parse_currency


logger = logging.getLogger(__name__)


class BadInput(ValueError):
    """Dato de formulario inválido (se responde 400)."""
    pass


# ═══════════════════════════════════════════════════════════════════════════
# SERIALIZACIÓN
# ═══════════════════════════════════════════════════════════════════════════

def sale_to_json(sale: SaleRecord) -> dict:
    data = sale.to_dict()
    data['unit_price_display'] = format_currency(sale.unit_price, sale.currency)
    data['total_display'] = format_currency(sale.total, sale.currency)
    data['change_due_display'] = format_currency(sale.change_due, sale.currency)
    return data


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _parse_int(value, field: str) -> int:
    """Entero estricto: rechaza booleanos y números con decimales."""
    if isinstance(value, bool):
        raise BadInput(f"{field} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise BadInput(f"{field} must be an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadInput(f"{field} must be an integer")


def _parse_optional_price(value, field: str):
    """None / '' → sin precio; número finito → precio."""
    if value is None or value == '':
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise BadInput(f"{field} must be a finite number")
        return float(value)
    raise BadInput(f"{field} must be a number or null")


def _parse_enum_arg(parser, value, field: str):
    try:
        return parser(value)
    except ValueError:
        raise BadInput(f"unknown {field}: {value}")


# ═══════════════════════════════════════════════════════════════════════════
# FÁBRICA DE LA APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════

def create_app(container: AppContainer = None) -> Flask:
    """
    Crea la aplicación Flask.

    Args:
        container: Contenedor a usar; por defecto el global
    """
    settings = load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key

    container = container or get_container(settings.data_dir)
    app.extensions['caisse_container'] = container

    # Los precios por defecto se siembran una sola vez
    if container.pricing_service.seed_if_empty():
        logger.info("Precios por defecto cargados en %s", container.base_path)

    init_profiling(app, log_dir=settings.log_dir, enabled=settings.profiling)

    # =========================================================================
    # ERRORES
    # =========================================================================

    @app.errorhandler(BadInput)
    def _bad_input(e):
        return jsonify({'ok': False, 'error': str(e)}), 400

    @app.errorhandler(InvalidImportFile)
    def _bad_import(e):
        return jsonify({'ok': False, 'error': str(e)}), 400

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({'ok': False, 'error': e.description}), e.code

    # =========================================================================
    # VENTAS
    # =========================================================================

    @app.route('/health')
    def health():
        return jsonify({'ok': True})

    @app.route('/api/sales', methods=['GET'])
    def list_sales():
        sales = container.sales_service.list_sales(newest_first=True)
        method = request.args.get('payment_method')
        if method:
            sales = filter_by_payment_method(
                sales, _parse_enum_arg(parse_payment_method, method, 'payment method')
            )
        return jsonify({'ok': True, 'sales': [sale_to_json(s) for s in sales]})

    @app.route('/api/sales', methods=['POST'])
    def create_sale_route():
        data = _body()
        product = _parse_enum_arg(parse_product, data.get('product'), 'product')
        payment_method = _parse_enum_arg(
            parse_payment_method, data.get('payment_method'), 'payment method'
        )
        quantity = _parse_int(data.get('quantity', 1), 'quantity')

        # El monto entregado solo se lee para Espèces
        amount_tendered = None
        if payment_method == PaymentMethod.CASH and data.get('amount_tendered') not in (None, ''):
            amount_tendered = parse_currency(data.get('amount_tendered'))

        box_pricing = None
        if data.get('box_pricing'):
            box_pricing = _parse_enum_arg(
                lambda v: BoxPricing(v), data.get('box_pricing'), 'box pricing'
            )

        result = container.sales_service.register_sale(
            product, quantity, payment_method, amount_tendered, box_pricing
        )
        if not result['ok']:
            return jsonify({'ok': False, 'code': result['code'], 'error': result['error']}), 400
        return jsonify({'ok': True, 'sale': sale_to_json(result['sale'])}), 201

    @app.route('/api/sales/<sale_id>', methods=['DELETE'])
    def delete_sale(sale_id):
        result = container.sales_service.delete_sale(sale_id)
        if not result['ok']:
            return jsonify({'ok': False, 'error': result['error']}), 404
        return jsonify({'ok': True, 'sale': sale_to_json(result['sale'])})

    @app.route('/api/sales/<sale_id>/duplicate', methods=['GET'])
    def duplicate_sale(sale_id):
        form = container.sales_service.duplicate_form(sale_id)
        if form is None:
            return jsonify({'ok': False, 'error': f'sale {sale_id} not found'}), 404
        return jsonify({'ok': True, 'form': form})

    @app.route('/api/sales/reset', methods=['POST'])
    def reset_day():
        removed = container.sales_service.reset_day()
        return jsonify({'ok': True, 'removed': removed})

    # =========================================================================
    # ESTADÍSTICAS
    # =========================================================================

    @app.route('/api/stats', methods=['GET'])
    def stats():
        try:
            summary = container.stats_service.summary(
                period=request.args.get('period', 'all'),
                custom_start=request.args.get('start'),
                custom_end=request.args.get('end'),
            )
        except ValueError as e:
            raise BadInput(str(e))
        return jsonify({'ok': True, **summary})

    # =========================================================================
    # PRECIOS
    # =========================================================================

    @app.route('/api/prices', methods=['GET'])
    def list_prices():
        prices = container.pricing_service.list_prices()
        return jsonify({'ok': True, 'prices': [p.to_dict() for p in prices]})

    @app.route('/api/prices/<product>', methods=['PUT'])
    def update_price(product):
        product = _parse_enum_arg(parse_product, product, 'product')
        data = _body()
        changes = {}
        for field in ('eur', 'fcfa'):
            if field in data:
                changes[field] = _parse_optional_price(data[field], field)
        try:
            entry = container.pricing_service.update_price(product, **changes)
        except ValueError as e:
            raise BadInput(str(e))
        return jsonify({'ok': True, 'price': entry.to_dict()})

    @app.route('/api/prices/reset', methods=['POST'])
    def reset_prices():
        prices = container.pricing_service.reset_to_defaults()
        return jsonify({'ok': True, 'prices': [p.to_dict() for p in prices]})

    # =========================================================================
    # STOCK
    # =========================================================================

    @app.route('/api/stock', methods=['GET'])
    def list_stock():
        return jsonify({'ok': True, 'stock': container.inventory.level_report()})

    @app.route('/api/stock/<product>', methods=['PUT'])
    def set_stock(product):
        product = _parse_enum_arg(parse_product, product, 'product')
        quantity = _parse_int(_body().get('quantity'), 'quantity')
        try:
            entry = container.inventory.set_quantity(product, quantity)
        except ValueError as e:
            raise BadInput(str(e))
        return jsonify({'ok': True, 'stock': entry.to_dict()})

    @app.route('/api/stock/reset', methods=['POST'])
    def reset_stock():
        container.inventory.reset_all()
        return jsonify({'ok': True})

    # =========================================================================
    # EXPORTACIÓN / IMPORTACIÓN
    # =========================================================================

    @app.route('/api/export/json', methods=['GET'])
    def export_json():
        content = export_sales_json(container.sales_service.list_sales(newest_first=False))
        return Response(
            content,
            mimetype='application/json',
            headers={'Content-Disposition': f'attachment;filename={export_filename("json")}'}
        )

    @app.route('/api/import/json', methods=['POST'])
    def import_json():
        upload = request.files.get('file')
        if upload is not None:
            content = upload.read()
        else:
            content = request.get_data()
        sales = import_sales_json(content)
        added = container.sales_service.import_sales(sales)
        return jsonify({'ok': True, 'imported': added, 'skipped': len(sales) - added})

    return app


if __name__ == "__main__":
    # Para desarrollo local. En producción usar wsgi.py con gunicorn.
    settings = load_settings()
    application = create_app()
    logger.info("Servidor iniciado en http://%s:%d", settings.host, settings.port)
    application.run(debug=settings.debug, host=settings.host, port=settings.port)
