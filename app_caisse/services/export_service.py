# ==============================================================================
# SERVICIO DE EXPORTACIÓN / IMPORTACIÓN
# ==============================================================================
# Respaldo de las ventas en JSON (exportar para guardar, importar para
# recuperar una jornada). La maquetación de PDF/CSV queda fuera de este
# servicio.
# ==============================================================================

import json
import math
from datetime import date
from typing import Iterable, List, Union

from app_caisse.models import InvalidImportFile, SaleRecord


EXPORT_PREFIX = 'datche-ventes'


def export_filename(extension: str, today: date = None) -> str:
    """Nombre de archivo de exportación: datche-ventes-YYYY-MM-DD.<ext>"""
    today = today or date.today()
    return f"{EXPORT_PREFIX}-{today.isoformat()}.{extension}"


def export_sales_json(sales: Iterable[SaleRecord]) -> str:
    """Serializa las ventas como una lista JSON indentada."""
    return json.dumps([s.to_dict() for s in sales], indent=2, ensure_ascii=False)


def _check_sale(sale: SaleRecord) -> None:
    """
    Verifica las reglas de un registro de venta.

    Raises:
        ValueError: Si el registro no las cumple
    """
    amounts = (sale.unit_price, sale.total, sale.amount_tendered, sale.change_due)
    if not all(math.isfinite(a) for a in amounts):
        raise ValueError("amounts must be finite numbers")
    if sale.quantity < 1:
        raise ValueError("quantity must be at least one")
    if sale.total != sale.unit_price * sale.quantity:
        raise ValueError("total must equal unit_price * quantity")
    if sale.change_due != sale.amount_tendered - sale.total:
        raise ValueError("change_due must equal amount_tendered - total")


def import_sales_json(content: Union[str, bytes]) -> List[SaleRecord]:
    """
    Lee ventas exportadas con export_sales_json.

    Acepta texto o los bytes del archivo subido (UTF-8). Cada venta debe
    cumplir las mismas reglas que una venta creada en caja.

    Raises:
        InvalidImportFile: Si el contenido no es una lista de ventas válidas
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidImportFile("invalid JSON file: not UTF-8 text") from e

    try:
        raw = json.loads(content)
    except (TypeError, ValueError) as e:
        raise InvalidImportFile(f"invalid JSON file: {e}") from e

    if not isinstance(raw, list):
        raise InvalidImportFile("invalid JSON file: expected a list of sales")

    sales = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidImportFile(f"invalid sale at position {i}")
        try:
            sale = SaleRecord.from_dict(item)
            _check_sale(sale)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidImportFile(f"invalid sale at position {i}: {e}") from e
        sales.append(sale)
    return sales
