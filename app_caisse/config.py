# ==============================================================================
# CONFIGURACIÓN
# ==============================================================================
# Toda la configuración se lee de variables de entorno.
#
#   CAISSE_DATA_DIR             Carpeta de sales.json / prices.json / stock.json
#   CAISSE_LOG_DIR              Carpeta de logs (performance.log)
#   CAISSE_LOG_LEVEL            Nivel de logging (INFO por defecto)
#   CAISSE_PROFILING            '0' para desactivar el profiling de rutas
#   CAISSE_LOW_STOCK_THRESHOLD  Debajo de este valor el stock es "bajo"
#   CAISSE_TIMEZONE             Zona horaria de la caja (UTC por defecto);
#                               fija dónde empieza el día en las estadísticas
#   CAISSE_SECRET_KEY           Clave de Flask (definir en producción)
#   FLASK_HOST / FLASK_PORT / FLASK_DEBUG
# ==============================================================================

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo

BASE = os.path.dirname(os.path.abspath(__file__))

_DEFAULT_SECRET = "app_caisse_dev_secret_key_change_in_production"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    """Foto de la configuración al arrancar."""
    data_dir: str
    log_dir: str
    log_level: str
    profiling: bool
    low_stock_threshold: int
    tz_name: str
    secret_key: str
    host: str
    port: int
    debug: bool


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def load_settings() -> Settings:
    """Lee la configuración actual del entorno."""
    return Settings(
        data_dir=os.environ.get('CAISSE_DATA_DIR', os.path.join(BASE, 'data')),
        log_dir=os.environ.get('CAISSE_LOG_DIR', os.path.join(BASE, 'logs')),
        log_level=os.environ.get('CAISSE_LOG_LEVEL', 'INFO'),
        profiling=_env_flag('CAISSE_PROFILING', '1'),
        low_stock_threshold=int(os.environ.get('CAISSE_LOW_STOCK_THRESHOLD', 5)),
        tz_name=os.environ.get('CAISSE_TIMEZONE', 'UTC'),
        secret_key=os.environ.get('CAISSE_SECRET_KEY') or _DEFAULT_SECRET,
        host=os.environ.get('FLASK_HOST', '0.0.0.0'),
        port=int(os.environ.get('FLASK_PORT', 5000)),
        debug=_env_flag('FLASK_DEBUG', '0'),
    )


def setup_logging(level: str = 'INFO') -> None:
    """Configura el logger raíz una sola vez (idempotente)."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, '_caisse', False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._caisse = True
        root.addHandler(handler)


def load_timezone(name: str) -> tzinfo:
    """
    Zona horaria por nombre IANA ('Africa/Douala', 'Europe/Paris').

    Raises:
        ValueError: Si la zona no existe
    """
    if not name or name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError) as e:
        raise ValueError(f"unknown timezone {name!r}") from e
