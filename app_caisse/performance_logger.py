# ==============================================================================
# TIEMPOS DE RESPUESTA DE LA CAJA
# ==============================================================================
# Cronometra cada petición HTTP y las operaciones de venta decoradas.
# Las mediciones van al logger 'app_caisse.performance' y, si se indica una
# carpeta, a <log_dir>/performance.log (archivo rotativo).
#
# Se apaga con CAISSE_PROFILING=0 (ver config.py).
# ==============================================================================

import logging
import os
import threading
import time
from dataclasses import dataclass
from functools import wraps
from logging.handlers import RotatingFileHandler
from typing import Dict

from flask import Flask, g, request

# Una petición lenta se anota como WARNING; una muy lenta, como CRITICAL
SLOW_MS = 300
VERY_SLOW_MS = 700

PERFORMANCE_LOG_NAME = 'performance.log'

# "MÉTODO regla" → acción de la caja, tal como la ve el cajero
ROUTE_NAMES = {
    'GET /api/sales': 'Ver ventas',
    'POST /api/sales': 'Registrar venta',
    'DELETE /api/sales/<sale_id>': 'Eliminar venta',
    'GET /api/sales/<sale_id>/duplicate': 'Duplicar venta',
    'POST /api/sales/reset': 'Reiniciar jornada',
    'GET /api/stats': 'Ver estadísticas',
    'GET /api/prices': 'Ver precios',
    'PUT /api/prices/<product>': 'Modificar precio',
    'POST /api/prices/reset': 'Restaurar precios',
    'GET /api/stock': 'Ver stock',
    'PUT /api/stock/<product>': 'Modificar stock',
    'POST /api/stock/reset': 'Reiniciar stock',
    'GET /api/export/json': 'Exportar ventas JSON',
    'POST /api/import/json': 'Importar ventas JSON',
}

perf_logger = logging.getLogger('app_caisse.performance')


@dataclass
class _CallStats:
    calls: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def record(self, elapsed_ms: float) -> None:
        self.calls += 1
        self.total_ms += elapsed_ms
        self.max_ms = max(self.max_ms, elapsed_ms)

    def summary(self) -> Dict[str, float]:
        avg = self.total_ms / self.calls if self.calls else 0
        return {
            'calls': self.calls,
            'avg_time': round(avg, 2),
            'max_time': round(self.max_ms, 2),
        }


_call_stats: Dict[str, _CallStats] = {}
_call_stats_lock = threading.Lock()


def level_for(elapsed_ms: float) -> int:
    """Nivel de logging según la duración medida."""
    if elapsed_ms >= VERY_SLOW_MS:
        return logging.CRITICAL
    if elapsed_ms >= SLOW_MS:
        return logging.WARNING
    return logging.INFO


def _attach_file_handler(log_dir: str) -> None:
    """Conecta performance.log al logger; no duplica el handler."""
    path = os.path.abspath(os.path.join(log_dir, PERFORMANCE_LOG_NAME))
    if any(getattr(h, 'baseFilename', None) == path for h in perf_logger.handlers):
        return
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding='utf-8')
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    perf_logger.addHandler(handler)


def _action_name(method: str, rule: str) -> str:
    key = f"{method} {rule}"
    return ROUTE_NAMES.get(key, key)


# =============================================================================
# PETICIONES HTTP
# =============================================================================

def init_profiling(app: Flask, log_dir: str = None, enabled: bool = True) -> None:
    """
    Cronometra todas las peticiones de la app.

    Args:
        app: Aplicación Flask
        log_dir: Carpeta de performance.log (None: solo el logger)
        enabled: False para no instalar nada
    """
    if not enabled:
        return

    if log_dir:
        _attach_file_handler(log_dir)

    @app.before_request
    def _mark_start():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_elapsed(response):
        started = g.get('request_started')
        if started is None:
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        rule = str(request.url_rule) if request.url_rule else request.path
        perf_logger.log(
            level_for(elapsed_ms), "%s | %s %s | %d | %.0f ms",
            _action_name(request.method, rule), request.method, request.path,
            response.status_code, elapsed_ms
        )
        return response


# =============================================================================
# OPERACIONES DECORADAS
# =============================================================================

def profile_function(func=None, name=None):
    """
    Acumula llamadas y duración de una operación.

    Se usa con o sin argumentos:
        @profile_function
        @profile_function(name="Registrar venta")

    Solo las llamadas lentas se escriben en el log; el resto queda en
    get_function_stats().
    """
    def decorator(fn):
        label = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                with _call_stats_lock:
                    _call_stats.setdefault(label, _CallStats()).record(elapsed_ms)
                if elapsed_ms >= SLOW_MS:
                    perf_logger.log(
                        level_for(elapsed_ms), "Operación lenta: %s (%.0f ms)", label, elapsed_ms
                    )

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def get_function_stats() -> Dict[str, Dict[str, float]]:
    """{operación: {calls, avg_time, max_time}} en milisegundos."""
    with _call_stats_lock:
        return {label: s.summary() for label, s in _call_stats.items()}


def reset_stats() -> None:
    with _call_stats_lock:
        _call_stats.clear()
