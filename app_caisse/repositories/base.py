# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List


logger = logging.getLogger(__name__)


class BaseRepository(ABC):
    """
    Clase base abstracta para los repositorios JSON.
    Proporciona lectura/escritura de archivos JSON con un lock de proceso.

    La caja trabaja con un único terminal: el lock evita escrituras
    intercaladas entre hilos del servidor, no coordina varios procesos.
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Crea el archivo (y su carpeta) con datos vacíos si no existe."""
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.file_path):
            self._write_raw(self._empty_data())

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.

        Returns:
            Estructura vacía (dict o list) según el repositorio
        """
        pass

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Returns:
            Datos parseados del JSON

        Raises:
            json.JSONDecodeError: Si el archivo tiene JSON inválido
            OSError: Si hay error de lectura
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return self._empty_data()
            except json.JSONDecodeError:
                logger.error("Archivo JSON corrupto: %s", self.file_path)
                raise

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON.

        Args:
            data: Datos a serializar y escribir

        Raises:
            OSError: Si hay error de escritura
        """
        with self._file_lock:
            # Escribir a archivo temporal primero para atomicidad
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                # Limpiar archivo temporal si algo falla
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

    def clear(self) -> None:
        """Vacía el archivo."""
        self._write_raw(self._empty_data())


class DictRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como diccionario.
    La clave del diccionario es la clave primaria.

    Ejemplo: stock.json -> {"Shampoing": {...}, "Masque": {...}}
    """

    def _empty_data(self) -> Dict:
        return {}

    def _read_dict(self) -> Dict[str, Any]:
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def _get_raw(self, key: str) -> Any:
        return self._read_dict().get(key)

    def _put_raw(self, key: str, record: Dict[str, Any]) -> None:
        data = self._read_dict()
        data[key] = record
        self._write_raw(data)

    def _contains(self, key: str) -> bool:
        return key in self._read_dict()

    def _pop_raw(self, key: str) -> Any:
        data = self._read_dict()
        removed = data.pop(key, None)
        if removed is not None:
            self._write_raw(data)
        return removed


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista.

    Ejemplo: sales.json -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def _read_list(self) -> List[Dict[str, Any]]:
        data = self._read_raw()
        return data if isinstance(data, list) else []

    def _append_raw(self, record: Dict[str, Any]) -> None:
        data = self._read_list()
        data.append(record)
        self._write_raw(data)

    def _find_raw(self, field: str, value: Any) -> Any:
        for record in self._read_list():
            if record.get(field) == value:
                return record
        return None

    def _replace_where(self, field: str, value: Any, record: Dict[str, Any]) -> bool:
        data = self._read_list()
        for i, current in enumerate(data):
            if current.get(field) == value:
                data[i] = record
                self._write_raw(data)
                return True
        return False

    def _remove_where(self, field: str, value: Any) -> Any:
        data = self._read_list()
        for i, current in enumerate(data):
            if current.get(field) == value:
                removed = data.pop(i)
                self._write_raw(data)
                return removed
        return None
