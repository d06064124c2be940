import logging
import threading
from collections import defaultdict
from pathlib import Path
from typing import Dict, List

from cms.core.exceptions import DocumentNotFoundError, InvalidNameError, PersistenceError

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Репозиторий документов: один файл на документ в каталоге данных"""

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path)
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock_for(self, name: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[name]

    def _path(self, name: str) -> Path:
        # имя документа не может выходить за пределы каталога данных
        if not name or Path(name).name != name or name.startswith("."):
            raise InvalidNameError(f"{name} is not a valid document name")
        return self.data_path / name

    def list_names(self) -> List[str]:
        """Имена всех документов, порядок не гарантируется"""
        if not self.data_path.is_dir():
            return []
        return [path.name for path in self.data_path.iterdir() if path.is_file()]

    def exists(self, name: str) -> bool:
        try:
            return self._path(name).is_file()
        except InvalidNameError:
            return False

    def read(self, name: str) -> bytes:
        path = self._path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise DocumentNotFoundError(name)
        except IsADirectoryError:
            raise DocumentNotFoundError(name)
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise PersistenceError(f"Could not read {name}") from e

    def write(self, name: str, content: bytes) -> None:
        """Полная перезапись содержимого, файл создается при отсутствии"""
        path = self._path(name)
        with self._lock_for(name):
            try:
                self.data_path.mkdir(parents=True, exist_ok=True)
                path.write_bytes(content)
            except OSError as e:
                logger.error(f"Failed to write {path}: {e}")
                raise PersistenceError(f"Could not save {name}") from e

    def create(self, name: str) -> bool:
        """Создание пустого файла, False если файл уже существует"""
        path = self._path(name)
        with self._lock_for(name):
            try:
                self.data_path.mkdir(parents=True, exist_ok=True)
                with open(path, "xb"):
                    pass
            except FileExistsError:
                return False
            except OSError as e:
                logger.error(f"Failed to create {path}: {e}")
                raise PersistenceError(f"Could not create {name}") from e
        return True

    def copy(self, source: str, target: str) -> bool:
        """Копирование содержимого в новый файл, False если цель уже существует"""
        content = self.read(source)
        path = self._path(target)
        with self._lock_for(target):
            try:
                with open(path, "xb") as f:
                    f.write(content)
            except FileExistsError:
                return False
            except OSError as e:
                logger.error(f"Failed to copy {source} to {path}: {e}")
                raise PersistenceError(f"Could not duplicate {source}") from e
        return True

    def delete(self, name: str) -> None:
        path = self._path(name)
        with self._lock_for(name):
            try:
                path.unlink()
            except FileNotFoundError:
                raise DocumentNotFoundError(name)
            except OSError as e:
                logger.error(f"Failed to delete {path}: {e}")
                raise PersistenceError(f"Could not delete {name}") from e

        with self._locks_guard:
            self._locks.pop(name, None)
