import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from cms.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def _match(users: Dict[str, str], username: str) -> Optional[str]:
    folded = username.casefold()
    for stored in users:
        if stored.casefold() == folded:
            return stored
    return None


class UserRepository:
    """Реестр пользователей в YAML: {"users": {имя: хеш пароля}}"""

    def __init__(self, credentials_path: Path):
        self.credentials_path = Path(credentials_path)
        self._lock = threading.Lock()

    def load(self) -> Dict[str, str]:
        """Загрузка всего реестра, отсутствующий файл означает пустой реестр"""
        try:
            with open(self.credentials_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load user registry {self.credentials_path}: {e}")
            raise PersistenceError("Could not load user registry") from e

        users = (data.get("users") or {}) if isinstance(data, dict) else None
        if not isinstance(users, dict):
            logger.error(f"User registry {self.credentials_path} is not a mapping of users")
            raise PersistenceError("Could not load user registry")
        return {str(username): str(password_hash) for username, password_hash in users.items()}

    def _save(self, users: Dict[str, str]) -> None:
        try:
            self.credentials_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.credentials_path, "w", encoding="utf-8") as f:
                yaml.safe_dump({"users": users}, f, default_flow_style=False)
        except OSError as e:
            logger.error(f"Failed to save user registry {self.credentials_path}: {e}")
            raise PersistenceError("Could not save user registry") from e

    def usernames(self) -> List[str]:
        return list(self.load())

    def find_username(self, username: str) -> Optional[str]:
        """Сохраненное написание имени при регистронезависимом сравнении"""
        return _match(self.load(), username)

    def get_password_hash(self, username: str) -> Optional[str]:
        users = self.load()
        stored = _match(users, username)
        if stored is None:
            return None
        return users[stored]

    def username_exists(self, username: str) -> bool:
        return self.find_username(username) is not None

    def add(self, username: str, password_hash: str) -> bool:
        """Добавление пользователя под блокировкой, False если имя уже занято"""
        with self._lock:
            users = self.load()
            if _match(users, username) is not None:
                return False
            users[username] = password_hash
            self._save(users)
        return True
