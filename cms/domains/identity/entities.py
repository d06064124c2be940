from passlib.context import CryptContext

from cms.core.security import get_password_hash, verify_password


class User:
    """Сущность пользователя: имя и хеш пароля"""

    def __init__(self, username: str, password_hash: str):
        self.username = username
        self.password_hash = password_hash

    def authenticate(self, pwd_context: CryptContext, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(pwd_context, password, self.password_hash)

    @classmethod
    def create_user(cls, pwd_context: CryptContext, username: str, password: str) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(username=username, password_hash=get_password_hash(pwd_context, password))

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.username.casefold() == other.username.casefold()

    def __repr__(self) -> str:
        return f"User(username={self.username})"
