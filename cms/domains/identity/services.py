import logging
from typing import List, Optional

from passlib.context import CryptContext

from cms.core.exceptions import InvalidCredentialsError, UsernameTakenError
from cms.core.session import SessionContext
from cms.db.repositories.user_repository import UserRepository
from cms.domains.identity.entities import User
from cms.domains.identity.schemas import SignUpForm

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для регистрации и аутентификации пользователей"""

    def __init__(self, repository: UserRepository, pwd_context: CryptContext):
        self.user_repository = repository
        self.pwd_context = pwd_context

    def get_user(self, username: str) -> Optional[User]:
        """Поиск пользователя без учета регистра"""
        stored = self.user_repository.find_username(username)
        if stored is None:
            return None
        return User(stored, self.user_repository.get_password_hash(stored))

    def validate(self, username: str, password: str) -> bool:
        """Проверка пары имя/пароль по реестру"""
        user = self.get_user(username)
        if user is None:
            return False
        return user.authenticate(self.pwd_context, password)

    def is_username_taken(self, username: str) -> bool:
        return self.user_repository.username_exists(username)

    def register(self, username: str, password_hash: str) -> User:
        """Сохранение уже захешированного пароля в реестре"""
        if not self.user_repository.add(username, password_hash):
            raise UsernameTakenError(username)

        logger.info(f"User {username} registered")
        return User(username, password_hash)

    def usernames(self) -> List[str]:
        return self.user_repository.usernames()

    def sign_up(self, form: SignUpForm) -> User:
        """Регистрация нового пользователя по проверенной форме"""
        user = User.create_user(self.pwd_context, form.username, form.password)
        return self.register(user.username, user.password_hash)

    def sign_in(self, session: SessionContext, username: str, password: str) -> User:
        """Вход пользователя: при успехе имя сохраняется в сессии"""
        user = self.get_user(username)

        if user is None or not user.authenticate(self.pwd_context, password):
            logger.warning(f"Rejected sign in for {username!r}")
            raise InvalidCredentialsError()

        session.sign_in(user.username)
        logger.info(f"User {user.username} signed in")
        return user

    def sign_out(self, session: SessionContext) -> None:
        username = session.username
        session.sign_out()
        if username:
            logger.info(f"User {username} signed out")
