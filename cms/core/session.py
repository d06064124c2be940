from typing import Any, MutableMapping, Optional

USERNAME_KEY = "username"
MESSAGE_KEY = "message"


class SessionContext:
    """Контекст запроса поверх сессии: вошедший пользователь и одноразовое сообщение"""

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    @property
    def username(self) -> Optional[str]:
        return self._session.get(USERNAME_KEY)

    @property
    def is_signed_in(self) -> bool:
        return bool(self.username)

    def sign_in(self, username: str) -> None:
        self._session[USERNAME_KEY] = username

    def sign_out(self) -> None:
        self._session.pop(USERNAME_KEY, None)

    def flash(self, message: str) -> None:
        """Сообщение для следующей отрисованной страницы"""
        self._session[MESSAGE_KEY] = message

    def take_message(self) -> Optional[str]:
        """Прочитать сообщение и сразу удалить его из сессии"""
        return self._session.pop(MESSAGE_KEY, None)
