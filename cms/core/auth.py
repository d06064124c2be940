from fastapi import Depends, Request

from cms.core.exceptions import UnauthorizedError
from cms.core.session import SessionContext

SIGN_IN_REQUIRED_MESSAGE = "You must be signed in to do that."


def require_signed_in(session: SessionContext) -> str:
    """Проверка входа: возвращает имя пользователя или поднимает UnauthorizedError"""
    if not session.is_signed_in:
        raise UnauthorizedError(SIGN_IN_REQUIRED_MESSAGE, redirect_target="/")
    return session.username


def get_session_context(request: Request) -> SessionContext:
    """Зависимость для получения контекста сессии"""
    return SessionContext(request.session)


def require_signed_in_user(session: SessionContext = Depends(get_session_context)) -> str:
    """Зависимость для операций, доступных только вошедшим пользователям"""
    return require_signed_in(session)
