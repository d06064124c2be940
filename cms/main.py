import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from cms.api.deps import get_document_service, render_page
from cms.api.http import auth_router, documents_router, health_router
from cms.core.config import Settings, settings as default_settings
from cms.core.exceptions import (
    CMSError,
    DocumentExistsError,
    DocumentNotFoundError,
    UnauthorizedError,
    UnsupportedKindError,
    ValidationError,
)
from cms.core.security import create_pwd_context
from cms.core.session import SessionContext
from cms.db.repositories import DocumentRepository, UserRepository

logger = logging.getLogger(__name__)


async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    """Перенаправление с сообщением, если пользователь не вошел"""
    SessionContext(request.session).flash(exc.message)
    return RedirectResponse(exc.redirect_target, status_code=status.HTTP_302_FOUND)


async def not_found_handler(request: Request, exc: DocumentNotFoundError):
    SessionContext(request.session).flash(exc.message)
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


def unprocessable_handler(request: Request, exc: CMSError):
    """Ошибки ввода, не обработанные в маршруте: главная страница с кодом 422"""
    session = SessionContext(request.session)
    session.flash(exc.message)
    documents = sorted(get_document_service(request).list_documents(), key=lambda doc: doc.name)
    return render_page(
        request,
        "index.html",
        {"documents": documents},
        status_code=422,
        session=session,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Сборка приложения с хранилищами из настроек"""
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="CMS",
        description="Minimal file-based content management service",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.document_repository = DocumentRepository(settings.data_path)
    app.state.user_repository = UserRepository(settings.credentials_path)
    app.state.pwd_context = create_pwd_context(settings.password_hash_rounds)

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(DocumentNotFoundError, not_found_handler)
    for exc_class in (ValidationError, DocumentExistsError, UnsupportedKindError):
        app.add_exception_handler(exc_class, unprocessable_handler)

    # маршрут /{name} перехватывает все одиночные пути, поэтому документы подключаются последними
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(documents_router)

    logger.info(f"Serving documents from {settings.data_path} ({settings.env})")
    return app


app = create_app()
