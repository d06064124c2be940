from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from cms.core.session import SessionContext
from cms.domains.documents.services import DocumentService
from cms.domains.identity.services import IdentityService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_document_service(request: Request) -> DocumentService:
    """Зависимость для получения сервиса документов"""
    return DocumentService(request.app.state.document_repository)


def get_identity_service(request: Request) -> IdentityService:
    """Зависимость для получения сервиса пользователей"""
    return IdentityService(request.app.state.user_repository, request.app.state.pwd_context)


def render_page(
    request: Request,
    template_name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    session: Optional[SessionContext] = None,
):
    """Отрисовка страницы; одноразовое сообщение забирается из сессии"""
    session = session or SessionContext(request.session)
    page_context = {
        "message": session.take_message(),
        "username": session.username,
    }
    page_context.update(context or {})
    return templates.TemplateResponse(request, template_name, page_context, status_code=status_code)
