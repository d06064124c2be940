from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse, Response

from cms.api.deps import get_document_service, render_page
from cms.core.auth import get_session_context, require_signed_in_user
from cms.core.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    InvalidNameError,
    ValidationError,
)
from cms.core.session import SessionContext
from cms.domains.documents.rendering import PLAIN_CONTENT_TYPE
from cms.domains.documents.schemas import DocumentCreate
from cms.domains.documents.services import DocumentService

router = APIRouter(tags=["documents"])


def _redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/")
def index(
    request: Request,
    document_service: DocumentService = Depends(get_document_service),
):
    """Список документов"""
    documents = sorted(document_service.list_documents(), key=lambda doc: doc.name)
    return render_page(request, "index.html", {"documents": documents})


@router.get("/new")
def new_document_form(request: Request, username: str = Depends(require_signed_in_user)):
    """Форма создания документа"""
    return render_page(request, "new.html")


@router.post("/new")
def create_document(
    request: Request,
    file_name: str = Form(""),
    username: str = Depends(require_signed_in_user),
    session: SessionContext = Depends(get_session_context),
    document_service: DocumentService = Depends(get_document_service),
):
    """Создание нового документа"""
    try:
        form = DocumentCreate.parse(file_name)
        document = document_service.create_document(form.name)
    except (ValidationError, DocumentExistsError) as e:
        session.flash(e.message)
        return render_page(
            request,
            "new.html",
            {"file_name": file_name},
            status_code=422,
            session=session,
        )

    session.flash(f"{document.name} has been created")
    return _redirect_home()


@router.get("/{name}")
def view_document(
    request: Request,
    name: str,
    document_service: DocumentService = Depends(get_document_service),
):
    """Просмотр документа"""
    try:
        content_type, body = document_service.render_document(name)
    except InvalidNameError:
        raise DocumentNotFoundError(name)

    if content_type == PLAIN_CONTENT_TYPE:
        return Response(content=body, media_type=PLAIN_CONTENT_TYPE)

    return render_page(request, "document.html", {"name": name, "body": body})


@router.get("/{name}/edit")
def edit_document_form(
    request: Request,
    name: str,
    username: str = Depends(require_signed_in_user),
    document_service: DocumentService = Depends(get_document_service),
):
    """Форма редактирования документа"""
    try:
        document = document_service.get_document(name)
    except InvalidNameError:
        raise DocumentNotFoundError(name)
    return render_page(request, "edit.html", {"name": name, "content": document.get_text()})


@router.post("/{name}")
def update_document(
    request: Request,
    name: str,
    content: str = Form(""),
    username: str = Depends(require_signed_in_user),
    session: SessionContext = Depends(get_session_context),
    document_service: DocumentService = Depends(get_document_service),
):
    """Обновление документа"""
    try:
        document_service.update_document(name, content.encode("utf-8"))
    except ValidationError as e:
        session.flash(e.message)
        return render_page(
            request,
            "edit.html",
            {"name": name, "content": content},
            status_code=422,
            session=session,
        )

    session.flash(f"{name} has been updated")
    return _redirect_home()


@router.post("/{name}/duplicate")
def duplicate_document(
    name: str,
    username: str = Depends(require_signed_in_user),
    session: SessionContext = Depends(get_session_context),
    document_service: DocumentService = Depends(get_document_service),
):
    """Копирование документа"""
    document_service.duplicate_document(name)

    session.flash(f"{name} has been duplicated")
    return _redirect_home()


@router.post("/{name}/delete")
def delete_document(
    name: str,
    username: str = Depends(require_signed_in_user),
    session: SessionContext = Depends(get_session_context),
    document_service: DocumentService = Depends(get_document_service),
):
    """Удаление документа"""
    document_service.delete_document(name)

    session.flash(f"{name} has been deleted")
    return _redirect_home()
