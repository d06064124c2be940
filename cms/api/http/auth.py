from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse

from cms.api.deps import get_identity_service, render_page
from cms.core.auth import get_session_context
from cms.core.exceptions import InvalidCredentialsError, ValidationError
from cms.core.session import SessionContext
from cms.domains.identity.schemas import SignInForm, SignUpForm
from cms.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["authentication"])


@router.get("/signin")
def signin_form(request: Request):
    """Форма входа"""
    return render_page(request, "signin.html")


@router.post("/signin")
def signin(
    request: Request,
    credentials: Annotated[SignInForm, Form()],
    session: SessionContext = Depends(get_session_context),
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Вход пользователя"""
    try:
        identity_service.sign_in(session, credentials.username, credentials.password)
    except InvalidCredentialsError as e:
        session.flash(e.message)
        return render_page(
            request,
            "signin.html",
            {"attempted_name": credentials.username},
            status_code=422,
            session=session,
        )

    session.flash("Welcome!")
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.post("/signout")
def signout(
    session: SessionContext = Depends(get_session_context),
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Выход пользователя"""
    identity_service.sign_out(session)
    session.flash("You have been signed out.")
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/signup")
def signup_form(request: Request):
    """Форма регистрации"""
    return render_page(request, "signup.html")


@router.post("/signup")
def signup(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    session: SessionContext = Depends(get_session_context),
    identity_service: IdentityService = Depends(get_identity_service),
):
    """Регистрация нового пользователя"""
    try:
        form = SignUpForm.parse(username, password, identity_service.usernames())
        user = identity_service.sign_up(form)
    except ValidationError as e:
        session.flash(e.message)
        return render_page(
            request,
            "signup.html",
            {"attempted_name": username},
            status_code=422,
            session=session,
        )

    session.flash(f"Account {user.username} created.")
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
