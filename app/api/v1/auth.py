"""
Authentication routes (sign in, sign up, sign out)
"""
import logging

from fastapi import APIRouter, Request, Form, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_user
from app.application.notifications import SessionNotifier, pop_flash
from app.auth import authenticate, register_user, RegistrationError
from app.api.v1.pages import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_page(request: Request, error: str | None = None, mode: str = "login", email: str = ""):
    return templates.TemplateResponse(request, "auth.html", {
        "error": error,
        "mode": mode,
        "email": email,
        "flashes": pop_flash(request.session),
    })


@router.get("/auth", response_class=HTMLResponse)
def auth_get(request: Request, mode: str = "login"):
    """
    Форма входа / регистрации
    """
    if require_user(request):
        return RedirectResponse("/dashboard", status_code=302)
    return _auth_page(request, mode="register" if mode == "register" else "login")


@router.post("/auth/login", response_class=HTMLResponse)
def login_post(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    """
    Обработка формы входа
    """
    user = authenticate(db, email, password)
    if not user:
        return _auth_page(request, error="Invalid email or password", email=email)

    request.session["user_id"] = user.id
    logger.info("user %s signed in", user.id)
    return RedirectResponse("/dashboard", status_code=302)


@router.post("/auth/register", response_class=HTMLResponse)
def register_post(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    full_name: str = Form(""),
    db: Session = Depends(get_db),
):
    """
    Регистрация: пользователь + профиль, сразу логиним
    """
    try:
        user = register_user(db, email, password, full_name)
    except RegistrationError as e:
        db.rollback()
        return _auth_page(request, error=str(e), mode="register", email=email)

    request.session["user_id"] = user.id
    logger.info("user %s registered", user.id)
    SessionNotifier(request.session).success("Account created successfully")
    return RedirectResponse("/dashboard", status_code=302)


@router.api_route("/auth/logout", methods=["GET", "POST"])
def logout(request: Request):
    """
    Выход из системы
    """
    request.session.clear()
    SessionNotifier(request.session).success("Signed out successfully")
    return RedirectResponse("/auth", status_code=302)
