"""
FastAPI dependencies (DB session, authentication, per-request user context)

Composition root: everything the core needs is built here from app.state
and handed over explicitly as a UserContext.
"""
from typing import Generator

from fastapi import Depends, Request, HTTPException, status
from sqlalchemy.orm import Session

from app.application.context import CurrentUser, UserContext
from app.application.notifications import Notifier, CollectingNotifier, SessionNotifier
from app.config import get_settings
from app.infrastructure.db.models import User
from app.infrastructure.db.session import get_session_factory
from app.infrastructure.store.base import RecordStore
from app.infrastructure.store.rest import RestRecordStore
from app.infrastructure.store.sql import SqlRecordStore
from app.utils.dates import local_today


def _session_factory(request: Request):
    return getattr(request.app.state, "session_factory", None) or get_session_factory()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency для получения DB session

    Usage:
        @app.get("/")
        def route(db: Session = Depends(get_db)):
            ...
    """
    db = _session_factory(request)()
    try:
        yield db
    finally:
        db.close()


def require_user(request: Request) -> bool:
    """
    Проверка аутентификации через session

    Usage в routes:
        if not require_user(request):
            return RedirectResponse("/auth")
    """
    return bool(request.session.get("user_id"))


def load_current_user(request: Request, db: Session) -> CurrentUser | None:
    """Пользователь из session или None (для SSR pages: redirect на /auth)"""
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None
    return CurrentUser(id=user.id, email=user.email)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> CurrentUser:
    """
    Получить текущего пользователя из session (для API endpoints)

    Raises:
        HTTPException(401): если не залогинен
    """
    if not request.session.get("user_id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    user = load_current_user(request, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user


def build_store(settings, session_factory=None) -> RecordStore:
    """RECORD_STORE=sql -> собственная БД, rest -> hosted PostgREST API"""
    if settings.RECORD_STORE == "rest":
        return RestRecordStore(
            settings.REST_URL,
            settings.REST_API_KEY,
            timeout=settings.REST_TIMEOUT_SECONDS,
        )
    return SqlRecordStore(session_factory)


def get_store(request: Request) -> RecordStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store(get_settings(), _session_factory(request))
        request.app.state.store = store
    return store


def build_context(request: Request, user: CurrentUser, notifier: Notifier | None = None) -> UserContext:
    """
    UserContext текущего запроса (scoped store + shared cache)

    SSR pages: SessionNotifier (flash на следующей странице),
    JSON API: CollectingNotifier (сообщение уходит в ответ).
    """
    settings = get_settings()
    return UserContext.build(
        user=user,
        store=get_store(request),
        cache=request.app.state.query_cache,
        notifier=notifier if notifier is not None else SessionNotifier(request.session),
        today=local_today(settings.TIMEZONE),
        currency_symbol=settings.CURRENCY_SYMBOL,
    )


def get_context(
    request: Request,
    user: CurrentUser = Depends(get_current_user),
) -> UserContext:
    return build_context(request, user, CollectingNotifier())
