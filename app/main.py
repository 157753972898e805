"""
FastAPI application factory
"""
import logging
import traceback
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from app.config import get_settings, Settings
from app.api.deps import build_store
from app.api.responses import store_error_status
from app.api.v1 import auth, businesses, finance, planner, goals, profile, pages
from app.application.mutations import MutationValidationError
from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.db.session import check_db_connection
from app.infrastructure.store.base import StoreError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent.parent / "static"


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Catches ALL exceptions including sync routes"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error("\n%s\nERROR on %s %s\n%s%s", "=" * 60, request.method, request.url.path, tb_str, "=" * 60)
            return Response(content=f"Internal Server Error: {exc}", status_code=500)


def create_app(settings: Settings | None = None, session_factory=None, store=None) -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Args:
        settings: настройки (по умолчанию get_settings())
        session_factory: sessionmaker для users/profiles и SQL record store
        store: готовый RecordStore (тесты, REST deployment)

    Returns:
        Настроенный FastAPI app
    """
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    app = FastAPI(
        title="OpsDeck",
        debug=settings.DEBUG,
    )

    # Shared state: один query cache на процесс, store строится лениво в deps
    app.state.query_cache = QueryCache(max_entries=settings.QUERY_CACHE_MAX_ENTRIES)
    app.state.session_factory = session_factory
    app.state.store = store or (build_store(settings, session_factory) if session_factory else None)

    app.add_middleware(ErrorLoggingMiddleware)

    # Middleware
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY
    )

    @app.exception_handler(MutationValidationError)
    def validation_error_handler(request: Request, exc: MutationValidationError):
        return JSONResponse(status_code=400, content={"ok": False, "detail": str(exc)})

    @app.exception_handler(StoreError)
    def store_error_handler(request: Request, exc: StoreError):
        logger.warning("store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=store_error_status(exc), content={"ok": False, "detail": str(exc)})

    # Static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Routers - API first, then SSR pages
    app.include_router(businesses.router)
    app.include_router(finance.router)
    app.include_router(planner.router)
    app.include_router(goals.router)
    app.include_router(profile.router)
    app.include_router(auth.router)
    app.include_router(pages.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (проверяет доступность БД)"""
        check_db_connection(session_factory)
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
