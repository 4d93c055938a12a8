"""Notely FastAPI application: entry point for the API server."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from notely import __version__
from notely.auth.tokens import JWTManager
from notely.core.constants import MSG_INVALID_BODY
from notely.core.exceptions import NotelyBaseError
from notely.core.interfaces import NoteStore
from notely.core.logging import get_logger, setup_logging
from notely.store import open_store
from notely.store.schema import close_engine

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown lifecycle: open the store unless one was injected, close on exit."""
    log.info("api_starting", backend=app.state.settings.store_backend)
    if app.state.store is None:
        app.state.store = await open_store(app.state.settings)
    yield
    await app.state.store.close()
    await close_engine()
    log.info("api_shutdown")


async def _notely_error_handler(request: Request, exc: NotelyBaseError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request_body_invalid", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"message": MSG_INVALID_BODY})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled_error", path=request.url.path, error=type(exc).__name__, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Settings | None = None, store: NoteStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    ``settings`` defaults to the environment; ``store`` defaults to the
    backend named in the settings and is opened on startup.
    """
    settings = settings or get_settings()
    setup_logging(json_output=settings.notely_env == "prod")

    app = FastAPI(
        title="Notely API",
        description="Multi-tenant notes with plan quotas: REST API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.jwt = JWTManager(
        secret=settings.notely_jwt_secret.get_secret_value(),
        expiry_hours=settings.notely_jwt_expiry_hours,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotelyBaseError, _notely_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # Register routers
    from notely.api.routes.auth import router as auth_router
    from notely.api.routes.health import router as health_router
    from notely.api.routes.notes import router as notes_router
    from notely.api.routes.tenants import router as tenants_router
    from notely.api.routes.users import router as users_router

    app.include_router(health_router)
    app.include_router(tenants_router)
    app.include_router(users_router)
    app.include_router(auth_router)
    app.include_router(notes_router)

    return app
