"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from inkwell.api.v1 import router as v1_router
from inkwell.core.config import Settings, get_settings
from inkwell.core.errors import (
    DuplicateEmail,
    DuplicateRole,
    DuplicateTag,
    DuplicateUsername,
    Forbidden,
    InvalidCredentials,
    NotFound,
    SelfDeletionRejected,
    StoreUnavailable,
    Unauthenticated,
    UnknownPermission,
    UnknownRole,
)
from inkwell.middleware import SessionMiddleware
from inkwell.services.articles import Sanitizer, escape_markup
from inkwell.services.notifier import CommentNotifier, build_notifier
from inkwell.services.sessions import MemorySessionStore, SessionStore

logger = logging.getLogger(__name__)

FIELD_ERRORS = (
    DuplicateEmail,
    DuplicateUsername,
    DuplicateTag,
    DuplicateRole,
    UnknownRole,
    UnknownPermission,
)


def _unauthenticated(request: Request, exc: Unauthenticated) -> RedirectResponse:
    settings: Settings = request.app.state.settings
    return RedirectResponse(settings.LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)


def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_403_FORBIDDEN)


def _invalid_credentials(request: Request, exc: InvalidCredentials) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_401_UNAUTHORIZED)


def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
    return JSONResponse(
        {"detail": "Service temporarily unavailable. Please try again later."},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def _field_error(request: Request, exc: Exception) -> JSONResponse:
    # Same shape as FastAPI's request validation errors so clients can attach it to the form field.
    return JSONResponse(
        {"detail": [{"loc": ["body", exc.field], "msg": str(exc), "type": "value_error"}]},
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)


def _self_deletion(request: Request, exc: SelfDeletionRejected) -> JSONResponse:
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_409_CONFLICT)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Unauthenticated, _unauthenticated)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(InvalidCredentials, _invalid_credentials)
    app.add_exception_handler(StoreUnavailable, _store_unavailable)
    for exc_class in FIELD_ERRORS:
        app.add_exception_handler(exc_class, _field_error)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(SelfDeletionRejected, _self_deletion)


def create_app(
    settings: Settings | None = None,
    session_store: SessionStore | None = None,
    notifier: CommentNotifier | None = None,
    sanitize: Sanitizer | None = None,
) -> FastAPI:
    """
    Build the application.

    Tests pass their own settings, session store and notifier; production uses
    the environment-driven defaults.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    app = FastAPI(
        title="Inkwell API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    if session_store is None:
        session_store = MemorySessionStore(settings.SESSION_MAX_AGE_SECONDS)
    app.state.session_store = session_store
    app.state.notifier = notifier or build_notifier(settings)
    app.state.sanitize = sanitize or escape_markup

    app.add_middleware(
        SessionMiddleware,
        store=app.state.session_store,
        settings=settings,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Inkwell API"}

    logger.info("Inkwell API configured (env=%s)", settings.APP_ENV)
    return app


app = create_app()
