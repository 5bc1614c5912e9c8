"""Session cookie transport: binds a SessionHandle to every request."""

import logging

import jwt
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from inkwell.core.config import Settings
from inkwell.core.security import create_session_token, decode_session_token
from inkwell.services.sessions import SessionHandle, SessionStore

logger = logging.getLogger(__name__)


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Resolve the signed session cookie into ``request.state.session``.

    After the endpoint runs, the handle tells us whether the browser needs a
    new cookie (session started or id rotated) or must drop its cookie
    (logout, expired or forged session).
    """

    def __init__(self, app: ASGIApp, store: SessionStore, settings: Settings) -> None:
        super().__init__(app)
        self._store = store
        self._settings = settings

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cookie_name = self._settings.SESSION_COOKIE_NAME
        token = request.cookies.get(cookie_name)
        session_id: str | None = None
        if token:
            try:
                session_id = decode_session_token(token)
            except jwt.PyJWTError:
                logger.info("Rejected invalid or expired session cookie from %s", _client_ip(request))

        handle = SessionHandle(self._store, session_id)
        request.state.session = handle

        response = await call_next(request)

        action = handle.cookie_action
        if action == "set":
            response.set_cookie(
                key=cookie_name,
                value=create_session_token(
                    handle.session_id, self._settings.SESSION_MAX_AGE_SECONDS
                ),
                max_age=self._settings.SESSION_MAX_AGE_SECONDS,
                httponly=True,
                secure=self._settings.SESSION_COOKIE_SECURE,
                samesite="lax",
                path="/",
            )
        elif action == "clear" or (token and not handle.is_started):
            response.delete_cookie(
                key=cookie_name,
                path="/",
                secure=self._settings.SESSION_COOKIE_SECURE,
                httponly=True,
                samesite="lax",
            )
        return response


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"
