"""Session login, logout and the current-session surface."""

from typing import Annotated

from fastapi import APIRouter, Depends

from inkwell.api.v1.deps import get_app_settings, get_auth_service, get_session
from inkwell.core.config import Settings
from inkwell.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionInfo
from inkwell.services import sessions
from inkwell.services.auth import AuthService
from inkwell.services.sessions import SessionHandle

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password and start a session.

    The session cookie is set on the response. Any failure (unknown email,
    wrong password, disabled account) returns the same 401.
    """
    result = auth.login(session, body.email.strip(), body.password)
    return LoginResponse(
        user_id=result.user_id,
        principal_role=result.principal_role.value,
        redirect_to=result.redirect_to,
        already_authenticated=result.already_authenticated,
    )


@router.post("/logout", response_model=LogoutResponse)
def logout(
    session: Annotated[SessionHandle, Depends(get_session)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LogoutResponse:
    """End the session and clear the cookie. Safe to call when not logged in."""
    auth.logout(session)
    return LogoutResponse(redirect_to=settings.PUBLIC_AREA_PATH)


@router.get("/me", response_model=SessionInfo)
def me(session: Annotated[SessionHandle, Depends(get_session)]) -> SessionInfo:
    """Current claims and any pending flash messages (each shown once)."""
    claims = session.claims()
    return SessionInfo(
        authenticated=claims[sessions.USER_ID] is not None,
        user_id=claims[sessions.USER_ID],
        username=claims[sessions.USERNAME],
        email=claims[sessions.EMAIL],
        roles=claims[sessions.ROLES] or [],
        principal_role=claims[sessions.PRINCIPAL_ROLE],
        flash_success=session.pop(sessions.FLASH_SUCCESS),
        flash_error=session.pop(sessions.FLASH_ERROR),
    )
