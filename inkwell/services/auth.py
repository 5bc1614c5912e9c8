"""Authentication service: login/logout state machine over the session store."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from inkwell.core.config import Settings
from inkwell.core.errors import InvalidCredentials
from inkwell.models import RoleName
from inkwell.services import sessions
from inkwell.services.credentials import CredentialStore
from inkwell.services.rbac import RoleGraph
from inkwell.services.sessions import SessionHandle

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid email or password."
LOGIN_SUCCEEDED_MESSAGE = "Signed in successfully."

# Highest first. Contributor is the fallback even for a user with no roles.
_PRINCIPAL_PRECEDENCE = (RoleName.ADMINISTRATOR, RoleName.EDITOR)
_ADMIN_AREA_ROLES = frozenset({RoleName.ADMINISTRATOR, RoleName.EDITOR})


def principal_role(role_names: Iterable[str]) -> RoleName:
    """
    Pick the single role used for coarse UI and redirect decisions.

    Display hint only. This is not a security boundary: authorization always
    goes through RoleGraph.has_permission.
    """
    held = set(role_names)
    for candidate in _PRINCIPAL_PRECEDENCE:
        if candidate.value in held:
            return candidate
    return RoleName.CONTRIBUTOR


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful (or already-established) login."""

    user_id: int
    principal_role: RoleName
    redirect_to: str
    already_authenticated: bool = False


class AuthService:
    """Establishes and tears down authenticated sessions."""

    def __init__(
        self,
        credentials: CredentialStore,
        graph: RoleGraph,
        settings: Settings,
    ) -> None:
        self._credentials = credentials
        self._graph = graph
        self._settings = settings

    def redirect_for(self, role: RoleName) -> str:
        if role in _ADMIN_AREA_ROLES:
            return self._settings.ADMIN_AREA_PATH
        return self._settings.PUBLIC_AREA_PATH

    def login(self, session: SessionHandle, email: str, password: str) -> LoginResult:
        """
        Anonymous -> Authenticated. Raises InvalidCredentials and stays anonymous on failure.

        A session that is already authenticated short-circuits without touching
        the credential store.
        """
        if session.has(sessions.USER_ID):
            role = RoleName(session.get(sessions.PRINCIPAL_ROLE, RoleName.CONTRIBUTOR))
            return LoginResult(
                user_id=session.get(sessions.USER_ID),
                principal_role=role,
                redirect_to=self.redirect_for(role),
                already_authenticated=True,
            )

        try:
            user = self._credentials.verify_credentials(email, password)
        except InvalidCredentials:
            logger.warning("Failed login attempt for email=%s", email)
            session.set(sessions.FLASH_ERROR, LOGIN_FAILED_MESSAGE)
            raise

        role_names = self._graph.role_names_of(user.id)
        role = principal_role(role_names)

        # New id on privilege change so a planted session id is worthless.
        session.regenerate()
        session.set(sessions.USER_ID, user.id)
        session.set(sessions.USERNAME, user.username)
        session.set(sessions.EMAIL, user.email)
        session.set(sessions.ROLES, role_names)
        session.set(sessions.PRINCIPAL_ROLE, role.value)
        session.set(sessions.FLASH_SUCCESS, LOGIN_SUCCEEDED_MESSAGE)

        logger.info("Successful login user_id=%s principal_role=%s", user.id, role.value)
        return LoginResult(
            user_id=user.id,
            principal_role=role,
            redirect_to=self.redirect_for(role),
        )

    def logout(self, session: SessionHandle) -> None:
        """Authenticated -> Anonymous."""
        if session.has(sessions.USER_ID):
            logger.info("Logout user_id=%s", session.get(sessions.USER_ID))
        session.destroy()
