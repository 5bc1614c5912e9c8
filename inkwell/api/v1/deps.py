"""FastAPI dependencies: per-request services, session access and permission guards."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from inkwell.core.config import Settings
from inkwell.core.database import get_db
from inkwell.services.articles import ArticleService, Sanitizer
from inkwell.services.auth import AuthService
from inkwell.services.comments import CommentService
from inkwell.services.credentials import CredentialStore
from inkwell.services.guard import AccessGuard
from inkwell.services.notifier import CommentNotifier
from inkwell.services.rbac import KNOWN_PERMISSIONS, RoleGraph, validate_permission_name
from inkwell.services.sessions import SessionHandle
from inkwell.services.tags import TagService
from inkwell.services.user_admin import UserAdminService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> SessionHandle:
    """The current client's session, attached by SessionMiddleware."""
    session = getattr(request.state, "session", None)
    if session is None:
        raise RuntimeError("SessionMiddleware is not installed")
    return session


def get_role_graph(db: Annotated[Session, Depends(get_db)]) -> RoleGraph:
    return RoleGraph(db)


def get_credentials(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    return CredentialStore(db)


def get_guard(graph: Annotated[RoleGraph, Depends(get_role_graph)]) -> AccessGuard:
    return AccessGuard(graph)


def get_auth_service(
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthService:
    return AuthService(credentials, graph, settings)


def get_user_admin(
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> UserAdminService:
    return UserAdminService(credentials, graph)


def get_article_service(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> ArticleService:
    sanitize: Sanitizer = request.app.state.sanitize
    return ArticleService(db, graph, sanitize=sanitize)


def get_comment_service(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> CommentService:
    notifier: CommentNotifier = request.app.state.notifier
    return CommentService(db, notifier=notifier)


def get_tag_service(db: Annotated[Session, Depends(get_db)]) -> TagService:
    return TagService(db)


def current_user_id(
    session: Annotated[SessionHandle, Depends(get_session)],
) -> int:
    """Dependency: the authenticated user's id. Raises Unauthenticated otherwise."""
    return AccessGuard.require_authenticated(session)


class PermissionDependencyFactory:
    """
    Creates dependencies that enforce one permission and return the user id.

    Names are checked against the permission catalogue when the route module
    is imported, so a misspelt permission fails at startup instead of
    silently denying every request.

    Usage::

        @router.delete("/{article_id}")
        def delete_article(user_id: Annotated[int, Depends(require_permission("article_delete"))]): ...
    """

    def __call__(self, permission: str) -> Callable[..., int]:
        validate_permission_name(permission)
        if permission not in KNOWN_PERMISSIONS:
            raise ValueError(f"Unknown permission: {permission!r}")

        def _dependency(
            session: Annotated[SessionHandle, Depends(get_session)],
            guard: Annotated[AccessGuard, Depends(get_guard)],
        ) -> int:
            return guard.require_permission(session, permission)

        _dependency.__name__ = f"require_{permission}"
        return _dependency


require_permission = PermissionDependencyFactory()
