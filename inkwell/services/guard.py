"""Access guard: authentication and permission checks run before protected actions."""

import logging

from inkwell.core.errors import Forbidden, Unauthenticated
from inkwell.services import sessions
from inkwell.services.rbac import RoleGraph
from inkwell.services.sessions import SessionHandle

logger = logging.getLogger(__name__)


class AccessGuard:
    """
    Stateless policy checks over a session and the role graph.

    Authentication is always checked first, so a permission check on an
    anonymous session raises Unauthenticated and never queries the graph.
    """

    def __init__(self, graph: RoleGraph) -> None:
        self._graph = graph

    @staticmethod
    def require_authenticated(session: SessionHandle) -> int:
        """Return the session's user id or raise Unauthenticated."""
        user_id = session.get(sessions.USER_ID)
        if user_id is None:
            raise Unauthenticated()
        return user_id

    def require_permission(self, session: SessionHandle, permission: str) -> int:
        """Return the session's user id if it holds permission; raise Forbidden otherwise."""
        user_id = self.require_authenticated(session)
        if not self._graph.has_permission(user_id, permission):
            logger.warning("Permission denied: user_id=%s lacks %r", user_id, permission)
            raise Forbidden(permission)
        return user_id

    def has_permission(self, session: SessionHandle, permission: str) -> bool:
        """Non-raising variant for branching inside an already-guarded action."""
        user_id = session.get(sessions.USER_ID)
        if user_id is None:
            return False
        return self._graph.has_permission(user_id, permission)
