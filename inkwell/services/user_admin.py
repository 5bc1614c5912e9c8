"""Administrative user management on top of the credential store and role graph."""

import logging
from collections.abc import Iterable

from inkwell.core.errors import NotFound, SelfDeletionRejected
from inkwell.models import User
from inkwell.services.credentials import CredentialStore
from inkwell.services.rbac import RoleGraph

logger = logging.getLogger(__name__)


class UserAdminService:
    """Account lifecycle as performed by an administrator (actor_id)."""

    def __init__(self, credentials: CredentialStore, graph: RoleGraph) -> None:
        self._credentials = credentials
        self._graph = graph

    def list_users(self) -> list[User]:
        return self._credentials.list_users()

    def get_user(self, user_id: int) -> User:
        user = self._credentials.find_by_id(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    def create_user(
        self,
        actor_id: int,
        username: str,
        email: str,
        password: str,
        role_ids: Iterable[int],
    ) -> User:
        """Create an account and give it its initial role set."""
        roles = set(role_ids)
        # Unknown role ids must fail before the account row is written.
        self._graph.ensure_roles_exist(roles)
        user_id = self._credentials.create(username, email, password)
        self._graph.assign_roles(user_id, roles)
        logger.info("user_id=%s created user id=%s", actor_id, user_id)
        return self.get_user(user_id)

    def set_active(self, actor_id: int, user_id: int, is_active: bool) -> User:
        if not self._credentials.update_active_status(user_id, is_active):
            raise NotFound("User", user_id)
        logger.info("user_id=%s set is_active=%s on user id=%s", actor_id, is_active, user_id)
        return self.get_user(user_id)

    def toggle_active(self, actor_id: int, user_id: int) -> User:
        user = self.get_user(user_id)
        return self.set_active(actor_id, user_id, not user.is_active)

    def replace_roles(self, actor_id: int, user_id: int, role_ids: Iterable[int]) -> User:
        """
        Replace the user's roles. Takes effect for permission checks at once;
        the user's displayed roles refresh at their next login.
        """
        self._graph.assign_roles(user_id, role_ids)
        logger.info("user_id=%s replaced roles of user id=%s", actor_id, user_id)
        return self.get_user(user_id)

    def delete_user(self, actor_id: int, user_id: int) -> None:
        """Hard-delete an account. Deleting your own account is rejected up front."""
        if actor_id == user_id:
            logger.warning("user_id=%s attempted to delete their own account", actor_id)
            raise SelfDeletionRejected()
        if not self._credentials.delete(user_id):
            raise NotFound("User", user_id)
        logger.info("user_id=%s deleted user id=%s", actor_id, user_id)
