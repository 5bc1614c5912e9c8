"""Role/permission graph: resolves user -> roles -> permissions and replaces role sets."""

import logging
import re
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from inkwell.core.database import store_operation
from inkwell.core.errors import (
    DuplicateRole,
    NotFound,
    StoreUnavailable,
    UnknownPermission,
    UnknownRole,
)
from inkwell.models import Permission, Role, RoleName, RolePermission, User, UserRole

logger = logging.getLogger(__name__)
audit = logging.getLogger("inkwell.audit")

PERMISSION_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

# Permission catalogue seeded into the permissions table.
ADMIN_ACCESS = "admin_access"
ARTICLE_CREATE = "article_create"
ARTICLE_EDIT_ALL = "article_edit_all"
ARTICLE_PUBLISH = "article_publish"
ARTICLE_DELETE = "article_delete"
COMMENT_MODERATE = "comment_moderate"
TAG_MANAGE = "tag_manage"
USER_MANAGE = "user_manage"

KNOWN_PERMISSIONS: frozenset[str] = frozenset(
    {
        ADMIN_ACCESS,
        ARTICLE_CREATE,
        ARTICLE_EDIT_ALL,
        ARTICLE_PUBLISH,
        ARTICLE_DELETE,
        COMMENT_MODERATE,
        TAG_MANAGE,
        USER_MANAGE,
    }
)

# Default grants per built-in role.
DEFAULT_ROLE_GRANTS: dict[RoleName, frozenset[str]] = {
    RoleName.ADMINISTRATOR: KNOWN_PERMISSIONS,
    RoleName.EDITOR: frozenset(
        {
            ADMIN_ACCESS,
            ARTICLE_CREATE,
            ARTICLE_EDIT_ALL,
            ARTICLE_PUBLISH,
            COMMENT_MODERATE,
            TAG_MANAGE,
        }
    ),
    RoleName.CONTRIBUTOR: frozenset({ARTICLE_CREATE}),
}


def validate_permission_name(name: str) -> str:
    """Return name if it is a well-formed permission identifier, else raise ValueError."""
    if not isinstance(name, str) or not PERMISSION_NAME_PATTERN.match(name):
        raise ValueError(f"Invalid permission name: {name!r}")
    return name


class RoleGraph:
    """
    Queries and mutations over users, roles and permissions.

    A user's permission set is the union of the permissions of every role they
    hold. There are no per-user grants and no deny rules.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def roles_of(self, user_id: int) -> set[Role]:
        """All roles held by the user (possibly empty)."""
        with store_operation(self._db, "roles_of"):
            stmt = (
                select(Role)
                .join(UserRole, UserRole.role_id == Role.id)
                .where(UserRole.user_id == user_id)
            )
            return set(self._db.scalars(stmt))

    def role_names_of(self, user_id: int) -> list[str]:
        """Sorted role names held by the user."""
        return sorted(role.name for role in self.roles_of(user_id))

    def permissions_granted(self, role_names: Iterable[str]) -> set[str]:
        """Union of permissions across the named roles. No roles grants nothing."""
        names = set(role_names)
        if not names:
            return set()
        with store_operation(self._db, "permissions_granted"):
            stmt = (
                select(Permission.name)
                .join(RolePermission, RolePermission.permission_id == Permission.id)
                .join(Role, Role.id == RolePermission.role_id)
                .where(Role.name.in_(names))
            )
            return set(self._db.scalars(stmt))

    def permissions_of(self, user_id: int) -> set[str]:
        """Full set of permission names granted to the user through their roles."""
        with store_operation(self._db, "permissions_of"):
            stmt = (
                select(Permission.name)
                .join(RolePermission, RolePermission.permission_id == Permission.id)
                .join(UserRole, UserRole.role_id == RolePermission.role_id)
                .where(UserRole.user_id == user_id)
            )
            return set(self._db.scalars(stmt))

    def has_permission(self, user_id: int | None, permission: str) -> bool:
        """
        True if any role held by the user grants the permission.

        Fails closed: a missing user id, a malformed name or a store error all
        return False. Errors are logged, never raised to the caller.
        """
        if user_id is None:
            return False
        try:
            validate_permission_name(permission)
        except ValueError:
            logger.warning("Permission check with malformed name %r", permission)
            return False
        try:
            with store_operation(self._db, "has_permission"):
                stmt = (
                    select(func.count())
                    .select_from(RolePermission)
                    .join(UserRole, UserRole.role_id == RolePermission.role_id)
                    .join(Permission, Permission.id == RolePermission.permission_id)
                    .where(UserRole.user_id == user_id, Permission.name == permission)
                )
                count = self._db.scalar(stmt)
        except StoreUnavailable:
            logger.error(
                "Permission check failed closed: user_id=%s permission=%s",
                user_id,
                permission,
            )
            return False
        return bool(count)

    def assign_roles(self, user_id: int, role_ids: Iterable[int]) -> bool:
        """
        Replace the user's entire role set with role_ids in one transaction.

        Existing links are deleted and the new set inserted before a single
        commit; on failure the transaction rolls back and the previous set
        remains. Unknown role ids are rejected before anything is written.
        """
        target = set(role_ids)
        with store_operation(self._db, "assign_roles"):
            if self._db.get(User, user_id) is None:
                raise NotFound("User", user_id)
            self._ensure_roles_exist(target)
            for link in self._db.scalars(select(UserRole).where(UserRole.user_id == user_id)):
                self._db.delete(link)
            self._db.flush()
            self._db.add_all(UserRole(user_id=user_id, role_id=rid) for rid in sorted(target))
            self._db.commit()
        audit.info("Roles replaced for user id=%s: %s", user_id, sorted(target))
        return True

    def ensure_roles_exist(self, role_ids: Iterable[int]) -> None:
        """Raise UnknownRole unless every id names an existing role."""
        with store_operation(self._db, "ensure_roles_exist"):
            self._ensure_roles_exist(set(role_ids))

    def _ensure_roles_exist(self, role_ids: set[int]) -> None:
        if not role_ids:
            return
        known = set(self._db.scalars(select(Role.id).where(Role.id.in_(role_ids))))
        missing = role_ids - known
        if missing:
            raise UnknownRole(missing)

    def all_roles(self) -> list[Role]:
        """All roles ordered by name, permissions loaded."""
        with store_operation(self._db, "all_roles"):
            stmt = select(Role).options(selectinload(Role.permissions)).order_by(Role.name)
            return list(self._db.scalars(stmt))

    def all_permissions(self) -> list[Permission]:
        with store_operation(self._db, "all_permissions"):
            return list(self._db.scalars(select(Permission).order_by(Permission.name)))

    def get_role(self, role_id: int) -> Role:
        with store_operation(self._db, "get_role"):
            role = self._db.get(Role, role_id)
        if role is None:
            raise NotFound("Role", role_id)
        return role

    def create_role(self, name: str, description: str | None = None) -> Role:
        with store_operation(self._db, "create_role"):
            if self._db.scalar(select(Role).where(Role.name == name)) is not None:
                raise DuplicateRole(name)
            role = Role(name=name, description=description)
            self._db.add(role)
            self._db.commit()
            self._db.refresh(role)
        audit.info("Role created id=%s name=%s", role.id, name)
        return role

    def update_role(self, role_id: int, name: str, description: str | None) -> Role:
        role = self.get_role(role_id)
        with store_operation(self._db, "update_role"):
            clash = self._db.scalar(select(Role).where(Role.name == name, Role.id != role_id))
            if clash is not None:
                raise DuplicateRole(name)
            role.name = name
            role.description = description
            self._db.commit()
            self._db.refresh(role)
        audit.info("Role updated id=%s name=%s", role_id, name)
        return role

    def set_role_permissions(self, role_id: int, permission_names: Iterable[str]) -> Role:
        """Replace the permissions a role grants, with the same replace-set semantics as assign_roles."""
        names = set(permission_names)
        role = self.get_role(role_id)
        with store_operation(self._db, "set_role_permissions"):
            permissions = list(self._db.scalars(select(Permission).where(Permission.name.in_(names))))
            missing = names - {p.name for p in permissions}
            if missing:
                raise UnknownPermission(missing)
            for link in self._db.scalars(
                select(RolePermission).where(RolePermission.role_id == role_id)
            ):
                self._db.delete(link)
            self._db.flush()
            self._db.add_all(
                RolePermission(role_id=role_id, permission_id=p.id) for p in permissions
            )
            self._db.commit()
            self._db.refresh(role)
        audit.info("Permissions replaced for role id=%s: %s", role_id, sorted(names))
        return role
