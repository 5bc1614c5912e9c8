"""Idempotent seeding of the permission catalogue and built-in roles."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.models import Permission, Role, RoleName, RolePermission
from inkwell.services.rbac import DEFAULT_ROLE_GRANTS, KNOWN_PERMISSIONS

logger = logging.getLogger(__name__)

ROLE_DESCRIPTIONS: dict[RoleName, str] = {
    RoleName.ADMINISTRATOR: "Full access to the dashboard and user management.",
    RoleName.EDITOR: "Creates, edits and publishes any article; moderates comments and tags.",
    RoleName.CONTRIBUTOR: "Creates and edits own articles as drafts.",
}


def seed_rbac(db: Session) -> dict[str, int]:
    """
    Make sure every known permission, built-in role and default grant exists.

    Missing rows are added and nothing is removed, so grants added by an
    administrator survive a re-run. Returns counts of rows inserted.
    """
    inserted = {"permissions": 0, "roles": 0, "grants": 0}

    permissions = {p.name: p for p in db.scalars(select(Permission))}
    for name in sorted(KNOWN_PERMISSIONS - permissions.keys()):
        permissions[name] = Permission(name=name)
        db.add(permissions[name])
        inserted["permissions"] += 1

    roles = {r.name: r for r in db.scalars(select(Role))}
    for role_name in RoleName:
        if role_name.value not in roles:
            roles[role_name.value] = Role(
                name=role_name.value, description=ROLE_DESCRIPTIONS[role_name]
            )
            db.add(roles[role_name.value])
            inserted["roles"] += 1
    db.flush()

    existing = {(rp.role_id, rp.permission_id) for rp in db.scalars(select(RolePermission))}
    for role_name, grants in DEFAULT_ROLE_GRANTS.items():
        role = roles[role_name.value]
        for perm_name in sorted(grants):
            key = (role.id, permissions[perm_name].id)
            if key not in existing:
                db.add(RolePermission(role_id=key[0], permission_id=key[1]))
                inserted["grants"] += 1
    db.commit()

    logger.info("RBAC seed: %s", inserted)
    return inserted
