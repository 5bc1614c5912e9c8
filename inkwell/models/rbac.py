"""RBAC models: Role, Permission and the UserRole / RolePermission join tables."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from inkwell.models.base import Base


class Permission(Base):
    """Atomic named capability, e.g. ``article_delete``."""

    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)


class Role(Base):
    """Named bundle of permissions assignable to users."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True, index=True)
    description = Column(String(255), nullable=True)

    permissions = relationship(
        "Permission",
        secondary="role_permissions",
        viewonly=True,
        order_by="Permission.name",
    )


class RolePermission(Base):
    """Join table: what each role grants."""

    __tablename__ = "role_permissions"

    role_id = Column(
        Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id = Column(
        Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True
    )


class UserRole(Base):
    """Join table: roles held by each user. A user may hold several."""

    __tablename__ = "user_roles"

    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role_id = Column(
        Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
