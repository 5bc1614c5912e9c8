"""ORM model for application users (credentials and account state)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true
from sqlalchemy.orm import relationship

from inkwell.models.base import Base


class User(Base):
    """
    User account for session login and role-based access control.

    Roles are held through the user_roles join table; see inkwell.models.rbac.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # Read-only view; role assignment goes through RoleGraph.assign_roles.
    roles = relationship(
        "Role",
        secondary="user_roles",
        viewonly=True,
        order_by="Role.name",
    )
