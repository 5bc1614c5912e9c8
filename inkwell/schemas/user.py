"""Schemas for administrative user management."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from inkwell.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class UserCreate(BaseModel):
    """New account with at least one role."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role_ids: list[int] = Field(..., min_length=1, description="Initial roles (at least one)")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not (USERNAME_MIN_LEN <= len(v) <= USERNAME_MAX_LEN):
            raise ValueError(
                f"username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters"
            )
        return v


class UserStatusUpdate(BaseModel):
    """Omit is_active to toggle the current state."""

    is_active: bool | None = None


class RoleAssignment(BaseModel):
    """Complete replacement role set; an empty list removes every role."""

    role_ids: list[int] = Field(default_factory=list)


class UserOut(BaseModel):
    """User entry for admin views (no password hash)."""

    id: int
    username: str
    email: str
    is_active: bool
    created_at: datetime | None = None
    roles: list[str] = Field(default_factory=list)


class UsersListResponse(BaseModel):
    users: list[UserOut]
