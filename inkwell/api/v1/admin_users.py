"""User administration: accounts, activation and role sets."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from inkwell.api.v1.deps import get_user_admin, require_permission
from inkwell.models import User
from inkwell.schemas.user import (
    RoleAssignment,
    UserCreate,
    UserOut,
    UsersListResponse,
    UserStatusUpdate,
)
from inkwell.services.rbac import USER_MANAGE
from inkwell.services.user_admin import UserAdminService

router = APIRouter()

RequireUserManager = Annotated[int, Depends(require_permission(USER_MANAGE))]


def _user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        roles=sorted(r.name for r in user.roles),
    )


@router.get("", response_model=UsersListResponse)
def list_users(
    _user_id: RequireUserManager,
    admin: Annotated[UserAdminService, Depends(get_user_admin)],
) -> UsersListResponse:
    """All accounts with their roles, newest first."""
    return UsersListResponse(users=[_user_out(u) for u in admin.list_users()])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    user_id: RequireUserManager,
    admin: Annotated[UserAdminService, Depends(get_user_admin)],
) -> UserOut:
    user = admin.create_user(
        user_id,
        username=body.username,
        email=str(body.email),
        password=body.password,
        role_ids=body.role_ids,
    )
    return _user_out(user)


@router.post("/{target_id}/status", response_model=UserOut)
def set_user_status(
    target_id: int,
    body: UserStatusUpdate,
    user_id: RequireUserManager,
    admin: Annotated[UserAdminService, Depends(get_user_admin)],
) -> UserOut:
    """Activate or deactivate an account; an empty body toggles."""
    if body.is_active is None:
        return _user_out(admin.toggle_active(user_id, target_id))
    return _user_out(admin.set_active(user_id, target_id, body.is_active))


@router.put("/{target_id}/roles", response_model=UserOut)
def replace_user_roles(
    target_id: int,
    body: RoleAssignment,
    user_id: RequireUserManager,
    admin: Annotated[UserAdminService, Depends(get_user_admin)],
) -> UserOut:
    return _user_out(admin.replace_roles(user_id, target_id, body.role_ids))


@router.delete("/{target_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    target_id: int,
    user_id: RequireUserManager,
    admin: Annotated[UserAdminService, Depends(get_user_admin)],
) -> None:
    admin.delete_user(user_id, target_id)
