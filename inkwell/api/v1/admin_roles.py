"""Roles and the permission catalogue."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from inkwell.api.v1.deps import get_role_graph, require_permission
from inkwell.models import Role
from inkwell.schemas.role import (
    PermissionOut,
    PermissionsListResponse,
    RoleIn,
    RoleOut,
    RolePermissionsUpdate,
    RolesListResponse,
)
from inkwell.services.rbac import USER_MANAGE, RoleGraph

router = APIRouter()
permissions_router = APIRouter()

RequireUserManager = Annotated[int, Depends(require_permission(USER_MANAGE))]


def _role_out(role: Role) -> RoleOut:
    return RoleOut(
        id=role.id,
        name=role.name,
        description=role.description,
        permissions=sorted(p.name for p in role.permissions),
    )


@router.get("", response_model=RolesListResponse)
def list_roles(
    _user_id: RequireUserManager,
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> RolesListResponse:
    return RolesListResponse(roles=[_role_out(r) for r in graph.all_roles()])


@router.post("", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def create_role(
    body: RoleIn,
    _user_id: RequireUserManager,
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> RoleOut:
    return _role_out(graph.create_role(body.name.strip(), body.description))


@router.put("/{role_id}", response_model=RoleOut)
def update_role(
    role_id: int,
    body: RoleIn,
    _user_id: RequireUserManager,
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> RoleOut:
    return _role_out(graph.update_role(role_id, body.name.strip(), body.description))


@router.put("/{role_id}/permissions", response_model=RoleOut)
def replace_role_permissions(
    role_id: int,
    body: RolePermissionsUpdate,
    _user_id: RequireUserManager,
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> RoleOut:
    """Replace the full permission set of a role. Applies to every holder at once."""
    return _role_out(graph.set_role_permissions(role_id, body.permissions))


@permissions_router.get("", response_model=PermissionsListResponse)
def list_permissions(
    _user_id: RequireUserManager,
    graph: Annotated[RoleGraph, Depends(get_role_graph)],
) -> PermissionsListResponse:
    return PermissionsListResponse(
        permissions=[PermissionOut.model_validate(p) for p in graph.all_permissions()]
    )
