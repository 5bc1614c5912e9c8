"""Schemas for roles and permissions."""

from pydantic import BaseModel, Field


class PermissionOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class RoleOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    permissions: list[str] = Field(default_factory=list)


class RoleIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=255)


class RolePermissionsUpdate(BaseModel):
    """Complete replacement permission set for a role."""

    permissions: list[str] = Field(default_factory=list)


class RolesListResponse(BaseModel):
    roles: list[RoleOut]


class PermissionsListResponse(BaseModel):
    permissions: list[PermissionOut]
