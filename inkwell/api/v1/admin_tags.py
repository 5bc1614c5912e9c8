"""Tag management."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from inkwell.api.v1.deps import get_tag_service, require_permission
from inkwell.api.v1.tags import tag_listing
from inkwell.schemas.tag import TagIn, TagOut, TagsListResponse
from inkwell.services.rbac import TAG_MANAGE
from inkwell.services.tags import TagService

router = APIRouter()

RequireTagManager = Annotated[int, Depends(require_permission(TAG_MANAGE))]


@router.get("", response_model=TagsListResponse)
def list_tags(
    _user_id: RequireTagManager,
    tags: Annotated[TagService, Depends(get_tag_service)],
) -> TagsListResponse:
    return tag_listing(tags)


@router.post("", response_model=TagOut, status_code=status.HTTP_201_CREATED)
def create_tag(
    body: TagIn,
    user_id: RequireTagManager,
    tags: Annotated[TagService, Depends(get_tag_service)],
) -> TagOut:
    return TagOut.model_validate(tags.create(user_id, body.name))


@router.put("/{tag_id}", response_model=TagOut)
def update_tag(
    tag_id: int,
    body: TagIn,
    user_id: RequireTagManager,
    tags: Annotated[TagService, Depends(get_tag_service)],
) -> TagOut:
    return TagOut.model_validate(tags.update(user_id, tag_id, body.name))


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(
    tag_id: int,
    user_id: RequireTagManager,
    tags: Annotated[TagService, Depends(get_tag_service)],
) -> None:
    """Delete the tag; articles that carried it simply lose it."""
    tags.delete(user_id, tag_id)
