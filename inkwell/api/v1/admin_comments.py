"""Comment moderation queue."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from inkwell.api.v1.deps import get_comment_service, require_permission
from inkwell.models import CommentStatus
from inkwell.schemas.comment import CommentOut, CommentsListResponse
from inkwell.services.comments import CommentService
from inkwell.services.rbac import COMMENT_MODERATE

router = APIRouter()

RequireModerator = Annotated[int, Depends(require_permission(COMMENT_MODERATE))]


@router.get("", response_model=CommentsListResponse)
def list_comments(
    _user_id: RequireModerator,
    comments: Annotated[CommentService, Depends(get_comment_service)],
    status_filter: Annotated[CommentStatus | None, Query(alias="status")] = None,
) -> CommentsListResponse:
    return CommentsListResponse(
        comments=[CommentOut.model_validate(c) for c in comments.list_all(status_filter)]
    )


@router.post("/{comment_id}/approve", response_model=CommentOut)
def approve_comment(
    comment_id: int,
    user_id: RequireModerator,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> CommentOut:
    return CommentOut.model_validate(
        comments.set_status(user_id, comment_id, CommentStatus.APPROVED)
    )


@router.post("/{comment_id}/reject", response_model=CommentOut)
def reject_comment(
    comment_id: int,
    user_id: RequireModerator,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> CommentOut:
    return CommentOut.model_validate(
        comments.set_status(user_id, comment_id, CommentStatus.REJECTED)
    )


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    user_id: RequireModerator,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> None:
    comments.delete(user_id, comment_id)
