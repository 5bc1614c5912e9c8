"""Schemas for reader comments and moderation."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from inkwell.models import CommentStatus


class CommentCreate(BaseModel):
    author_name: str = Field(..., min_length=1, max_length=100)
    author_email: EmailStr | None = None
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("author_name", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class PublicCommentOut(BaseModel):
    """Comment as shown to readers (no email, no status)."""

    model_config = {"from_attributes": True}

    id: int
    author_name: str
    content: str
    created_at: datetime | None = None


class CommentOut(PublicCommentOut):
    """Comment as shown to moderators."""

    article_id: int
    author_email: str | None = None
    status: CommentStatus


class CommentsListResponse(BaseModel):
    comments: list[CommentOut]
