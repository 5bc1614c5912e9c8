"""Schemas for articles (admin and public views)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from inkwell.models import ArticleStatus
from inkwell.schemas.comment import PublicCommentOut
from inkwell.schemas.tag import TagOut


class ArticleIn(BaseModel):
    """Create or full update. Any status but Draft needs publish rights."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    status: ArticleStatus = ArticleStatus.DRAFT
    tag_ids: list[int] = Field(default_factory=list)
    featured_image: str | None = Field(
        default=None, max_length=255, description="Path of an already uploaded image"
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class ArticleStatusUpdate(BaseModel):
    status: ArticleStatus


class ArticleOut(BaseModel):
    """Article as seen in the admin area."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    slug: str
    content: str
    featured_image: str | None = None
    status: ArticleStatus
    author_id: int | None = None
    author_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[TagOut] = Field(default_factory=list)


class PublicArticleOut(BaseModel):
    """Published article for readers."""

    model_config = {"from_attributes": True}

    id: int
    title: str
    slug: str
    content: str
    featured_image: str | None = None
    author_name: str | None = None
    created_at: datetime | None = None
    tags: list[TagOut] = Field(default_factory=list)


class PublicArticleDetail(PublicArticleOut):
    comments: list[PublicCommentOut] = Field(default_factory=list)


class ArticlesListResponse(BaseModel):
    articles: list[ArticleOut]


class PublicArticlesPage(BaseModel):
    articles: list[PublicArticleOut]
    total: int
    limit: int
    offset: int
