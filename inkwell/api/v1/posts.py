"""Public read paths: published articles and reader comments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inkwell.api.v1.deps import get_article_service, get_comment_service
from inkwell.core.database import get_db
from inkwell.schemas.article import PublicArticleDetail, PublicArticleOut, PublicArticlesPage
from inkwell.schemas.comment import CommentCreate, PublicCommentOut
from inkwell.services.articles import ArticleService
from inkwell.services.comments import CommentService
from inkwell.services.visibility import get_public_article

router = APIRouter()


@router.get("", response_model=PublicArticlesPage)
def list_posts(
    articles: Annotated[ArticleService, Depends(get_article_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> PublicArticlesPage:
    """Published articles, newest first."""
    page, total = articles.list_published(limit=limit, offset=offset)
    return PublicArticlesPage(
        articles=[PublicArticleOut.model_validate(a) for a in page],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{article_id}", response_model=PublicArticleDetail)
def get_post(
    article_id: int,
    db: Annotated[Session, Depends(get_db)],
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> PublicArticleDetail:
    """One published article with its approved comments. Anything else is a 404."""
    article = get_public_article(db, article_id)
    base = PublicArticleOut.model_validate(article)
    return PublicArticleDetail(
        **base.model_dump(),
        comments=[
            PublicCommentOut.model_validate(c) for c in comments.approved_for_article(article.id)
        ],
    )


@router.post(
    "/{article_id}/comments",
    response_model=PublicCommentOut,
    status_code=status.HTTP_201_CREATED,
)
def post_comment(
    article_id: int,
    body: CommentCreate,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> PublicCommentOut:
    """Submit a comment for moderation. It is not shown until approved."""
    comment = comments.post_public_comment(
        article_id,
        author_name=body.author_name,
        content=body.content,
        author_email=body.author_email,
    )
    return PublicCommentOut.model_validate(comment)
