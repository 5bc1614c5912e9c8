"""Admin article management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from inkwell.api.v1.deps import get_article_service, require_permission
from inkwell.models import ArticleStatus
from inkwell.schemas.article import ArticleIn, ArticleOut, ArticlesListResponse, ArticleStatusUpdate
from inkwell.services.articles import ArticleService
from inkwell.services.rbac import (
    ADMIN_ACCESS,
    ARTICLE_CREATE,
    ARTICLE_DELETE,
    ARTICLE_PUBLISH,
)

router = APIRouter()


@router.get("", response_model=ArticlesListResponse)
def list_articles(
    _user_id: Annotated[int, Depends(require_permission(ADMIN_ACCESS))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
    status_filter: Annotated[ArticleStatus | None, Query(alias="status")] = None,
) -> ArticlesListResponse:
    """Every article regardless of status, newest first."""
    return ArticlesListResponse(
        articles=[ArticleOut.model_validate(a) for a in articles.list_all(status_filter)]
    )


@router.post("", response_model=ArticleOut, status_code=status.HTTP_201_CREATED)
def create_article(
    body: ArticleIn,
    user_id: Annotated[int, Depends(require_permission(ARTICLE_CREATE))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
) -> ArticleOut:
    article = articles.create(
        user_id,
        title=body.title,
        content=body.content,
        status=body.status,
        tag_ids=body.tag_ids,
        featured_image=body.featured_image,
    )
    return ArticleOut.model_validate(article)


@router.get("/{article_id}", response_model=ArticleOut)
def get_article(
    article_id: int,
    user_id: Annotated[int, Depends(require_permission(ARTICLE_CREATE))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
) -> ArticleOut:
    """Load an article for editing: your own, or any with article_edit_all."""
    return ArticleOut.model_validate(articles.get_for_edit(user_id, article_id))


@router.put("/{article_id}", response_model=ArticleOut)
def update_article(
    article_id: int,
    body: ArticleIn,
    user_id: Annotated[int, Depends(require_permission(ARTICLE_CREATE))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
) -> ArticleOut:
    article = articles.update(
        user_id,
        article_id,
        title=body.title,
        content=body.content,
        status=body.status,
        tag_ids=body.tag_ids,
        featured_image=body.featured_image,
    )
    return ArticleOut.model_validate(article)


@router.post("/{article_id}/status", response_model=ArticleOut)
def set_article_status(
    article_id: int,
    body: ArticleStatusUpdate,
    user_id: Annotated[int, Depends(require_permission(ARTICLE_PUBLISH))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
) -> ArticleOut:
    """Publish, archive or move back to draft."""
    return ArticleOut.model_validate(articles.set_status(user_id, article_id, body.status))


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article(
    article_id: int,
    user_id: Annotated[int, Depends(require_permission(ARTICLE_DELETE))],
    articles: Annotated[ArticleService, Depends(get_article_service)],
) -> None:
    articles.delete(user_id, article_id)
