"""Public tag listing and per-tag article pages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from inkwell.api.v1.deps import get_article_service, get_tag_service
from inkwell.schemas.article import PublicArticleOut, PublicArticlesPage
from inkwell.schemas.tag import TagsListResponse, TagWithCount
from inkwell.services.articles import ArticleService
from inkwell.services.tags import TagService

router = APIRouter()


def tag_listing(tags: TagService) -> TagsListResponse:
    return TagsListResponse(
        tags=[
            TagWithCount(id=tag.id, name=tag.name, slug=tag.slug, article_count=count)
            for tag, count in tags.list_with_counts()
        ]
    )


@router.get("", response_model=TagsListResponse)
def list_tags(tags: Annotated[TagService, Depends(get_tag_service)]) -> TagsListResponse:
    """All tags with their published-article counts."""
    return tag_listing(tags)


@router.get("/{slug}/posts", response_model=PublicArticlesPage)
def list_tag_posts(
    slug: str,
    tags: Annotated[TagService, Depends(get_tag_service)],
    articles: Annotated[ArticleService, Depends(get_article_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> PublicArticlesPage:
    tag = tags.get_by_slug(slug)
    page, total = articles.list_published(tag_slug=tag.slug, limit=limit, offset=offset)
    return PublicArticlesPage(
        articles=[PublicArticleOut.model_validate(a) for a in page],
        total=total,
        limit=limit,
        offset=offset,
    )
