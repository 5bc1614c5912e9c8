"""Content visibility policy for public (unauthenticated) read paths."""

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from inkwell.core.database import store_operation
from inkwell.core.errors import ArticleNotFound
from inkwell.models import Article, ArticleStatus


def is_publicly_visible(article: Article) -> bool:
    """Only published articles may be shown to the public. Draft and Archived never are."""
    return article.status == ArticleStatus.PUBLISHED


def published_articles() -> Select:
    """Base query for every public listing; filters at the query layer."""
    return select(Article).where(Article.status == ArticleStatus.PUBLISHED)


def get_public_article(db: Session, article_id: int) -> Article:
    """
    Fetch an article for public display.

    A hidden article raises the same ArticleNotFound as a missing one so the
    caller cannot learn that unpublished content exists.
    """
    with store_operation(db, "get_public_article"):
        article = db.scalar(published_articles().where(Article.id == article_id))
    if article is None or not is_publicly_visible(article):
        raise ArticleNotFound(article_id)
    return article
