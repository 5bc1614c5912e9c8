"""Article authoring: admin CRUD, publication gate and public listings."""

import html
import logging
from collections.abc import Callable, Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from inkwell.core.database import store_operation
from inkwell.core.errors import Forbidden, NotFound
from inkwell.models import Article, ArticleStatus, Comment, Tag
from inkwell.services.rbac import ARTICLE_EDIT_ALL, ARTICLE_PUBLISH, RoleGraph
from inkwell.services.slugs import unique_slug
from inkwell.services.visibility import published_articles

logger = logging.getLogger(__name__)
audit = logging.getLogger("inkwell.audit")

Sanitizer = Callable[[str], str]


def escape_markup(body: str) -> str:
    """Default sanitizer: neutralize raw HTML, leave Markdown syntax alone."""
    return html.escape(body, quote=False)


class ArticleService:
    """
    Article operations for an authenticated actor.

    Route guards check the coarse permission (article_create, article_delete,
    ...). This service adds the per-article rules: editing someone else's
    article needs article_edit_all, and any status other than Draft needs
    article_publish.
    """

    def __init__(
        self,
        db: Session,
        graph: RoleGraph,
        sanitize: Sanitizer = escape_markup,
    ) -> None:
        self._db = db
        self._graph = graph
        self._sanitize = sanitize

    def list_all(self, status: ArticleStatus | None = None) -> list[Article]:
        with store_operation(self._db, "list_articles"):
            stmt = select(Article).order_by(Article.created_at.desc(), Article.id.desc())
            if status is not None:
                stmt = stmt.where(Article.status == status)
            return list(self._db.scalars(stmt).unique())

    def get(self, article_id: int) -> Article:
        with store_operation(self._db, "get_article"):
            article = self._db.get(Article, article_id)
        if article is None:
            raise NotFound("Article", article_id)
        return article

    def get_for_edit(self, actor_id: int, article_id: int) -> Article:
        article = self.get(article_id)
        self._require_can_edit(actor_id, article)
        return article

    def create(
        self,
        actor_id: int,
        title: str,
        content: str,
        status: ArticleStatus = ArticleStatus.DRAFT,
        tag_ids: Iterable[int] = (),
        featured_image: str | None = None,
    ) -> Article:
        self._require_can_set_status(actor_id, status)
        with store_operation(self._db, "create_article"):
            article = Article(
                author_id=actor_id,
                title=title,
                slug=unique_slug(self._db, Article, title),
                content=self._sanitize(content),
                featured_image=featured_image,
                status=status,
            )
            article.tags = self._resolve_tags(tag_ids)
            self._db.add(article)
            self._db.commit()
            self._db.refresh(article)
        audit.info("Article created id=%s by user_id=%s status=%s", article.id, actor_id, status)
        return article

    def update(
        self,
        actor_id: int,
        article_id: int,
        title: str,
        content: str,
        status: ArticleStatus,
        tag_ids: Iterable[int] = (),
        featured_image: str | None = None,
    ) -> Article:
        article = self.get_for_edit(actor_id, article_id)
        self._require_can_set_status(actor_id, status)
        with store_operation(self._db, "update_article"):
            if title != article.title:
                article.slug = unique_slug(self._db, Article, title, exclude_id=article.id)
            article.title = title
            article.content = self._sanitize(content)
            article.status = status
            article.featured_image = featured_image
            article.tags = self._resolve_tags(tag_ids)
            self._db.commit()
            self._db.refresh(article)
        audit.info("Article updated id=%s by user_id=%s status=%s", article_id, actor_id, status)
        return article

    def set_status(self, actor_id: int, article_id: int, status: ArticleStatus) -> Article:
        """Publish, archive or revert to draft. Caller is guarded by article_publish."""
        article = self.get(article_id)
        with store_operation(self._db, "set_article_status"):
            article.status = status
            self._db.commit()
            self._db.refresh(article)
        audit.info("Article status id=%s -> %s by user_id=%s", article_id, status, actor_id)
        return article

    def delete(self, actor_id: int, article_id: int) -> None:
        article = self.get(article_id)
        with store_operation(self._db, "delete_article"):
            self._db.execute(delete(Comment).where(Comment.article_id == article_id))
            self._db.delete(article)
            self._db.commit()
        audit.info("Article deleted id=%s by user_id=%s", article_id, actor_id)

    def list_published(
        self,
        tag_slug: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Article], int]:
        """Public listing (newest first) and the total count of matching articles."""
        with store_operation(self._db, "list_published"):
            stmt = published_articles()
            if tag_slug is not None:
                stmt = stmt.where(Article.tags.any(Tag.slug == tag_slug))
            total = self._db.scalar(stmt.with_only_columns(func.count(Article.id)))
            page = stmt.order_by(Article.created_at.desc(), Article.id.desc()).limit(limit).offset(offset)
            return list(self._db.scalars(page).unique()), total or 0

    def _require_can_edit(self, actor_id: int, article: Article) -> None:
        if article.author_id == actor_id:
            return
        if not self._graph.has_permission(actor_id, ARTICLE_EDIT_ALL):
            logger.warning(
                "user_id=%s tried to edit article id=%s owned by user_id=%s",
                actor_id,
                article.id,
                article.author_id,
            )
            raise Forbidden(ARTICLE_EDIT_ALL)

    def _require_can_set_status(self, actor_id: int, status: ArticleStatus) -> None:
        if status == ArticleStatus.DRAFT:
            return
        if not self._graph.has_permission(actor_id, ARTICLE_PUBLISH):
            logger.warning("user_id=%s tried to set status %s without publish rights", actor_id, status)
            raise Forbidden(ARTICLE_PUBLISH)

    def _resolve_tags(self, tag_ids: Iterable[int]) -> list[Tag]:
        wanted = set(tag_ids)
        if not wanted:
            return []
        tags = list(self._db.scalars(select(Tag).where(Tag.id.in_(wanted))))
        missing = wanted - {t.id for t in tags}
        if missing:
            raise NotFound("Tag", min(missing))
        return tags
