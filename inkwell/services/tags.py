"""Tag management and public tag listings."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkwell.core.database import store_operation
from inkwell.core.errors import DuplicateTag, NotFound
from inkwell.models import Article, ArticleStatus, Tag, article_tags
from inkwell.services.slugs import unique_slug

logger = logging.getLogger(__name__)
audit = logging.getLogger("inkwell.audit")

TAG_SLUG_MAX_LEN = 50


class TagService:
    def __init__(self, db: Session) -> None:
        self._db = db

    def list_with_counts(self) -> list[tuple[Tag, int]]:
        """Every tag with the number of published articles carrying it."""
        with store_operation(self._db, "list_tags"):
            published = (
                select(article_tags.c.tag_id, func.count().label("n"))
                .join(Article, Article.id == article_tags.c.article_id)
                .where(Article.status == ArticleStatus.PUBLISHED)
                .group_by(article_tags.c.tag_id)
                .subquery()
            )
            stmt = (
                select(Tag, func.coalesce(published.c.n, 0))
                .outerjoin(published, published.c.tag_id == Tag.id)
                .order_by(Tag.name)
            )
            return [(tag, count) for tag, count in self._db.execute(stmt)]

    def get(self, tag_id: int) -> Tag:
        with store_operation(self._db, "get_tag"):
            tag = self._db.get(Tag, tag_id)
        if tag is None:
            raise NotFound("Tag", tag_id)
        return tag

    def get_by_slug(self, slug: str) -> Tag:
        with store_operation(self._db, "get_tag_by_slug"):
            tag = self._db.scalar(select(Tag).where(Tag.slug == slug))
        if tag is None:
            raise NotFound("Tag", slug)
        return tag

    def create(self, actor_id: int, name: str) -> Tag:
        with store_operation(self._db, "create_tag"):
            self._ensure_name_free(name)
            tag = Tag(name=name, slug=unique_slug(self._db, Tag, name, max_length=TAG_SLUG_MAX_LEN))
            self._db.add(tag)
            self._db.commit()
            self._db.refresh(tag)
        audit.info("Tag created id=%s name=%s by user_id=%s", tag.id, name, actor_id)
        return tag

    def update(self, actor_id: int, tag_id: int, name: str) -> Tag:
        tag = self.get(tag_id)
        with store_operation(self._db, "update_tag"):
            self._ensure_name_free(name, exclude_id=tag_id)
            if name != tag.name:
                tag.slug = unique_slug(
                    self._db, Tag, name, exclude_id=tag_id, max_length=TAG_SLUG_MAX_LEN
                )
            tag.name = name
            self._db.commit()
            self._db.refresh(tag)
        audit.info("Tag updated id=%s name=%s by user_id=%s", tag_id, name, actor_id)
        return tag

    def delete(self, actor_id: int, tag_id: int) -> None:
        """Delete a tag and detach it from every article."""
        tag = self.get(tag_id)
        with store_operation(self._db, "delete_tag"):
            self._db.execute(article_tags.delete().where(article_tags.c.tag_id == tag_id))
            self._db.delete(tag)
            self._db.commit()
        audit.info("Tag deleted id=%s by user_id=%s", tag_id, actor_id)

    def _ensure_name_free(self, name: str, exclude_id: int | None = None) -> None:
        stmt = select(Tag.id).where(func.lower(Tag.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(Tag.id != exclude_id)
        if self._db.scalar(stmt) is not None:
            raise DuplicateTag(name)
