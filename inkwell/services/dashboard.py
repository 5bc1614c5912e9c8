"""Counters for the administrative dashboard."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inkwell.core.database import store_operation
from inkwell.models import Article, ArticleStatus, Comment, CommentStatus, User


def site_stats(db: Session) -> dict[str, int]:
    """Article, comment and user counts."""
    with store_operation(db, "site_stats"):
        return {
            "articles": db.scalar(select(func.count(Article.id))) or 0,
            "published_articles": db.scalar(
                select(func.count(Article.id)).where(Article.status == ArticleStatus.PUBLISHED)
            )
            or 0,
            "comments": db.scalar(select(func.count(Comment.id))) or 0,
            "pending_comments": db.scalar(
                select(func.count(Comment.id)).where(Comment.status == CommentStatus.PENDING)
            )
            or 0,
            "users": db.scalar(select(func.count(User.id))) or 0,
        }
