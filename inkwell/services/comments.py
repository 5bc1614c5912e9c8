"""Reader comments: public posting on visible articles and moderation."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.core.database import store_operation
from inkwell.core.errors import NotFound
from inkwell.models import Comment, CommentStatus
from inkwell.services.notifier import CommentNotifier, NotificationError, NullCommentNotifier
from inkwell.services.visibility import get_public_article

logger = logging.getLogger(__name__)
audit = logging.getLogger("inkwell.audit")


class CommentService:
    def __init__(self, db: Session, notifier: CommentNotifier | None = None) -> None:
        self._db = db
        self._notifier = notifier or NullCommentNotifier()

    def post_public_comment(
        self,
        article_id: int,
        author_name: str,
        content: str,
        author_email: str | None = None,
    ) -> Comment:
        """
        Add a comment to a publicly visible article. New comments wait for moderation.

        Comments on hidden articles fail with the same not-found as missing ones.
        """
        article = get_public_article(self._db, article_id)
        with store_operation(self._db, "post_comment"):
            comment = Comment(
                article_id=article.id,
                author_name=author_name,
                author_email=author_email,
                content=content,
                status=CommentStatus.PENDING,
            )
            self._db.add(comment)
            self._db.commit()
            self._db.refresh(comment)
        logger.info("Comment id=%s posted on article id=%s", comment.id, article.id)
        try:
            self._notifier.notify_new_comment(comment, article)
        except NotificationError as e:
            # The comment is stored; moderators still see it in the queue.
            logger.warning("New-comment notification failed for comment %s: %s", comment.id, e.message)
        return comment

    def approved_for_article(self, article_id: int) -> list[Comment]:
        with store_operation(self._db, "approved_comments"):
            stmt = (
                select(Comment)
                .where(Comment.article_id == article_id, Comment.status == CommentStatus.APPROVED)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
            )
            return list(self._db.scalars(stmt))

    def list_all(self, status: CommentStatus | None = None) -> list[Comment]:
        """Moderation queue, newest first."""
        with store_operation(self._db, "list_comments"):
            stmt = select(Comment).order_by(Comment.created_at.desc(), Comment.id.desc())
            if status is not None:
                stmt = stmt.where(Comment.status == status)
            return list(self._db.scalars(stmt))

    def set_status(self, actor_id: int, comment_id: int, status: CommentStatus) -> Comment:
        with store_operation(self._db, "moderate_comment"):
            comment = self._db.get(Comment, comment_id)
            if comment is None:
                raise NotFound("Comment", comment_id)
            comment.status = status
            self._db.commit()
            self._db.refresh(comment)
        audit.info("Comment id=%s set to %s by user_id=%s", comment_id, status, actor_id)
        return comment

    def delete(self, actor_id: int, comment_id: int) -> None:
        with store_operation(self._db, "delete_comment"):
            comment = self._db.get(Comment, comment_id)
            if comment is None:
                raise NotFound("Comment", comment_id)
            self._db.delete(comment)
            self._db.commit()
        audit.info("Comment id=%s deleted by user_id=%s", comment_id, actor_id)
