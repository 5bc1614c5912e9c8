"""New-comment notifications delivered to an optional webhook."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

if TYPE_CHECKING:
    from inkwell.core.config import Settings
    from inkwell.models import Article, Comment

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when the webhook cannot be reached or rejects the payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class CommentNotifier(Protocol):
    def notify_new_comment(self, comment: Comment, article: Article) -> None: ...


class NullCommentNotifier:
    """Used when no webhook is configured."""

    def notify_new_comment(self, comment: Comment, article: Article) -> None:
        logger.debug("No comment webhook configured; skipping notification for comment %s", comment.id)


def _comment_payload(comment: Comment, article: Article) -> dict[str, Any]:
    return {
        "event": "comment.created",
        "comment": {
            "id": comment.id,
            "author_name": comment.author_name,
            "content": comment.content,
            "status": str(comment.status),
        },
        "article": {"id": article.id, "title": article.title, "slug": article.slug},
    }


class WebhookCommentNotifier:
    """POSTs a JSON summary of each new comment so moderators hear about it."""

    def __init__(self, url: str, timeout: float, client: httpx.Client | None = None) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    def notify_new_comment(self, comment: Comment, article: Article) -> None:
        payload = _comment_payload(comment, article)
        try:
            if self._client is not None:
                resp = self._client.post(self._url, json=payload, timeout=self._timeout)
            else:
                with httpx.Client() as client:
                    resp = client.post(self._url, json=payload, timeout=self._timeout)
        except httpx.TimeoutException as e:
            raise NotificationError(f"Comment webhook timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise NotificationError(f"Comment webhook unreachable: {e}") from e
        if resp.status_code >= 400:
            raise NotificationError(
                f"Comment webhook returned status {resp.status_code}", resp.status_code
            )


def build_notifier(settings: Settings) -> CommentNotifier:
    if not settings.COMMENT_WEBHOOK_URL:
        return NullCommentNotifier()
    return WebhookCommentNotifier(
        settings.COMMENT_WEBHOOK_URL, settings.COMMENT_WEBHOOK_TIMEOUT_SEC
    )
