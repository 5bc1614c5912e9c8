"""Closed vocabularies stored in the database."""

import enum


class RoleName(enum.StrEnum):
    """Built-in roles. Administrators may add more rows to the roles table."""

    ADMINISTRATOR = "Administrator"
    EDITOR = "Editor"
    CONTRIBUTOR = "Contributor"


class ArticleStatus(enum.StrEnum):
    """Article lifecycle. Only PUBLISHED is visible on public read paths."""

    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


class CommentStatus(enum.StrEnum):
    """Comment moderation state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
