"""SQLAlchemy ORM models."""

from inkwell.models.article import Article, Tag, article_tags
from inkwell.models.base import Base
from inkwell.models.comment import Comment
from inkwell.models.enums import ArticleStatus, CommentStatus, RoleName
from inkwell.models.rbac import Permission, Role, RolePermission, UserRole
from inkwell.models.user import User

__all__ = [
    "Article",
    "ArticleStatus",
    "Base",
    "Comment",
    "CommentStatus",
    "Permission",
    "Role",
    "RoleName",
    "RolePermission",
    "Tag",
    "User",
    "UserRole",
    "article_tags",
]
