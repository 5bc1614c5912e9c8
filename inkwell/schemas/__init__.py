"""Pydantic request/response schemas."""

from inkwell.schemas.article import (
    ArticleIn,
    ArticleOut,
    ArticlesListResponse,
    ArticleStatusUpdate,
    PublicArticleDetail,
    PublicArticleOut,
    PublicArticlesPage,
)
from inkwell.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionInfo
from inkwell.schemas.comment import (
    CommentCreate,
    CommentOut,
    CommentsListResponse,
    PublicCommentOut,
)
from inkwell.schemas.dashboard import DashboardResponse
from inkwell.schemas.health import HealthResponse
from inkwell.schemas.role import (
    PermissionOut,
    PermissionsListResponse,
    RoleIn,
    RoleOut,
    RolePermissionsUpdate,
    RolesListResponse,
)
from inkwell.schemas.tag import TagIn, TagOut, TagsListResponse, TagWithCount
from inkwell.schemas.user import (
    RoleAssignment,
    UserCreate,
    UserOut,
    UsersListResponse,
    UserStatusUpdate,
)

__all__ = [
    "ArticleIn",
    "ArticleOut",
    "ArticleStatusUpdate",
    "ArticlesListResponse",
    "CommentCreate",
    "CommentOut",
    "CommentsListResponse",
    "DashboardResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "PermissionOut",
    "PermissionsListResponse",
    "PublicArticleDetail",
    "PublicArticleOut",
    "PublicArticlesPage",
    "PublicCommentOut",
    "RoleAssignment",
    "RoleIn",
    "RoleOut",
    "RolePermissionsUpdate",
    "RolesListResponse",
    "SessionInfo",
    "TagIn",
    "TagOut",
    "TagWithCount",
    "TagsListResponse",
    "UserCreate",
    "UserOut",
    "UserStatusUpdate",
    "UsersListResponse",
]
