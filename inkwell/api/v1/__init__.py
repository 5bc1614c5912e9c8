"""API v1 routes."""

from fastapi import APIRouter

from inkwell.api.v1 import (
    admin_articles,
    admin_comments,
    admin_dashboard,
    admin_roles,
    admin_tags,
    admin_users,
    auth,
    health,
    posts,
    tags,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(admin_dashboard.router, prefix="/admin/dashboard", tags=["admin"])
router.include_router(admin_articles.router, prefix="/admin/articles", tags=["admin"])
router.include_router(admin_comments.router, prefix="/admin/comments", tags=["admin"])
router.include_router(admin_tags.router, prefix="/admin/tags", tags=["admin"])
router.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
router.include_router(admin_roles.router, prefix="/admin/roles", tags=["admin"])
router.include_router(
    admin_roles.permissions_router, prefix="/admin/permissions", tags=["admin"]
)
