"""Schema for the admin dashboard."""

from pydantic import BaseModel


class DashboardResponse(BaseModel):
    username: str | None = None
    principal_role: str | None = None
    articles: int
    published_articles: int
    comments: int
    pending_comments: int
    users: int
