"""Request/response schemas for login, logout and the session surface."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login. Not format-validated so every bad login fails the same way."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Where the client should go next; rendering the redirect is up to the client."""

    user_id: int
    principal_role: str = Field(description="Display hint only; not an authorization input")
    redirect_to: str
    already_authenticated: bool = False


class LogoutResponse(BaseModel):
    redirect_to: str


class SessionInfo(BaseModel):
    """Read-only claims for the rendering layer, plus one-shot flash messages."""

    authenticated: bool
    user_id: int | None = None
    username: str | None = None
    email: str | None = None
    roles: list[str] = Field(default_factory=list)
    principal_role: str | None = None
    flash_success: str | None = None
    flash_error: str | None = None
