"""Health check payload: process liveness, store reachability and session load."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """What /health reports to load balancers and uptime monitors."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV of the running process")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the credential and content store answered a ping",
    )
    active_sessions: int = Field(
        default=0, description="Live server-side sessions held by this process"
    )
