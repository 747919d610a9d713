"""API Models - Pydantic models for FastAPI endpoints.

Defines request and response schemas for the Helpdesk HTTP gateway.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class InboundMessageRequest(BaseModel):
    """A message written by a user in a channel."""

    channel_id: int = Field(description="Channel the message was posted in")
    author_id: int = Field(description="User who wrote it")
    content: str = Field(description="Raw message text")
    author_is_bot: bool = Field(default=False, description="Whether the author is a bot")


class SessionInfo(BaseModel):
    """A live dialogue session."""

    channel_id: int
    user_id: int
    node_id: str = Field(description="Node whose reply is awaited")
    tracked_messages: int = Field(description="Messages the session will clean up")


class InboundMessageResponse(BaseModel):
    """What happened to an inbound message."""

    message_id: int
    status: Literal["started", "continued", "ignored"]
    session: SessionInfo | None = None


class ChannelMessage(BaseModel):
    """A message currently visible in a channel."""

    id: int
    author_id: int
    content: str


class MemberRequest(BaseModel):
    user_id: int
    display_name: str = ""


class RoleRequest(BaseModel):
    role_id: int
    name: str = ""


class MemberRolesResponse(BaseModel):
    guild_id: int
    user_id: int
    role_ids: list[int]


class CancelResponse(BaseModel):
    """Response model for session cancellation."""

    cancelled: bool
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "starting", "degraded", "unhealthy"]
    version: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    active_sessions: int = 0


class ReadinessResponse(BaseModel):
    """Readiness probe response."""

    ready: bool
    message: str
    checks: dict[str, bool] | None = None
