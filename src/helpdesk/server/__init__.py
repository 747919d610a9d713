"""Helpdesk Server Module.

Provides a FastAPI-based HTTP gateway: a sandbox chat backend that relays
can post user messages to and read bot messages from.
"""

from helpdesk.server.api import app, create_app
from helpdesk.server.gateway import Gateway
from helpdesk.server.models import (
    HealthResponse,
    InboundMessageRequest,
    InboundMessageResponse,
    SessionInfo,
)

__all__ = [
    "app",
    "create_app",
    "Gateway",
    "InboundMessageRequest",
    "InboundMessageResponse",
    "HealthResponse",
    "SessionInfo",
]
