"""Chat transport interface and reference implementations."""

from helpdesk.transport.base import ChatTransport
from helpdesk.transport.console import ConsoleTransport
from helpdesk.transport.memory import InMemoryTransport
from helpdesk.transport.models import Channel, InboundMessage, Member, Role, StoredMessage

__all__ = [
    "ChatTransport",
    "InMemoryTransport",
    "ConsoleTransport",
    "Channel",
    "InboundMessage",
    "Member",
    "Role",
    "StoredMessage",
]
