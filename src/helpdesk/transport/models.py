"""Value types exchanged with a chat transport."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Channel:
    id: int
    guild_id: int
    name: str = ""


@dataclass(frozen=True)
class Role:
    id: int
    guild_id: int
    name: str = ""


@dataclass(frozen=True)
class Member:
    user_id: int
    guild_id: int
    display_name: str = ""


@dataclass(frozen=True)
class InboundMessage:
    """A message received in a channel."""

    id: int
    author_id: int
    channel_id: int
    content: str
    author_is_bot: bool = False


@dataclass(frozen=True)
class StoredMessage:
    """A message currently visible in a channel."""

    id: int
    author_id: int
    content: str
