"""ChatTransport interface.

Everything the dialogue engine needs from a chat platform: resolving
channels, roles and members, and sending, deleting and role-assigning.
Lookups are synchronous cache reads; anything that talks to the
platform is a coroutine.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from helpdesk.transport.models import Channel, Member, Role


class ChatTransport(ABC):
    """Interface for a chat platform connection (DIP)."""

    @abstractmethod
    def get_channel(self, channel_id: int) -> Channel | None:
        """Resolve a channel, or None if it is gone."""
        ...

    @abstractmethod
    def get_role(self, guild_id: int, role_id: int) -> Role | None:
        """Resolve a role in a guild, or None if it is gone."""
        ...

    @abstractmethod
    def get_member(self, guild_id: int, user_id: int) -> Member | None:
        """Resolve a guild member, or None if the user left."""
        ...

    @abstractmethod
    async def send_message(self, channel: Channel, content: str) -> int:
        """Post a message and return its id."""
        ...

    @abstractmethod
    async def purge_messages(
        self, channel: Channel, message_ids: Sequence[int]
    ) -> dict[int, Exception | None]:
        """Delete messages in bulk.

        Returns:
            Per-id outcome: None on success, the exception on failure
        """
        ...

    @abstractmethod
    async def assign_role(self, guild_id: int, member: Member, role: Role) -> None:
        """Give a role to a member."""
        ...

    @abstractmethod
    async def remove_role(self, guild_id: int, member: Member, role: Role) -> None:
        """Take a role away from a member."""
        ...
