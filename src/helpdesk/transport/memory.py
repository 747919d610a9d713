"""In-process chat transport.

Backs the HTTP gateway sandbox, the console chat and the test suite.
Failures can be injected per operation to exercise error handling.
"""

import itertools
from collections.abc import Sequence

from helpdesk.core.errors import TransportError
from helpdesk.transport.base import ChatTransport
from helpdesk.transport.models import Channel, InboundMessage, Member, Role, StoredMessage

BOT_USER_ID = 0


class InMemoryTransport(ChatTransport):
    """Keeps channels, messages, roles and members in dictionaries."""

    def __init__(self, bot_user_id: int = BOT_USER_ID, first_message_id: int = 1000) -> None:
        self.bot_user_id = bot_user_id
        self._ids = itertools.count(first_message_id)
        self.channels: dict[int, Channel] = {}
        self.messages: dict[int, dict[int, StoredMessage]] = {}
        self.roles: dict[tuple[int, int], Role] = {}
        self.members: dict[tuple[int, int], Member] = {}
        self.member_roles: dict[tuple[int, int], set[int]] = {}

        # Failure injection
        self.fail_sends = False
        self.fail_assign = False
        self.fail_remove = False
        self.undeletable: set[int] = set()

    # --- Sandbox setup ---

    def add_channel(self, channel_id: int, guild_id: int, name: str = "") -> Channel:
        channel = Channel(id=channel_id, guild_id=guild_id, name=name)
        self.channels[channel_id] = channel
        self.messages.setdefault(channel_id, {})
        return channel

    def remove_channel(self, channel_id: int) -> None:
        self.channels.pop(channel_id, None)
        self.messages.pop(channel_id, None)

    def add_role(self, guild_id: int, role_id: int, name: str = "") -> Role:
        role = Role(id=role_id, guild_id=guild_id, name=name)
        self.roles[(guild_id, role_id)] = role
        return role

    def remove_role_definition(self, guild_id: int, role_id: int) -> None:
        self.roles.pop((guild_id, role_id), None)

    def add_member(self, guild_id: int, user_id: int, display_name: str = "") -> Member:
        member = Member(user_id=user_id, guild_id=guild_id, display_name=display_name)
        self.members[(guild_id, user_id)] = member
        self.member_roles.setdefault((guild_id, user_id), set())
        return member

    def remove_member(self, guild_id: int, user_id: int) -> None:
        self.members.pop((guild_id, user_id), None)
        self.member_roles.pop((guild_id, user_id), None)

    def post_inbound(
        self, channel_id: int, author_id: int, content: str, author_is_bot: bool = False
    ) -> InboundMessage:
        """Record a message written by someone else and return it as an event."""
        if channel_id not in self.channels:
            raise TransportError(f"Unknown channel {channel_id}")
        message_id = next(self._ids)
        self.messages[channel_id][message_id] = StoredMessage(
            id=message_id, author_id=author_id, content=content
        )
        return InboundMessage(
            id=message_id,
            author_id=author_id,
            channel_id=channel_id,
            content=content,
            author_is_bot=author_is_bot,
        )

    def visible_messages(self, channel_id: int) -> list[StoredMessage]:
        return list(self.messages.get(channel_id, {}).values())

    def roles_of(self, guild_id: int, user_id: int) -> set[int]:
        return set(self.member_roles.get((guild_id, user_id), set()))

    # --- ChatTransport ---

    def get_channel(self, channel_id: int) -> Channel | None:
        return self.channels.get(channel_id)

    def get_role(self, guild_id: int, role_id: int) -> Role | None:
        return self.roles.get((guild_id, role_id))

    def get_member(self, guild_id: int, user_id: int) -> Member | None:
        return self.members.get((guild_id, user_id))

    async def send_message(self, channel: Channel, content: str) -> int:
        if self.fail_sends:
            raise TransportError(f"Sending to channel {channel.id} failed")
        if channel.id not in self.channels:
            raise TransportError(f"Unknown channel {channel.id}")

        message_id = next(self._ids)
        self.messages[channel.id][message_id] = StoredMessage(
            id=message_id, author_id=self.bot_user_id, content=content
        )
        return message_id

    async def purge_messages(
        self, channel: Channel, message_ids: Sequence[int]
    ) -> dict[int, Exception | None]:
        stored = self.messages.get(channel.id, {})
        results: dict[int, Exception | None] = {}
        for message_id in message_ids:
            if message_id in self.undeletable:
                results[message_id] = TransportError(f"Missing permissions to delete {message_id}")
            elif message_id not in stored:
                results[message_id] = TransportError(f"Unknown message {message_id}")
            else:
                del stored[message_id]
                results[message_id] = None
        return results

    async def assign_role(self, guild_id: int, member: Member, role: Role) -> None:
        if self.fail_assign:
            raise TransportError(f"Assigning role {role.id} to {member.user_id} failed")
        self.member_roles.setdefault((guild_id, member.user_id), set()).add(role.id)

    async def remove_role(self, guild_id: int, member: Member, role: Role) -> None:
        if self.fail_remove:
            raise TransportError(f"Removing role {role.id} from {member.user_id} failed")
        self.member_roles.get((guild_id, member.user_id), set()).discard(role.id)
