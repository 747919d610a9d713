"""Grant the role attached to a node when a user reaches it."""

import logging
from typing import Protocol

from helpdesk.transport.base import ChatTransport
from helpdesk.transport.models import Member, Role

logger = logging.getLogger(__name__)


class GrantRegistry(Protocol):
    """Whoever owns the lifetime of temporary roles."""

    def register(self, member: Member, role: Role) -> None: ...


class PrivilegeDispatcher:
    """Assigns roles and hands them to the grant registry for later expiry.

    Channel, role and member are resolved on every call so that role
    deletions or members leaving mid-conversation are respected. Nothing
    raised here reaches the caller.
    """

    def __init__(self, transport: ChatTransport, registry: GrantRegistry | None = None):
        self.transport = transport
        self.registry = registry

    async def grant(self, user_id: int, channel_id: int, role_id: int) -> bool:
        """Give role_id to user_id in the guild owning channel_id.

        Returns:
            True if the role was assigned
        """
        channel = self.transport.get_channel(channel_id)
        if channel is None:
            logger.warning(f"Where did the channel {channel_id} go? Not granting role {role_id}")
            return False

        role = self.transport.get_role(channel.guild_id, role_id)
        if role is None:
            logger.warning(f"Where did the role {role_id} go?")
            return False

        member = self.transport.get_member(channel.guild_id, user_id)
        if member is None:
            logger.warning(f"No member found for user {user_id} in guild {channel.guild_id}")
            return False

        try:
            await self.transport.assign_role(channel.guild_id, member, role)
        except Exception:
            logger.exception(
                f"Failed to assign role {role_id} to user {user_id} in channel {channel_id}"
            )
            return False

        if self.registry is not None:
            try:
                self.registry.register(member, role)
            except Exception:
                logger.exception(f"Failed to register temporary role {role_id} for user {user_id}")

        logger.info(f"Granted role {role_id} to user {user_id}")
        return True
