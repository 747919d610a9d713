"""Temporary role bookkeeping.

Roles granted by a helpdesk are only kept for a while. The service
remembers when each grant expires and removes expired roles on a
periodic sweep.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from helpdesk.transport.base import ChatTransport
from helpdesk.transport.models import Member, Role

logger = logging.getLogger(__name__)


@dataclass
class TemporaryGrant:
    member: Member
    role: Role
    expires_at: float


class TemporaryRoleService:
    """Tracks time-bounded role grants and takes them back when they expire."""

    def __init__(
        self,
        transport: ChatTransport,
        lifetime_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if lifetime_seconds <= 0:
            raise ValueError(f"lifetime_seconds must be positive, got {lifetime_seconds}")
        self.transport = transport
        self.lifetime_seconds = lifetime_seconds
        self._clock = clock
        self._grants: dict[tuple[int, int, int], TemporaryGrant] = {}
        self._sweeper: asyncio.Task[None] | None = None

    @staticmethod
    def _key(member: Member, role: Role) -> tuple[int, int, int]:
        return (member.guild_id, member.user_id, role.id)

    def register(self, member: Member, role: Role) -> None:
        """Start (or restart) the clock on a grant."""
        expires_at = self._clock() + self.lifetime_seconds
        self._grants[self._key(member, role)] = TemporaryGrant(member, role, expires_at)
        logger.debug(f"Role {role.id} of user {member.user_id} expires in {self.lifetime_seconds}s")

    @property
    def grants(self) -> list[TemporaryGrant]:
        return list(self._grants.values())

    async def expire_due(self, now: float | None = None) -> int:
        """Remove every grant that has expired.

        Grants whose removal fails are kept and retried on the next sweep.

        Returns:
            Number of roles removed
        """
        now = self._clock() if now is None else now
        due = [(key, grant) for key, grant in self._grants.items() if grant.expires_at <= now]

        removed = 0
        for key, grant in due:
            try:
                await self.transport.remove_role(grant.member.guild_id, grant.member, grant.role)
            except Exception:
                logger.exception(
                    f"Failed to remove temporary role {grant.role.id} "
                    f"from user {grant.member.user_id}"
                )
                continue
            current = self._grants.get(key)
            if current is grant:
                del self._grants[key]
                removed += 1
            elif current is not None:
                await self._restore(current)

        if removed:
            logger.info(f"Removed {removed} expired temporary role(s)")
        return removed

    async def _restore(self, grant: TemporaryGrant) -> None:
        """Give back a role that was granted again while its removal was in flight."""
        try:
            await self.transport.assign_role(grant.member.guild_id, grant.member, grant.role)
        except Exception:
            logger.exception(
                f"Failed to restore role {grant.role.id} of user {grant.member.user_id}"
            )
            # Not held any more, so nothing left to expire
            key = self._key(grant.member, grant.role)
            if self._grants.get(key) is grant:
                del self._grants[key]

    def start(self, interval_seconds: float) -> None:
        """Run expire_due every interval_seconds until stop() is called."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(self._sweep(interval_seconds))

    async def stop(self) -> None:
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is None:
            return
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass

    async def _sweep(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.expire_due()
            except Exception:
                logger.exception("Temporary role sweep failed")
