"""Tests for the temporary role service."""

import asyncio
import logging

import pytest

from helpdesk.runtime.roles import TemporaryRoleService
from helpdesk.transport.memory import InMemoryTransport
from tests.helpers import GUILD_ID, OTHER_USER_ID, ROLE_ID, USER_ID


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


async def grant(transport, service, user_id=USER_ID):
    member = transport.get_member(GUILD_ID, user_id)
    role = transport.get_role(GUILD_ID, ROLE_ID)
    await transport.assign_role(GUILD_ID, member, role)
    service.register(member, role)


class GatedRemovalTransport(InMemoryTransport):
    """Holds role removals until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.remove_gate = asyncio.Event()

    async def remove_role(self, guild_id, member, role):
        await self.remove_gate.wait()
        await super().remove_role(guild_id, member, role)


class TestTemporaryRoleService:
    @pytest.mark.asyncio
    async def test_expired_roles_are_removed(self, transport, clock):
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service)

        assert await service.expire_due() == 0
        assert ROLE_ID in transport.roles_of(GUILD_ID, USER_ID)

        clock.now += 61
        assert await service.expire_due() == 1

        assert ROLE_ID not in transport.roles_of(GUILD_ID, USER_ID)
        assert service.grants == []

    @pytest.mark.asyncio
    async def test_register_again_extends(self, transport, clock):
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service)
        clock.now += 50
        await grant(transport, service)

        clock.now += 20
        assert await service.expire_due() == 0
        assert len(service.grants) == 1

    @pytest.mark.asyncio
    async def test_only_due_grants_expire(self, transport, clock):
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service, USER_ID)
        clock.now += 30
        await grant(transport, service, OTHER_USER_ID)

        clock.now += 40
        assert await service.expire_due() == 1

        assert ROLE_ID not in transport.roles_of(GUILD_ID, USER_ID)
        assert ROLE_ID in transport.roles_of(GUILD_ID, OTHER_USER_ID)

    @pytest.mark.asyncio
    async def test_failed_removal_is_retried(self, transport, clock, caplog):
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service)
        clock.now += 61
        transport.fail_remove = True

        with caplog.at_level(logging.ERROR, logger="helpdesk"):
            assert await service.expire_due() == 0

        assert "Failed to remove temporary role" in caplog.text
        assert len(service.grants) == 1

        transport.fail_remove = False
        assert await service.expire_due() == 1

    @pytest.mark.asyncio
    async def test_grant_during_removal_keeps_role(self, clock):
        """Reaching the leaf again while the old role is being removed keeps the role."""
        transport = GatedRemovalTransport()
        transport.add_channel(1, GUILD_ID)
        transport.add_member(GUILD_ID, USER_ID)
        transport.add_role(GUILD_ID, ROLE_ID)
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service)
        clock.now += 61

        sweep = asyncio.create_task(service.expire_due())
        await asyncio.sleep(0)
        await grant(transport, service)
        transport.remove_gate.set()

        assert await sweep == 0
        assert ROLE_ID in transport.roles_of(GUILD_ID, USER_ID)
        [kept] = service.grants
        assert kept.expires_at == clock.now + 60

    @pytest.mark.asyncio
    async def test_failed_restore_forgets_grant(self, clock, caplog):
        transport = GatedRemovalTransport()
        transport.add_channel(1, GUILD_ID)
        transport.add_member(GUILD_ID, USER_ID)
        transport.add_role(GUILD_ID, ROLE_ID)
        service = TemporaryRoleService(transport, lifetime_seconds=60, clock=clock)
        await grant(transport, service)
        clock.now += 61

        sweep = asyncio.create_task(service.expire_due())
        await asyncio.sleep(0)
        await grant(transport, service)
        transport.fail_assign = True
        transport.remove_gate.set()

        with caplog.at_level(logging.ERROR, logger="helpdesk"):
            await sweep

        assert "Failed to restore role" in caplog.text
        assert service.grants == []

    @pytest.mark.asyncio
    async def test_sweeper_runs_until_stopped(self, transport):
        service = TemporaryRoleService(transport, lifetime_seconds=0.01)
        await grant(transport, service)

        service.start(interval_seconds=0.01)
        await asyncio.sleep(0.1)
        await service.stop()

        assert ROLE_ID not in transport.roles_of(GUILD_ID, USER_ID)

    @pytest.mark.asyncio
    async def test_stop_without_start(self, transport):
        await TemporaryRoleService(transport, lifetime_seconds=1).stop()

    def test_lifetime_must_be_positive(self, transport):
        with pytest.raises(ValueError):
            TemporaryRoleService(transport, lifetime_seconds=0)
