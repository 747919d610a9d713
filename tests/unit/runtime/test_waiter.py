"""Tests for the event waiter."""

import asyncio
from unittest.mock import MagicMock

import pytest

from helpdesk.runtime.waiter import EventWaiter
from helpdesk.transport.models import InboundMessage


def message(message_id: int = 1, author_id: int = 7, channel_id: int = 100, content: str = "0"):
    return InboundMessage(
        id=message_id, author_id=author_id, channel_id=channel_id, content=content
    )


def from_author(author_id: int):
    return lambda m: m.author_id == author_id


class TestEventWaiter:
    @pytest.mark.asyncio
    async def test_match_calls_on_match_once(self):
        waiter = EventWaiter()
        on_match, on_timeout = MagicMock(), MagicMock()
        handle = waiter.wait_for(from_author(7), 10, on_match, on_timeout)

        assert waiter.dispatch(message(1)) is True
        assert waiter.dispatch(message(2)) is False

        on_match.assert_called_once_with(message(1))
        on_timeout.assert_not_called()
        assert not handle.active
        assert waiter.pending == 0

    @pytest.mark.asyncio
    async def test_non_matching_message_is_not_consumed(self):
        waiter = EventWaiter()
        on_match = MagicMock()
        waiter.wait_for(from_author(7), 10, on_match, MagicMock())

        assert waiter.dispatch(message(author_id=8)) is False
        on_match.assert_not_called()
        assert waiter.pending == 1

    @pytest.mark.asyncio
    async def test_timeout_fires(self):
        waiter = EventWaiter()
        on_match, on_timeout = MagicMock(), MagicMock()
        waiter.wait_for(from_author(7), 0.01, on_match, on_timeout)

        await asyncio.sleep(0.05)

        on_timeout.assert_called_once_with()
        assert waiter.pending == 0
        assert waiter.dispatch(message()) is False
        on_match.assert_not_called()

    @pytest.mark.asyncio
    async def test_match_stops_the_timer(self):
        waiter = EventWaiter()
        on_timeout = MagicMock()
        waiter.wait_for(from_author(7), 0.02, MagicMock(), on_timeout)

        waiter.dispatch(message())
        await asyncio.sleep(0.05)

        on_timeout.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self):
        waiter = EventWaiter()
        on_match, on_timeout = MagicMock(), MagicMock()
        handle = waiter.wait_for(from_author(7), 0.01, on_match, on_timeout)

        handle.cancel()
        handle.cancel()
        await asyncio.sleep(0.03)

        assert waiter.dispatch(message()) is False
        on_match.assert_not_called()
        on_timeout.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancel_after_match_is_safe(self):
        waiter = EventWaiter()
        handle = waiter.wait_for(from_author(7), 10, MagicMock(), MagicMock())
        waiter.dispatch(message())

        handle.cancel()

        assert waiter.pending == 0

    @pytest.mark.asyncio
    async def test_wait_armed_during_dispatch_does_not_see_same_message(self):
        waiter = EventWaiter()
        second = MagicMock()

        def rearm(_message):
            waiter.wait_for(from_author(7), 10, second, MagicMock())

        waiter.wait_for(from_author(7), 10, rearm, MagicMock())
        waiter.dispatch(message(1))

        second.assert_not_called()
        assert waiter.pending == 1

        waiter.dispatch(message(2))
        second.assert_called_once_with(message(2))

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_break_dispatch(self):
        waiter = EventWaiter()
        other = MagicMock()
        waiter.wait_for(from_author(7), 10, MagicMock(side_effect=RuntimeError("boom")), MagicMock())
        waiter.wait_for(from_author(7), 10, other, MagicMock())

        assert waiter.dispatch(message()) is True
        other.assert_called_once()

    def test_wait_for_needs_running_loop(self):
        with pytest.raises(RuntimeError):
            EventWaiter().wait_for(from_author(7), 10, MagicMock(), MagicMock())
