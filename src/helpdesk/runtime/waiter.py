"""Non-blocking waits for the next matching inbound message.

A wait is a registration plus a loop timer; nothing is parked on an
await while the user thinks. All callbacks run on the event loop.
"""

import asyncio
import logging
from collections.abc import Callable

from helpdesk.transport.models import InboundMessage

logger = logging.getLogger(__name__)

MessagePredicate = Callable[[InboundMessage], bool]
MatchCallback = Callable[[InboundMessage], None]
TimeoutCallback = Callable[[], None]


class WaitHandle:
    """A single outstanding wait. Resolves at most once."""

    def __init__(
        self,
        waiter: "EventWaiter",
        predicate: MessagePredicate,
        on_match: MatchCallback,
        on_timeout: TimeoutCallback,
    ) -> None:
        self._waiter = waiter
        self.predicate = predicate
        self._on_match = on_match
        self._on_timeout = on_timeout
        self._timer: asyncio.TimerHandle | None = None
        self._resolved = False

    @property
    def active(self) -> bool:
        return not self._resolved

    def cancel(self) -> None:
        """Drop the wait. Safe to call after it fired or was already cancelled."""
        if self._resolved:
            return
        self._resolved = True
        self._stop_timer()
        self._waiter._discard(self)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _match(self, message: InboundMessage) -> None:
        if self._resolved:
            return
        self._resolved = True
        self._stop_timer()
        self._on_match(message)

    def _expire(self) -> None:
        self._timer = None
        if self._resolved:
            return
        self._resolved = True
        self._waiter._discard(self)
        self._on_timeout()


class EventWaiter:
    """Routes inbound messages to whoever is waiting for them."""

    def __init__(self) -> None:
        self._waiting: list[WaitHandle] = []

    def wait_for(
        self,
        predicate: MessagePredicate,
        timeout: float,
        on_match: MatchCallback,
        on_timeout: TimeoutCallback,
    ) -> WaitHandle:
        """Wait for the next message accepted by predicate, or for timeout seconds.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        handle = WaitHandle(self, predicate, on_match, on_timeout)
        handle._timer = loop.call_later(timeout, handle._expire)
        self._waiting.append(handle)
        return handle

    def dispatch(self, message: InboundMessage) -> bool:
        """Offer a message to the current waits.

        Waits armed while dispatching (by a match callback) do not see
        this message.

        Returns:
            True if at least one wait consumed the message
        """
        consumed = False
        for handle in list(self._waiting):
            if not handle.active:
                continue
            try:
                matches = handle.predicate(message)
            except Exception:
                logger.exception(f"Wait predicate failed for message {message.id}")
                continue
            if not matches:
                continue

            self._discard(handle)
            consumed = True
            try:
                handle._match(message)
            except Exception:
                logger.exception(f"Handler for message {message.id} failed")
        return consumed

    @property
    def pending(self) -> int:
        return len(self._waiting)

    def _discard(self, handle: WaitHandle) -> None:
        try:
            self._waiting.remove(handle)
        except ValueError:
            pass
