"""Helpdesk listener: routes inbound messages to dialogue sessions.

Keeps one live DialogueSession per (channel, user). A message from a user
with a live session is consumed by that session's wait; any other message
in a helpdesk channel starts a new session.
"""

import asyncio
import logging
from collections.abc import Mapping

from helpdesk.config.settings import SettingsConfig
from helpdesk.dialogue.grants import GrantRegistry, PrivilegeDispatcher
from helpdesk.dialogue.session import DialogueSession
from helpdesk.runtime.waiter import EventWaiter
from helpdesk.transport.base import ChatTransport
from helpdesk.transport.models import InboundMessage
from helpdesk.tree.models import DialogueTree

logger = logging.getLogger(__name__)

SessionKey = tuple[int, int]


class HelpdeskListener:
    """Creates, tracks and shuts down dialogue sessions."""

    def __init__(
        self,
        transport: ChatTransport,
        trees: Mapping[int, DialogueTree],
        settings: SettingsConfig | None = None,
        waiter: EventWaiter | None = None,
        grant_registry: GrantRegistry | None = None,
    ) -> None:
        """
        Initialize HelpdeskListener.

        Args:
            transport: Chat platform connection
            trees: Dialogue tree per helpdesk channel id
            settings: Timeouts and emojis (defaults if omitted)
            waiter: Shared event waiter (a new one if omitted)
            grant_registry: Receives temporary role grants
        """
        self.transport = transport
        self.trees = dict(trees)
        self.settings = settings or SettingsConfig()
        self.waiter = waiter or EventWaiter()
        self.dispatcher = PrivilegeDispatcher(transport, grant_registry)
        self._sessions: dict[SessionKey, DialogueSession] = {}
        self._closing: set[DialogueSession] = set()
        self._digit_emojis = self.settings.emojis.as_table()

    def on_message(self, message: InboundMessage) -> DialogueSession | None:
        """Handle an inbound message.

        Returns:
            The session that received the message, or None if it was ignored
        """
        if message.author_is_bot:
            return None

        tree = self.trees.get(message.channel_id)
        if tree is None:
            return None

        key = (message.channel_id, message.author_id)
        live = self._sessions.get(key)
        if self.waiter.dispatch(message):
            return live

        stale = self._sessions.pop(key, None)
        if stale is not None and not stale.done:
            logger.info(
                f"Superseding dialogue of user {message.author_id} in channel {message.channel_id}"
            )
            stale.cancel()

        logger.info(f"Starting dialogue for user {message.author_id} in channel {message.channel_id}")
        session = DialogueSession(
            tree=tree,
            first_message=message,
            transport=self.transport,
            waiter=self.waiter,
            dispatcher=self.dispatcher,
            timeout=self.settings.timeout_seconds,
            digit_emojis=self._digit_emojis,
            on_done=self._session_done,
        )
        if not session.done:
            self._sessions[key] = session
        return session

    def get_session(self, channel_id: int, user_id: int) -> DialogueSession | None:
        return self._sessions.get((channel_id, user_id))

    def active_sessions(self) -> list[DialogueSession]:
        return list(self._sessions.values())

    def cancel(self, channel_id: int, user_id: int) -> bool:
        """Cancel a user's live session.

        Returns:
            True if a session was cancelled
        """
        session = self._sessions.get((channel_id, user_id))
        if session is None:
            return False
        return session.cancel()

    async def shutdown(self) -> None:
        """Cancel every session and wait for their cleanup to finish."""
        sessions = list(self._sessions.values())
        if sessions:
            logger.info(f"Shutting down {len(sessions)} dialogue(s)")
        for session in sessions:
            session.cancel()
        await self.drain()

    async def drain(self) -> None:
        """Wait for pending side effects of live and recently ended sessions."""
        pending = list(self._sessions.values()) + list(self._closing)
        await asyncio.gather(*(session.wait_closed() for session in pending))
        # Sessions that ended during the gather stay for the next drain
        self._closing.difference_update(pending)

    def _session_done(self, session: DialogueSession) -> None:
        key = (session.channel_id, session.user_id)
        if self._sessions.get(key) is session:
            del self._sessions[key]
        self._closing = {s for s in self._closing if not s.idle}
        self._closing.add(session)
