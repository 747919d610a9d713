"""Per-user dialogue session.

A DialogueSession walks one user through a DialogueTree in one channel:
it sends the current node, waits for the user's next message, interprets
it and moves on. It ends exactly once, when a wait times out or when it
is cancelled, and then deletes every message it produced or consumed.

All state changes happen in callbacks on the event loop, which is what
serializes them. Sends, grants and purges run as background tasks so the
next wait is armed without waiting on the network.
"""

import asyncio
from collections.abc import Callable, Coroutine, Sequence
from typing import Any

from helpdesk.dialogue.cleanup import CleanupTracker
from helpdesk.dialogue.grants import PrivilegeDispatcher
from helpdesk.dialogue.interpreter import GoTo, GoToRoot, Reprompt, interpret
from helpdesk.dialogue.render import DEFAULT_DIGIT_EMOJIS, render_node
from helpdesk.observability.logging import ContextLogger
from helpdesk.runtime.waiter import EventWaiter, WaitHandle
from helpdesk.transport.base import ChatTransport
from helpdesk.transport.models import Channel, InboundMessage
from helpdesk.tree.models import DialogueTree, Node

DoneCallback = Callable[["DialogueSession"], None]


class DialogueSession:
    """One user's conversation with a helpdesk in one channel.

    Must be created from within a running event loop: the constructor
    registers the starting message, interprets it against the root node
    and arms the first wait.
    """

    def __init__(
        self,
        tree: DialogueTree,
        first_message: InboundMessage,
        transport: ChatTransport,
        waiter: EventWaiter,
        dispatcher: PrivilegeDispatcher,
        timeout: float,
        digit_emojis: Sequence[str] = DEFAULT_DIGIT_EMOJIS,
        on_done: DoneCallback | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.tree = tree
        self.user_id = first_message.author_id
        self.channel_id = first_message.channel_id
        self.transport = transport
        self.waiter = waiter
        self.dispatcher = dispatcher
        self.timeout = timeout
        self.digit_emojis = digit_emojis
        self._on_done = on_done

        self._cleanup = CleanupTracker()
        self._wait: WaitHandle | None = None
        self._wait_epoch = 0
        self._done = False
        self._node: Node = tree.root
        self._tasks: set[asyncio.Task[Any]] = set()
        self._log = ContextLogger(__name__).with_context(
            user_id=self.user_id, channel_id=self.channel_id
        )

        self._handle_reply(first_message, tree.root)

    def __repr__(self) -> str:
        return (
            f"DialogueSession(user_id={self.user_id}, channel_id={self.channel_id}, "
            f"node={self._node.id!r}, done={self._done})"
        )

    # --- Public API ---

    @property
    def done(self) -> bool:
        return self._done

    @property
    def current_node(self) -> Node:
        """The node shown last, whose reply is being awaited."""
        return self._node

    @property
    def tracked_message_ids(self) -> list[int]:
        """Every inbound and outbound message id tracked so far, in order."""
        return self._cleanup.message_ids

    @property
    def idle(self) -> bool:
        """True when no send, grant or purge is still running."""
        return not self._tasks

    def cancel(self) -> bool:
        """End the session now.

        Returns:
            True if this call ended the session, False if it had already ended
        """
        return self.terminate(reason="cancelled")

    def terminate(self, reason: str = "cancelled") -> bool:
        """End the session and purge its messages. Only the first call has any effect."""
        if self._done:
            return False
        self._done = True

        wait, self._wait = self._wait, None
        if wait is not None:
            wait.cancel()

        message_ids = self._cleanup.seal()
        self._log.info(
            f"Dialogue of user {self.user_id} in channel {self.channel_id} ended ({reason}), "
            f"cleaning up {len(message_ids)} message(s)"
        )

        channel = self._get_channel()
        if channel is not None and message_ids:
            self._spawn(self._purge(channel, message_ids))

        if self._on_done is not None:
            try:
                self._on_done(self)
            except Exception:
                self._log.exception(f"Done callback failed for user {self.user_id}")
        return True

    async def wait_closed(self) -> None:
        """Wait for every send, grant and purge this session started."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # --- State machine ---

    def _advance(self, node: Node) -> None:
        if self._done:
            return
        self._node = node

        channel = self._get_channel()
        if channel is not None:
            self._spawn(self._send(channel, node))

        if node.role_id is not None:
            self._spawn(self.dispatcher.grant(self.user_id, self.channel_id, node.role_id))

        self._arm(node)

    def _arm(self, node: Node) -> None:
        previous, self._wait = self._wait, None
        if previous is not None:
            previous.cancel()

        self._wait_epoch += 1
        epoch = self._wait_epoch
        self._wait = self.waiter.wait_for(
            self._is_from_user,
            self.timeout,
            on_match=lambda message: self._on_match(message, node, epoch),
            on_timeout=lambda: self._on_timeout(epoch),
        )

    def _is_from_user(self, message: InboundMessage) -> bool:
        return message.author_id == self.user_id and message.channel_id == self.channel_id

    def _on_match(self, message: InboundMessage, node: Node, epoch: int) -> None:
        if self._done or epoch != self._wait_epoch:
            self._log.debug(f"Ignoring reply {message.id} for a superseded wait")
            return
        self._wait = None
        self._handle_reply(message, node)

    def _on_timeout(self, epoch: int) -> None:
        if epoch != self._wait_epoch:
            self._log.debug(f"Ignoring stale timeout of wait #{epoch}")
            return
        self.terminate(reason="timeout")

    def _handle_reply(self, message: InboundMessage, node: Node) -> None:
        self._cleanup.add(message.id)

        choice = interpret(message.content, node)
        if isinstance(choice, Reprompt):
            self._log.debug(f"Reply {message.content!r} is not a choice of node '{node.id}'")
            self._advance(node)
        elif isinstance(choice, GoToRoot):
            self._advance(self.tree.root)
        elif isinstance(choice, GoTo):
            target = self.tree.lookup(choice.target_id)
            if target is None:
                self._log.error(
                    f"Node '{node.id}' has a branch to unknown node '{choice.target_id}', "
                    f"ending dialogue of user {self.user_id}"
                )
                self.terminate(reason="unknown node")
                return
            self._advance(target)

    # --- Side effects ---

    def _get_channel(self) -> Channel | None:
        channel = self.transport.get_channel(self.channel_id)
        if channel is None:
            self._log.warning(f"Where did the channel {self.channel_id} go?")
        return channel

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send(self, channel: Channel, node: Node) -> None:
        try:
            message_id = await self.transport.send_message(
                channel, render_node(node, self.digit_emojis)
            )
        except Exception:
            self._log.exception(
                f"Failed to send node '{node.id}' to user {self.user_id} "
                f"in channel {self.channel_id}"
            )
            return

        if not self._cleanup.add(message_id):
            # Sent after the session ended; nobody else will delete it.
            await self._purge(channel, [message_id])

    async def _purge(self, channel: Channel, message_ids: list[int]) -> None:
        try:
            results = await self.transport.purge_messages(channel, message_ids)
        except Exception:
            self._log.exception(
                f"Failed to purge messages for user {self.user_id} in channel {self.channel_id}"
            )
            return

        for message_id, error in results.items():
            if error is not None:
                self._log.error(
                    f"Failed to purge message {message_id} for user {self.user_id} "
                    f"in channel {self.channel_id}: {error}"
                )
