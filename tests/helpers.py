"""Test helpers shared across the suite."""

from pathlib import Path
from types import SimpleNamespace

from helpdesk.dialogue.grants import PrivilegeDispatcher
from helpdesk.dialogue.session import DialogueSession
from helpdesk.runtime.waiter import EventWaiter
from helpdesk.transport.memory import InMemoryTransport
from helpdesk.transport.models import InboundMessage
from helpdesk.tree.models import DialogueTree

GUILD_ID = 10
CHANNEL_ID = 100
USER_ID = 7
OTHER_USER_ID = 8
ROLE_ID = 4242

DEMO_DIR = Path(__file__).resolve().parent.parent / "examples" / "helpdesk_demo"


class RecordingWaiter(EventWaiter):
    """EventWaiter that remembers every wait it armed."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[SimpleNamespace] = []

    def wait_for(self, predicate, timeout, on_match, on_timeout):
        handle = super().wait_for(predicate, timeout, on_match, on_timeout)
        self.calls.append(
            SimpleNamespace(
                timeout=timeout, on_match=on_match, on_timeout=on_timeout, handle=handle
            )
        )
        return handle


def start_session(
    tree: DialogueTree,
    transport: InMemoryTransport,
    waiter: EventWaiter,
    text: str = "help",
    timeout: float = 60.0,
    registry=None,
    on_done=None,
    user_id: int = USER_ID,
) -> DialogueSession:
    """Post a first message and start a session from it. Call inside a running loop."""
    first = transport.post_inbound(CHANNEL_ID, user_id, text)
    return DialogueSession(
        tree=tree,
        first_message=first,
        transport=transport,
        waiter=waiter,
        dispatcher=PrivilegeDispatcher(transport, registry),
        timeout=timeout,
        on_done=on_done,
    )


def reply(
    transport: InMemoryTransport, waiter: EventWaiter, text: str, user_id: int = USER_ID
) -> tuple[InboundMessage, bool]:
    """Post a user message and offer it to the waiter."""
    message = transport.post_inbound(CHANNEL_ID, user_id, text)
    return message, waiter.dispatch(message)


def bot_messages(transport: InMemoryTransport) -> list[str]:
    return [m.content for m in transport.visible_messages(CHANNEL_ID) if m.author_id == 0]
