"""Shared fixtures for Helpdesk tests.

Sessions run against an InMemoryTransport so every send, purge and role
assignment can be inspected after the fact.
"""

import logging

import pytest

from helpdesk.transport.memory import InMemoryTransport
from helpdesk.tree.models import Branch, DialogueTree, Node
from tests.helpers import (
    CHANNEL_ID,
    GUILD_ID,
    OTHER_USER_ID,
    ROLE_ID,
    USER_ID,
    RecordingWaiter,
)


@pytest.fixture(autouse=True)
def _propagate_helpdesk_logs():
    """setup_logging() stops propagation; caplog needs it back."""
    yield
    logging.getLogger("helpdesk").propagate = True


@pytest.fixture
def leaf_tree() -> DialogueTree:
    """root offers one branch to A; A is a leaf that grants ROLE_ID."""
    return DialogueTree(
        [
            Node(id="root", title="Welcome", branches=(Branch(target_id="A", message="Go to A"),)),
            Node(id="A", title="You reached A", role_id=ROLE_ID),
        ]
    )


@pytest.fixture
def deep_tree() -> DialogueTree:
    return DialogueTree(
        [
            Node(
                id="root",
                title="How can we help?",
                branches=(
                    Branch(target_id="install", message="Installing"),
                    Branch(target_id="account", message="My account"),
                ),
            ),
            Node(
                id="install",
                title="Which platform?",
                branches=(
                    Branch(target_id="windows", message="Windows"),
                    Branch(target_id="linux", message="Linux"),
                ),
            ),
            Node(id="windows", title="Run the installer as administrator."),
            Node(id="linux", title="Use the AppImage."),
            Node(id="account", title="Reset your password."),
        ]
    )


@pytest.fixture
def transport() -> InMemoryTransport:
    transport = InMemoryTransport()
    transport.add_channel(CHANNEL_ID, GUILD_ID, name="helpdesk")
    transport.add_member(GUILD_ID, USER_ID, display_name="user")
    transport.add_member(GUILD_ID, OTHER_USER_ID, display_name="other")
    transport.add_role(GUILD_ID, ROLE_ID, name="beta")
    return transport


@pytest.fixture
def waiter() -> RecordingWaiter:
    return RecordingWaiter()
