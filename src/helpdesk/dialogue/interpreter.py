"""Map a user's raw reply onto a choice of the node they were shown."""

from dataclasses import dataclass

from helpdesk.tree.models import Node


@dataclass(frozen=True)
class Reprompt:
    """Reply was not a valid choice; show the same node again."""


@dataclass(frozen=True)
class GoToRoot:
    """User picked the trailing 'Go back to the start.' option."""


@dataclass(frozen=True)
class GoTo:
    """User picked a branch."""

    target_id: str


Choice = Reprompt | GoToRoot | GoTo


def parse_choice(raw_text: str) -> int | None:
    """Parse a reply as a non-negative base-10 integer, or return None.

    Leading and trailing whitespace is ignored. What remains must be ASCII
    digits only, so signs ("+1", "-1"), decimals and non-ASCII digits are
    not choices.
    """
    text = raw_text.strip()
    if not text or not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def interpret(raw_text: str, node: Node) -> Choice:
    """Resolve a reply against the node that prompted it.

    Choices 0..n-1 pick a branch. Choice n means "back to the start" and is
    only offered on non-root nodes; at root it is treated like any other
    out-of-range number.
    """
    picked = parse_choice(raw_text)
    if picked is None:
        return Reprompt()

    branch_count = len(node.branches)
    if picked > branch_count:
        return Reprompt()

    if picked == branch_count:
        return Reprompt() if node.is_root else GoToRoot()

    return GoTo(node.branches[picked].target_id)
