"""Render nodes as chat messages."""

from collections.abc import Sequence

from helpdesk.core.constants import BACK_TO_START_LABEL, DEFAULT_DIGIT_EMOJIS
from helpdesk.tree.models import Node


def number_as_emojis(number: int, digit_emojis: Sequence[str] = DEFAULT_DIGIT_EMOJIS) -> str:
    """Render each decimal digit of a non-negative number as its emoji."""
    if number < 0:
        raise ValueError(f"{number} is negative")
    return "".join(digit_emojis[ord(c) - ord("0")] for c in str(number))


def render_node(node: Node, digit_emojis: Sequence[str] = DEFAULT_DIGIT_EMOJIS) -> str:
    """Render a node as a bold title followed by one numbered line per choice.

    Non-root nodes get a trailing "Go back to the start." choice whose
    number equals the branch count.
    """
    parts = [f"**{node.title}**\n\n"]
    for index, branch in enumerate(node.branches):
        parts.append(f"{number_as_emojis(index, digit_emojis)} {branch.message}\n")

    if not node.is_root:
        back = number_as_emojis(len(node.branches), digit_emojis)
        parts.append(f"{back} {BACK_TO_START_LABEL}\n")

    return "".join(parts)
