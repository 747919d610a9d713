"""Dialogue engine: input interpretation, rendering and per-user sessions."""

from helpdesk.dialogue.cleanup import CleanupTracker
from helpdesk.dialogue.grants import PrivilegeDispatcher
from helpdesk.dialogue.interpreter import Choice, GoTo, GoToRoot, Reprompt, interpret
from helpdesk.dialogue.render import DEFAULT_DIGIT_EMOJIS, number_as_emojis, render_node
from helpdesk.dialogue.session import DialogueSession

__all__ = [
    "CleanupTracker",
    "PrivilegeDispatcher",
    "Choice",
    "GoTo",
    "GoToRoot",
    "Reprompt",
    "interpret",
    "DEFAULT_DIGIT_EMOJIS",
    "number_as_emojis",
    "render_node",
    "DialogueSession",
]
