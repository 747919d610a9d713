"""Helpdesk - branching question-and-answer dialogues for chat channels.

A helpdesk walks a user through a fixed decision tree, one numbered prompt
at a time, and can grant a temporary role when a leaf is reached.

Quick start:
    from helpdesk import DialogueTree, TreeLoader

    tree = TreeLoader.load("examples/helpdesk_demo/tree.yaml")
    print(tree.root.title)
"""

from helpdesk.__version__ import __version__

__author__ = "Helpdesk Contributors"

from helpdesk.core.errors import (
    ConfigError,
    HelpdeskError,
    TransportError,
    TreeError,
)
from helpdesk.dialogue.interpreter import GoTo, GoToRoot, Reprompt, interpret
from helpdesk.dialogue.render import render_node
from helpdesk.dialogue.session import DialogueSession
from helpdesk.tree.loader import TreeLoader
from helpdesk.tree.models import Branch, DialogueTree, Node

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Tree model
    "Branch",
    "Node",
    "DialogueTree",
    "TreeLoader",
    # Dialogue engine
    "DialogueSession",
    "interpret",
    "render_node",
    "Reprompt",
    "GoToRoot",
    "GoTo",
    # Errors
    "HelpdeskError",
    "ConfigError",
    "TreeError",
    "TransportError",
]
