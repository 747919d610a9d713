"""Dialogue tree model and loader."""

from helpdesk.tree.loader import TreeLoader
from helpdesk.tree.models import Branch, DialogueTree, Node

__all__ = ["Branch", "Node", "DialogueTree", "TreeLoader"]
