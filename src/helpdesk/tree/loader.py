"""Tree loader for YAML dialogue files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from helpdesk.core.errors import TreeError
from helpdesk.tree.models import Branch, DialogueTree, Node

logger = logging.getLogger(__name__)


class BranchSpec(BaseModel):
    """Branch as written in a tree file."""

    target: str = Field(description="Target node id")
    message: str = Field(description="Choice label")


class NodeSpec(BaseModel):
    """Node as written in a tree file. The id is the mapping key."""

    title: str
    branches: list[BranchSpec] = Field(default_factory=list)
    role: int | None = Field(default=None, description="Role id granted on reach")


class TreeLoader:
    """Load a DialogueTree from a YAML file.

    Expected layout:

        root:
          title: How can we help?
          branches:
            - target: billing
              message: I have a billing question
        billing:
          title: Billing
          role: 1234
    """

    @staticmethod
    def from_dict(data: dict[str, Any], strict: bool = True) -> DialogueTree:
        """Build a tree from already-parsed data.

        Args:
            data: Mapping of node id to node definition
            strict: Reject trees whose branches point at missing nodes

        Returns:
            The validated DialogueTree

        Raises:
            TreeError: If the data does not describe a valid tree
        """
        if not isinstance(data, dict):
            raise TreeError("Tree file must contain a mapping of node id to node")

        nodes: list[Node] = []
        for node_id, raw in data.items():
            try:
                entry = NodeSpec.model_validate(raw)
            except PydanticValidationError as e:
                raise TreeError(f"Invalid node '{node_id}': {e}") from e

            nodes.append(
                Node(
                    id=str(node_id),
                    title=entry.title,
                    branches=tuple(
                        Branch(target_id=b.target, message=b.message) for b in entry.branches
                    ),
                    role_id=entry.role,
                )
            )

        tree = DialogueTree(nodes)

        if strict:
            dangling = tree.dangling_targets()
            if dangling:
                pairs = ", ".join(f"{src} -> {dst}" for src, dst in dangling)
                raise TreeError(f"Branches point at unknown nodes: {pairs}")

        return tree

    @staticmethod
    def load(path: Path | str, strict: bool = True) -> DialogueTree:
        """Load a tree from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
            TreeError: If the contents are not a valid tree
        """
        tree_path = Path(path)
        if not tree_path.is_file():
            raise FileNotFoundError(f"Tree file not found: {tree_path}")

        with open(tree_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        tree = TreeLoader.from_dict(data, strict=strict)
        logger.debug(f"Loaded tree with {len(tree)} nodes from {tree_path}")
        return tree
