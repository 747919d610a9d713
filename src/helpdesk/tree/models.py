"""Dialogue tree models.

Nodes and branches are frozen pydantic models; a DialogueTree is a
read-only mapping from node id to Node shared by every session.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from helpdesk.core.constants import ROOT_NODE_ID
from helpdesk.core.errors import TreeError


class Branch(BaseModel):
    """One out-edge of a node. Its position in the node defines its choice index."""

    model_config = ConfigDict(frozen=True)

    target_id: str = Field(description="Id of the node this branch leads to")
    message: str = Field(description="Label shown to the user")


class Node(BaseModel):
    """A vertex of the decision tree."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable node identifier")
    title: str = Field(description="Title shown in bold above the choices")
    branches: tuple[Branch, ...] = Field(default=(), description="Ordered choices")
    role_id: int | None = Field(
        default=None, description="Role granted to the user when this node is reached"
    )

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_NODE_ID


class DialogueTree(Mapping[str, Node]):
    """Immutable mapping of node id to Node.

    A node with id ``root`` must exist. Branch targets are not checked here;
    use dangling_targets() or TreeLoader for strict validation.
    """

    def __init__(self, nodes: Iterable[Node]):
        by_id: dict[str, Node] = {}
        for node in nodes:
            if node.id in by_id:
                raise TreeError(f"Duplicate node id '{node.id}'")
            by_id[node.id] = node

        if ROOT_NODE_ID not in by_id:
            raise TreeError(f"Dialogue tree has no '{ROOT_NODE_ID}' node")

        self._nodes = MappingProxyType(by_id)

    def __getitem__(self, node_id: str) -> Node:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"DialogueTree(nodes={len(self._nodes)})"

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_NODE_ID]

    def lookup(self, node_id: str) -> Node | None:
        """Return the node with the given id, or None if it does not exist."""
        return self._nodes.get(node_id)

    def dangling_targets(self) -> list[tuple[str, str]]:
        """List (node_id, target_id) pairs whose target is not in the tree."""
        return [
            (node.id, branch.target_id)
            for node in self._nodes.values()
            for branch in node.branches
            if branch.target_id not in self._nodes
        ]
