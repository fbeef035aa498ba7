"""Node datatypes shared by the selection collections and the branch chunker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

BRANCH_GROUP = "branch-group"


class TreeItem(Protocol):
    """Minimal shape of a preorder tree row: parent index and depth."""

    parent: int
    depth: int


@dataclass
class TreeNode:
    """One ontology term in a preorder-flattened tree.

    ``parent`` is the index of the parent row (-1 for roots) and
    ``child_count`` the number of real descendants; group placeholders
    inserted by chunking are not counted.
    """

    name: str
    depth: int = 0
    parent: int = -1
    uri: str | None = None
    abbrev: str | None = None
    child_count: int = 0
    schema_count: int = 0
    in_schema: bool = True
    in_model: bool = False
    alt_labels: tuple[str, ...] = ()

    @property
    def is_group(self) -> bool:
        """Return whether this node is a synthetic branch group."""
        return self.uri == BRANCH_GROUP


def is_group_node(node: object) -> bool:
    """Return whether ``node`` carries the branch-group marker."""
    return getattr(node, "uri", None) == BRANCH_GROUP
