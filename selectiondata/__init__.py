"""Selection and visibility engine for large preorder trees and lists.

Collections track which rows are visible, selected and expanded, run
label/synonym search with ancestor propagation, and report the minimal set
of changed indices. ``BranchChunker`` splits oversized branches into group
nodes before a tree is loaded.
"""

from __future__ import annotations

from .build import assign_tree_metrics, nodes_from_outline
from .grouping import (
    DEFAULT_CHUNK_SIZE,
    MIN_CHUNK_SIZE,
    BranchChunker,
    group_labels,
    make_group_node,
    minimum_differentiating_length,
    process_nodes,
)
from .hierarchy import HierarchicalCollection
from .layout import (
    DEFAULT_MAX_ROOT_CHILDREN,
    TOGGLE_CLOSED,
    TOGGLE_OPEN,
    TOGGLE_PARTIAL,
    apply_toggle,
    initial_tree_layout,
    next_toggle_state,
    populate_tree,
    remap_indices,
    search_tree,
    toggle_state,
)
from .masked import MaskedCollection, SelectionList
from .matching import match_label, match_label_or_synonyms
from .types import BRANCH_GROUP, TreeItem, TreeNode, is_group_node

__all__ = [
    "BRANCH_GROUP",
    "TreeItem",
    "TreeNode",
    "is_group_node",
    "MaskedCollection",
    "SelectionList",
    "HierarchicalCollection",
    "BranchChunker",
    "DEFAULT_CHUNK_SIZE",
    "MIN_CHUNK_SIZE",
    "process_nodes",
    "group_labels",
    "make_group_node",
    "minimum_differentiating_length",
    "match_label",
    "match_label_or_synonyms",
    "assign_tree_metrics",
    "nodes_from_outline",
    "TOGGLE_OPEN",
    "TOGGLE_PARTIAL",
    "TOGGLE_CLOSED",
    "DEFAULT_MAX_ROOT_CHILDREN",
    "toggle_state",
    "next_toggle_state",
    "apply_toggle",
    "initial_tree_layout",
    "search_tree",
    "remap_indices",
    "populate_tree",
]
