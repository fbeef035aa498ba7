"""Tree construction helpers for preorder node lists."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .types import BRANCH_GROUP, TreeNode, is_group_node

_OUTLINE_SPLIT_RE = re.compile(r"[,\n]")


def assign_tree_metrics(nodes: Sequence) -> Sequence:
    """Fill ``depth`` and ``child_count`` from parent pointers, in place.

    Every node is counted towards each of its ancestors except group
    placeholders, which only structure the tree.
    """
    for node in nodes:
        node.depth = 0
        node.child_count = 0
    for node in nodes:
        counted = not is_group_node(node)
        pos = node.parent
        while pos >= 0:
            node.depth += 1
            if counted:
                nodes[pos].child_count += 1
            pos = nodes[pos].parent
    return nodes


def nodes_from_outline(text: str) -> list[TreeNode]:
    """Parse an indented outline into preorder ``TreeNode`` rows.

    Entries are separated by commas or newlines; each leading ``-`` adds one
    level of depth. Bracketed names such as ``[a - d]`` become group nodes.
    """
    nodes: list[TreeNode] = []
    last_at_depth: list[int] = []
    for raw in _OUTLINE_SPLIT_RE.split(text):
        entry = raw.strip()
        if not entry:
            continue
        name = entry.lstrip("-")
        depth = min(len(entry) - len(name), len(last_at_depth))
        parent = last_at_depth[depth - 1] if depth > 0 else -1
        is_group = name.startswith("[") and name.endswith("]")
        nodes.append(
            TreeNode(
                name=name,
                depth=depth,
                parent=parent,
                uri=BRANCH_GROUP if is_group else name,
                abbrev=None if is_group else name,
                in_schema=not is_group,
            )
        )
        del last_at_depth[depth:]
        last_at_depth.append(len(nodes) - 1)
    assign_tree_metrics(nodes)
    return nodes
