"""Branch chunking: split oversized branches into synthetic group nodes.

A branch with more direct children than ``chunk_size`` is rewritten so its
children hang below consecutive group placeholders labelled like
``[alpha - delta]``. The rewrite keeps the preorder layout, so it has to run
before the nodes are handed to a ``HierarchicalCollection``.
"""

from __future__ import annotations

import copy
import logging
from bisect import bisect_right
from collections.abc import Callable, Sequence

from .types import BRANCH_GROUP, TreeNode, is_group_node

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 250
MIN_CHUNK_SIZE = 2

GroupFactory = Callable[[str, int, int, int], object]


def make_group_node(name: str, depth: int, parent: int, child_count: int) -> TreeNode:
    """Build the default placeholder node for one group of children."""
    return TreeNode(
        name=name,
        depth=depth,
        parent=parent,
        uri=BRANCH_GROUP,
        child_count=child_count,
        in_schema=False,
    )


def minimum_differentiating_length(names: Sequence[str]) -> int:
    """Return the shortest prefix length that tells all names apart.

    Prefixes are compared case-insensitively. Returns 0 when no prefix length
    works, e.g. for duplicate names or an empty list.
    """
    if not names:
        return 0
    max_length = max(len(name) for name in names)
    for length in range(1, max_length + 1):
        prefixes = {name[:length].casefold() for name in names}
        if len(prefixes) == len(names):
            return length
    return 0


def group_labels(first_names: Sequence[str], last_names: Sequence[str]) -> list[str]:
    """Build ``[first - last]`` labels with minimally disambiguated prefixes.

    Each boundary name is shortened just enough to stay distinct from the
    other end of its own group and from the adjacent group's boundary.
    """
    firsts = list(first_names)
    lasts = list(last_names)
    for idx in range(len(firsts)):
        compare = [firsts[idx], lasts[idx]]
        if idx > 0:
            compare.append(lasts[idx - 1])
        length = minimum_differentiating_length(compare)
        if length > 0:
            firsts[idx] = firsts[idx][:length]

        compare = [firsts[idx], lasts[idx]]
        if idx + 1 < len(firsts):
            compare.append(firsts[idx + 1])
        length = minimum_differentiating_length(compare)
        if length > 0:
            lasts[idx] = lasts[idx][:length]
    return [f"[{first} - {last}]" for first, last in zip(firsts, lasts)]


class BranchChunker:
    """Rewrite preorder nodes so no branch exceeds ``chunk_size`` direct children.

    A branch qualifies when its ``child_count`` exceeds ``descendant_threshold``
    (``chunk_size`` unless given) and it has more than ``chunk_size`` direct
    children. Chunk sizes below two are raised to two, since one group per
    child never shrinks a branch. Nodes need ``depth``, ``parent``,
    ``child_count`` and ``name``.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        descendant_threshold: int | None = None,
        group_factory: GroupFactory | None = None,
    ) -> None:
        self.chunk_size = max(MIN_CHUNK_SIZE, int(chunk_size))
        self.descendant_threshold = self.chunk_size if descendant_threshold is None else descendant_threshold
        self.group_factory = group_factory or make_group_node
        self.nodes: list = []

    def process_nodes(self, nodes: Sequence) -> list:
        """Return a chunked deep copy of ``nodes``; the input is left untouched."""
        self.nodes = copy.deepcopy(list(nodes))
        branch = self.branch_to_group()
        while branch is not None:
            self.chunk_branch(*branch)
            branch = self.branch_to_group()
        return self.nodes

    def subtree_end(self, idx: int) -> int:
        """Return the index one past the last descendant of ``idx``."""
        depth = self.nodes[idx].depth
        end = idx + 1
        while end < len(self.nodes) and self.nodes[end].depth > depth:
            end += 1
        return end

    def branch_to_group(self) -> tuple[int, list[int]] | None:
        """Find the first branch that needs chunking and its direct children."""
        for idx, node in enumerate(self.nodes):
            if node.child_count <= self.descendant_threshold:
                continue
            child_depth = node.depth + 1
            direct = [
                pos
                for pos in range(idx + 1, self.subtree_end(idx))
                if self.nodes[pos].depth == child_depth
            ]
            if len(direct) <= self.chunk_size:
                continue
            return idx, direct
        return None

    def chunk_branch(self, branch_idx: int, direct: list[int]) -> None:
        """Insert group nodes below ``branch_idx`` and re-link every parent pointer."""
        nodes = self.nodes
        parent_node = nodes[branch_idx]
        end = self.subtree_end(branch_idx)
        runs = [direct[pos:pos + self.chunk_size] for pos in range(0, len(direct), self.chunk_size)]
        firsts = [run[0] for run in runs]
        labels = group_labels(
            [nodes[run[0]].name for run in runs],
            [nodes[run[-1]].name for run in runs],
        )
        logger.debug(
            "grouping %d children of node %d (%s) into %d groups",
            len(direct),
            branch_idx,
            parent_node.name,
            len(runs),
        )

        def new_index(old: int) -> int:
            """Map a pre-insertion index to its position after insertion."""
            if old <= branch_idx:
                return old
            if old >= end:
                return old + len(runs)
            return old + bisect_right(firsts, old)

        rewritten = nodes[:branch_idx + 1]
        for group_no, run in enumerate(runs):
            run_end = firsts[group_no + 1] if group_no + 1 < len(runs) else end
            child_count = sum(
                nodes[child].child_count + (0 if is_group_node(nodes[child]) else 1)
                for child in run
            )
            group_idx = len(rewritten)
            rewritten.append(self.group_factory(labels[group_no], parent_node.depth + 1, branch_idx, child_count))
            for pos in range(run[0], run_end):
                node = nodes[pos]
                node.depth += 1
                node.parent = group_idx if node.parent == branch_idx else new_index(node.parent)
                rewritten.append(node)

        for node in nodes[end:]:
            node.parent = new_index(node.parent)
            rewritten.append(node)
        self.nodes = rewritten


def process_nodes(nodes: Sequence, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list:
    """Chunk oversized branches of ``nodes`` in one call."""
    return BranchChunker(chunk_size).process_nodes(nodes)
