"""Tree-picker layout decisions expressed as index operations.

Covers the three-state branch toggle, the initial expansion of a freshly
loaded tree, and search that keeps already-annotated terms in view. None of
this touches a renderer; every helper returns the indices whose visibility
changed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from .config import load_chunk_size, load_max_root_children
from .grouping import DEFAULT_CHUNK_SIZE, BranchChunker
from .hierarchy import HierarchicalCollection
from .masked import MatchFunc
from .types import is_group_node

logger = logging.getLogger(__name__)

TOGGLE_OPEN = "open"
TOGGLE_PARTIAL = "partial"
TOGGLE_CLOSED = "closed"

DEFAULT_MAX_ROOT_CHILDREN = 200

_NEXT_TOGGLE_STATE = {
    TOGGLE_OPEN: TOGGLE_CLOSED,
    TOGGLE_PARTIAL: TOGGLE_OPEN,
    TOGGLE_CLOSED: TOGGLE_PARTIAL,
}

SelectedFunc = Callable[[object], bool]


def _changed_since(tree: HierarchicalCollection, before: list[bool]) -> list[int]:
    """Return indices whose visibility differs from the ``before`` snapshot."""
    return [idx for idx, visible in enumerate(tree.vis_mask) if visible != before[idx]]


def toggle_state(tree: HierarchicalCollection, idx: int) -> str | None:
    """Return the toggle icon state for ``idx``, or ``None`` for leaf rows."""
    if not 0 <= idx < len(tree) or not tree.child_mask[idx]:
        return None
    if tree.is_partial_open(idx):
        return TOGGLE_PARTIAL
    if tree.open_mask[idx]:
        return TOGGLE_OPEN
    return TOGGLE_CLOSED


def next_toggle_state(current: str, searching: bool, hide_unmatched: bool) -> str:
    """Return the state a click on a toggle moves to.

    Partial expansion only makes sense while a search hides unmatched rows;
    otherwise the cycle skips straight to fully open.
    """
    next_state = _NEXT_TOGGLE_STATE.get(current, TOGGLE_OPEN)
    if next_state == TOGGLE_PARTIAL and not (searching and hide_unmatched):
        return TOGGLE_OPEN
    return next_state


def apply_toggle(
    tree: HierarchicalCollection,
    idx: int,
    current: str,
    searching: bool = False,
    hide_unmatched: bool = True,
) -> list[int]:
    """Advance the toggle of ``idx`` and apply the matching branch operation."""
    next_state = next_toggle_state(current, searching, hide_unmatched)
    if next_state == TOGGLE_CLOSED:
        return tree.close_branch(idx)
    if next_state == TOGGLE_PARTIAL:
        return tree.partial_open_branch(idx)
    return tree.open_branch(idx)


def _selected_indices(tree: HierarchicalCollection, is_selected: SelectedFunc | None) -> list[int]:
    if is_selected is None:
        return []
    return [idx for idx, item in enumerate(tree.data) if is_selected(item)]


def initial_tree_layout(
    tree: HierarchicalCollection,
    is_selected: SelectedFunc | None = None,
    reveal_indices: Iterable[int] = (),
    max_root_children: int = DEFAULT_MAX_ROOT_CHILDREN,
) -> list[int]:
    """Collapse a freshly loaded tree to a browsable first view.

    Depth-1 branches are closed, and so are roots with at least
    ``max_root_children`` direct children. Parents of selected rows are
    opened, then ``reveal_indices`` are shown with their ancestors.
    """
    before = list(tree.vis_mask)
    roots: list[int] = []
    for idx, item in enumerate(tree.data):
        if item.depth == 0:
            roots.append(idx)
        elif item.depth == 1:
            tree.close_branch(idx)

    for root in roots:
        count = 0
        for pos in range(root + 1, len(tree.data)):
            depth = tree.data[pos].depth
            if depth == 0 or count > max_root_children:
                break
            if depth == 1:
                count += 1
        if count >= max_root_children:
            tree.close_branch(root)

    for idx in _selected_indices(tree, is_selected):
        tree.open_branch(tree.data[idx].parent)

    tree.show(reveal_indices)
    return _changed_since(tree, before)


def search_tree(
    tree: HierarchicalCollection,
    query: str,
    is_selected: SelectedFunc | None = None,
) -> list[int]:
    """Run ``query`` while keeping selected rows and their ancestors visible."""
    before = list(tree.vis_mask)
    tree.search(query)
    tree.show(_selected_indices(tree, is_selected))
    return _changed_since(tree, before)


def _node_uri(node: object) -> object:
    return getattr(node, "uri", None)


def remap_indices(
    before: Sequence,
    after: Sequence,
    indices: Iterable[int],
    key: Callable[[object], object] = _node_uri,
) -> list[int]:
    """Locate rows of ``before`` in ``after`` by ``key`` once indices have shifted."""
    wanted = {key(before[idx]) for idx in indices if 0 <= idx < len(before)}
    return [
        idx
        for idx, node in enumerate(after)
        if not is_group_node(node) and key(node) in wanted
    ]


def populate_tree(
    nodes: Sequence,
    match: MatchFunc,
    reveal_indices: Iterable[int] = (),
    is_selected: SelectedFunc | None = None,
    chunk_size: int | None = None,
    max_root_children: int | None = None,
) -> tuple[HierarchicalCollection, list[int]]:
    """Chunk ``nodes``, build the tree collection and lay out its first view.

    Limits not passed explicitly come from the user config, then from the
    defaults. Returns the collection and the reveal indices re-targeted to
    the chunked array.
    """
    reveal = list(reveal_indices)
    chunk_size = chunk_size or load_chunk_size() or DEFAULT_CHUNK_SIZE
    max_root_children = max_root_children or load_max_root_children() or DEFAULT_MAX_ROOT_CHILDREN

    grouped = BranchChunker(chunk_size).process_nodes(nodes)
    if len(grouped) != len(nodes):
        reveal = remap_indices(nodes, grouped, reveal)
        logger.debug("chunking added %d group nodes; remapped %d reveal indices", len(grouped) - len(nodes), len(reveal))

    tree = HierarchicalCollection(grouped, match)
    initial_tree_layout(tree, is_selected, reveal, max_root_children)
    return tree, reveal
