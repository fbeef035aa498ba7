"""Hierarchical collection over a preorder-flattened tree.

Rows are stored depth-first: a node is immediately followed by its whole
subtree, and each row knows its parent index and depth. All traversal is
index arithmetic over that ordering.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .masked import MaskedCollection, MatchFunc
from .types import TreeItem


class HierarchicalCollection(MaskedCollection[TreeItem]):
    """Masked collection with parent/child visibility and open/closed branches."""

    def __init__(self, data: Sequence[TreeItem], match: MatchFunc) -> None:
        self.open_mask: list[bool] = []
        self.child_mask: list[bool] = []
        super().__init__(data, match)

    def set_data(self, data: Sequence[TreeItem]) -> None:
        """Replace rows and recompute child/open masks from depth changes."""
        super().set_data(data)
        size = len(self.data)
        self.child_mask = [False] * size
        for idx in range(size - 1):
            self.child_mask[idx] = self.data[idx + 1].depth > self.data[idx].depth
        self.open_mask = list(self.child_mask)

    def _valid(self, idx: int) -> bool:
        return 0 <= idx < len(self.data)

    def search(self, query: str) -> list[int]:
        """Search rows, close all branches, and aggregate descendant hit counts.

        After a non-empty query ``match_count[n]`` holds the number of direct
        matches strictly below ``n``.
        """
        self.open_mask = [False] * len(self.data)
        changed = super().search(query)
        if query == "":
            return changed

        counts = [0] * len(self.data)
        for idx, hit in enumerate(self.match_count):
            if hit == 0:
                continue
            for parent in self.find_parents(idx):
                counts[parent] += 1
        self.match_count = counts
        return changed

    def propagate_visibility(self, new_visible: list[bool]) -> list[bool]:
        """Make the full ancestor chain of every visible row visible."""
        for idx in range(len(new_visible)):
            if not new_visible[idx]:
                continue
            for parent in self.find_parents(idx):
                if new_visible[parent]:
                    break
                new_visible[parent] = True
        return new_visible

    def show(self, indices: Iterable[int]) -> list[int]:
        """Show rows together with their ancestors, opening those ancestors."""
        indices = self.valid_indices(indices)
        result = list(indices)
        for idx in indices:
            for parent in self.find_parents(idx):
                result.append(parent)
                self.open_mask[parent] = True
        return super().show(result)

    def hide(self, indices: Iterable[int]) -> list[int]:
        """Hide rows together with their subtrees, closing every hidden branch."""
        indices = self.valid_indices(indices)
        result = list(indices)
        for idx in indices:
            self.open_mask[idx] = False
            for child in self.find_children(idx):
                result.append(child)
                self.open_mask[child] = False
        return super().hide(result)

    def reset(self, visible: bool = True) -> list[int]:
        """Force uniform visibility; changed branches open or close with it."""
        changed = super().reset(visible)
        for idx in changed:
            self.open_mask[idx] = visible and self.child_mask[idx]
        return changed

    def open_branch(self, idx: int) -> list[int]:
        """Expand ``idx`` by exactly one level.

        Direct children become visible; deeper descendants are hidden and
        closed regardless of their previous state. Hidden ancestors of
        ``idx`` are shown and opened.
        """
        return self._expand(idx, only_selected=False)

    def partial_open_branch(self, idx: int) -> list[int]:
        """Expand ``idx`` one level, revealing only selected direct children."""
        return self._expand(idx, only_selected=True)

    def _expand(self, idx: int, only_selected: bool) -> list[int]:
        if not self._valid(idx):
            return []
        new_visible = list(self.vis_mask)
        self.open_mask[idx] = self.child_mask[idx]
        new_visible[idx] = True
        for parent in self.find_parents(idx):
            new_visible[parent] = True
            self.open_mask[parent] = True
        child_depth = self.data[idx].depth + 1
        for child in self.find_children(idx):
            visible = self.data[child].depth == child_depth
            if only_selected:
                visible = visible and self.sel_mask[child]
            new_visible[child] = visible
            self.open_mask[child] = False
        return self.set_visibility(new_visible)

    def close_branch(self, idx: int) -> list[int]:
        """Collapse ``idx``: hide and close all descendants, keep ``idx`` visible.

        Hidden ancestors of ``idx`` are shown and opened, as in ``open_branch``.
        """
        if not self._valid(idx) or not self.open_mask[idx]:
            return []
        new_visible = list(self.vis_mask)
        self.open_mask[idx] = False
        new_visible[idx] = True
        for parent in self.find_parents(idx):
            new_visible[parent] = True
            self.open_mask[parent] = True
        for child in self.find_children(idx):
            new_visible[child] = False
            self.open_mask[child] = False
        return self.set_visibility(new_visible)

    def find_children(self, idx: int) -> list[int]:
        """Return all strict descendants of ``idx`` in array order."""
        if not self._valid(idx):
            return []
        parent_depth = self.data[idx].depth
        children: list[int] = []
        for pos in range(idx + 1, len(self.data)):
            if self.data[pos].depth <= parent_depth:
                break
            children.append(pos)
        return children

    def find_direct_children(self, idx: int) -> list[int]:
        """Return descendants of ``idx`` exactly one level deeper."""
        if not self._valid(idx):
            return []
        parent_depth = self.data[idx].depth
        children: list[int] = []
        for pos in range(idx + 1, len(self.data)):
            depth = self.data[pos].depth
            if depth <= parent_depth:
                break
            if depth == parent_depth + 1:
                children.append(pos)
        return children

    def find_parents(self, idx: int) -> list[int]:
        """Return the ancestor chain of ``idx``, nearest first."""
        if not self._valid(idx):
            return []
        parents: list[int] = []
        pos = self.data[idx].parent
        while pos >= 0:
            parents.append(pos)
            pos = self.data[pos].parent
        return parents

    def is_partial_open(self, idx: int) -> bool:
        """Return whether some, but not all, direct children are visible."""
        return self._is_partial(idx, self.vis_mask)

    def is_partial_selected(self, idx: int) -> bool:
        """Return whether some, but not all, direct children are selected."""
        return self._is_partial(idx, self.sel_mask)

    def _is_partial(self, idx: int, mask: list[bool]) -> bool:
        children = self.find_direct_children(idx)
        count = sum(1 for child in children if mask[child])
        return 0 < count < len(children)

    def describe_rows(self, visible_only: bool = False) -> list[str]:
        """Format one debug line per row with visibility and open flags."""
        lines: list[str] = []
        for idx in range(len(self.data)):
            if visible_only and not self.vis_mask[idx]:
                continue
            lines.append(f"{idx} v:{self.vis_mask[idx]} o:{self.open_mask[idx]} {self.row_label(idx)}")
        return lines
