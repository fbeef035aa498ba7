"""Masked collections: visibility and selection state over a flat item list.

Every mutator returns the indices whose visibility actually flipped, so a
renderer can patch only the rows that changed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

T = TypeVar("T")

MatchFunc = Callable[[T, str], bool]


class MaskedCollection(Generic[T]):
    """Ordered items with parallel visible/selected masks and match counts."""

    def __init__(self, data: Sequence[T], match: MatchFunc) -> None:
        self._match = match
        self.data: list[T] = []
        self.vis_mask: list[bool] = []
        self.sel_mask: list[bool] = []
        self.match_count: list[int] = []
        self.set_data(data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def length(self) -> int:
        """Number of items in the backing array."""
        return len(self.data)

    def set_data(self, data: Sequence[T]) -> None:
        """Replace the backing array and re-derive every mask.

        All rows start visible and unselected, with no active search.
        """
        self.data = list(data)
        size = len(self.data)
        self.vis_mask = [True] * size
        self.sel_mask = [False] * size
        self.match_count = [-1] * size

    def search(self, query: str) -> list[int]:
        """Apply ``query`` to every item and return changed visibility indices.

        An empty query clears the search: everything becomes visible and
        selections and match counts are reset.
        """
        if query == "":
            result = self.propagate_visibility([True] * len(self.data))
            self.sel_mask = [False] * len(self.data)
            self.match_count = [-1] * len(self.data)
            return self.set_visibility(result)

        matches = [bool(self._match(item, query)) for item in self.data]
        self.match_count = [1 if matched else 0 for matched in matches]
        result = self.propagate_visibility(matches)
        self.sel_mask = list(result)
        return self.set_visibility(result)

    def propagate_visibility(self, new_visible: list[bool]) -> list[bool]:
        """Hook for subclasses whose row visibility depends on other rows."""
        return new_visible

    def count_hits(self) -> int:
        """Return the number of selected rows."""
        return sum(1 for selected in self.sel_mask if selected)

    def valid_indices(self, indices: Iterable[int]) -> list[int]:
        """Drop indices that do not address a row in the current data."""
        size = len(self.data)
        return [idx for idx in indices if 0 <= idx < size]

    def show(self, indices: Iterable[int]) -> list[int]:
        """Make rows visible, returning those that were hidden before."""
        new_state = list(self.vis_mask)
        for idx in self.valid_indices(indices):
            new_state[idx] = True
        return self.set_visibility(new_state)

    def hide(self, indices: Iterable[int]) -> list[int]:
        """Hide rows, returning those that were visible before."""
        new_state = list(self.vis_mask)
        for idx in self.valid_indices(indices):
            new_state[idx] = False
        return self.set_visibility(new_state)

    def reset(self, visible: bool = True) -> list[int]:
        """Force every row to the same visibility."""
        return self.set_visibility([visible] * len(self.data))

    def set_visibility(self, new_state: Sequence[bool]) -> list[int]:
        """Replace the visibility mask and return indices that changed.

        This is the only writer of ``vis_mask``. Entries missing from a short
        ``new_state`` keep their current value.
        """
        changed: list[int] = []
        for idx, visible in zip(range(len(self.vis_mask)), new_state):
            visible = bool(visible)
            if self.vis_mask[idx] == visible:
                continue
            self.vis_mask[idx] = visible
            changed.append(idx)
        return changed

    def row_label(self, idx: int) -> str:
        """Return a short label for debug output."""
        item = self.data[idx]
        return str(getattr(item, "name", item))

    def describe_rows(self, visible_only: bool = False) -> list[str]:
        """Format one debug line per row with its visibility flag."""
        lines: list[str] = []
        for idx in range(len(self.data)):
            if visible_only and not self.vis_mask[idx]:
                continue
            lines.append(f"{idx} v:{self.vis_mask[idx]} {self.row_label(idx)}")
        return lines


class SelectionList(MaskedCollection[T]):
    """Plain list of items with no inter-row visibility rules."""
