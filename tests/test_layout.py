"""Tests for toggle states, initial tree layout and annotation-aware search."""

from __future__ import annotations

import unittest
from unittest import mock

from selectiondata import (
    TOGGLE_CLOSED,
    TOGGLE_OPEN,
    TOGGLE_PARTIAL,
    HierarchicalCollection,
    apply_toggle,
    initial_tree_layout,
    match_label,
    next_toggle_state,
    nodes_from_outline,
    populate_tree,
    remap_indices,
    search_tree,
    toggle_state,
)

ONTOLOGY = """
assay
-binding
--ligand binding
--protein binding
-functional
--reporter
---luciferase
--viability
"""


def visible(tree: HierarchicalCollection) -> list[str]:
    return [tree.data[idx].name for idx in range(len(tree)) if tree.vis_mask[idx]]


class ToggleStateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tree = HierarchicalCollection(nodes_from_outline(ONTOLOGY), match_label)

    def test_leaf_rows_have_no_toggle(self) -> None:
        self.assertIsNone(toggle_state(self.tree, 2))
        self.assertIsNone(toggle_state(self.tree, 99))

    def test_toggle_state_reflects_open_partial_and_closed(self) -> None:
        self.assertEqual(toggle_state(self.tree, 1), TOGGLE_OPEN)

        self.tree.close_branch(1)
        self.assertEqual(toggle_state(self.tree, 1), TOGGLE_CLOSED)

        self.tree.search("luci")
        self.assertEqual(toggle_state(self.tree, 0), TOGGLE_PARTIAL)

    def test_partial_step_only_while_filtering(self) -> None:
        self.assertEqual(next_toggle_state(TOGGLE_OPEN, searching=False, hide_unmatched=True), TOGGLE_CLOSED)
        self.assertEqual(next_toggle_state(TOGGLE_PARTIAL, searching=True, hide_unmatched=True), TOGGLE_OPEN)
        self.assertEqual(next_toggle_state(TOGGLE_CLOSED, searching=True, hide_unmatched=True), TOGGLE_PARTIAL)
        self.assertEqual(next_toggle_state(TOGGLE_CLOSED, searching=False, hide_unmatched=True), TOGGLE_OPEN)
        self.assertEqual(next_toggle_state(TOGGLE_CLOSED, searching=True, hide_unmatched=False), TOGGLE_OPEN)

    def test_apply_toggle_cycles_branch_operations(self) -> None:
        self.tree.search("luci")
        self.tree.open_branch(0)
        self.tree.close_branch(0)
        self.assertEqual(visible(self.tree), ["assay"])

        apply_toggle(self.tree, 0, TOGGLE_CLOSED, searching=True, hide_unmatched=True)
        self.assertEqual(visible(self.tree), ["assay", "functional"])

        apply_toggle(self.tree, 0, TOGGLE_PARTIAL, searching=True, hide_unmatched=True)
        self.assertEqual(visible(self.tree), ["assay", "binding", "functional"])

        self.assertEqual(apply_toggle(self.tree, 0, TOGGLE_OPEN), [1, 4])
        self.assertEqual(visible(self.tree), ["assay"])


class InitialLayoutTests(unittest.TestCase):
    def test_depth_one_branches_start_closed(self) -> None:
        tree = HierarchicalCollection(nodes_from_outline(ONTOLOGY), match_label)

        changed = initial_tree_layout(tree)

        self.assertEqual(changed, [2, 3, 5, 6, 7])
        self.assertEqual(visible(tree), ["assay", "binding", "functional"])

    def test_large_roots_start_closed(self) -> None:
        outline = "big\n-" + ",-".join(f"t{idx}" for idx in range(5)) + "\nsmall\n-s0"
        tree = HierarchicalCollection(nodes_from_outline(outline), match_label)

        initial_tree_layout(tree, max_root_children=5)

        self.assertEqual(visible(tree), ["big", "small", "s0"])

    def test_selected_terms_and_reveal_indices_are_shown(self) -> None:
        tree = HierarchicalCollection(nodes_from_outline(ONTOLOGY), match_label)

        initial_tree_layout(tree, is_selected=lambda node: node.name == "viability", reveal_indices=[6])

        self.assertEqual(
            visible(tree),
            ["assay", "binding", "functional", "reporter", "luciferase", "viability"],
        )

    def test_search_tree_keeps_selected_terms_visible(self) -> None:
        tree = HierarchicalCollection(nodes_from_outline(ONTOLOGY), match_label)
        tree.reset(False)

        changed = search_tree(tree, "ligand", is_selected=lambda node: node.name == "viability")

        self.assertEqual(changed, [0, 1, 2, 4, 7])
        self.assertEqual(tree.count_hits(), 3)


class PopulateTreeTests(unittest.TestCase):
    def test_remap_indices_follows_uris_after_chunking(self) -> None:
        before = nodes_from_outline("root\n-" + ",-".join(f"n{idx}" for idx in range(6)))
        tree, reveal = populate_tree(before, match_label, reveal_indices=[6], chunk_size=4, max_root_children=200)

        self.assertEqual(reveal, [8])
        self.assertEqual(tree.data[8].name, "n5")
        self.assertTrue(tree.vis_mask[8])
        self.assertEqual(remap_indices(before, tree.data, [99]), [])

    def test_populate_reads_limits_from_config(self) -> None:
        nodes = nodes_from_outline("root\n-" + ",-".join(f"n{idx}" for idx in range(6)))
        with mock.patch("selectiondata.layout.load_chunk_size", return_value=3), mock.patch(
            "selectiondata.layout.load_max_root_children", return_value=None
        ):
            tree, reveal = populate_tree(nodes, match_label)

        self.assertEqual([node.name for node in tree.data if node.is_group], ["[n0 - n2]", "[n3 - n5]"])
        self.assertEqual(reveal, [])


if __name__ == "__main__":
    unittest.main()
