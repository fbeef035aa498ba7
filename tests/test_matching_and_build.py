from __future__ import annotations

import unittest

from selectiondata import (
    BRANCH_GROUP,
    HierarchicalCollection,
    TreeNode,
    assign_tree_metrics,
    match_label,
    match_label_or_synonyms,
    nodes_from_outline,
)


class MatchingTests(unittest.TestCase):
    def test_label_match_is_case_insensitive_substring(self) -> None:
        node = TreeNode(name="Luciferase Reporter")

        self.assertTrue(match_label(node, "lucif"))
        self.assertTrue(match_label(node, "REPORTER"))
        self.assertFalse(match_label(node, "kinase"))

    def test_blank_query_matches_nothing(self) -> None:
        node = TreeNode(name="anything", alt_labels=("else",))

        self.assertFalse(match_label(node, ""))
        self.assertFalse(match_label_or_synonyms(node, ""))

    def test_synonyms_are_searched_after_label(self) -> None:
        node = TreeNode(name="fluorescence", alt_labels=("FRET", "photoluminescence"))

        self.assertTrue(match_label_or_synonyms(node, "fret"))
        self.assertTrue(match_label_or_synonyms(node, "photo"))
        self.assertFalse(match_label(node, "fret"))
        self.assertFalse(match_label_or_synonyms(node, "absorbance"))

    def test_tree_search_with_synonym_predicate(self) -> None:
        nodes = nodes_from_outline("assay\n-binding\n--FRET binding\n-functional\n--reporter")
        nodes[4].alt_labels = ("luciferase",)
        tree = HierarchicalCollection(nodes, match_label_or_synonyms)

        self.assertEqual(tree.search("LUCI"), [1, 2])
        self.assertEqual(tree.count_hits(), 3)
        self.assertEqual(tree.match_count, [1, 0, 0, 1, 0])


class BuildTests(unittest.TestCase):
    def test_assign_tree_metrics_from_parents(self) -> None:
        nodes = [TreeNode(name=str(idx), parent=parent) for idx, parent in enumerate([-1, 0, 1, 1, 0])]

        assign_tree_metrics(nodes)

        self.assertEqual([node.depth for node in nodes], [0, 1, 2, 2, 1])
        self.assertEqual([node.child_count for node in nodes], [4, 2, 0, 0, 0])

    def test_group_nodes_are_not_counted_as_descendants(self) -> None:
        nodes = nodes_from_outline("root\n-[a - b]\n--a,--b")

        self.assertEqual(nodes[1].uri, BRANCH_GROUP)
        self.assertEqual([node.child_count for node in nodes], [2, 2, 0, 0])

    def test_outline_supports_multiple_roots(self) -> None:
        nodes = nodes_from_outline("first\n-child\nsecond\n-other,--deep")

        self.assertEqual([node.parent for node in nodes], [-1, 0, -1, 2, 3])
        self.assertEqual([node.depth for node in nodes], [0, 1, 0, 1, 2])
        self.assertEqual(nodes[3].uri, "other")


if __name__ == "__main__":
    unittest.main()
