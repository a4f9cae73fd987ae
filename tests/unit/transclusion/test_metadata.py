"""Tests for the per-host metadata tree."""
from __future__ import annotations

from mdtransclude.core.transclusion.metadata import MetadataTree, record, tree_key


class TestTreeKey:
    def test_strips_one_default_suffix(self) -> None:
        assert tree_key("a/b.md") == ["a", "b"]
        assert tree_key("a/b.md.md") == ["a", "b.md"]

    def test_keeps_other_suffixes(self) -> None:
        assert tree_key("a/b.txt") == ["a", "b.txt"]
        assert tree_key("notes") == ["notes"]


class TestRecord:
    def test_nests_by_path_segments(self) -> None:
        tree = record({}, "a/b.md", {"title": "B"})
        assert tree == {"a": {"b": {"title": "B"}}}

    def test_siblings_share_parents(self) -> None:
        tree = record({}, "a/b.md", {"title": "B"})
        tree = record(tree, "a/c.md", {"title": "C"})
        assert tree == {"a": {"b": {"title": "B"}, "c": {"title": "C"}}}

    def test_last_write_wins_without_merging(self) -> None:
        tree = record({}, "a.md", {"title": "old", "draft": True})
        tree = record(tree, "a.md", {"title": "new"})
        assert tree == {"a": {"title": "new"}}

    def test_input_tree_is_not_mutated(self) -> None:
        original = {"a": {"b": {"title": "B"}}}
        record(original, "a/c.md", {"title": "C"})
        assert original == {"a": {"b": {"title": "B"}}}

    def test_stored_metadata_is_a_copy(self) -> None:
        metadata = {"tags": ["x"]}
        tree = record({}, "a.md", metadata)
        metadata["tags"].append("y")
        assert tree == {"a": {"tags": ["x"]}}

    def test_scalar_on_the_way_is_replaced(self) -> None:
        tree = record({"a": "scalar"}, "a/b.md", {"title": "B"})
        assert tree == {"a": {"b": {"title": "B"}}}


class TestMetadataTree:
    def test_accumulates_records(self) -> None:
        tree = MetadataTree()
        assert not tree
        tree.record("a/b.md", {"title": "B"})
        tree.record("a/c.md", {"title": "C"})
        assert tree
        assert tree.as_dict() == {"a": {"b": {"title": "B"}, "c": {"title": "C"}}}

    def test_as_dict_returns_a_copy(self) -> None:
        tree = MetadataTree()
        tree.record("a.md", {"title": "A"})
        snapshot = tree.as_dict()
        snapshot["a"]["title"] = "changed"
        assert tree.as_dict() == {"a": {"title": "A"}}
