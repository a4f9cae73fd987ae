"""Metadata tree of transcluded documents.

While one host document is transcluded, the metadata of every document it
pulls in is recorded under that document's path, split into nested keys:

    record({}, "a/b.md", {"title": "B"})  ->  {"a": {"b": {"title": "B"}}}

The tree belongs to a single host-document pass and is merged into the host
metadata once that pass completes.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Mapping

from .targets import DEFAULT_SUFFIX


def tree_key(path: str, suffix: str = DEFAULT_SUFFIX) -> list[str]:
    """Split ``path`` into tree segments, dropping one trailing ``suffix``."""
    if suffix and path.endswith(suffix):
        path = path[: -len(suffix)]
    return [segment for segment in path.split("/") if segment]


def record(
    tree: Mapping[str, Any],
    canonical_path: str,
    metadata: Mapping[str, Any],
    *,
    suffix: str = DEFAULT_SUFFIX,
) -> Dict[str, Any]:
    """Return a copy of ``tree`` with ``metadata`` stored at ``canonical_path``.

    A previous value at the same address is replaced, not merged. Scalar
    values found on the way down are replaced by nested mappings.
    """
    segments = tree_key(canonical_path, suffix)
    updated: Dict[str, Any] = copy.deepcopy(dict(tree))
    if not segments:
        return updated

    node = updated
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = copy.deepcopy(dict(metadata))
    return updated


class MetadataTree:
    """Accumulator for one host document's metadata tree."""

    def __init__(self, suffix: str = DEFAULT_SUFFIX) -> None:
        self._tree: Dict[str, Any] = {}
        self._suffix = suffix

    def record(self, canonical_path: str, metadata: Mapping[str, Any]) -> None:
        self._tree = record(self._tree, canonical_path, metadata, suffix=self._suffix)

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._tree)

    def __bool__(self) -> bool:
        return bool(self._tree)

    def __repr__(self) -> str:
        return f"MetadataTree({self._tree!r})"


__all__ = ["tree_key", "record", "MetadataTree"]
