"""Read-only index of the documents taking part in a transclusion run.

Documents are keyed by POSIX logical path relative to the tree root
(``docs/guide/install.md``). The index is built once per run and never
mutated; updates produce a new index.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping

# Keys carried by pipeline file records that are not document metadata.
NON_METADATA_KEYS = frozenset({"contents", "content", "mode", "stats"})


def normalize_path(path: str) -> str:
    """Normalize a logical path: POSIX separators, no '.' or leading './'."""
    normalized = posixpath.normpath(path.replace("\\", "/"))
    if normalized == ".":
        return ""
    return normalized.lstrip("/")


@dataclass(frozen=True)
class Document:
    """One entry of the virtual file tree."""

    path: str
    content: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only view over a private copy.
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def from_record(cls, path: str, record: Mapping[str, Any]) -> "Document":
        """Build a document from a pipeline record ``{"contents": ..., **meta}``.

        ``contents`` may be ``str`` or UTF-8 ``bytes``; storage fields
        (``mode``, ``stats``) are dropped from the metadata.
        """
        raw = record.get("contents", record.get("content", ""))
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8")
        metadata = {k: v for k, v in record.items() if k not in NON_METADATA_KEYS}
        return cls(path=normalize_path(path), content=str(raw), metadata=metadata)

    def with_updates(self, *, content: str | None = None, metadata: Mapping[str, Any] | None = None) -> "Document":
        """Return a copy with new content and/or metadata merged on top."""
        merged: Dict[str, Any] = dict(self.metadata)
        if metadata:
            merged.update(metadata)
        return Document(
            path=self.path,
            content=self.content if content is None else content,
            metadata=merged,
        )

    def to_record(self) -> Dict[str, Any]:
        """Inverse of :meth:`from_record`."""
        return {**dict(self.metadata), "contents": self.content}


class FileIndex(Mapping[str, Document]):
    """Immutable mapping of logical path -> :class:`Document`.

    Iteration order is insertion order, which is the order documents are
    processed in.
    """

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._docs: Dict[str, Document] = {}
        for doc in documents:
            self._docs[normalize_path(doc.path)] = doc

    @classmethod
    def from_mapping(cls, records: Mapping[str, Mapping[str, Any]]) -> "FileIndex":
        """Build an index from ``{path: {"contents": ..., **metadata}}``."""
        return cls(Document.from_record(path, record) for path, record in records.items())

    def __getitem__(self, path: str) -> Document:
        return self._docs[normalize_path(path)]

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._docs

    def __iter__(self) -> Iterator[str]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def __repr__(self) -> str:
        return f"FileIndex({list(self._docs)!r})"

    def replace(self, path: str, document: Document) -> "FileIndex":
        """Return a new index with ``path`` mapped to ``document``."""
        updated = FileIndex()
        updated._docs = dict(self._docs)
        updated._docs[normalize_path(path)] = document
        return updated

    def to_mapping(self) -> Dict[str, Dict[str, Any]]:
        return {path: doc.to_record() for path, doc in self._docs.items()}


__all__ = ["Document", "FileIndex", "normalize_path", "NON_METADATA_KEYS"]
