"""Transclude every eligible document of a virtual file tree.

Documents are processed strictly one after the other, in index order. Each
host document gets its own :class:`MetadataTree` and its own resolver; the
index itself is only read. Results are merged into a new index after all
documents succeeded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from mdtransclude.core.config import TransclusionOptions
from mdtransclude.core.exceptions import DocumentTransclusionError, TranscludeError
from mdtransclude.core.files.index import FileIndex
from mdtransclude.core.utils.patterns import matches_any_pattern

from .engine import TransclusionEngine
from .metadata import MetadataTree
from .resolvers import FileIndexResolver, PlaceholderResolver, ResolverChain

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    """Outcome of transcluding one host document."""

    path: str
    content: str
    metadata_tree: Dict[str, Any] = field(default_factory=dict)
    changed: bool = False


@dataclass
class TransclusionRun:
    """Outcome of a whole run: the updated index plus per-document results."""

    index: FileIndex
    results: List[DocumentResult] = field(default_factory=list)

    @property
    def changed_paths(self) -> List[str]:
        return [r.path for r in self.results if r.changed]


def build_engine(
    index: FileIndex,
    host_path: str,
    options: TransclusionOptions,
    tree: MetadataTree,
) -> TransclusionEngine:
    """Engine for one host document: index lookup, then literal placeholder."""
    chain = ResolverChain([
        FileIndexResolver(index, host_path, options, tree),
        PlaceholderResolver(),
    ])
    return TransclusionEngine(chain, max_depth=options.max_depth)


def transclude_document(
    index: FileIndex,
    path: str,
    options: Optional[TransclusionOptions] = None,
) -> DocumentResult:
    """Resolve every directive of the document at ``path``.

    Raises:
        KeyError: If ``path`` is not in the index
        TranscludeError: On a missing section, malformed anchor or cycle
    """
    options = options or TransclusionOptions()
    document = index[path]
    tree = MetadataTree(options.default_suffix)
    engine = build_engine(index, document.path, options, tree)

    logger.debug(">> Processing %s", document.path)
    content = engine.transclude(document.content, document.path)
    logger.debug("<< Finished processing %s", document.path)

    return DocumentResult(
        path=document.path,
        content=content,
        metadata_tree=tree.as_dict() if options.frontmatter else {},
        changed=content != document.content or bool(tree),
    )


def transclude_files(
    index: FileIndex,
    options: Optional[TransclusionOptions] = None,
) -> TransclusionRun:
    """Transclude all documents matching ``options.patterns``.

    Non-matching documents pass through unchanged. The host document's
    metadata is updated with its metadata tree when ``frontmatter`` is on.

    Raises:
        DocumentTransclusionError: For the first document that fails; the
            typed cause is chained and no document is updated
    """
    options = options or TransclusionOptions()
    results: List[DocumentResult] = []

    for path in index:
        if not matches_any_pattern(path, options.patterns):
            logger.debug("skip %s", path)
            continue
        try:
            results.append(transclude_document(index, path, options))
        except TranscludeError as exc:
            logger.error("Transclusion failed for %s: %s", path, exc)
            raise DocumentTransclusionError(
                f"Transclusion failed for {path}: {exc}",
                path=path,
                context={"error": exc.__class__.__name__, "cause": exc.context},
            ) from exc

    updated = index
    for result in results:
        document = updated[result.path]
        updated = updated.replace(
            result.path,
            document.with_updates(content=result.content, metadata=result.metadata_tree),
        )
    logger.debug("Transcluded %d of %d documents", len(results), len(index))
    return TransclusionRun(index=updated, results=results)


__all__ = ["DocumentResult", "TransclusionRun", "build_engine", "transclude_document", "transclude_files"]
