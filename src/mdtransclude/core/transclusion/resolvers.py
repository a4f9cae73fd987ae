"""Resolvers handed to the transclusion engine.

A resolver receives one directive target together with the path of the
document the directive appears in, and either declines (``None``) or returns
:class:`ResolvedContent`. The engine tries its resolvers in order:

1. :class:`FileIndexResolver` - looks the target up in the virtual file tree
2. :class:`PlaceholderResolver` - keeps the directive text as written

so a directive that cannot be resolved stays visible in the output.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional

from mdtransclude.core.config import TransclusionOptions
from mdtransclude.core.files.index import FileIndex

from .metadata import MetadataTree
from .sections import extract_section
from .targets import ResolvedTarget, is_local_target, join_target, resolve_target

logger = logging.getLogger(__name__)


@dataclass
class ResolvedContent:
    """What a resolver returns for an accepted directive.

    Attributes:
        content: Lazy, single-pass iterator of UTF-8 encoded chunks
        url: Canonical path the content came from; directives nested in the
            content resolve relative to it. None for literal placeholders.
    """

    content: Iterator[bytes]
    url: Optional[str] = None

    def text(self) -> str:
        """Drain ``content`` and decode it."""
        return b"".join(self.content).decode("utf-8")


def _chunks(parts: Iterable[str]) -> Iterator[bytes]:
    for part in parts:
        if part:
            yield part.encode("utf-8")


class Resolver(ABC):
    """A strategy for turning a directive target into content."""

    @abstractmethod
    def resolve(self, raw_target: str, origin_path: str, placeholder: str) -> Optional[ResolvedContent]:
        """Resolve ``raw_target`` found in ``origin_path``.

        Args:
            raw_target: Target as written in the directive
            origin_path: Logical path of the document containing the directive
            placeholder: Full directive text, e.g. ``:[intro](intro.md)``

        Returns:
            Content, or None to let the next resolver try
        """
        ...

    def get_name(self) -> str:
        return self.__class__.__name__


def format_header(target: ResolvedTarget, metadata: Mapping[str, Any], verbose: bool) -> str:
    """Leading provenance comment for a snippet."""
    if not verbose:
        return f"<!-- Following snippet transcluded from {target.canonical_path} -->\n"
    # The header is scanned for directives along with the snippet; metadata
    # text must not read as one. With the default separators ':[' only occurs
    # inside JSON strings, where '\u005b' decodes to the same '['.
    payload = json.dumps(dict(metadata), default=str, sort_keys=True).replace(":[", ":\\u005b")
    return (
        f"<!-- Following snippet transcluded from {target.canonical_path} "
        f"with reference({target.base}) {payload} -->\n"
    )


def format_footer(target: ResolvedTarget) -> str:
    """Trailing provenance comment for a snippet."""
    return f"\n<!-- End of transcluded snippet from {target.canonical_path} -->\n\n"


class FileIndexResolver(Resolver):
    """Resolve directives against the documents of a :class:`FileIndex`.

    One instance serves one host document: the metadata of every resolved
    document is recorded into ``tree`` when frontmatter collection is on.
    """

    def __init__(
        self,
        index: FileIndex,
        host_path: str,
        options: Optional[TransclusionOptions] = None,
        tree: Optional[MetadataTree] = None,
    ) -> None:
        self.index = index
        self.host_path = host_path
        self.options = options or TransclusionOptions()
        self.tree = tree if tree is not None else MetadataTree(self.options.default_suffix)

    def resolve(self, raw_target: str, origin_path: str, placeholder: str = "") -> Optional[ResolvedContent]:
        if not is_local_target(raw_target):
            logger.debug("not a local target: %r", raw_target)
            return None

        target = resolve_target(
            raw_target,
            origin_path or self.host_path,
            self.index,
            default_suffix=self.options.default_suffix,
        )
        if target is None:
            if self.options.warning:
                attempted = join_target(origin_path or self.host_path, raw_target.split("#", 1)[0])
                logger.warning("Missing transclusion destination in %s: %s", self.host_path, attempted)
            return None
        logger.debug("found %s for %r", target.canonical_path, raw_target)

        document = self.index[target.canonical_path]
        if target.section_name is not None and target.boundary_mode is not None:
            text = extract_section(
                document.content,
                target.section_name,
                target.boundary_mode,
                source=target.canonical_path,
            )
        else:
            text = document.content

        if self.options.frontmatter:
            self.tree.record(target.canonical_path, document.metadata)

        parts: List[str] = [text]
        if self.options.comments:
            parts = [
                format_header(target, document.metadata, self.options.verbose),
                text,
                format_footer(target),
            ]
        return ResolvedContent(content=_chunks(parts), url=target.canonical_path)


class PlaceholderResolver(Resolver):
    """Fallback that substitutes the directive text unchanged."""

    def resolve(self, raw_target: str, origin_path: str, placeholder: str) -> Optional[ResolvedContent]:
        return ResolvedContent(content=_chunks([placeholder]), url=None)


class ResolverChain:
    """Ordered resolvers; the first one that accepts wins."""

    def __init__(self, resolvers: Iterable[Resolver]) -> None:
        self.resolvers: List[Resolver] = list(resolvers)

    def resolve(self, raw_target: str, origin_path: str, placeholder: str) -> Optional[ResolvedContent]:
        for resolver in self.resolvers:
            result = resolver.resolve(raw_target, origin_path, placeholder)
            if result is not None:
                return result
        return None

    def __iter__(self) -> Iterator[Resolver]:
        return iter(self.resolvers)

    def __len__(self) -> int:
        return len(self.resolvers)


__all__ = [
    "ResolvedContent",
    "Resolver",
    "FileIndexResolver",
    "PlaceholderResolver",
    "ResolverChain",
    "format_header",
    "format_footer",
]
