"""Recursive transclusion engine.

Scans text for ``:[label](target)`` directives, asks a :class:`ResolverChain`
for each one and substitutes the result. Content that comes back with a
``url`` is transcluded again, with that url as the origin of its own
directives.

Directives inside fenced code blocks are left untouched.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union

from mdtransclude.core.exceptions import ReferenceCycleError, TransclusionDepthError
from mdtransclude.core.files.index import normalize_path

from .resolvers import Resolver, ResolverChain

logger = logging.getLogger(__name__)

DIRECTIVE_PATTERN = re.compile(r":\[(?P<label>[^\]\n]*)\]\((?P<target>[^)\n]*)\)")
FENCE_PATTERN = re.compile(
    r"^[ \t]{0,3}(?P<fence>`{3,}|~{3,})[^\n]*\n.*?^[ \t]{0,3}(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class Directive:
    """One directive occurrence in a text."""

    label: str
    target: str
    placeholder: str
    start: int
    end: int


def _fenced_spans(text: str) -> List[Tuple[int, int]]:
    return [(m.start(), m.end()) for m in FENCE_PATTERN.finditer(text)]


def find_directives(text: str) -> Iterator[Directive]:
    """Yield the directives of ``text`` outside fenced code blocks, in order."""
    fences = _fenced_spans(text)
    for match in DIRECTIVE_PATTERN.finditer(text):
        if any(start <= match.start() < end for start, end in fences):
            continue
        yield Directive(
            label=match.group("label"),
            target=match.group("target").strip(),
            placeholder=match.group(0),
            start=match.start(),
            end=match.end(),
        )


class TransclusionEngine:
    """Substitute directives using an ordered chain of resolvers.

    The chain of in-flight canonical paths is tracked per top-level call: a
    document that (indirectly) transcludes itself raises
    :class:`ReferenceCycleError` instead of recursing forever.
    """

    def __init__(
        self,
        resolvers: Union[ResolverChain, Iterable[Resolver]],
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.resolvers = resolvers if isinstance(resolvers, ResolverChain) else ResolverChain(resolvers)
        self.max_depth = max_depth

    def transclude(self, text: str, origin_path: str) -> str:
        """Resolve every directive in ``text`` found in document ``origin_path``.

        Raises:
            ReferenceCycleError: When a document is reached through itself
            TransclusionDepthError: When nesting exceeds ``max_depth``
            TranscludeError: Whatever a resolver raises (e.g. a missing section)
        """
        origin = normalize_path(origin_path)
        return self._transclude(text, origin, (origin,))

    def _transclude(self, text: str, origin: str, chain: Tuple[str, ...]) -> str:
        out: List[str] = []
        pos = 0
        for directive in find_directives(text):
            out.append(text[pos:directive.start])
            pos = directive.end
            out.append(self._substitute(directive, origin, chain))
        out.append(text[pos:])
        return "".join(out)

    def _substitute(self, directive: Directive, origin: str, chain: Tuple[str, ...]) -> str:
        logger.debug("directive %s in %s", directive.placeholder, origin)
        result = self.resolvers.resolve(directive.target, origin, directive.placeholder)
        if result is None:
            return directive.placeholder

        content = result.text()
        if result.url is None:
            return content

        url = normalize_path(result.url)
        if url in chain:
            cycle = " -> ".join([*chain, url])
            raise ReferenceCycleError(
                f"Transclusion cycle: {cycle}",
                context={"chain": [*chain, url]},
            )
        if len(chain) > self.max_depth:
            raise TransclusionDepthError(
                f"Transclusion deeper than {self.max_depth} levels at {url}",
                context={"chain": [*chain, url], "max_depth": self.max_depth},
            )
        return self._transclude(content, url, (*chain, url))


__all__ = ["Directive", "TransclusionEngine", "find_directives", "DIRECTIVE_PATTERN", "DEFAULT_MAX_DEPTH"]
