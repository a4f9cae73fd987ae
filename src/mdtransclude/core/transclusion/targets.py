"""Directive target resolution.

Maps the raw target of a ``:[label](target)`` directive to a document of
the virtual file tree:

- ``guide/install``           -> ``docs/guide/install.md`` (from ``docs/index.md``)
- ``../README.md#usage``      -> section ``usage``, single-heading span
- ``api.md##endpoints``       -> section ``endpoints`` including sub-headings

The directory of the *origin* document is the base for relative targets, so
nested transclusions resolve relative to the document that contains the
directive rather than the top-level host.
"""
from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple

from mdtransclude.core.exceptions import SectionAnchorError
from mdtransclude.core.files.index import normalize_path

logger = logging.getLogger(__name__)

LOCAL_TARGET_PATTERN = re.compile(r"^[^ ()\"']+")
ANCHOR_PATTERN = re.compile(r"#+")

DEFAULT_SUFFIX = ".md"


class BoundaryMode(Enum):
    """Where a section ends."""
    SINGLE = "#"        # at the next heading of any level
    SAME_LEVEL = "##"   # at the next heading of the same level

    @classmethod
    def from_marker(cls, marker: str) -> "BoundaryMode":
        for mode in cls:
            if mode.value == marker:
                return mode
        raise SectionAnchorError(
            f"Unsupported section anchor '{marker}': use '#' (up to the next heading) "
            f"or '##' (up to the next heading of the same level)",
            context={"marker": marker},
        )


@dataclass(frozen=True)
class ResolvedTarget:
    """A directive target mapped onto an existing index key."""

    canonical_path: str
    section_name: Optional[str] = None
    boundary_mode: Optional[BoundaryMode] = None
    base: str = ""

    @property
    def has_section(self) -> bool:
        return self.section_name is not None


def is_local_target(raw_target: str) -> bool:
    """Return True when ``raw_target`` looks like a local path.

    Targets starting with a space, parenthesis or quote belong to other
    resolvers (and so does the empty target).
    """
    return bool(LOCAL_TARGET_PATTERN.match(raw_target))


def split_anchor(raw_target: str) -> Tuple[str, Optional[str], Optional[BoundaryMode]]:
    """Split ``path#section`` into ``(path, section, mode)``.

    The first run of ``#`` characters separates the path from the section
    name; its length selects the boundary mode.

    Raises:
        SectionAnchorError: For three or more ``#`` or an empty section name
    """
    match = ANCHOR_PATTERN.search(raw_target)
    if match is None:
        return raw_target, None, None

    base = raw_target[: match.start()]
    section = raw_target[match.end():]
    mode = BoundaryMode.from_marker(match.group(0))
    if not section:
        raise SectionAnchorError(
            f"Empty section name in transclusion target '{raw_target}'",
            context={"target": raw_target},
        )
    return base, section, mode


def join_target(origin_path: str, base: str) -> str:
    """Join ``base`` onto the directory of ``origin_path``."""
    return normalize_path(posixpath.join(posixpath.dirname(origin_path), base))


def resolve_target(
    raw_target: str,
    origin_path: str,
    index: Mapping[str, object],
    *,
    default_suffix: str = DEFAULT_SUFFIX,
) -> Optional[ResolvedTarget]:
    """Resolve a directive target against the index.

    Args:
        raw_target: Target as written in the directive (may carry ``#section``)
        origin_path: Logical path of the document containing the directive
        index: Mapping whose keys are the existing logical paths
        default_suffix: Suffix tried when the joined path does not exist

    Returns:
        The resolved target, or None when neither the joined path nor the
        joined path plus ``default_suffix`` exists

    Raises:
        SectionAnchorError: When the anchor is malformed
    """
    base, section, mode = split_anchor(raw_target)
    target_key = join_target(origin_path, base)
    logger.debug("target %r from %s -> %s", raw_target, origin_path, target_key)

    for candidate in (target_key, target_key + default_suffix):
        if candidate and candidate in index:
            return ResolvedTarget(
                canonical_path=candidate,
                section_name=section,
                boundary_mode=mode,
                base=base,
            )
    return None


__all__ = [
    "BoundaryMode",
    "ResolvedTarget",
    "DEFAULT_SUFFIX",
    "is_local_target",
    "split_anchor",
    "join_target",
    "resolve_target",
]
