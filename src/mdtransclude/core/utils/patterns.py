"""Glob matching for document eligibility.

Decides which documents of a virtual file tree take part in transclusion.
Patterns are matched against the whole logical path, from the tree root:

    matches_any_pattern("index.md", ["**/*.md"])              # True
    matches_any_pattern("docs/guide/intro.md", ["docs/**"])   # True
    matches_any_pattern("docs/guide/intro.md", ["docs/*.md"]) # False
    matches_any_pattern("img/logo.svg", ["*.{md,markdown}"])  # False

``*``, ``?`` and ``[...]`` stay inside one path segment; only a ``**``
segment spans directories. Wildcards do not match a leading ``.`` of a
segment, so hidden files and directories are only selected by patterns that
name the dot explicitly.
"""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Iterable, Pattern

# A non-final '**' segment: zero or more whole directories.
_ANY_DIRS = r"(?:(?!\.)[^/]*/)*"
# A final '**' segment: one or more trailing segments.
_ANY_SEGMENTS = r"(?!\.)[^/]*(?:/(?!\.)[^/]*)*"


def matches_any_pattern(file_path: str, patterns: Iterable[str]) -> bool:
    """Check if a logical path matches at least one glob pattern.

    Args:
        file_path: POSIX path relative to the tree root
        patterns: Glob patterns (``**`` and ``{a,b}`` supported)

    Returns:
        True if the path matches; False for an empty pattern list
    """
    for pattern in patterns:
        if _matches_pattern(file_path, pattern):
            return True
    return False


def _matches_pattern(file_path: str, pattern: str) -> bool:
    file_posix = str(PurePosixPath(file_path)).lstrip("/")

    for pat in _expand_braces(pattern):
        pat = str(PurePosixPath(pat))
        # Tree-root relative.
        if pat.startswith("/"):
            pat = pat.lstrip("/")
        if not pat or pat == ".":
            continue
        if _compile(pat).match(file_posix):
            return True

    return False


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Pattern[str]:
    """Translate a brace-free glob into a regex anchored at both ends."""
    segments = pattern.split("/")
    out: list[str] = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == "**":
            out.append(_ANY_SEGMENTS if last else _ANY_DIRS)
        else:
            out.append(_translate_segment(segment) + ("" if last else "/"))
    return re.compile("".join(out) + r"\Z")


def _translate_segment(segment: str) -> str:
    out: list[str] = []
    i, n = 0, len(segment)
    while i < n:
        c = segment[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = segment.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = segment[i + 1 : end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                elif body.startswith("^"):
                    body = "\\" + body
                out.append(f"[{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1

    regex = "".join(out)
    if segment[:1] in ("*", "?", "["):
        regex = r"(?!\.)" + regex
    return regex


def _expand_braces(pattern: str) -> list[str]:
    """Expand brace groups: 'a.{md,txt}' -> ['a.md', 'a.txt'] (recursive)."""
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    end = pattern.find("}", start + 1)
    if end == -1:
        return [pattern]

    before, inside, after = pattern[:start], pattern[start + 1 : end], pattern[end + 1 :]
    parts = [p.strip() for p in inside.split(",") if p.strip()]
    if len(parts) <= 1:
        return [pattern]

    out: list[str] = []
    for part in parts:
        out.extend(_expand_braces(f"{before}{part}{after}"))
    return out


__all__ = ["matches_any_pattern"]
