"""Heading-delimited section extraction.

A section starts at the first ATX heading (``#`` .. ``######``) whose text
begins with the requested name, compared case-insensitively and treating
``-`` in the name as any separator (space, punctuation or underscore), so
``getting-started`` finds ``## Getting Started`` and ``# getting_started``.

Where it ends depends on the :class:`BoundaryMode`:

    # A           <- extract("A", SINGLE) spans these two lines
    text1
    ## B          <- extract("A", SAME_LEVEL) also spans B
    text2
    # C
"""
from __future__ import annotations

import re
from typing import Optional, Pattern

from mdtransclude.core.exceptions import SectionNotFoundError

from .targets import BoundaryMode

ANY_HEADING = re.compile(r"^#+[ \t]+.*$", re.MULTILINE)


def heading_pattern(section_name: str) -> Pattern[str]:
    """Compile the regex matching the opening heading of ``section_name``."""
    name = "[\\W_]".join(re.escape(part) for part in section_name.split("-"))
    return re.compile(r"^(#+)[ \t]+" + name, re.IGNORECASE | re.MULTILINE)


def extract_section(
    text: str,
    section_name: str,
    mode: BoundaryMode,
    *,
    source: Optional[str] = None,
) -> str:
    """Return the slice of ``text`` spanning the named section.

    Args:
        text: Full document content
        section_name: Heading text to look for
        mode: ``SINGLE`` stops at the next heading of any level,
            ``SAME_LEVEL`` at the next heading with the same number of ``#``
        source: Document path, used in the error message

    Returns:
        The section, starting with its heading line and ending right before
        the next boundary heading (or at the end of the text)

    Raises:
        SectionNotFoundError: If no heading matches ``section_name``
    """
    match = heading_pattern(section_name).search(text)
    if match is None:
        where = f" in {source}" if source else ""
        raise SectionNotFoundError(
            f"Section '{section_name}' not found{where}",
            context={"section": section_name, "path": source},
        )

    start = match.start()
    if mode is BoundaryMode.SINGLE:
        boundary = ANY_HEADING
    else:
        level = re.escape(match.group(1))
        boundary = re.compile(r"^" + level + r"[ \t]+.*$", re.MULTILINE)

    # Resume after the opening heading line so it never bounds itself.
    line_end = text.find("\n", match.end())
    resume = len(text) if line_end == -1 else line_end + 1
    end_match = boundary.search(text, resume)
    end = end_match.start() if end_match else len(text)
    return text[start:end]


__all__ = ["heading_pattern", "extract_section"]
