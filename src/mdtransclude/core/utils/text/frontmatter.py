"""YAML frontmatter parsing utilities.

Markdown documents loaded from disk may start with a YAML block delimited by
'---' markers. The block becomes the document's metadata; the rest is the
content that directives are resolved in.

Example:
    ```yaml
    ---
    title: Installation
    tags: [setup]
    ---

    # Installation
    ```
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping

import yaml

# Matches content between the first pair of '---' markers at the start of a file
FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\n(.*?\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)


@dataclass
class ParsedDocument:
    """Result of splitting a document into frontmatter and body.

    Attributes:
        frontmatter: Parsed YAML mapping (empty when absent)
        content: Text after the frontmatter block
        raw_frontmatter: The raw YAML string (for debugging)
    """
    frontmatter: Dict[str, Any]
    content: str
    raw_frontmatter: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: Full markdown content including frontmatter

    Returns:
        ParsedDocument with frontmatter dict, body content and raw YAML

    Raises:
        ValueError: If the YAML is invalid or not a mapping

    Example:
        >>> doc = parse_frontmatter('---\\ntitle: B\\n---\\n# B\\n')
        >>> doc.frontmatter['title']
        'B'
        >>> doc.content
        '# B\\n'
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_yaml = match.group(1) or ""
    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(parsed).__name__}")

    return ParsedDocument(
        frontmatter=parsed,
        content=content[match.end():],
        raw_frontmatter=raw_yaml,
    )


def format_frontmatter(data: Mapping[str, Any]) -> str:
    """Format a mapping as YAML frontmatter wrapped in '---' delimiters.

    Returns an empty string for an empty mapping.
    """
    if not data:
        return ""
    yaml_content = yaml.safe_dump(
        dict(data),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,  # Preserve insertion order
    )
    return f"---\n{yaml_content}---\n"


__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "FRONTMATTER_PATTERN",
]
