"""Text helpers (frontmatter)."""
from .frontmatter import ParsedDocument, format_frontmatter, parse_frontmatter

__all__ = ["ParsedDocument", "parse_frontmatter", "format_frontmatter"]
