"""Transclusion of ``:[label](path#section)`` directives.

Layers, leaves first:

- ``targets``   - directive target -> canonical path + section anchor
- ``sections``  - heading-delimited section extraction
- ``metadata``  - per-host tree of transcluded documents' metadata
- ``resolvers`` - resolver chain handed to the engine
- ``engine``    - directive scanning and recursive substitution
- ``pipeline``  - sequential processing of a whole file tree
"""
from .engine import Directive, TransclusionEngine, find_directives
from .metadata import MetadataTree, record, tree_key
from .pipeline import DocumentResult, TransclusionRun, build_engine, transclude_document, transclude_files
from .resolvers import (
    FileIndexResolver,
    PlaceholderResolver,
    ResolvedContent,
    Resolver,
    ResolverChain,
    format_footer,
    format_header,
)
from .sections import extract_section, heading_pattern
from .targets import BoundaryMode, ResolvedTarget, is_local_target, join_target, resolve_target, split_anchor

__all__ = [
    "BoundaryMode",
    "ResolvedTarget",
    "is_local_target",
    "split_anchor",
    "join_target",
    "resolve_target",
    "extract_section",
    "heading_pattern",
    "MetadataTree",
    "record",
    "tree_key",
    "ResolvedContent",
    "Resolver",
    "FileIndexResolver",
    "PlaceholderResolver",
    "ResolverChain",
    "format_header",
    "format_footer",
    "Directive",
    "TransclusionEngine",
    "find_directives",
    "DocumentResult",
    "TransclusionRun",
    "build_engine",
    "transclude_document",
    "transclude_files",
]
