"""
mdtransclude - Markdown transclusion for virtual file trees

Resolves ``:[label](path#section)`` directives across an in-memory set of
documents, inlining whole files or heading-delimited sections and recording
where every snippet came from.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
