"""Virtual file tree: in-memory documents keyed by logical path."""
from .index import Document, FileIndex, normalize_path
from .loader import copy_unloaded, load_directory, write_directory

__all__ = ["Document", "FileIndex", "normalize_path", "load_directory", "copy_unloaded", "write_directory"]
