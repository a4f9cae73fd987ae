"""File I/O helpers."""
from .atomic import atomic_write_text
from .yaml import read_yaml

__all__ = ["atomic_write_text", "read_yaml"]
