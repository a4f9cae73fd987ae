"""Bridge between a directory on disk and a :class:`FileIndex`.

Markdown files have their YAML frontmatter split off into document
metadata; other text files are loaded verbatim with empty metadata. Files
that are not UTF-8 text (images, archives) stay out of the index and are
copied byte for byte by :func:`copy_unloaded`.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from mdtransclude.core.utils.io import atomic_write_text
from mdtransclude.core.utils.patterns import matches_any_pattern
from mdtransclude.core.utils.text import format_frontmatter, parse_frontmatter

from .index import Document, FileIndex

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


def _iter_files(root: Path, exclude: Optional[Iterable[str]]) -> Iterator[Tuple[Path, str]]:
    """Yield ``(file, relative POSIX path)`` for every non-excluded file, sorted."""
    excluded = list(exclude or [])
    for file_path in sorted(p for p in root.rglob("*") if p.is_file()):
        rel = file_path.relative_to(root).as_posix()
        if excluded and matches_any_pattern(rel, excluded):
            logger.debug("exclude %s", rel)
            continue
        yield file_path, rel


def load_directory(root: Path, exclude: Optional[Iterable[str]] = None) -> FileIndex:
    """Load every text file under ``root`` into a :class:`FileIndex`.

    Args:
        root: Directory to scan recursively
        exclude: Optional globs (relative to ``root``) of files to skip

    Returns:
        Index keyed by POSIX paths relative to ``root``, in sorted order

    Raises:
        NotADirectoryError: If ``root`` is not a directory
        ValueError: If a Markdown file has malformed frontmatter
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    documents: List[Document] = []
    for file_path, rel in _iter_files(root, exclude):
        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug("skip non-text file %s", rel)
            continue

        if file_path.suffix.lower() in MARKDOWN_SUFFIXES:
            try:
                parsed = parse_frontmatter(text)
            except ValueError as exc:
                raise ValueError(f"{rel}: {exc}") from exc
            documents.append(Document(path=rel, content=parsed.content, metadata=parsed.frontmatter))
        else:
            documents.append(Document(path=rel, content=text))

    logger.debug("Loaded %d documents from %s", len(documents), root)
    return FileIndex(documents)


def copy_unloaded(
    root: Path,
    dest: Path,
    index: FileIndex,
    exclude: Optional[Iterable[str]] = None,
) -> List[Path]:
    """Copy the files under ``root`` that ``index`` does not hold to ``dest``.

    These are the binary files :func:`load_directory` skipped; they pass
    through untouched, keeping their mode and timestamps.

    Returns:
        Copied file paths under ``dest``
    """
    root, dest = Path(root), Path(dest)
    copied: List[Path] = []
    for file_path, rel in _iter_files(root, exclude):
        if rel in index:
            continue
        target = dest / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file_path, target)
        copied.append(target)
    logger.debug("Copied %d unloaded files to %s", len(copied), dest)
    return copied


def write_directory(index: FileIndex, dest: Path, paths: Optional[Iterable[str]] = None) -> List[Path]:
    """Write documents back to ``dest``, re-emitting Markdown frontmatter.

    Args:
        index: Documents to write
        dest: Target root directory
        paths: Optional subset of logical paths to write (default: all)

    Returns:
        Written file paths
    """
    dest = Path(dest)
    written: List[Path] = []
    for rel in (index if paths is None else paths):
        doc = index[rel]
        target = dest / doc.path
        text = doc.content
        if target.suffix.lower() in MARKDOWN_SUFFIXES and doc.metadata:
            text = format_frontmatter(dict(doc.metadata)) + text
        atomic_write_text(target, text)
        written.append(target)
    return written


__all__ = ["load_directory", "copy_unloaded", "write_directory", "MARKDOWN_SUFFIXES"]
