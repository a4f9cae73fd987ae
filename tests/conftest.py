import sys
from pathlib import Path
from typing import Any, Dict, Mapping

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'mdtransclude'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from mdtransclude.core.files.index import Document, FileIndex
from mdtransclude.core.logging import reset_logging_for_tests


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI commands install a stderr handler; drop it between tests."""
    yield
    reset_logging_for_tests()


def build_index(files: Mapping[str, Any]) -> FileIndex:
    """Build a FileIndex from ``{path: content}`` or ``{path: (content, metadata)}``."""
    docs = []
    for path, value in files.items():
        if isinstance(value, tuple):
            content, metadata = value
        else:
            content, metadata = value, {}
        docs.append(Document(path=path, content=content, metadata=metadata))
    return FileIndex(docs)


@pytest.fixture
def make_index():
    return build_index


@pytest.fixture
def write_tree(tmp_path: Path):
    """Write ``{relative path: text}`` under tmp_path/src and return the root."""

    def _write(files: Dict[str, str], root_name: str = "src") -> Path:
        root = tmp_path / root_name
        for rel, text in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return root

    return _write
