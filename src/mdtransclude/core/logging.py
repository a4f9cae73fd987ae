from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "WARNING", *, log_path: Optional[Path] = None) -> None:
    """Install one handler on the ``mdtransclude`` logger.

    Logs go to ``log_path`` when given, otherwise to stderr (stdout stays
    free for JSON output). Calling again replaces the handler installed by
    the previous call.
    """
    global _INSTALLED_HANDLER

    logger = logging.getLogger("mdtransclude")
    logger.setLevel(_level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _INSTALLED_HANDLER = handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _INSTALLED_HANDLER
    if _INSTALLED_HANDLER is not None:
        logging.getLogger("mdtransclude").removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests", "LOG_FORMAT"]
