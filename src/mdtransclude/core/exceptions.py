from __future__ import annotations

from typing import Any, Dict, Mapping


class TranscludeError(Exception):
    """Base exception for mdtransclude."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class SectionNotFoundError(TranscludeError, LookupError):
    """Raised when a requested heading does not exist in the target document."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TranscludeError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class SectionAnchorError(TranscludeError, ValueError):
    """Raised when a section anchor is malformed (e.g. ``###name``)."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TranscludeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ReferenceCycleError(TranscludeError):
    """Raised when a document transcludes itself, directly or indirectly."""


class TransclusionDepthError(TranscludeError):
    """Raised when nested transclusion exceeds the configured maximum depth."""


class DocumentTransclusionError(TranscludeError):
    """Raised by the pipeline when one host document fails to transclude.

    The underlying typed failure is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("path", path)
        super().__init__(message, context=ctx)
        self.path = path


class ConfigError(TranscludeError, ValueError):
    """Raised when transclusion options are invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TranscludeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "TranscludeError",
    "SectionNotFoundError",
    "SectionAnchorError",
    "ReferenceCycleError",
    "TransclusionDepthError",
    "DocumentTransclusionError",
    "ConfigError",
]
