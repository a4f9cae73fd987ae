"""Transclusion options."""
from .options import CONFIG_SCHEMA, DEFAULT_PATTERNS, TransclusionOptions, load_options, validate_options

__all__ = ["TransclusionOptions", "load_options", "validate_options", "DEFAULT_PATTERNS", "CONFIG_SCHEMA"]
