"""Transclusion options and their YAML configuration file.

Options can come from a YAML mapping (``mdtransclude.yaml``), from CLI
flags, or be built directly:

    patterns:            # or `pattern: "docs/**/*.md"`
      - "**/*.md"
    comments: true       # wrap snippets in provenance comments
    frontmatter: true    # collect transcluded metadata into the host
    verbose: false       # add reference + JSON metadata to the comments
    warning: true        # log missing targets

Every mapping is validated against the bundled JSON Schema
(``data/schemas/config.schema.yaml``).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from mdtransclude.core.exceptions import ConfigError
from mdtransclude.core.utils.io import read_yaml
from mdtransclude.data import read_yaml as read_data_yaml

DEFAULT_PATTERNS: Tuple[str, ...] = ("**/*.md",)
CONFIG_SCHEMA = ("schemas", "config.schema.yaml")


@dataclass(frozen=True)
class TransclusionOptions:
    """Options for one transclusion run."""

    patterns: Tuple[str, ...] = DEFAULT_PATTERNS
    comments: bool = False
    frontmatter: bool = False
    verbose: bool = True
    warning: bool = True
    default_suffix: str = ".md"
    max_depth: int = 32

    def __post_init__(self) -> None:
        object.__setattr__(self, "patterns", tuple(self.patterns))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "TransclusionOptions":
        """Build options from a config mapping.

        ``pattern`` (string or list) is accepted as an alias of ``patterns``;
        when both are present, ``patterns`` wins.

        Raises:
            ConfigError: If the mapping violates the config schema
        """
        raw = dict(data or {})
        validate_options(raw)
        return cls(**_normalize(raw))

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "TransclusionOptions":
        """Return a copy with ``overrides`` (validated, None values ignored) applied."""
        values = {k: v for k, v in (overrides or {}).items() if v is not None}
        if not values:
            return self
        validate_options(values)
        return replace(self, **_normalize(values))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["patterns"] = list(self.patterns)
        return data


def _normalize(values: Dict[str, Any]) -> Dict[str, Any]:
    """Fold the `pattern` alias into `patterns` (a tuple)."""
    out = dict(values)
    alias = out.pop("pattern", None)
    if "patterns" not in out and alias is not None:
        out["patterns"] = [alias] if isinstance(alias, str) else list(alias)
    if "patterns" in out:
        out["patterns"] = tuple(out["patterns"])
    return out


def validate_options(data: Mapping[str, Any]) -> None:
    """Validate a config mapping against the bundled schema.

    Raises:
        ConfigError: Listing every violation found
    """
    schema = read_data_yaml(*CONFIG_SCHEMA)
    validator = Draft202012Validator(schema)
    errors: List[str] = []
    instance = {k: list(v) if isinstance(v, tuple) else v for k, v in data.items()}
    for error in sorted(validator.iter_errors(instance), key=lambda e: list(e.path)):
        location = "/".join(str(p) for p in error.path) or "<root>"
        errors.append(f"{location}: {error.message}")
    if errors:
        raise ConfigError(
            "Invalid transclusion options:\n" + "\n".join(f"- {e}" for e in errors),
            context={"errors": errors},
        )


def load_options(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TransclusionOptions:
    """Load options from a YAML file, then apply ``overrides``.

    A missing or empty file yields the defaults.

    Raises:
        ConfigError: If the file is not a mapping or fails validation
    """
    data: Any = {}
    if path is not None:
        try:
            data = read_yaml(Path(path), default={}, raise_on_error=Path(path).exists())
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config {path} must be a YAML mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
    return TransclusionOptions.from_mapping(data).merged(overrides)


__all__ = ["TransclusionOptions", "load_options", "validate_options", "DEFAULT_PATTERNS", "CONFIG_SCHEMA"]
