"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without writing files",
    )


def add_source_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional SOURCE directory argument."""
    parser.add_argument("source", help="Directory holding the documents to transclude")


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config for a YAML options file."""
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="YAML file with transclusion options",
    )


def add_option_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags overriding transclusion options.

    Boolean flags default to None so that values from --config survive when
    a flag is not given.
    """
    parser.add_argument(
        "--pattern",
        "-p",
        dest="patterns",
        action="append",
        help="Glob selecting documents to transclude (repeatable, default: **/*.md)",
    )
    parser.add_argument(
        "--comments",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Wrap transcluded snippets in provenance comments",
    )
    parser.add_argument(
        "--frontmatter",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Collect transcluded documents' metadata into the host frontmatter",
    )
    parser.add_argument(
        "--verbose-comments",
        dest="verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add the reference and JSON metadata to provenance comments",
    )
    parser.add_argument(
        "--warning",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Log missing transclusion targets",
    )


def add_log_level_flag(parser: argparse.ArgumentParser) -> None:
    """Add --log-level."""
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )


def option_overrides(args: argparse.Namespace) -> dict:
    """Collect option overrides from parsed flags (None = not given)."""
    return {
        "patterns": getattr(args, "patterns", None),
        "comments": getattr(args, "comments", None),
        "frontmatter": getattr(args, "frontmatter", None),
        "verbose": getattr(args, "verbose", None),
        "warning": getattr(args, "warning", None),
    }


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --config, --log-level
    """
    add_json_flag(parser)
    add_config_flag(parser)
    add_log_level_flag(parser)


__all__ = [
    "add_json_flag",
    "add_dry_run_flag",
    "add_source_arg",
    "add_config_flag",
    "add_option_flags",
    "add_log_level_flag",
    "add_standard_flags",
    "option_overrides",
]
