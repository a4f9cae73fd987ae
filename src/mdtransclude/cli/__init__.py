"""
mdtransclude CLI package.

Commands are auto-discovered from ``cli/commands/``: each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_json_flag,
    add_dry_run_flag,
    add_source_arg,
    add_config_flag,
    add_option_flags,
    add_log_level_flag,
    add_standard_flags,
    option_overrides,
)

__all__ = [
    "OutputFormatter",
    "format_json",
    "add_json_flag",
    "add_dry_run_flag",
    "add_source_arg",
    "add_config_flag",
    "add_option_flags",
    "add_log_level_flag",
    "add_standard_flags",
    "option_overrides",
]
