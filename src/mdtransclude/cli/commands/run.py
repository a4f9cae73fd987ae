from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from mdtransclude.cli._args import add_dry_run_flag, add_option_flags, add_source_arg, add_standard_flags, option_overrides
from mdtransclude.cli._output import OutputFormatter
from mdtransclude.core.config import load_options
from mdtransclude.core.exceptions import TranscludeError
from mdtransclude.core.files import copy_unloaded, load_directory, write_directory
from mdtransclude.core.logging import configure_logging
from mdtransclude.core.transclusion import transclude_files

SUMMARY = "Transclude every matching document of a directory"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    add_source_arg(parser)
    parser.add_argument(
        "--dest",
        "-o",
        help="Write the result tree here instead of updating SOURCE in place",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Glob of files to leave out of the tree entirely (repeatable)",
    )
    add_option_flags(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)
    configure_logging(args.log_level)

    source = Path(args.source)
    dest = Path(args.dest) if args.dest else source
    try:
        options = load_options(Path(args.config) if args.config else None, option_overrides(args))
        index = load_directory(source, exclude=args.exclude)
        run = transclude_files(index, options)
    except TranscludeError as exc:
        formatter.error(exc, error_code=exc.__class__.__name__)
        return 1
    except (OSError, ValueError) as exc:
        formatter.error(exc)
        return 1

    # In place only changed documents are rewritten; a new destination gets the
    # whole tree, binary files included.
    in_place = dest.resolve() == source.resolve()
    paths = run.changed_paths if in_place else list(run.index)
    written: List[Path] = []
    copied: List[Path] = []
    if not args.dry_run:
        try:
            written = write_directory(run.index, dest, paths)
            if not in_place:
                copied = copy_unloaded(source, dest, run.index, exclude=args.exclude)
        except OSError as exc:
            formatter.error(exc)
            return 1
    logger.info("Wrote %d files and copied %d to %s", len(written), len(copied), dest)

    formatter.success(
        {
            "source": str(source),
            "dest": str(dest),
            "dry_run": bool(args.dry_run),
            "transcluded": [r.path for r in run.results],
            "changed": run.changed_paths,
            "written": [str(p) for p in written],
            "copied": [str(p) for p in copied],
        },
        f"Transcluded {len(run.results)} documents ({len(run.changed_paths)} changed) into {dest}",
    )
    return 0
