from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from mdtransclude.cli._args import add_option_flags, add_source_arg, add_standard_flags, option_overrides
from mdtransclude.cli._output import OutputFormatter
from mdtransclude.core.config import load_options
from mdtransclude.core.exceptions import TranscludeError
from mdtransclude.core.files import load_directory
from mdtransclude.core.logging import configure_logging
from mdtransclude.core.transclusion import (
    FileIndexResolver,
    MetadataTree,
    build_engine,
    is_local_target,
    resolve_target,
)

SUMMARY = "Explain how a single directive target resolves"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_source_arg(parser)
    parser.add_argument("target", help="Directive target, e.g. guide/install#usage")
    parser.add_argument(
        "--from",
        dest="origin",
        default="index.md",
        help="Path (relative to SOURCE) of the document containing the directive (default: index.md)",
    )
    parser.add_argument(
        "--recursive",
        "-r",
        action="store_true",
        help="Also resolve directives nested in the extracted content",
    )
    add_option_flags(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)
    configure_logging(args.log_level)

    try:
        options = load_options(Path(args.config) if args.config else None, option_overrides(args))
        index = load_directory(Path(args.source))
        payload: Dict[str, Any] = {
            "target": args.target,
            "origin": args.origin,
            "local": is_local_target(args.target),
            "canonical_path": None,
            "section": None,
            "boundary_mode": None,
            "content": None,
        }
        target = None
        if payload["local"]:
            target = resolve_target(args.target, args.origin, index, default_suffix=options.default_suffix)
        if target is None:
            formatter.success(payload, f"{args.target}: not resolved from {args.origin}", status="unresolved")
            return 1

        tree = MetadataTree(options.default_suffix)
        resolver = FileIndexResolver(index, args.origin, options, tree)
        result = resolver.resolve(args.target, args.origin, f":[]({args.target})")
        content = result.text() if result is not None else ""
        if args.recursive and result is not None and result.url:
            content = build_engine(index, args.origin, options, tree).transclude(content, result.url)
    except TranscludeError as exc:
        formatter.error(exc, error_code=exc.__class__.__name__)
        return 1
    except (OSError, ValueError) as exc:
        formatter.error(exc)
        return 1

    payload.update(
        canonical_path=target.canonical_path,
        section=target.section_name,
        boundary_mode=target.boundary_mode.name.lower() if target.boundary_mode else None,
        content=content,
        metadata_tree=tree.as_dict(),
    )
    if formatter.json_mode:
        formatter.json_output(payload)
    else:
        formatter.text(f"{args.target} -> {target.canonical_path}")
        if target.section_name:
            formatter.text_kv("section", f"{target.section_name} ({payload['boundary_mode']})")
        formatter.text("")
        formatter.text(content)
    return 0
