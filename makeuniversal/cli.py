#!/usr/bin/env python3
"""Create a universal macOS tree from an x86_64 tree and an arm64 tree."""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import Optional, Sequence

from makeuniversal.arch import Architecture
from makeuniversal.classifier import ArchitectureClassifier
from makeuniversal.combiner import BinaryCombiner
from makeuniversal.config import load_settings
from makeuniversal.log import configure_logging
from makeuniversal.orchestrator import MergeOrchestrator, MergeRun
from makeuniversal.process import ToolRunner
from makeuniversal.replicator import TreeReplicator
from makeuniversal.report import summary_line, write_report


def arch_argument(value: str) -> Architecture:
    try:
        return Architecture.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="makeuniversal", description=__doc__)
    parser.add_argument("destination", type=pathlib.Path, help="Universal output tree")
    parser.add_argument("primary_root", type=pathlib.Path, help="Primary (x86_64) build tree")
    parser.add_argument("secondary_root", type=pathlib.Path, help="Secondary (arm64) build tree")
    parser.add_argument("--config", type=pathlib.Path, help="YAML settings file")
    parser.add_argument("--report", type=pathlib.Path, help="Write a YAML report of the run to this path")
    parser.add_argument("--primary-arch", type=arch_argument, help="Architecture of the primary tree")
    parser.add_argument("--secondary-arch", type=arch_argument, help="Architecture to add")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for each lipo/rsync call")
    parser.add_argument(
        "--allow-partial-copy",
        action="store_true",
        default=None,
        help="Merge even if copying the primary tree failed",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every tool invocation")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def require_directory(path: pathlib.Path, label: str) -> None:
    if not path.is_dir():
        raise SystemExit(f"{label} is not a directory: {path}")


def main(argv: Optional[Sequence[str]] = None, runner: Optional[ToolRunner] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(quiet=args.quiet, verbose=args.verbose)

    settings = load_settings(args.config).override(
        primary_arch=args.primary_arch,
        secondary_arch=args.secondary_arch,
        timeout=args.timeout,
        allow_partial_copy=args.allow_partial_copy,
    )
    require_directory(args.primary_root, "primary tree")
    require_directory(args.secondary_root, "secondary tree")

    merge_run = MergeRun.from_paths(
        args.destination,
        args.primary_root,
        args.secondary_root,
        primary_arch=settings.primary_arch,
        secondary_arch=settings.secondary_arch,
    )
    if runner is None:
        runner = ToolRunner(timeout=settings.timeout)

    logger.info(
        "copying %s tree to destination (this may take a while)...",
        merge_run.primary_arch,
    )
    copied = TreeReplicator(runner, rsync=settings.rsync).replicate(
        merge_run.primary_root, merge_run.destination_root
    )
    if not copied:
        if not settings.allow_partial_copy:
            logger.error("copying %s failed, not creating universal binaries", merge_run.primary_root)
            return 1
        logger.warning("copying %s failed, merging whatever was copied", merge_run.primary_root)

    logger.info("creating universal binaries...")
    orchestrator = MergeOrchestrator(
        ArchitectureClassifier(runner, lipo=settings.lipo, not_binary_pattern=settings.not_binary_pattern),
        BinaryCombiner(runner, lipo=settings.lipo),
    )
    summary = orchestrator.run(merge_run)

    if summary.total:
        logger.info("")
    logger.info(summary_line(summary))
    if summary.unresolvable:
        logger.info("Binaries without a %s counterpart: %d", merge_run.secondary_arch, summary.unresolvable)

    if args.report:
        write_report(args.report, merge_run, summary)

    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
