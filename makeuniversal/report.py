"""Summary line and YAML report for a finished merge run."""

from __future__ import annotations

import pathlib

import yaml

from makeuniversal.orchestrator import MergeOutcome, MergeRun, MergeSummary

REPORTED_OUTCOMES = (
    MergeOutcome.MERGED,
    MergeOutcome.SKIPPED,
    MergeOutcome.FAILED,
    MergeOutcome.UNRESOLVABLE,
)


def summary_line(summary: MergeSummary) -> str:
    return f"Total binaries: {summary.total}, Skipped: {summary.skipped}, Failed: {summary.failed}"


def build_report(merge_run: MergeRun, summary: MergeSummary) -> dict:
    files = [
        {"path": result.relative_path.as_posix(), "outcome": result.outcome.value}
        for result in summary.results
        if result.outcome in REPORTED_OUTCOMES
    ]
    return {
        "destination": str(merge_run.destination_root),
        "primary": {"arch": merge_run.primary_arch.value, "root": str(merge_run.primary_root)},
        "secondary": {"arch": merge_run.secondary_arch.value, "root": str(merge_run.secondary_root)},
        "totals": {
            "binaries": summary.total,
            "merged": summary.merged,
            "skipped": summary.skipped,
            "failed": summary.failed,
            "unresolvable": summary.unresolvable,
        },
        "files": sorted(files, key=lambda item: item["path"]),
    }


def write_report(path: pathlib.Path, merge_run: MergeRun, summary: MergeSummary) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(build_report(merge_run, summary), handle, sort_keys=False)
