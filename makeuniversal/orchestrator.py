"""Walk the destination tree and add the secondary architecture to each binary."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple

from makeuniversal.arch import Architecture, FileClassification
from makeuniversal.classifier import ArchitectureClassifier
from makeuniversal.combiner import BinaryCombiner
from makeuniversal.log import get_logger

logger = get_logger("orchestrator")


class MergeOutcome(enum.Enum):
    MERGED = "merged"
    FAILED = "failed"
    SKIPPED = "skipped"
    # Lacks the secondary slice, but the counterpart cannot supply it.
    UNRESOLVABLE = "unresolvable"
    NOT_BINARY = "not-binary"
    INSPECTION_FAILED = "inspection-failed"


@dataclass(frozen=True)
class MergeRun:
    primary_root: Path
    secondary_root: Path
    destination_root: Path
    primary_arch: Architecture = Architecture.X86_64
    secondary_arch: Architecture = Architecture.ARM64

    @classmethod
    def from_paths(
        cls,
        destination: os.PathLike,
        primary: os.PathLike,
        secondary: os.PathLike,
        primary_arch: Architecture = Architecture.X86_64,
        secondary_arch: Architecture = Architecture.ARM64,
    ) -> "MergeRun":
        if primary_arch == secondary_arch:
            raise ValueError(f"primary and secondary architecture are both {primary_arch}")
        return cls(
            primary_root=Path(primary).absolute(),
            secondary_root=Path(secondary).absolute(),
            destination_root=Path(destination).absolute(),
            primary_arch=primary_arch,
            secondary_arch=secondary_arch,
        )

    def counterpart(self, relative_path: Path) -> Path:
        return self.secondary_root / relative_path


@dataclass(frozen=True)
class CandidateFile:
    path: Path
    relative_path: Path


@dataclass(frozen=True)
class FileResult:
    relative_path: Path
    outcome: MergeOutcome


@dataclass
class MergeSummary:
    results: List[FileResult] = field(default_factory=list)

    def record(self, relative_path: Path, outcome: MergeOutcome) -> FileResult:
        result = FileResult(relative_path, outcome)
        self.results.append(result)
        return result

    def count(self, outcome: MergeOutcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)

    @property
    def merged(self) -> int:
        return self.count(MergeOutcome.MERGED)

    @property
    def failed(self) -> int:
        return self.count(MergeOutcome.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(MergeOutcome.SKIPPED)

    @property
    def unresolvable(self) -> int:
        return self.count(MergeOutcome.UNRESOLVABLE)

    @property
    def total(self) -> int:
        return self.merged + self.failed + self.skipped

    @property
    def visited(self) -> int:
        return len(self.results)

    def counts(self) -> Tuple[int, int, int]:
        return self.merged, self.failed, self.skipped


def iter_candidates(root: Path) -> Iterator[CandidateFile]:
    """Yield every regular file below ``root``; symlinks and directories are never yielded."""
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            yield CandidateFile(path=path, relative_path=path.relative_to(root))


class MergeOrchestrator:
    def __init__(self, classifier: ArchitectureClassifier, combiner: BinaryCombiner) -> None:
        self.classifier = classifier
        self.combiner = combiner

    def run(self, merge_run: MergeRun) -> MergeSummary:
        summary = MergeSummary()
        for candidate in iter_candidates(merge_run.destination_root):
            outcome = self.process(merge_run, candidate)
            summary.record(candidate.relative_path, outcome)
        return summary

    def process(self, merge_run: MergeRun, candidate: CandidateFile) -> MergeOutcome:
        arch = merge_run.secondary_arch
        relative = candidate.relative_path
        classification = self.classifier.classify(candidate.path, arch)

        if classification is FileClassification.HAS_ARCHITECTURE:
            logger.info("skipped adding %s arch to binary: %s", arch, relative)
            return MergeOutcome.SKIPPED
        if classification is FileClassification.NOT_BINARY:
            return MergeOutcome.NOT_BINARY
        if classification is FileClassification.INSPECTION_FAILED:
            logger.debug("could not inspect %s, leaving it untouched", relative)
            return MergeOutcome.INSPECTION_FAILED

        counterpart = merge_run.counterpart(relative)
        if self.classifier.classify(counterpart, arch) is not FileClassification.HAS_ARCHITECTURE:
            logger.debug("no %s counterpart for binary: %s", arch, relative)
            return MergeOutcome.UNRESOLVABLE

        if self.combiner.combine(candidate.path, counterpart):
            logger.info("success adding %s arch to binary: %s", arch, relative)
            return MergeOutcome.MERGED
        logger.warning("failed adding %s arch to binary: %s", arch, relative)
        return MergeOutcome.FAILED
