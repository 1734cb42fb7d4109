"""Merge x86_64 and arm64 build trees into a universal macOS tree."""

from __future__ import annotations

from makeuniversal.arch import Architecture, FileClassification
from makeuniversal.orchestrator import MergeOrchestrator, MergeOutcome, MergeRun, MergeSummary

__all__ = [
    "Architecture",
    "FileClassification",
    "MergeOrchestrator",
    "MergeOutcome",
    "MergeRun",
    "MergeSummary",
]

__version__ = "0.1.0"
