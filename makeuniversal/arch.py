"""Architecture identifiers and lipo classification results."""

from __future__ import annotations

import enum


class Architecture(enum.Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> "Architecture":
        try:
            return cls(str(name).strip())
        except ValueError:
            choices = ", ".join(arch.value for arch in cls)
            raise ValueError(f"Unknown architecture {name!r} (expected one of: {choices})") from None


class FileClassification(enum.Enum):
    HAS_ARCHITECTURE = "has-architecture"
    # Valid Mach-O container that lacks the requested slice.
    MISSING_ARCHITECTURE = "missing-architecture"
    NOT_BINARY = "not-binary"
    INSPECTION_FAILED = "inspection-failed"
