"""Classify files by the architectures their Mach-O payload carries."""

from __future__ import annotations

import os
import re
from typing import Union

from makeuniversal.arch import Architecture, FileClassification
from makeuniversal.process import ToolError, ToolRunner
from makeuniversal.log import get_logger

NOT_BINARY_PATTERN = r"can't figure out the architecture type of"

logger = get_logger("classifier")


class ArchitectureClassifier:
    def __init__(
        self,
        runner: ToolRunner,
        lipo: str = "lipo",
        not_binary_pattern: Union[str, re.Pattern] = NOT_BINARY_PATTERN,
    ) -> None:
        self.runner = runner
        self.lipo = lipo
        self.not_binary = re.compile(not_binary_pattern)

    def classify(self, path: Union[str, os.PathLike], architecture: Architecture) -> FileClassification:
        """Ask ``lipo -verify_arch`` whether ``path`` contains ``architecture``.

        Missing paths and tools that fail to run map to INSPECTION_FAILED
        instead of raising, so one bad file never stops a merge run.
        """
        if not os.path.isfile(path):
            logger.debug("cannot inspect %s: no such file", path)
            return FileClassification.INSPECTION_FAILED

        try:
            result = self.runner.run([self.lipo, os.fspath(path), "-verify_arch", architecture.value])
        except ToolError as exc:
            logger.debug("inspection of %s failed: %s", path, exc)
            return FileClassification.INSPECTION_FAILED

        if result.ok:
            return FileClassification.HAS_ARCHITECTURE
        if self.not_binary.search(result.stderr):
            return FileClassification.NOT_BINARY
        return FileClassification.MISSING_ARCHITECTURE
