"""Fuse a second architecture slice into an existing binary with lipo."""

from __future__ import annotations

import os
from typing import Union

from makeuniversal.process import ToolError, ToolRunner
from makeuniversal.log import get_logger

logger = get_logger("combiner")

PathArg = Union[str, os.PathLike]


class BinaryCombiner:
    def __init__(self, runner: ToolRunner, lipo: str = "lipo") -> None:
        self.runner = runner
        self.lipo = lipo

    def combine(self, destination: PathArg, source: PathArg) -> bool:
        # The destination is both an input and the output; lipo rewrites it in place.
        destination = os.fspath(destination)
        argv = [self.lipo, "-create", "-output", destination, destination, os.fspath(source)]
        try:
            result = self.runner.run(argv)
        except ToolError as exc:
            logger.debug("lipo -create for %s failed: %s", destination, exc)
            return False
        return result.ok
