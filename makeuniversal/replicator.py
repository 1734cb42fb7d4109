"""Copy the primary-architecture tree into the destination with rsync."""

from __future__ import annotations

import os
from typing import Union

from makeuniversal.process import ToolError, ToolRunner
from makeuniversal.log import get_logger

logger = get_logger("replicator")


class TreeReplicator:
    def __init__(self, runner: ToolRunner, rsync: str = "rsync") -> None:
        self.runner = runner
        self.rsync = rsync

    def replicate(self, source_root: Union[str, os.PathLike], destination_root: Union[str, os.PathLike]) -> bool:
        # Trailing separator: copy the contents of source_root, not the directory itself.
        source = os.path.join(os.fspath(source_root), "")
        argv = [self.rsync, "-a", "-l", "-r", source, os.fspath(destination_root)]
        try:
            result = self.runner.run(argv)
        except ToolError as exc:
            logger.error("copying %s failed: %s", source, exc)
            return False
        if not result.ok:
            logger.error("rsync exited with status %d: %s", result.returncode, result.stderr.strip())
        return result.ok
