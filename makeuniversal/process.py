"""Blocking invocation of the external command-line tools (lipo, rsync)."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from makeuniversal.log import get_logger

logger = get_logger("process")


class ToolError(Exception):
    """The tool could not be started or did not finish within the timeout."""


@dataclass(frozen=True)
class ToolResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ToolRunner:
    """Runs one command to completion and captures its output.

    ``timeout`` is in seconds; ``None`` waits indefinitely.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def run(self, argv: Sequence[str]) -> ToolResult:
        command = [str(part) for part in argv]
        logger.debug("running: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolError(f"{command[0]} did not finish within {self.timeout}s") from exc
        except OSError as exc:
            raise ToolError(f"could not start {command[0]}: {exc}") from exc

        result = ToolResult(
            argv=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug("%s exited with %d %s", command[0], result.returncode, result.stderr.strip())
        return result
