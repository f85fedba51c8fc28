"""
Program Runner
==============

Executes a compiled BP program. Standard output and error are either
forwarded to the parent process's streams or captured for inspection,
and the program's exit code is returned to the caller unchanged.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bplang.errors import ExecutionTimeoutError
from bplang.toolchain.config import ToolchainConfig

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """
    Result of running a program.

    Attributes:
        returncode: Program exit status
        stdout: Captured standard output (empty when forwarded)
        stderr: Captured standard error (empty when forwarded)
    """
    returncode: int
    stdout: str = ""
    stderr: str = ""


class ProgramRunner:
    """Runs translated binaries."""

    def __init__(self, config: Optional[ToolchainConfig] = None):
        self.config = config or ToolchainConfig()

    def run(self, binary: Path, capture: bool = False) -> RunOutcome:
        """
        Run `binary` with no arguments.

        Args:
            binary: Path to the executable
            capture: Capture output instead of forwarding it

        Raises:
            ExecutionTimeoutError: If the program exceeds run_timeout
        """
        cmd = [str(Path(binary).resolve())]
        logger.debug("Running %s", cmd[0])

        try:
            proc = subprocess.run(
                cmd,
                capture_output=capture,
                encoding="utf-8",
                errors="replace",
                timeout=self.config.run_timeout,
            )
        except subprocess.TimeoutExpired:
            raise ExecutionTimeoutError(str(binary), self.config.run_timeout)

        logger.debug("%s exited with status %d", binary, proc.returncode)
        return RunOutcome(
            proc.returncode,
            proc.stdout or "",
            proc.stderr or "",
        )
