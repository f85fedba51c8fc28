"""
C Compiler Wrapper
==================

Runs the system C compiler on a generated translation unit. The translator
treats the compiler as an opaque collaborator: it only needs to know
whether a binary was produced, plus the diagnostics when it was not.

Usage
-----
>>> from bplang.toolchain import CCompiler, ToolchainConfig
>>> cc = CCompiler(ToolchainConfig())
>>> cc.check(Path("hello.c"), Path("hello"))
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bplang.errors import ToolchainNotFoundError, CompilerFailedError
from bplang.toolchain.config import ToolchainConfig

logger = logging.getLogger(__name__)


@dataclass
class CompileOutcome:
    """
    Result of one compiler invocation.

    Attributes:
        command: The command line that was run
        returncode: Compiler exit status
        stdout: Compiler standard output
        stderr: Compiler diagnostics
    """
    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CCompiler:
    """Invokes the configured C compiler."""

    def __init__(self, config: Optional[ToolchainConfig] = None):
        self.config = config or ToolchainConfig()

    def find(self) -> str:
        """
        Locate the compiler executable.

        Raises:
            ToolchainNotFoundError: If it is not on PATH
        """
        path = shutil.which(self.config.cc)
        if path is None:
            raise ToolchainNotFoundError(self.config.cc)
        return path

    def command(self, source: Path, output: Path) -> list[str]:
        return [self.find(), *self.config.cflags, str(source), "-o", str(output)]

    def compile(self, source: Path, output: Path) -> CompileOutcome:
        """Compile `source` to the binary `output` and report the outcome."""
        cmd = self.command(source, output)
        logger.debug("Running %s", " ".join(cmd))

        proc = subprocess.run(
            cmd, capture_output=True, encoding="utf-8", errors="replace"
        )
        outcome = CompileOutcome(cmd, proc.returncode, proc.stdout, proc.stderr)

        if not outcome.success:
            logger.warning("%s exited with status %d", self.config.cc, proc.returncode)
        return outcome

    def check(self, source: Path, output: Path) -> CompileOutcome:
        """
        Compile and raise on failure.

        Raises:
            CompilerFailedError: If the compiler exits non-zero
        """
        outcome = self.compile(source, output)
        if not outcome.success:
            raise CompilerFailedError(outcome.command, outcome.returncode, outcome.stderr)
        return outcome
