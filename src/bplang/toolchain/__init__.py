"""
External C Toolchain
====================

Collaborators that take over once C source has been generated:

- **CCompiler**: builds a binary from the generated .c file
- **ProgramRunner**: executes the binary and reports its exit code
- **build_and_run**: the full translate, compile, run sequence

The sequence is strictly ordered. No artifact reaches the C compiler unless
translation succeeded.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bplang.bpc.compiler import BPCompiler, CompilerOptions, CompilerResult
from bplang.toolchain.config import ToolchainConfig
from bplang.toolchain.cc import CCompiler, CompileOutcome
from bplang.toolchain.runner import ProgramRunner, RunOutcome

logger = logging.getLogger(__name__)


@dataclass
class BuildArtifacts:
    """
    Products of build_program().

    Attributes:
        c_file: Generated C source inside the work directory
        binary: Compiled executable inside the work directory
        result: The translation result (AST, symbols, C source)
        command: C compiler command line that produced `binary`
        kept_c: Copy of the generated C kept outside the work directory
    """
    c_file: Path
    binary: Path
    result: Optional[CompilerResult] = None
    command: list[str] = field(default_factory=list)
    kept_c: Optional[Path] = None


def build_program(
    source_file: Path,
    work_dir: Path,
    config: Optional[ToolchainConfig] = None,
    options: Optional[CompilerOptions] = None,
    keep_c: Optional[Path] = None,
) -> BuildArtifacts:
    """
    Translate `source_file` and compile it inside `work_dir`.

    Args:
        source_file: BP source to build
        work_dir: Directory for the .c file and the binary
        config: Toolchain settings
        options: Translator options
        keep_c: Also copy the generated C here, before compiling, so it
                survives a C compiler failure

    Raises:
        BPCError: If translation fails (nothing is written)
        ToolchainError: If the C compiler is missing or fails
    """
    config = config or ToolchainConfig()
    stem = source_file.stem or "program"

    result = BPCompiler(options).compile_file(source_file)

    c_file = work_dir / f"{stem}.c"
    c_file.write_text(result.c_source, encoding="utf-8")

    if keep_c is not None:
        shutil.copyfile(c_file, keep_c)
        logger.debug("Kept %s", keep_c)

    binary = work_dir / stem
    outcome = CCompiler(config).check(c_file, binary)
    logger.debug("Built %s from %s", binary, source_file)
    return BuildArtifacts(c_file, binary, result, outcome.command, keep_c)


def build_and_run(
    source_file: Path,
    config: Optional[ToolchainConfig] = None,
    capture: bool = False,
) -> RunOutcome:
    """
    Translate, compile, and run a BP program in a temporary directory.

    Returns:
        RunOutcome of the program
    """
    config = config or ToolchainConfig()
    with tempfile.TemporaryDirectory(prefix="bprun_") as temp_dir:
        artifacts = build_program(Path(source_file), Path(temp_dir), config)
        return ProgramRunner(config).run(artifacts.binary, capture=capture)


__all__ = [
    "ToolchainConfig",
    "CCompiler",
    "CompileOutcome",
    "ProgramRunner",
    "RunOutcome",
    "BuildArtifacts",
    "build_program",
    "build_and_run",
]
