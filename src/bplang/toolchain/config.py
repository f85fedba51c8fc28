"""
Toolchain Configuration
=======================

Settings for the external C compiler and program runner. Configuration
can come from:
- Default values (defined here)
- Environment variables (ToolchainConfig.from_env)
- Command-line options, applied on top by the CLI tools
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os
import shlex


DEFAULT_CC = "cc"
DEFAULT_CFLAGS = ["-std=c99", "-w"]
DEFAULT_RUN_TIMEOUT = 30.0


@dataclass
class ToolchainConfig:
    """
    Configuration for compiling and running translated programs.

    Attributes:
        cc: C compiler executable (name on PATH or a path)
        cflags: Extra flags passed before the source file
        run_timeout: Seconds to wait for the program, None for no limit
        keep_intermediates: Keep the generated .c and binary after a run
    """
    cc: str = DEFAULT_CC
    cflags: List[str] = field(default_factory=lambda: list(DEFAULT_CFLAGS))
    run_timeout: Optional[float] = DEFAULT_RUN_TIMEOUT
    keep_intermediates: bool = False

    @classmethod
    def from_env(cls) -> "ToolchainConfig":
        """
        Create ToolchainConfig from environment variables.

        Environment variables (all optional):
            BP_CC: C compiler executable
            BP_CFLAGS: Compiler flags, split like a shell command line
            BP_RUN_TIMEOUT: Run timeout in seconds (0 disables the limit)
        """
        config = cls()

        if cc := os.environ.get("BP_CC"):
            config.cc = cc

        if cflags := os.environ.get("BP_CFLAGS"):
            try:
                config.cflags = shlex.split(cflags)
            except ValueError:
                pass  # Unbalanced quotes, keep defaults

        if timeout := os.environ.get("BP_RUN_TIMEOUT"):
            try:
                seconds = float(timeout)
            except ValueError:
                pass  # Ignore invalid values
            else:
                config.run_timeout = seconds if seconds > 0 else None

        return config
