"""
BPLang Error Hierarchy
======================

This module defines the exception hierarchy shared by the whole BPLang
toolchain. All exceptions inherit from BPLangError, allowing callers to
catch every toolchain-related error with a single except clause.

Exception Hierarchy
-------------------
BPLangError (base)
├── BPCError (translator errors, see bplang.bpc.errors)
└── ToolchainError (external C toolchain)
    ├── ToolchainNotFoundError - compiler binary not on PATH
    ├── CompilerFailedError - C compiler rejected the generated source
    └── ExecutionTimeoutError - translated program did not finish in time

Design Philosophy
-----------------
Translator errors capture source location information (filename, line,
column, offset). Error messages follow this format:

    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class BPLangError(Exception):
    """
    Base exception for all BPLang errors.

        try:
            translate_file("hello.bp")
        except BPLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in BP source for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Byte offset from the start of the UTF-8 source (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Toolchain Exceptions
# =============================================================================

class ToolchainError(BPLangError):
    """Base exception for errors raised by the external C toolchain."""
    pass


class ToolchainNotFoundError(ToolchainError):
    """
    The configured C compiler could not be found.

    Raised when the compiler executable is not on PATH. Set BP_CC or pass
    --cc to point at a working compiler.
    """

    def __init__(self, program: str):
        self.program = program
        super().__init__(
            f"C compiler '{program}' not found; set BP_CC or use --cc"
        )


class CompilerFailedError(ToolchainError):
    """
    The C compiler rejected the generated source.

    Attributes:
        command: The command line that was run
        returncode: Compiler exit status
        stderr: Compiler diagnostics
    """

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr

        message = f"C compilation failed (exit status {returncode})"
        if stderr.strip():
            message = f"{message}:\n{stderr.rstrip()}"
        super().__init__(message)


class ExecutionTimeoutError(ToolchainError):
    """The translated program did not exit within the configured timeout."""

    def __init__(self, binary: str, timeout: Optional[float]):
        self.binary = binary
        self.timeout = timeout
        super().__init__(f"'{binary}' did not finish within {timeout} seconds")
