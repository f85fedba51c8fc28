"""
bplang - BP to C Translator
===========================

This package translates programs written in BP, a tiny declaration and
print language, into portable C, then hands the C to the system compiler
and runs the result.

Main Components
---------------
- **bpc**: The translator (lexer, parser, type resolver, code generator)
    Converts BP source files (.bp) to a single C translation unit

- **toolchain**: External C compiler and program runner
    Builds the generated C and executes the binary

- **cli**: Command-line tools (bpc, bprun)

Quick Start
-----------
Translate a program:
    >>> from bplang.bpc import translate
    >>> c_source = translate('m x = 1; show "hi"; show x;')

Or use the command-line tools:
    $ bpc hello.bp -o hello.c
    $ bprun hello.bp

Version History
---------------
1.0.0 - Initial release with translator, toolchain driver, and CLI tools
"""

__version__ = "1.0.0"
__author__ = "bplang contributors"

from bplang.errors import (
    BPLangError,
    SourceLocation,
    ToolchainError,
    ToolchainNotFoundError,
    CompilerFailedError,
    ExecutionTimeoutError,
)

__all__ = [
    "__version__",
    "BPLangError",
    "SourceLocation",
    "ToolchainError",
    "ToolchainNotFoundError",
    "CompilerFailedError",
    "ExecutionTimeoutError",
]
