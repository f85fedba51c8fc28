"""
bplang Command-Line Interface
=============================

This package provides command-line tools for bplang:

- **bpc**: BP to C translator
- **bprun**: Translate, compile, and run a BP program

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["bpc", "bprun"]
