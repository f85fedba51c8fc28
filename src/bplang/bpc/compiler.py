"""
BP Translator Main Module
=========================

This module provides the translator interface for BP. It sequences the
complete translation run:

    Source → Lex → Parse → Resolve → Generate → C source

Usage
-----
Command line:
    $ bpc hello.bp -o hello.c

Programmatic:
    >>> from bplang.bpc import translate
    >>> c_source = translate('show "hi";')

Error Handling
--------------
The first error from any stage aborts the run and is raised unchanged.
translate_file() writes its output only after a successful run, so a
failing translation never leaves a C file behind.

Source files are read as UTF-8. A byte sequence that does not decode is
reported as an InvalidCharacterError at its line and column.

Runs are independent: every compile_source() call builds fresh stage
objects, so no tokens, symbols, or diagnostics carry over between runs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bplang.bpc.lexer import BPLexer, BPToken
from bplang.bpc.parser import BPParser
from bplang.bpc.resolver import TypeResolver
from bplang.bpc.codegen import CodeGenerator
from bplang.bpc.ast import ProgramNode
from bplang.bpc.types import SymbolTable
from bplang.bpc.errors import InvalidCharacterError
from bplang.errors import SourceLocation

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Translator configuration options.

    Attributes:
        output_comments: Include BP source lines as comments in the C output
        emit_header_comment: Start the C output with a "Generated by" banner
        keep_tokens: Record the token stream on the result (for --tokens)
    """
    output_comments: bool = False
    emit_header_comment: bool = True
    keep_tokens: bool = False


@dataclass
class CompilerResult:
    """
    Result of a successful translation.

    Attributes:
        filename: Source filename
        c_source: Generated C translation unit
        ast: Parsed program
        symbols: Resolved symbol table
        tokens: Token stream, when CompilerOptions.keep_tokens is set
        token_count: Number of tokens lexed, EOF included
    """
    filename: str = ""
    c_source: str = ""
    ast: Optional[ProgramNode] = None
    symbols: Optional[SymbolTable] = None
    tokens: list[BPToken] = field(default_factory=list)
    token_count: int = 0


class _CountingStream:
    """Passes tokens through to the parser, counting or keeping them."""

    def __init__(self, tokens, keep: bool):
        self._tokens = tokens
        self._keep = keep
        self.count = 0
        self.kept: list[BPToken] = []

    def __iter__(self):
        for token in self._tokens:
            self.count += 1
            if self._keep:
                self.kept.append(token)
            yield token


class BPCompiler:
    """
    BP to C translator.

    Example:
        compiler = BPCompiler()
        result = compiler.compile_file("hello.bp")
        print(result.c_source)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Translate BP source to C.

        Args:
            source: BP source code
            filename: Source filename for error messages

        Returns:
            CompilerResult with the generated C and intermediate products

        Raises:
            BPCError: The first error found by any stage
        """
        source_lines = source.splitlines()
        result = CompilerResult(filename=filename)

        # Stages 1 and 2: lexing is pulled lazily by the parser
        stream = _CountingStream(
            BPLexer(source, filename).tokenize(), self.options.keep_tokens
        )
        ast = BPParser(stream, filename, source_lines).parse()
        result.ast = ast
        result.token_count = stream.count
        result.tokens = stream.kept
        logger.debug(
            "%s: %d tokens, %d statements", filename, stream.count, len(ast.statements)
        )

        # Stage 3: type resolution
        symbols = TypeResolver(source_lines).resolve(ast)
        result.symbols = symbols

        # Stage 4: code generation
        generator = CodeGenerator(
            output_comments=self.options.output_comments,
            emit_header_comment=self.options.emit_header_comment,
            source_lines=source_lines,
        )
        result.c_source = generator.generate(ast, symbols)
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Translate a BP source file to C.

        Raises:
            BPCError: If translation fails
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = decode_source(path.read_bytes(), str(filepath))
        return self.compile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def decode_source(data: bytes, filename: str = "<input>") -> str:
    """
    Decode BP source bytes as UTF-8.

    Raises:
        InvalidCharacterError: At the first byte that is not valid UTF-8
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        before = data[:e.start].decode("utf-8")
        line_start = before.rfind("\n") + 1
        line_end = data.find(b"\n", e.start)
        if line_end == -1:
            line_end = len(data)
        source_line = data[:line_end].decode("utf-8", "replace")[line_start:].rstrip("\r")

        location = SourceLocation(
            filename,
            before.count("\n") + 1,
            len(before) - line_start + 1,
            e.start,
        )
        raise InvalidCharacterError(
            chr(0xDC00 + data[e.start]), location, source_line
        ) from None


def translate(source: str, filename: str = "<input>") -> str:
    """
    Translate BP source code to C.

    Example:
        >>> c_source = translate('m x = 1; show x;')
    """
    return BPCompiler().compile_source(source, filename).c_source


def translate_file(
    filepath: str | Path,
    output_path: Optional[str | Path] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Translate a BP source file to C, optionally writing the result.

    The output file is written only after the whole run succeeds.

    Example:
        >>> c_source = translate_file("hello.bp", "hello.c")
    """
    result = BPCompiler(options).compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.c_source, encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(result.c_source), output_path)

    return result.c_source
