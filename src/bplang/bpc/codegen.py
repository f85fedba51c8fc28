"""
C Code Generator for BP
=======================

This module generates C source from a resolved BP AST. Each BP statement
becomes one C statement inside a single main() function, in source order.

Output Layout
-------------
    /* Generated by bpc. Do not edit. */
    #include <stdio.h>

    int main(void)
    {
        long long bp_count = 10;
        char bp_greeting[] = "hello";
        puts(bp_greeting);
        printf("%lld\\n", bp_count);
        return 0;
    }

Naming
------
BP variables are emitted with a `bp_` prefix so that a BP name can never
collide with a C keyword or a libc symbol (`int`, `main`, `puts`).

Strings
-------
BP strings have no escape sequences: the text between the quotes is printed
exactly. c_string_literal() escapes everything C would otherwise interpret
(backslash, quote, '?' for trigraphs, control and non-ASCII bytes).

Usage
-----
>>> from bplang.bpc.parser import parse_source
>>> from bplang.bpc.resolver import resolve
>>> from bplang.bpc.codegen import CodeGenerator
>>> program = parse_source('show "hi";')
>>> c_source = CodeGenerator().generate(program, resolve(program))
"""

import logging
from typing import Optional

from bplang.bpc.ast import (
    ASTVisitor,
    ProgramNode,
    VariableDeclaration,
    PrintStatement,
    Expression,
    IntegerLiteral,
    StringLiteral,
    IdentifierExpression,
)
from bplang.bpc.types import TypeTag, SymbolTable, Symbol
from bplang.bpc.errors import InternalError

logger = logging.getLogger(__name__)


# Prefix applied to every BP variable name in the generated C
C_NAME_PREFIX = "bp_"

HEADER_COMMENT = "/* Generated by bpc. Do not edit. */"

INCLUDES = ("stdio.h",)

INDENT = "    "


def c_name(name: str) -> str:
    """C identifier for a BP variable."""
    return f"{C_NAME_PREFIX}{name}"


def c_string_literal(text: str) -> str:
    """
    Quote `text` as a C string literal that reproduces it byte for byte.

    Non-ASCII characters are encoded as UTF-8 and written as three-digit
    octal escapes, which cannot run into a following digit.
    """
    parts = ['"']
    for char in text:
        if char == "\\":
            parts.append("\\\\")
        elif char == '"':
            parts.append('\\"')
        elif char == "?":
            parts.append("\\?")
        elif char == "\t":
            parts.append("\\t")
        elif " " <= char <= "~":
            parts.append(char)
        else:
            parts.extend(f"\\{byte:03o}" for byte in char.encode("utf-8"))
    parts.append('"')
    return "".join(parts)


class CodeGenerator(ASTVisitor):
    """
    Generates C source from a BP AST and its symbol table.

    Attributes:
        output_comments: Emit the BP source line above each statement
        emit_header_comment: Emit the "Generated by" banner
    """

    def __init__(
        self,
        output_comments: bool = False,
        emit_header_comment: bool = True,
        source_lines: Optional[list[str]] = None,
    ):
        self.output_comments = output_comments
        self.emit_header_comment = emit_header_comment
        self.source_lines = source_lines or []

        self._output: list[str] = []
        self._symbols: Optional[SymbolTable] = None

    def generate(self, program: ProgramNode, symbols: SymbolTable) -> str:
        """
        Generate C source code.

        Args:
            program: The root AST node
            symbols: Symbol table produced by the TypeResolver for `program`

        Returns:
            Complete C translation unit, ending in a newline

        Raises:
            InternalError: If the AST and symbol table disagree
        """
        if not symbols.frozen:
            raise InternalError("code generation requires a resolved symbol table")

        self._output = []
        self._symbols = symbols

        self._emit_header()
        for stmt in program.statements:
            self._emit_source_comment(stmt.location.line)
            self.visit(stmt)
        self._emit_footer()

        text = "\n".join(self._output) + "\n"
        logger.debug(
            "Generated %d bytes of C for %d statements", len(text), len(program.statements)
        )
        return text

    # =========================================================================
    # Emission Helpers
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        self._output.append(line)

    def _emit_statement(self, line: str) -> None:
        self._output.append(f"{INDENT}{line}")

    def _emit_header(self) -> None:
        if self.emit_header_comment:
            self._emit(HEADER_COMMENT)
        for header in INCLUDES:
            self._emit(f"#include <{header}>")
        self._emit()
        self._emit("int main(void)")
        self._emit("{")

    def _emit_footer(self) -> None:
        self._emit_statement("return 0;")
        self._emit("}")

    def _emit_source_comment(self, line: int) -> None:
        if not self.output_comments:
            return
        if 0 < line <= len(self.source_lines):
            # Keep the comment well-formed whatever the BP text holds
            text = self.source_lines[line - 1].strip().replace("*/", "* /")
            self._emit_statement(f"/* line {line}: {text} */")

    def _lookup(self, expr: IdentifierExpression) -> Symbol:
        symbol = self._symbols.lookup(expr.name)
        if symbol is None:
            raise InternalError(
                f"'{expr.name}' missing from symbol table after resolution",
                expr.location,
            )
        return symbol

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        symbol = self._symbols.lookup(node.name)
        if symbol is None or symbol.type_tag != node.type_tag:
            raise InternalError(
                f"declaration of '{node.name}' does not match symbol table",
                node.location,
            )

        init = node.initializer
        if node.type_tag == TypeTag.NUMERIC and isinstance(init, IntegerLiteral):
            self._emit_statement(
                f"{node.type_tag.c_type} {c_name(node.name)} = {init.value};"
            )
        elif node.type_tag == TypeTag.TEXT and isinstance(init, StringLiteral):
            self._emit_statement(
                f"{node.type_tag.c_type} {c_name(node.name)}[] = "
                f"{c_string_literal(init.value)};"
            )
        else:
            raise InternalError(
                f"initializer of '{node.name}' does not match its type",
                node.location,
            )

    def visit_PrintStatement(self, node: PrintStatement):
        self._emit_statement(self._print_call(node.argument))

    def _print_call(self, argument: Expression) -> str:
        if isinstance(argument, StringLiteral):
            return f"puts({c_string_literal(argument.value)});"

        if isinstance(argument, IntegerLiteral):
            return f"puts({c_string_literal(str(argument.value))});"

        if isinstance(argument, IdentifierExpression):
            symbol = self._lookup(argument)
            if symbol.type_tag == TypeTag.NUMERIC:
                return f'printf("%lld\\n", {c_name(symbol.name)});'
            if symbol.type_tag == TypeTag.TEXT:
                return f"puts({c_name(symbol.name)});"

        raise InternalError(
            f"cannot print {type(argument).__name__}",
            argument.location,
        )

    def generic_visit(self, node):
        raise InternalError(
            f"code generator has no rule for {type(node).__name__}",
            node.location,
        )
