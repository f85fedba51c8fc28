"""
BP Type Resolver
================

This module walks a parsed BP program in declaration order, assigns each
declared variable its type, checks literal initializers against the
declared tag, and validates variable references.

Rules
-----
- `m` requires an integer literal that fits in a signed 64-bit value
- `c` requires a string literal
- A name may be declared only once per program
- `show name;` requires `name` to be declared by an earlier statement

The result is a frozen SymbolTable owned by the current translation run.

Usage
-----
>>> from bplang.bpc.parser import parse_source
>>> from bplang.bpc.resolver import resolve
>>> symbols = resolve(parse_source('m x = 1; show x;'))
>>> symbols.lookup("x").type_tag
<TypeTag.NUMERIC: 1>
"""

import difflib
import logging
from typing import Optional

from bplang.bpc.ast import (
    ASTVisitor,
    ProgramNode,
    VariableDeclaration,
    PrintStatement,
    IntegerLiteral,
    StringLiteral,
    IdentifierExpression,
)
from bplang.bpc.types import TypeTag, SymbolTable, fits_numeric, NUMERIC_MIN, NUMERIC_MAX
from bplang.bpc.errors import (
    InternalError,
    TypeMismatchError,
    DuplicateDeclarationError,
    UndeclaredVariableError,
)

logger = logging.getLogger(__name__)


class TypeResolver(ASTVisitor):
    """
    Builds the symbol table for one program.

    A resolver instance is single-use: call resolve() once per program.
    """

    def __init__(self, source_lines: Optional[list[str]] = None):
        self.source_lines = source_lines or []
        self._symbols = SymbolTable()

    def resolve(self, program: ProgramNode) -> SymbolTable:
        """
        Resolve a program.

        Returns:
            The completed, frozen SymbolTable

        Raises:
            TypeMismatchError, DuplicateDeclarationError,
            UndeclaredVariableError: On the first violation found
        """
        if self._symbols.frozen:
            raise InternalError("TypeResolver.resolve() called twice")

        self.visit(program)
        logger.debug("Resolved %d symbols", len(self._symbols))
        return self._symbols.freeze()

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_ProgramNode(self, node: ProgramNode):
        for stmt in node.statements:
            self.visit(stmt)

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        self._check_initializer(node)

        existing = self._symbols.lookup(node.name)
        if existing is not None:
            raise DuplicateDeclarationError(
                node.name,
                location=node.location,
                original_location=existing.location,
                source_line=self._get_source_line(node.location.line),
            )

        self._symbols.declare(node.name, node.type_tag, node.location)

    def visit_PrintStatement(self, node: PrintStatement):
        argument = node.argument
        if isinstance(argument, IdentifierExpression):
            if argument.name not in self._symbols:
                raise UndeclaredVariableError(
                    argument.name,
                    location=argument.location,
                    source_line=self._get_source_line(argument.location.line),
                    similar_identifiers=difflib.get_close_matches(
                        argument.name, self._symbols.names(), n=3
                    ),
                )
        elif not isinstance(argument, (IntegerLiteral, StringLiteral)):
            raise InternalError(
                f"unsupported print argument {type(argument).__name__}",
                argument.location,
            )

    def generic_visit(self, node):
        raise InternalError(
            f"type resolver has no rule for {type(node).__name__}",
            node.location,
        )

    # =========================================================================
    # Initializer Checks
    # =========================================================================

    def _check_initializer(self, node: VariableDeclaration) -> None:
        init = node.initializer
        tag = node.type_tag

        if tag == TypeTag.NUMERIC:
            if not isinstance(init, IntegerLiteral):
                raise self._mismatch(node, init)
            if not fits_numeric(init.value):
                raise TypeMismatchError(
                    f"integer literal {init.text} is out of range for '{tag.keyword}'",
                    expected_type=f"a value between {NUMERIC_MIN} and {NUMERIC_MAX}",
                    actual_type=init.text,
                    location=init.location,
                    source_line=self._get_source_line(init.location.line),
                )
        elif tag == TypeTag.TEXT:
            if not isinstance(init, StringLiteral):
                raise self._mismatch(node, init)
        else:
            raise InternalError(f"unknown type tag {tag!r}", node.location)

    def _mismatch(self, node: VariableDeclaration, init) -> TypeMismatchError:
        actual = "string literal" if isinstance(init, StringLiteral) else "integer literal"
        return TypeMismatchError(
            f"cannot initialize '{node.type_tag.keyword}' variable '{node.name}' "
            f"with a {actual}",
            expected_type=node.type_tag.literal_kind,
            actual_type=actual,
            location=init.location,
            source_line=self._get_source_line(init.location.line),
        )


def resolve(program: ProgramNode, source_lines: Optional[list[str]] = None) -> SymbolTable:
    """Resolve `program` with a fresh TypeResolver."""
    return TypeResolver(source_lines).resolve(program)
