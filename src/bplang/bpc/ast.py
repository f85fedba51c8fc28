"""
BP Abstract Syntax Tree (AST) Definitions
=========================================

This module defines the AST node types produced by the BP parser.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node, ordered statements
├── Statements
│   ├── VariableDeclaration - m/c declaration with literal initializer
│   └── PrintStatement - show statement
└── Expressions
    ├── IntegerLiteral - integer constant
    ├── StringLiteral - string constant
    └── IdentifierExpression - variable reference

Design Notes
------------
- All nodes are dataclasses
- Each node stores the source location stamped at parse time
- The tree is owned top-down: no parent links, no sharing
- New statements or expressions are new subclasses plus a visit_ method
  in each ASTVisitor that handles them
"""

from dataclasses import dataclass, field
from typing import Any

from bplang.errors import SourceLocation
from bplang.bpc.types import TypeTag


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for expression nodes (values)."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for statement nodes (actions, in program order)."""
    pass


# =============================================================================
# Program Root Node
# =============================================================================

@dataclass
class ProgramNode(ASTNode):
    """
    Root node of the AST.

    Attributes:
        statements: Statements in source order, which is execution order
    """
    statements: list[Statement] = field(default_factory=list)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class IntegerLiteral(Expression):
    """
    Integer constant.

    Attributes:
        value: Decimal value
        text: Digits as written (may carry leading zeros)
    """
    value: int = 0
    text: str = ""


@dataclass
class StringLiteral(Expression):
    """String constant, without the surrounding quotes."""
    value: str = ""


@dataclass
class IdentifierExpression(Expression):
    """Reference to a declared variable."""
    name: str = ""


# Literal initializers accepted by declarations
Literal = IntegerLiteral | StringLiteral


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class VariableDeclaration(Statement):
    """
    Variable declaration with literal initializer.

        m count = 10;
        c greeting = "hello";

    Attributes:
        type_tag: Declared type, selected by the m/c prefix
        name: Variable name
        initializer: Literal initial value
    """
    type_tag: TypeTag = TypeTag.NUMERIC
    name: str = ""
    initializer: Literal = None


@dataclass
class PrintStatement(Statement):
    """
    Print statement.

        show "text";
        show count;

    Attributes:
        argument: Literal or variable reference to print
    """
    argument: Expression = None


# =============================================================================
# Visitor
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    visit() dispatches to visit_<ClassName>. Subclasses override the
    methods they care about; generic_visit() is called otherwise.
    """

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: ASTNode) -> Any:
        """Visit children of a node that has no dedicated method."""
        if isinstance(node, ProgramNode):
            for stmt in node.statements:
                self.visit(stmt)
        elif isinstance(node, VariableDeclaration):
            self.visit(node.initializer)
        elif isinstance(node, PrintStatement):
            self.visit(node.argument)
        return None


# =============================================================================
# AST Printer (debugging)
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Renders an AST as indented text.

        Program (3 statements)
          VarDecl m variable01 = 1  @1:1
          VarDecl c variable02 = "hi"  @1:19
          Show variable02  @1:37
    """

    def __init__(self):
        self._lines: list[str] = []
        self._depth = 0

    def print(self, node: ASTNode) -> str:
        self._lines = []
        self._depth = 0
        self.visit(node)
        return "\n".join(self._lines)

    def _emit(self, text: str) -> None:
        self._lines.append("  " * self._depth + text)

    def visit_ProgramNode(self, node: ProgramNode):
        count = len(node.statements)
        word = "statement" if count == 1 else "statements"
        self._emit(f"Program ({count} {word})")
        self._depth += 1
        for stmt in node.statements:
            self.visit(stmt)
        self._depth -= 1

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        value = self._expr_str(node.initializer)
        self._emit(
            f"VarDecl {node.type_tag.keyword} {node.name} = {value}"
            f"  @{node.location.line}:{node.location.column}"
        )

    def visit_PrintStatement(self, node: PrintStatement):
        self._emit(
            f"Show {self._expr_str(node.argument)}"
            f"  @{node.location.line}:{node.location.column}"
        )

    def _expr_str(self, expr: Expression) -> str:
        if isinstance(expr, IntegerLiteral):
            return expr.text or str(expr.value)
        if isinstance(expr, StringLiteral):
            return f'"{expr.value}"'
        if isinstance(expr, IdentifierExpression):
            return expr.name
        return f"<{type(expr).__name__}>"
