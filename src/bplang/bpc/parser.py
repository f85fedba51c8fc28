"""
BP Recursive Descent Parser
===========================

This module implements the parser for BP. It consumes the token stream
from the lexer and builds an Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program     ::= statement* EOF
statement   ::= var_decl | print_stmt
var_decl    ::= type_tag IDENTIFIER '=' literal ';'
print_stmt  ::= 'show' (literal | IDENTIFIER) ';'
type_tag    ::= 'm' | 'c'
literal     ::= NUMBER | STRING

Parsing is a single left-to-right pass with one token of lookahead. A
statement is classified by its first token alone: 'm' or 'c' starts a
declaration, 'show' starts a print statement, anything else is an error.

Whether a declaration's literal matches its tag is checked by the type
resolver, not here.

Example Usage
-------------
>>> from bplang.bpc.parser import parse_source
>>> program = parse_source('m x = 1; show x;')
>>> len(program.statements)
2
"""

from typing import Iterable, Iterator, Optional

from bplang.errors import SourceLocation
from bplang.bpc.lexer import BPLexer, BPToken, BPTokenType
from bplang.bpc.types import tag_for_keyword
from bplang.bpc.ast import (
    ProgramNode,
    Statement,
    VariableDeclaration,
    PrintStatement,
    Expression,
    IntegerLiteral,
    StringLiteral,
    IdentifierExpression,
)
from bplang.bpc.errors import (
    UnexpectedTokenError,
    MissingTokenError,
)


class BPParser:
    """
    Recursive descent parser for BP.

    The parser stops at the first syntax error; there is no recovery.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: Iterable[BPToken],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.filename = filename
        self.source_lines = source_lines or []

        self._tokens: Iterator[BPToken] = iter(tokens)
        self._current: Optional[BPToken] = None
        self._previous: Optional[BPToken] = None

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into an AST.

        Returns:
            ProgramNode containing all statements in source order

        Raises:
            BPSyntaxError: On the first token that does not fit the grammar
            LexError: Propagated from the lexer as tokens are pulled
        """
        statements: list[Statement] = []

        while not self._check(BPTokenType.EOF):
            statements.append(self._parse_statement())

        return ProgramNode(
            location=SourceLocation(self.filename, 1, 1, 0),
            statements=statements,
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> BPToken:
        """The lookahead token, pulled from the stream on first use."""
        if self._current is None:
            self._current = next(self._tokens, None)
            if self._current is None:
                # Streams always end with EOF; synthesize one if a caller
                # handed us a truncated list.
                end = self._previous.end_location if self._previous else None
                self._current = BPToken(
                    BPTokenType.EOF,
                    None,
                    "",
                    end.line if end else 1,
                    end.column if end else 1,
                    end.offset if end else 0,
                    self.filename,
                )
        return self._current

    def _advance(self) -> BPToken:
        token = self._peek()
        if token.type != BPTokenType.EOF:
            self._previous = token
            self._current = None
        return token

    def _check(self, token_type: BPTokenType) -> bool:
        return self._peek().type == token_type

    def _expect(self, token_type: BPTokenType, expected: str) -> BPToken:
        """
        Consume a token of the given type.

        Raises:
            MissingTokenError: Located right after the previous token
        """
        if self._check(token_type):
            return self._advance()

        found = self._peek()
        location = self._previous.end_location if self._previous else found.location
        raise MissingTokenError(
            expected,
            found=found.describe(),
            location=location,
            source_line=self._get_source_line(location.line),
        )

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        token = self._peek()
        return UnexpectedTokenError(
            token.describe(),
            expected=expected,
            location=token.location,
            source_line=self._get_source_line(token.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        token = self._peek()

        if token.type == BPTokenType.KEYWORD:
            if tag_for_keyword(token.value) is not None:
                return self._parse_variable_declaration()
            if token.value == "show":
                return self._parse_print_statement()

        raise self._unexpected("a declaration ('m' or 'c') or 'show'")

    def _parse_variable_declaration(self) -> VariableDeclaration:
        """var_decl ::= type_tag IDENTIFIER '=' literal ';'"""
        tag_token = self._advance()

        if not self._check(BPTokenType.IDENTIFIER):
            raise self._unexpected("a variable name")
        name_token = self._advance()

        self._expect(BPTokenType.EQUALS, "=")
        initializer = self._parse_literal()
        self._expect(BPTokenType.SEMICOLON, ";")

        return VariableDeclaration(
            location=tag_token.location,
            type_tag=tag_for_keyword(tag_token.value),
            name=name_token.value,
            initializer=initializer,
        )

    def _parse_print_statement(self) -> PrintStatement:
        """print_stmt ::= 'show' (literal | IDENTIFIER) ';'"""
        show_token = self._advance()

        if self._check(BPTokenType.IDENTIFIER):
            name_token = self._advance()
            argument: Expression = IdentifierExpression(
                location=name_token.location,
                name=name_token.value,
            )
        elif self._check(BPTokenType.NUMBER) or self._check(BPTokenType.STRING):
            argument = self._parse_literal()
        else:
            raise self._unexpected("a literal or variable name after 'show'")

        self._expect(BPTokenType.SEMICOLON, ";")

        return PrintStatement(location=show_token.location, argument=argument)

    def _parse_literal(self) -> Expression:
        """literal ::= NUMBER | STRING"""
        token = self._peek()

        if token.type == BPTokenType.NUMBER:
            self._advance()
            return IntegerLiteral(location=token.location, value=token.value, text=token.raw)

        if token.type == BPTokenType.STRING:
            self._advance()
            return StringLiteral(location=token.location, value=token.value)

        raise self._unexpected("an integer or string literal")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """Lex and parse BP source in one step."""
    lexer = BPLexer(source, filename)
    parser = BPParser(lexer.tokenize(), filename, source.splitlines())
    return parser.parse()
