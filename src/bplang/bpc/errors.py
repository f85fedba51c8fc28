"""
BP Translator Error Hierarchy
=============================

This module defines the exception hierarchy for the BP-to-C translator.
All exceptions inherit from BPCError, which itself inherits from the base
BPLangError for consistent error handling across the toolchain.

Exception Hierarchy
-------------------
BPCError (base for all translator errors)
├── LexError - lexical errors
│   ├── UnterminatedStringError - missing closing quote
│   └── InvalidCharacterError - unexpected character
├── BPSyntaxError - token sequence does not match the grammar
│   ├── UnexpectedTokenError - wrong token at statement start or in a rule
│   └── MissingTokenError - required token (such as ';') absent
├── BPSemanticError - resolution errors
│   ├── TypeMismatchError - literal kind disagrees with declared tag
│   ├── DuplicateDeclarationError - variable declared twice
│   └── UndeclaredVariableError - print of an undeclared name
└── InternalError - translator invariant violated (a bug, not user error)

Every stage raises the most specific error immediately. The pipeline stops
at the first error; nothing is aggregated.

Example:
    hello.bp:2:6: error: undeclared variable 'nmae'
        show nmae;
             ^
    hint: did you mean 'name'?
"""

from typing import Optional, List

from bplang.errors import BPLangError, SourceLocation


# =============================================================================
# Base Translator Exception
# =============================================================================

class BPCError(BPLangError):
    """
    Base exception for all BP translator errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            hello.bp:1:8: error: expected ';'
                m x = 1
                       ^
            hint: found end of input
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. 'TypeMismatchError'."""
        return type(self).__name__


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(BPCError):
    """
    Lexical error in BP source.

    Raised when the lexer meets input it cannot classify. The lexer does
    not attempt recovery.
    """
    pass


class UnterminatedStringError(LexError):
    """
    String literal not closed before the end of the line or input.

    The location points at the opening quote.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class InvalidCharacterError(LexError):
    """
    Character that does not start any BP token.

    Source bytes that are not valid UTF-8 are reported with `char` holding
    the byte as a surrogate escape (U+DC80 to U+DCFF).
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            message = f"invalid byte 0x{code - 0xDC00:02X} (source is not valid UTF-8)"
        else:
            message = f"invalid character '{char}' (U+{code:04X})"
        super().__init__(message, location=location, source_line=source_line)


# =============================================================================
# Syntax Errors
# =============================================================================

class BPSyntaxError(BPCError):
    """
    Token sequence does not match the BP grammar.

    Named with a prefix so it does not shadow the builtin SyntaxError.
    """
    pass


class UnexpectedTokenError(BPSyntaxError):
    """Parser found a token that no grammar rule accepts at this point."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(BPSyntaxError):
    """
    Required token is missing.

    The location is the position where the token should have started,
    immediately after the previous token.
    """

    def __init__(
        self,
        expected: str,
        found: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected '{expected}'",
            location=location,
            hint=f"found {found}" if found else None,
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors
# =============================================================================

class BPSemanticError(BPCError):
    """Program is grammatical but violates BP's typing or scoping rules."""
    pass


class TypeMismatchError(BPSemanticError):
    """
    Initializer literal does not fit the declared type tag.

        m x = "hello";   // 'm' needs an integer literal
    """

    def __init__(
        self,
        message: str,
        expected_type: Optional[str] = None,
        actual_type: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected_type = expected_type
        self.actual_type = actual_type

        hint = None
        if expected_type and actual_type:
            hint = f"expected {expected_type}, got {actual_type}"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateDeclarationError(BPSemanticError):
    """Variable name declared more than once in a program."""

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location}"

        super().__init__(
            f"redeclaration of '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndeclaredVariableError(BPSemanticError):
    """
    Reference to a variable that has not been declared yet.

    Forward references count as undeclared: a variable must be declared
    before the statement that prints it.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_identifiers: Optional[List[str]] = None,
    ):
        self.identifier = identifier
        self.similar_identifiers = similar_identifiers or []

        hint = None
        if self.similar_identifiers:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_identifiers[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undeclared variable '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Internal Errors
# =============================================================================

class InternalError(BPCError):
    """
    Translator invariant violated after successful resolution.

    Indicates a bug in the translator, not a problem with the input.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
    ):
        super().__init__(
            f"internal error: {message}",
            location=location,
            hint="this is a translator bug, please report it",
        )
