"""
BP Lexer (Tokenizer)
====================

This module implements the lexer for BP. It converts source text into a
lazy stream of tokens for the parser, in a single forward pass.

Token Categories
----------------
- Keywords: m, c, show
- Identifiers: [a-zA-Z_][a-zA-Z0-9_]*
- Integers: [0-9]+ (decimal, leading zeros allowed)
- Strings: "double quoted", no escape sequences, may span lines
- Punctuation: = ;

Comments
--------
- Single-line: // comment

Example Usage
-------------
>>> from bplang.bpc.lexer import BPLexer
>>> for token in BPLexer('m x = 1;', "test.bp").tokenize():
...     print(token)
Token(KEYWORD, 'm', 1:1)
Token(IDENTIFIER, 'x', 1:3)
Token(EQUALS, '=', 1:5)
Token(NUMBER, 1, 1:7)
Token(SEMICOLON, ';', 1:8)
Token(EOF, 1:9)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from bplang.errors import SourceLocation
from bplang.bpc.errors import (
    UnterminatedStringError,
    InvalidCharacterError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class BPTokenType(Enum):
    """
    Token types for BP.

    Keywords share one token type; the parser distinguishes them by value.
    """

    EOF = auto()            # End of input

    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Integer literals
    STRING = auto()         # String literals "..."
    KEYWORD = auto()        # m, c, show

    EQUALS = auto()         # =
    SEMICOLON = auto()      # ;


# Reserved words, matched only as whole tokens
KEYWORDS: frozenset[str] = frozenset({"m", "c", "show"})

# Single character tokens
PUNCTUATION: dict[str, BPTokenType] = {
    "=": BPTokenType.EQUALS,
    ";": BPTokenType.SEMICOLON,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class BPToken:
    """
    A single token from BP source.

    Attributes:
        type: The BPTokenType classification
        value: Parsed value (int for numbers, unquoted text for strings,
               the name for identifiers and keywords, None for EOF)
        raw: The exact source text of the token, quotes included
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        offset: Byte offset of the token in the UTF-8 encoded source
                (0-indexed)
        filename: Name of the source file
    """
    type: BPTokenType
    value: str | int | None
    raw: str
    line: int
    column: int
    offset: int
    filename: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column, self.offset)

    @property
    def end_location(self) -> SourceLocation:
        """Position immediately after this token."""
        line = self.line + self.raw.count("\n")
        if line == self.line:
            column = self.column + len(self.raw)
        else:
            # String literal spanning lines
            column = len(self.raw) - self.raw.rfind("\n")
        return SourceLocation(
            self.filename,
            line,
            column,
            self.offset + len(self.raw.encode("utf-8", "surrogatepass")),
        )

    def is_keyword(self, word: str) -> bool:
        """Return True if this token is the keyword `word`."""
        return self.type == BPTokenType.KEYWORD and self.value == word

    def describe(self) -> str:
        """Short human-readable description used in diagnostics."""
        if self.type == BPTokenType.EOF:
            return "end of input"
        if self.type == BPTokenType.KEYWORD:
            return f"keyword '{self.raw}'"
        if self.type == BPTokenType.IDENTIFIER:
            return f"identifier '{self.raw}'"
        if self.type == BPTokenType.NUMBER:
            return f"integer literal {self.raw}"
        if self.type == BPTokenType.STRING:
            return f"string literal {self.raw}"
        return f"'{self.raw}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

class BPLexer:
    """
    Tokenizes BP source code.

    Usage:
        lexer = BPLexer(source_text, filename)
        tokens = list(lexer.tokenize())

    The token stream is produced lazily and cannot be restarted; create a
    new lexer to tokenize the same text again.

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    WHITESPACE = " \t\r\n"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source. _pos indexes the str, _byte_pos
        # counts UTF-8 bytes for token offsets.
        self._pos = 0
        self._byte_pos = 0
        self._token_start_byte = 0
        self._line = 1
        self._column = 1

        # Track line start position for error reporting
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[BPToken]:
        """
        Generate tokens from the source code.

        Yields:
            BPToken objects in source order, ending with EOF

        Raises:
            LexError: On an unterminated string or invalid character
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield BPToken(
            BPTokenType.EOF, None, "", self._line, self._column, self._byte_pos, self.filename
        )

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1
        self._byte_pos += 1 if char < "\x80" else len(char.encode("utf-8", "surrogatepass"))

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            # Single-line comment: //
            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> BPToken:
        # `start` indexes self.source; token offsets are in bytes
        self._token_start_byte = self._byte_pos
        start = (self._line, self._column, self._pos)
        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(*start)

        if char in string.digits:
            return self._scan_number(*start)

        if char == '"':
            return self._scan_string(*start)

        if char in PUNCTUATION:
            self._advance()
            return self._make_token(PUNCTUATION[char], char, *start)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, self._line, self._column, self._byte_pos),
            self._get_current_line(),
        )

    def _scan_identifier(self, line: int, column: int, start: int) -> BPToken:
        """
        Scan an identifier or keyword.

        Keywords are only recognised as whole tokens, so 'ms' and 'shown'
        are ordinary identifiers.
        """
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[start:self._pos]
        token_type = BPTokenType.KEYWORD if name in KEYWORDS else BPTokenType.IDENTIFIER
        return self._make_token(token_type, name, line, column, start)

    def _scan_number(self, line: int, column: int, start: int) -> BPToken:
        """Scan a decimal integer. Leading zeros are kept in `raw` only."""
        while self._peek() and self._peek() in string.digits:
            self._advance()

        text = self.source[start:self._pos]
        return self._make_token(BPTokenType.NUMBER, int(text, 10), line, column, start)

    def _scan_string(self, line: int, column: int, start: int) -> BPToken:
        """
        Scan a double-quoted string literal.

        Backslashes have no special meaning and newlines are part of the
        text. End of input before the closing quote is an error at the
        opening quote.
        """
        start_line_text = self._get_current_line()
        self._advance()  # consume opening "

        while not self._at_end():
            if self._peek() == '"':
                self._advance()  # consume closing "
                return self._make_token(
                    BPTokenType.STRING,
                    self.source[start + 1:self._pos - 1],
                    line,
                    column,
                    start,
                )
            self._advance()

        raise UnterminatedStringError(
            SourceLocation(self.filename, line, column, self._token_start_byte),
            start_line_text,
        )

    def _make_token(
        self,
        token_type: BPTokenType,
        value: str | int | None,
        line: int,
        column: int,
        start: int,
    ) -> BPToken:
        return BPToken(
            type=token_type,
            value=value,
            raw=self.source[start:self._pos],
            line=line,
            column=column,
            offset=self._token_start_byte,
            filename=self.filename,
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end].rstrip("\r")


def tokenize(source: str, filename: str = "<input>") -> list[BPToken]:
    """Tokenize `source` completely and return the token list."""
    return list(BPLexer(source, filename).tokenize())
