"""
BP Lexer Tests
==============

Tests for tokenization of BP source: token kinds, values, positions,
comments, and lexical errors.
"""

import pytest

from bplang.bpc.lexer import BPLexer, BPTokenType, tokenize
from bplang.bpc.errors import (
    LexError,
    UnterminatedStringError,
    InvalidCharacterError,
)


def token_types(source: str) -> list[BPTokenType]:
    return [t.type for t in tokenize(source, "test.bp")]


# =============================================================================
# Basic Tokens
# =============================================================================

class TestLexer:
    """Tests for the BP lexer."""

    def test_empty_source(self):
        """Empty source should produce only EOF token."""
        tokens = tokenize("", "test.bp")
        assert len(tokens) == 1
        assert tokens[0].type == BPTokenType.EOF

    def test_whitespace_only(self):
        """Whitespace-only source should produce only EOF token."""
        tokens = tokenize("  \n\t \r\n  ", "test.bp")
        assert [t.type for t in tokens] == [BPTokenType.EOF]

    def test_declaration(self):
        """A numeric declaration lexes to five tokens plus EOF."""
        assert token_types("m x = 1;") == [
            BPTokenType.KEYWORD,
            BPTokenType.IDENTIFIER,
            BPTokenType.EQUALS,
            BPTokenType.NUMBER,
            BPTokenType.SEMICOLON,
            BPTokenType.EOF,
        ]

    def test_keywords(self):
        """m, c and show are keywords."""
        tokens = tokenize("m c show", "test.bp")
        assert [t.type for t in tokens[:3]] == [BPTokenType.KEYWORD] * 3
        assert [t.value for t in tokens[:3]] == ["m", "c", "show"]

    def test_keyword_prefix_is_identifier(self):
        """Keywords match whole tokens only."""
        tokens = tokenize("ms cc shown show_x", "test.bp")
        assert all(t.type == BPTokenType.IDENTIFIER for t in tokens[:4])
        assert [t.value for t in tokens[:4]] == ["ms", "cc", "shown", "show_x"]

    def test_identifier_characters(self):
        """Identifiers may contain letters, digits and underscores."""
        tokens = tokenize("_a variable01 X_9", "test.bp")
        assert [t.value for t in tokens[:3]] == ["_a", "variable01", "X_9"]

    def test_number_value(self):
        tokens = tokenize("12345", "test.bp")
        assert tokens[0].type == BPTokenType.NUMBER
        assert tokens[0].value == 12345

    def test_number_leading_zeros(self):
        """Leading zeros are decimal, not octal; raw keeps them."""
        token = tokenize("007", "test.bp")[0]
        assert token.value == 7
        assert token.raw == "007"

    def test_large_number(self):
        """The lexer does not limit integer size."""
        token = tokenize("99999999999999999999", "test.bp")[0]
        assert token.value == 99999999999999999999

    def test_number_then_identifier(self):
        """Digits followed by letters split into two tokens."""
        tokens = tokenize("12ab", "test.bp")
        assert tokens[0].type == BPTokenType.NUMBER
        assert tokens[1].type == BPTokenType.IDENTIFIER
        assert tokens[1].value == "ab"

    def test_string_value_excludes_quotes(self):
        token = tokenize('"hi there"', "test.bp")[0]
        assert token.type == BPTokenType.STRING
        assert token.value == "hi there"
        assert token.raw == '"hi there"'

    def test_empty_string(self):
        token = tokenize('""', "test.bp")[0]
        assert token.type == BPTokenType.STRING
        assert token.value == ""

    def test_string_backslash_is_literal(self):
        """Backslashes inside strings have no special meaning."""
        token = tokenize(r'"a\nb"', "test.bp")[0]
        assert token.value == "a\\nb"

    def test_string_spans_lines(self):
        """Newlines inside quotes are part of the string."""
        tokens = tokenize('show "a\nb";\nshow x;', "test.bp")
        string = tokens[1]
        assert string.type == BPTokenType.STRING
        assert string.value == "a\nb"
        assert (string.line, string.column) == (1, 6)
        end = string.end_location
        assert (end.line, end.column) == (2, 3)
        semicolon, show = tokens[2], tokens[3]
        assert (semicolon.line, semicolon.column) == (2, 3)
        assert show.is_keyword("show")
        assert (show.line, show.column) == (3, 1)

    def test_punctuation_without_spaces(self):
        assert token_types('c s="x";') == [
            BPTokenType.KEYWORD,
            BPTokenType.IDENTIFIER,
            BPTokenType.EQUALS,
            BPTokenType.STRING,
            BPTokenType.SEMICOLON,
            BPTokenType.EOF,
        ]

    def test_line_comment(self):
        """// comments run to the end of the line."""
        tokens = tokenize("// comment\nshow x; // trailing", "test.bp")
        assert [t.type for t in tokens] == [
            BPTokenType.KEYWORD,
            BPTokenType.IDENTIFIER,
            BPTokenType.SEMICOLON,
            BPTokenType.EOF,
        ]

    def test_lexing_is_deterministic(self):
        """Re-lexing the same text yields the same tokens."""
        source = 'm variable01 = 1; c variable02 = "hi";\nshow variable02; show variable01;'
        assert tokenize(source, "a.bp") == tokenize(source, "a.bp")

    def test_tokenize_is_lazy(self):
        """Tokens are produced on demand, before a later error is reached."""
        stream = BPLexer('show x; @', "test.bp").tokenize()
        first = next(stream)
        assert first.is_keyword("show")


# =============================================================================
# Positions
# =============================================================================

class TestTokenPositions:
    """Tests for line/column tracking."""

    def test_columns(self):
        tokens = tokenize("m x = 1;", "test.bp")
        assert [(t.line, t.column) for t in tokens] == [
            (1, 1), (1, 3), (1, 5), (1, 7), (1, 8), (1, 9),
        ]

    def test_lines(self):
        tokens = tokenize("show a;\n  show b;", "test.bp")
        show_b = tokens[3]
        assert show_b.is_keyword("show")
        assert (show_b.line, show_b.column) == (2, 3)

    def test_offset(self):
        tokens = tokenize("show a;\nshow b;", "test.bp")
        assert tokens[3].offset == 8

    def test_end_location(self):
        """end_location is the position just after the token."""
        number = tokenize("m x = 123", "test.bp")[3]
        end = number.end_location
        assert (end.line, end.column) == (1, 10)

    def test_offsets_count_utf8_bytes(self):
        """Offsets are byte offsets; columns count characters."""
        tokens = tokenize('c s = "é"; show s;', "test.bp")
        string, semicolon, show = tokens[3], tokens[4], tokens[5]
        assert string.offset == 6
        assert string.end_location.offset == 10
        assert (semicolon.column, semicolon.offset) == (10, 10)
        assert (show.column, show.offset) == (12, 12)
        assert tokens[-1].offset == len('c s = "é"; show s;'.encode("utf-8"))

    def test_error_offset_is_byte_offset(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize('show "é"; $', "test.bp")
        location = exc_info.value.location
        assert (location.column, location.offset) == (11, 11)

    def test_location_filename(self):
        token = tokenize("show", "prog.bp")[0]
        assert token.location.filename == "prog.bp"
        assert str(token.location) == "prog.bp:1:1"

    def test_repr(self):
        tokens = tokenize("m x = 1;", "test.bp")
        assert repr(tokens[0]) == "Token(KEYWORD, 'm', 1:1)"
        assert repr(tokens[3]) == "Token(NUMBER, 1, 1:7)"
        assert repr(tokens[-1]) == "Token(EOF, 1:9)"

    def test_describe(self):
        tokens = tokenize('m x 1 "s" ;', "test.bp")
        assert tokens[0].describe() == "keyword 'm'"
        assert tokens[1].describe() == "identifier 'x'"
        assert tokens[2].describe() == "integer literal 1"
        assert tokens[3].describe() == 'string literal "s"'
        assert tokens[4].describe() == "';'"
        assert tokens[5].describe() == "end of input"


# =============================================================================
# Lexical Errors
# =============================================================================

class TestLexerErrors:
    """Tests for lexical error reporting."""

    def test_unterminated_string_at_eof(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('show "hello', "test.bp")
        location = exc_info.value.location
        assert (location.line, location.column) == (1, 6)

    def test_unterminated_string_across_lines(self):
        """A string still open at end of input is reported at its opening quote."""
        with pytest.raises(UnterminatedStringError) as exc_info:
            tokenize('show "hello\nworld;\n', "test.bp")
        location = exc_info.value.location
        assert (location.line, location.column, location.offset) == (1, 6, 5)
        assert exc_info.value.source_line == 'show "hello'

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("m x = 1 + 2;", "test.bp")
        error = exc_info.value
        assert error.char == "+"
        assert (error.location.line, error.location.column) == (1, 9)
        assert "U+002B" in str(error)

    def test_single_slash_is_invalid(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("show x; / nope", "test.bp")

    def test_non_ascii_outside_string_is_invalid(self):
        with pytest.raises(InvalidCharacterError):
            tokenize("m café = 1;", "test.bp")

    def test_non_ascii_inside_string_is_allowed(self):
        token = tokenize('"café"', "test.bp")[0]
        assert token.value == "café"

    def test_lex_errors_share_base(self):
        with pytest.raises(LexError):
            tokenize("#", "test.bp")

    def test_error_format(self):
        """Errors render as file:line:col, source line, caret."""
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("show $;", "prog.bp")
        lines = str(exc_info.value).splitlines()
        assert lines[0] == "prog.bp:1:6: error: invalid character '$' (U+0024)"
        assert lines[1] == "    show $;"
        assert lines[2] == "         ^"
