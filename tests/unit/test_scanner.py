"""Tests for the loxexpr scanner.

Covers:
- Punctuation, one- and two-character operators
- Number, string, identifier and keyword literals
- Comments and line counting
- Lexical error resilience
"""

from __future__ import annotations

from loxexpr.core.diagnostics import Diagnostics
from loxexpr.core.expression_lang.scanner import scan
from loxexpr.core.ir.tokens import TokenKind


def kinds(source: str) -> list[TokenKind]:
    return [t.kind for t in scan(source)]


# ============================================================================
# Token kinds
# ============================================================================


class TestTokenKinds:
    def test_punctuation(self) -> None:
        assert kinds("(){},.-+;*/") == [
            TokenKind.LEFT_PAREN,
            TokenKind.RIGHT_PAREN,
            TokenKind.LEFT_BRACE,
            TokenKind.RIGHT_BRACE,
            TokenKind.COMMA,
            TokenKind.DOT,
            TokenKind.MINUS,
            TokenKind.PLUS,
            TokenKind.SEMICOLON,
            TokenKind.STAR,
            TokenKind.SLASH,
            TokenKind.EOF,
        ]

    def test_two_character_operators(self) -> None:
        assert kinds("!= == <= >=") == [
            TokenKind.BANG_EQUAL,
            TokenKind.EQUAL_EQUAL,
            TokenKind.LESS_EQUAL,
            TokenKind.GREATER_EQUAL,
            TokenKind.EOF,
        ]

    def test_one_character_fallbacks(self) -> None:
        assert kinds("! = < >") == [
            TokenKind.BANG,
            TokenKind.EQUAL,
            TokenKind.LESS,
            TokenKind.GREATER,
            TokenKind.EOF,
        ]

    def test_adjacent_operators_without_spaces(self) -> None:
        assert kinds("!!=") == [TokenKind.BANG, TokenKind.BANG_EQUAL, TokenKind.EOF]

    def test_keywords(self) -> None:
        source = "and class else false for fun if nil or print return super this true var while"
        assert kinds(source)[:-1] == [
            TokenKind.AND,
            TokenKind.CLASS,
            TokenKind.ELSE,
            TokenKind.FALSE,
            TokenKind.FOR,
            TokenKind.FUN,
            TokenKind.IF,
            TokenKind.NIL,
            TokenKind.OR,
            TokenKind.PRINT,
            TokenKind.RETURN,
            TokenKind.SUPER,
            TokenKind.THIS,
            TokenKind.TRUE,
            TokenKind.VAR,
            TokenKind.WHILE,
        ]

    def test_identifier(self) -> None:
        tokens = scan("_my_var2 orchid")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
            TokenKind.EOF,
        ]
        assert tokens[0].lexeme == "_my_var2"
        assert tokens[1].lexeme == "orchid"
        assert tokens[0].literal is None


# ============================================================================
# Literals
# ============================================================================


class TestLiterals:
    def test_integer_number_is_float(self) -> None:
        token = scan("42")[0]
        assert token.kind == TokenKind.NUMBER
        assert token.lexeme == "42"
        assert token.literal == 42.0
        assert isinstance(token.literal, float)

    def test_fractional_number(self) -> None:
        token = scan("3.25")[0]
        assert token.literal == 3.25
        assert token.lexeme == "3.25"

    def test_trailing_dot_not_part_of_number(self) -> None:
        tokens = scan("123.")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF]
        assert tokens[0].lexeme == "123"

    def test_leading_dot_not_part_of_number(self) -> None:
        tokens = scan(".5")
        assert [t.kind for t in tokens] == [TokenKind.DOT, TokenKind.NUMBER, TokenKind.EOF]
        assert tokens[1].literal == 5.0

    def test_string(self) -> None:
        token = scan('"hello world"')[0]
        assert token.kind == TokenKind.STRING
        assert token.lexeme == '"hello world"'
        assert token.literal == "hello world"

    def test_empty_string(self) -> None:
        token = scan('""')[0]
        assert token.kind == TokenKind.STRING
        assert token.literal == ""

    def test_multiline_string_counts_lines(self) -> None:
        tokens = scan('"a\nb"\n1')
        assert tokens[0].literal == "a\nb"
        assert tokens[0].line == 2
        assert tokens[1].line == 3


# ============================================================================
# Comments, whitespace and lines
# ============================================================================


class TestCommentsAndLines:
    def test_line_comment_produces_no_token(self) -> None:
        assert kinds("1 // 2 + 3\n4") == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]

    def test_block_comment_skipped_and_counts_lines(self) -> None:
        tokens = scan("1 /* two\nlines\n */ 2")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF]
        assert tokens[1].line == 3

    def test_block_comment_ends_at_first_close(self) -> None:
        assert kinds("/* a */ */") == [TokenKind.STAR, TokenKind.SLASH, TokenKind.EOF]

    def test_unterminated_block_comment_is_silent(self) -> None:
        diagnostics = Diagnostics()
        tokens = scan("1 /* never\nclosed", diagnostics)
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.EOF]
        assert tokens[-1].line == 2
        assert diagnostics.items == []

    def test_whitespace_skipped(self) -> None:
        assert kinds(" \t\r1\t ") == [TokenKind.NUMBER, TokenKind.EOF]

    def test_eof_carries_final_line(self) -> None:
        tokens = scan("1\n2\n\n")
        assert tokens[-1].kind == TokenKind.EOF
        assert tokens[-1].lexeme == ""
        assert tokens[-1].line == 4

    def test_empty_source(self) -> None:
        tokens = scan("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].line == 1


# ============================================================================
# Lexical errors
# ============================================================================


class TestLexicalErrors:
    def test_unexpected_characters_reported_and_scanning_continues(self) -> None:
        diagnostics = Diagnostics()
        tokens = scan("@ # 1", diagnostics)
        assert diagnostics.messages() == ["Unexpected character.", "Unexpected character."]
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.EOF]
        assert tokens[0].literal == 1.0

    def test_unexpected_character_format(self) -> None:
        diagnostics = Diagnostics()
        scan("1\n  $", diagnostics)
        assert [d.format() for d in diagnostics.items] == [
            "[line 2] Error: Unexpected character."
        ]

    def test_unterminated_string(self) -> None:
        diagnostics = Diagnostics()
        tokens = scan('"abc', diagnostics)
        assert diagnostics.messages() == ["Unterminated string."]
        assert [t.kind for t in tokens] == [TokenKind.EOF]

    def test_unterminated_string_reported_on_last_line(self) -> None:
        diagnostics = Diagnostics()
        tokens = scan('1 "abc\ndef', diagnostics)
        assert diagnostics.items[0].line == 2
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.EOF]

    def test_non_ascii_letter_is_unexpected(self) -> None:
        diagnostics = Diagnostics()
        tokens = scan("é", diagnostics)
        assert diagnostics.messages() == ["Unexpected character."]
        assert [t.kind for t in tokens] == [TokenKind.EOF]

    def test_errors_set_had_error(self) -> None:
        diagnostics = Diagnostics()
        scan("1 + 2", diagnostics)
        assert not diagnostics.had_error
        scan("?", diagnostics)
        assert diagnostics.had_error


class TestNumbers:
    def test_second_dot_starts_new_token(self) -> None:
        tokens = scan("1.2.3")
        assert [t.kind for t in tokens] == [
            TokenKind.NUMBER,
            TokenKind.DOT,
            TokenKind.NUMBER,
            TokenKind.EOF,
        ]
        assert tokens[0].literal == 1.2
        assert tokens[2].literal == 3.0

    def test_number_then_identifier(self) -> None:
        tokens = scan("12abc")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.EOF]
        assert tokens[1].lexeme == "abc"

    def test_identifier_with_digits(self) -> None:
        tokens = scan("abc12 _1")
        assert [t.lexeme for t in tokens[:-1]] == ["abc12", "_1"]
