"""
Scanner for the loxexpr language.

Converts source text into a sequence of tokens terminated by a single EOF
token. Lexical errors are reported to the diagnostics collector and scanning
carries on, so one pass can surface several independent mistakes.
"""

from __future__ import annotations

import logging

from loxexpr.core.diagnostics import Diagnostics
from loxexpr.core.ir.tokens import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char -> (kind when followed by "=", kind otherwise)
_WITH_EQUAL: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG_EQUAL, TokenKind.BANG),
    "=": (TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    "<": (TokenKind.LESS_EQUAL, TokenKind.LESS),
    ">": (TokenKind.GREATER_EQUAL, TokenKind.GREATER),
}


class Scanner:
    """Single-pass scanner over one source string."""

    def __init__(self, source: str, diagnostics: Diagnostics) -> None:
        self.source = source
        self.diagnostics = diagnostics
        self.tokens: list[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> list[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(kind=TokenKind.EOF, lexeme="", line=self.line))
        logger.debug("Scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        """Consume the next character only if it is ``expected``."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def add_token(self, kind: TokenKind, literal: float | str | None = None) -> None:
        text = self.source[self.start : self.current]
        self.tokens.append(Token(kind=kind, lexeme=text, literal=literal, line=self.line))

    # -- Lexical rules --

    def scan_token(self) -> None:
        c = self.advance()

        if c in _SINGLE_CHAR:
            self.add_token(_SINGLE_CHAR[c])
            return

        if c in _WITH_EQUAL:
            two, one = _WITH_EQUAL[c]
            self.add_token(two if self.match("=") else one)
            return

        if c == "/":
            if self.match("/"):
                self._line_comment()
            elif self.match("*"):
                self._block_comment()
            else:
                self.add_token(TokenKind.SLASH)
            return

        # Skip whitespace
        if c in " \r\t":
            return
        if c == "\n":
            self.line += 1
            return

        if c == '"':
            self._string()
            return

        if _is_digit(c):
            self._number()
            return

        if _is_alpha(c):
            self._identifier()
            return

        # The bad character is already consumed; keep scanning
        self.diagnostics.error(self.line, "Unexpected character.")

    def _line_comment(self) -> None:
        while self.peek() != "\n" and not self.is_at_end():
            self.advance()

    def _block_comment(self) -> None:
        """Consume through the closing ``*/`` or, if there is none, to end of input."""
        end = self.source.find("*/", self.current)
        stop = len(self.source) if end == -1 else end + 2
        self.line += self.source.count("\n", self.current, stop)
        self.current = stop

    def _string(self) -> None:
        end = self.source.find('"', self.current)
        if end == -1:
            self.line += self.source.count("\n", self.current)
            self.current = len(self.source)
            self.diagnostics.error(self.line, "Unterminated string.")
            return

        value = self.source[self.current : end]
        self.line += value.count("\n")
        self.current = end + 1
        self.add_token(TokenKind.STRING, value)

    def _number(self) -> None:
        while _is_digit(self.peek()):
            self.advance()

        # A fractional part needs a digit after the dot ("123." stops at the dot)
        if self.peek() == "." and _is_digit(self.peek_next()):
            self.advance()
            while _is_digit(self.peek()):
                self.advance()

        self.add_token(TokenKind.NUMBER, float(self.source[self.start : self.current]))

    def _identifier(self) -> None:
        while _is_alpha_numeric(self.peek()):
            self.advance()
        text = self.source[self.start : self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_alpha(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == "_")


def _is_alpha_numeric(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def scan(source: str, diagnostics: Diagnostics | None = None) -> list[Token]:
    """Scan a source string into a list of tokens.

    Args:
        source: Program text.
        diagnostics: Collector for lexical errors. A private one is used if
            omitted, in which case errors are only visible in the logs.

    Returns:
        Tokens in source order, always ending with exactly one EOF token.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    return Scanner(source, diagnostics).scan_tokens()
