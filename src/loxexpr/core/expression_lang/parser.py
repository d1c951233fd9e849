"""
Recursive descent parser for the loxexpr language.

Grammar (precedence low to high, binary levels are left-associative):
    expression  → equality
    equality    → comparison (("!=" | "==") comparison)*
    comparison  → term ((">" | ">=" | "<" | "<=") term)*
    term        → factor (("-" | "+") factor)*
    factor      → unary (("/" | "*") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from loxexpr.core.diagnostics import Diagnostics
from loxexpr.core.errors import ParseError
from loxexpr.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary
from loxexpr.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Tokens that plausibly begin a new statement; synchronize() stops before them
_STATEMENT_STARTS = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.FUN,
        TokenKind.VAR,
        TokenKind.FOR,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.PRINT,
        TokenKind.RETURN,
    }
)


class Parser:
    """Recursive descent parser over a scanned token list."""

    def __init__(self, tokens: list[Token], diagnostics: Diagnostics) -> None:
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.pos = 0

    def parse(self) -> Expr | None:
        """Parse one expression.

        Returns:
            The expression tree, or None if a syntax error was reported.
        """
        try:
            expr = self.expression()
        except ParseError as e:
            logger.debug("Parse abandoned: %s", e)
            self.synchronize()
            return None
        except RecursionError:
            logger.debug("Parse abandoned: recursion limit reached at token %d", self.pos)
            self.diagnostics.error_at(self.current, "Expression nested too deeply.")
            self.synchronize()
            return None
        logger.debug("Parsed expression ending before token %d", self.pos)
        return expr

    # -- Cursor --

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.current.kind == kind

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.current, message)

    def error(self, token: Token, message: str) -> ParseError:
        """Report a syntax error and return the exception used to unwind."""
        self.diagnostics.error_at(token, message)
        return ParseError(message, token)

    def synchronize(self) -> None:
        """Discard tokens up to a likely statement boundary."""
        self.advance()
        while not self.is_at_end():
            if self.previous.kind == TokenKind.SEMICOLON:
                return
            if self.current.kind in _STATEMENT_STARTS:
                return
            self.advance()

    # -- Grammar rules --

    def expression(self) -> Expr:
        return self.equality()

    def _binary_level(self, operand: Callable[[], Expr], *operators: TokenKind) -> Expr:
        """operand (operator operand)*, folded into a left-deep tree."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous
            right = operand()
            expr = Binary(left=expr, operator=operator, right=right)
        return expr

    def equality(self) -> Expr:
        return self._binary_level(
            self.comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL
        )

    def comparison(self) -> Expr:
        return self._binary_level(
            self.term,
            TokenKind.GREATER,
            TokenKind.GREATER_EQUAL,
            TokenKind.LESS,
            TokenKind.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._binary_level(self.factor, TokenKind.MINUS, TokenKind.PLUS)

    def factor(self) -> Expr:
        return self._binary_level(self.unary, TokenKind.SLASH, TokenKind.STAR)

    def unary(self) -> Expr:
        """('!' | '-') unary | primary"""
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous
            right = self.unary()
            return Unary(operator=operator, right=right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenKind.FALSE):
            return Literal(value=False)
        if self.match(TokenKind.TRUE):
            return Literal(value=True)
        if self.match(TokenKind.NIL):
            return Literal(value=None)

        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(value=self.previous.literal)

        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expression=expr)

        raise self.error(self.current, "Expect expression.")


def parse(tokens: list[Token], diagnostics: Diagnostics | None = None) -> Expr | None:
    """Parse a token list into an expression tree.

    Args:
        tokens: Output of the scanner, terminated by EOF.
        diagnostics: Collector for syntax errors.

    Returns:
        Parsed expression, or None if the tokens are not a valid expression.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    return Parser(tokens, diagnostics).parse()
