"""
Intermediate representation for loxexpr: tokens and expression trees.
"""

from loxexpr.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary
from loxexpr.core.ir.tokens import KEYWORDS, Token, TokenKind

__all__ = [
    "KEYWORDS",
    "Binary",
    "Expr",
    "Grouping",
    "Literal",
    "Token",
    "TokenKind",
    "Unary",
]
