"""
Debug printer: renders an expression tree in fully parenthesized prefix form.

    1 + 2 * 3    →  (+ 1 (* 2 3))
    (1 + 2) * 3  →  (* (group (+ 1 2)) 3)
"""

from __future__ import annotations

from loxexpr.core.expression_lang.evaluator import stringify
from loxexpr.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary


def print_ast(expr: Expr) -> str:
    # Explicit work stack: long operator chains are as deep as they are long
    parts: list[str] = []
    stack: list[Expr | str] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Literal):
            parts.append(stringify(item.value))
        elif isinstance(item, Grouping):
            stack.extend([")", item.expression, "(group "])
        elif isinstance(item, Unary):
            stack.extend([")", item.right, f"({item.operator.lexeme} "])
        elif isinstance(item, Binary):
            stack.extend([")", item.right, " ", item.left, f"({item.operator.lexeme} "])
        else:
            raise TypeError(f"Unknown expression type: {type(item).__name__}")
    return "".join(parts)
