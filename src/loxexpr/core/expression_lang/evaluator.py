"""
Expression evaluator for the loxexpr language.

Reduces an expression tree to a runtime value by walking it. Values are the
closed set nil (None), booleans, numbers (float) and strings. Operand types
are checked at runtime; the first mismatch aborts the whole evaluation with
a LoxRuntimeError carrying the offending operator token.
"""

from __future__ import annotations

import logging
import math

from loxexpr.core.diagnostics import Diagnostics
from loxexpr.core.errors import LoxRuntimeError
from loxexpr.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary
from loxexpr.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

Value = bool | float | str | None


def evaluate(expr: Expr) -> Value:
    """Evaluate an expression tree.

    Operands are evaluated left to right.

    Args:
        expr: Parsed expression tree.

    Returns:
        The computed value.

    Raises:
        LoxRuntimeError: If an operator receives operands of the wrong type.
    """
    return _interpret(expr)


def _interpret(expr: Expr) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, Grouping):
        return _interpret(expr.expression)

    if isinstance(expr, Unary):
        return _interpret_unary(expr)

    if isinstance(expr, Binary):
        return _interpret_binary(expr)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_unary(expr: Unary) -> Value:
    right = _interpret(expr.right)
    op = expr.operator.kind

    if op == TokenKind.BANG:
        return not is_truthy(right)
    if op == TokenKind.MINUS:
        _check_number_operand(expr.operator, right)
        return -right

    raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")


def _interpret_binary(expr: Binary) -> Value:
    """Evaluate a left-deep chain of binary nodes without recursing down its spine."""
    spine: list[Binary] = []
    node: Expr = expr
    while isinstance(node, Binary):
        spine.append(node)
        node = node.left

    value = _interpret(node)
    for binary in reversed(spine):
        right = _interpret(binary.right)
        value = _apply_binary(binary.operator, value, right)
    return value


def _apply_binary(operator: Token, left: Value, right: Value) -> Value:
    op = operator.kind

    if op == TokenKind.EQUAL_EQUAL:
        return is_equal(left, right)
    if op == TokenKind.BANG_EQUAL:
        return not is_equal(left, right)

    if op == TokenKind.PLUS:
        if isinstance(left, float) and isinstance(right, float):
            return left + right
        if isinstance(left, str) and isinstance(right, str):
            return left + right
        raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

    # Everything else is numeric only
    _check_number_operands(operator, left, right)

    if op == TokenKind.MINUS:
        return left - right
    if op == TokenKind.STAR:
        return left * right
    if op == TokenKind.SLASH:
        return _divide(left, right)
    if op == TokenKind.GREATER:
        return left > right
    if op == TokenKind.GREATER_EQUAL:
        return left >= right
    if op == TokenKind.LESS:
        return left < right
    if op == TokenKind.LESS_EQUAL:
        return left <= right

    raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")


def _divide(left: float, right: float) -> float:
    """IEEE 754 division: x/0 is ±inf and 0/0 is nan, never ZeroDivisionError."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _check_number_operand(operator: Token, operand: Value) -> None:
    if not isinstance(operand, float):
        raise LoxRuntimeError(operator, "Operand must be a number.")


def _check_number_operands(operator: Token, left: Value, right: Value) -> None:
    if not (isinstance(left, float) and isinstance(right, float)):
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def is_truthy(value: Value) -> bool:
    """nil and false are falsy; everything else, including 0 and "", is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left: Value, right: Value) -> bool:
    # type() check stops Python's True == 1.0 from leaking through
    if left is None:
        return right is None
    if type(left) is not type(right):
        return False
    if isinstance(left, float):
        return _same_number(left, right)
    return left == right


def _same_number(left: float, right: float) -> bool:
    """Value identity rather than IEEE comparison: NaN equals NaN, -0 differs from 0."""
    if math.isnan(left) or math.isnan(right):
        return math.isnan(left) and math.isnan(right)
    return left == right and math.copysign(1.0, left) == math.copysign(1.0, right)


def stringify(value: Value) -> str:
    """Render a runtime value as program output."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return value


class Interpreter:
    """Top-level evaluation entry point.

    The single place where runtime errors are caught: they are reported to
    the diagnostics collector and never propagate further.
    """

    def __init__(self, diagnostics: Diagnostics) -> None:
        self.diagnostics = diagnostics

    def interpret(self, expr: Expr) -> str | None:
        """Evaluate and stringify, or report the runtime error and return None."""
        try:
            value = evaluate(expr)
        except LoxRuntimeError as e:
            logger.debug("Evaluation aborted: %s", e)
            self.diagnostics.runtime_error(e)
            return None
        except RecursionError:
            logger.debug("Evaluation aborted: recursion limit reached")
            self.diagnostics.runtime_error(
                LoxRuntimeError(_operator_token(expr), "Expression nested too deeply.")
            )
            return None
        logger.debug("Evaluated to %r", value)
        return stringify(value)


def _operator_token(expr: Expr) -> Token | None:
    """The outermost operator of an expression, for locating an error."""
    while isinstance(expr, Grouping):
        expr = expr.expression
    if isinstance(expr, (Unary, Binary)):
        return expr.operator
    return None
