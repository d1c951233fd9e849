"""
Expression tree for loxexpr.

A closed set of four node variants. Children are owned by their parent
and nodes are frozen, so a tree is read-only once the parser returns it.

- Literal:  nil, true, false, numbers, strings
- Grouping: ( expr )
- Unary:    ! expr, - expr
- Binary:   expr op expr
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from loxexpr.core.ir.tokens import Token

# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: number, string, boolean, or None (nil)."""

    # bool first so pydantic never coerces True/False into a float
    value: bool | float | str | None = Field(default=None, description="The literal value")

    model_config = ConfigDict(frozen=True)


class Grouping(BaseModel):
    """A parenthesized expression."""

    expression: Expr

    model_config = ConfigDict(frozen=True)


class Unary(BaseModel):
    """Prefix operation: operator right. Operator is ``!`` or ``-``."""

    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)


class Binary(BaseModel):
    """Infix operation: left operator right."""

    left: Expr
    operator: Token
    right: Expr

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Grouping | Unary | Binary

# Rebuild models for recursive forward references
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()
