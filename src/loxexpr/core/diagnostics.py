"""
Line-addressed diagnostics shared by the scanner, parser and evaluator.

A ``Diagnostics`` collector is handed to each pipeline stage. Stages report
into it; callers inspect ``had_error`` / ``had_runtime_error`` to decide
whether to continue, and call ``reset()`` between interactive lines.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from loxexpr.core.errors import LoxRuntimeError
from loxexpr.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    """Which pipeline stage raised a diagnostic."""

    LEXICAL = "lexical"
    SYNTAX = "syntax"
    RUNTIME = "runtime"


class Diagnostic(BaseModel):
    """A single reported error."""

    kind: DiagnosticKind
    line: int
    message: str
    where: str = Field(default="", description='"", " at end" or " at \'<lexeme>\'"')

    model_config = ConfigDict(frozen=True)

    def format(self) -> str:
        """Render the diagnostic the way it is written to stderr."""
        if self.kind == DiagnosticKind.RUNTIME:
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


Reporter = Callable[[Diagnostic], None]


class Diagnostics:
    """Collects diagnostics for one pipeline run.

    Args:
        reporter: Optional callback invoked with each diagnostic as soon as it
            is reported (the CLI writes it to stderr).
    """

    def __init__(self, reporter: Reporter | None = None) -> None:
        self.reporter = reporter
        self.items: list[Diagnostic] = []

    @property
    def had_error(self) -> bool:
        """True if any lexical or syntax error was reported."""
        return any(d.kind != DiagnosticKind.RUNTIME for d in self.items)

    @property
    def had_runtime_error(self) -> bool:
        return any(d.kind == DiagnosticKind.RUNTIME for d in self.items)

    def error(self, line: int, message: str) -> None:
        """Report a scan-level error on a line."""
        self._report(Diagnostic(kind=DiagnosticKind.LEXICAL, line=line, message=message))

    def error_at(self, token: Token, message: str) -> None:
        """Report a syntax error located at a token."""
        if token.kind == TokenKind.EOF:
            where = " at end"
        else:
            where = f" at '{token.lexeme}'"
        self._report(
            Diagnostic(kind=DiagnosticKind.SYNTAX, line=token.line, message=message, where=where)
        )

    def runtime_error(self, error: LoxRuntimeError) -> None:
        line = error.line if error.line is not None else 0
        self._report(Diagnostic(kind=DiagnosticKind.RUNTIME, line=line, message=error.message))

    def reset(self) -> None:
        """Forget everything reported so far."""
        self.items.clear()

    def messages(self) -> list[str]:
        return [d.message for d in self.items]

    def _report(self, diagnostic: Diagnostic) -> None:
        logger.debug("Reported %s diagnostic on line %d", diagnostic.kind, diagnostic.line)
        self.items.append(diagnostic)
        if self.reporter is not None:
            self.reporter(diagnostic)
