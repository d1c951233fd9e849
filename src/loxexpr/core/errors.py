"""
Error types for loxexpr scanning, parsing, evaluation and configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxexpr.core.ir.tokens import Token


class LoxError(Exception):
    """Base exception for all loxexpr errors."""

    def __init__(self, message: str, token: Token | None = None):
        self.message = message
        self.token = token
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the token location if available."""
        if self.token is not None:
            return f"[line {self.token.line}] {self.message}"
        return self.message

    @property
    def line(self) -> int | None:
        return self.token.line if self.token is not None else None


class ParseError(LoxError):
    """
    Raised inside the parser to abandon the current parse attempt.

    The error has already been reported to the diagnostics collector by the
    time it is raised; ``Parser.parse`` catches it and returns ``None``.
    """

    pass


class LoxRuntimeError(LoxError):
    """
    Raised when evaluation hits an operand of the wrong type.

    Examples:
    - Negating a string
    - Comparing a number with nil
    - Adding a number to a string
    """

    def __init__(self, token: Token | None, message: str):
        super().__init__(message, token)


class ConfigError(LoxError):
    """Raised when a loxexpr.toml file holds an invalid value."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
