"""
The source → tokens → tree → output pipeline.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from loxexpr.core.diagnostics import Diagnostics
from loxexpr.core.expression_lang.evaluator import Interpreter
from loxexpr.core.expression_lang.parser import Parser
from loxexpr.core.expression_lang.printer import print_ast
from loxexpr.core.expression_lang.scanner import Scanner
from loxexpr.core.manifest import RunMode

logger = logging.getLogger(__name__)

# Each nested parenthesis costs about a dozen parser frames
RECURSION_LIMIT = 20_000


@contextmanager
def recursion_headroom(limit: int = RECURSION_LIMIT) -> Iterator[None]:
    """Temporarily raise the interpreter recursion limit to at least ``limit``."""
    previous = sys.getrecursionlimit()
    if previous >= limit:
        yield
        return
    sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def run_source(
    source: str,
    diagnostics: Diagnostics,
    mode: RunMode = RunMode.AST,
) -> str | None:
    """Run the whole pipeline over one piece of source text.

    Args:
        source: Program text (a file, or one interactive line).
        diagnostics: Collector that receives every error raised on the way.
        mode: Print the parsed tree, or evaluate it.

    Returns:
        The text to write to stdout, or None if a diagnostic suppressed output.
    """
    tokens = Scanner(source, diagnostics).scan_tokens()

    with recursion_headroom():
        expr = Parser(tokens, diagnostics).parse()

        # Stop if there was a lexical or syntax error
        if diagnostics.had_error or expr is None:
            logger.debug("Skipping output: %d diagnostic(s)", len(diagnostics.items))
            return None

        if mode == RunMode.EVAL:
            return Interpreter(diagnostics).interpret(expr)
        return print_ast(expr)
