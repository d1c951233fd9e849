"""
loxexpr - scanner, parser and tree-walking evaluator for Lox expressions.
"""

from loxexpr._version import get_version
from loxexpr.core.diagnostics import Diagnostic, Diagnostics
from loxexpr.core.errors import LoxError, LoxRuntimeError
from loxexpr.core.expression_lang import Interpreter, evaluate, parse, print_ast, scan
from loxexpr.core.manifest import RunMode
from loxexpr.core.runner import run_source

__version__ = get_version()

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Interpreter",
    "LoxError",
    "LoxRuntimeError",
    "RunMode",
    "__version__",
    "evaluate",
    "parse",
    "print_ast",
    "run_source",
    "scan",
]
