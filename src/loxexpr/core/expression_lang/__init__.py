"""
loxexpr expression language front end.

Scanner, parser, evaluator and debug printer for single Lox expressions.

Usage:
    from loxexpr.core.expression_lang import evaluate, parse, print_ast, scan

    expr = parse(scan("1 + 2 * 3"))
    print_ast(expr)   # "(+ 1 (* 2 3))"
    evaluate(expr)    # 7.0
"""

from loxexpr.core.expression_lang.evaluator import Interpreter, evaluate, stringify
from loxexpr.core.expression_lang.parser import Parser, parse
from loxexpr.core.expression_lang.printer import print_ast
from loxexpr.core.expression_lang.scanner import Scanner, scan

__all__ = [
    "Interpreter",
    "Parser",
    "Scanner",
    "evaluate",
    "parse",
    "print_ast",
    "scan",
    "stringify",
]
