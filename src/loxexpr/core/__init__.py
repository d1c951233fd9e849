"""
Core of loxexpr: token/tree model, scanner, parser, evaluator, diagnostics.
"""
