"""Tests for the end-to-end pipeline."""

from __future__ import annotations

import sys

from loxexpr.core.diagnostics import Diagnostic, Diagnostics
from loxexpr.core.manifest import RunMode
from loxexpr.core.runner import run_source


class TestRunSource:
    def test_prints_tree_by_default(self, diagnostics: Diagnostics) -> None:
        assert run_source("1 + 2 * 3", diagnostics) == "(+ 1 (* 2 3))"

    def test_eval_mode(self, diagnostics: Diagnostics) -> None:
        assert run_source("(1 + 2) * 3", diagnostics, RunMode.EVAL) == "9"

    def test_eval_mode_strings(self, diagnostics: Diagnostics) -> None:
        assert run_source('"a" + "b"', diagnostics, RunMode.EVAL) == "ab"

    def test_lexical_error_suppresses_output(
        self, diagnostics: Diagnostics, reported: list[Diagnostic]
    ) -> None:
        assert run_source("1 + 2 @", diagnostics) is None
        assert diagnostics.had_error
        assert [d.format() for d in reported] == ["[line 1] Error: Unexpected character."]

    def test_syntax_error_suppresses_output(self, diagnostics: Diagnostics) -> None:
        assert run_source("(1 +", diagnostics, RunMode.EVAL) is None
        assert diagnostics.messages() == ["Expect expression."]

    def test_runtime_error_suppresses_output(
        self, diagnostics: Diagnostics, reported: list[Diagnostic]
    ) -> None:
        assert run_source('1 + "x"', diagnostics, RunMode.EVAL) is None
        assert diagnostics.had_runtime_error
        assert not diagnostics.had_error
        assert len(reported) == 1

    def test_runtime_error_not_raised_in_ast_mode(self, diagnostics: Diagnostics) -> None:
        assert run_source('1 + "x"', diagnostics) == "(+ 1 x)"
        assert diagnostics.items == []

    def test_reset_between_runs(self, diagnostics: Diagnostics) -> None:
        assert run_source("?", diagnostics) is None
        diagnostics.reset()
        assert run_source("!true", diagnostics, RunMode.EVAL) == "false"


class TestDeepInput:
    def test_long_chain_ast_mode(self, diagnostics: Diagnostics) -> None:
        output = run_source("1" + " + 1" * 1000, diagnostics)
        assert output is not None
        assert output.count("(+") == 1000
        assert diagnostics.items == []

    def test_long_chain_eval_mode(self, diagnostics: Diagnostics) -> None:
        assert run_source("1" + " + 1" * 1000, diagnostics, RunMode.EVAL) == "1001"

    def test_nested_groups_ast_mode(self, diagnostics: Diagnostics) -> None:
        output = run_source("(" * 500 + "1" + ")" * 500, diagnostics)
        assert output == "(group " * 500 + "1" + ")" * 500

    def test_nested_groups_eval_mode(self, diagnostics: Diagnostics) -> None:
        source = "(" * 500 + "2 * 3" + ")" * 500
        assert run_source(source, diagnostics, RunMode.EVAL) == "6"

    def test_long_unary_chain_eval_mode(self, diagnostics: Diagnostics) -> None:
        assert run_source("-" * 1001 + "5", diagnostics, RunMode.EVAL) == "-5"

    def test_excessive_nesting_reported(
        self, diagnostics: Diagnostics, reported: list[Diagnostic]
    ) -> None:
        source = "(" * 5000 + "1" + ")" * 5000
        assert run_source(source, diagnostics, RunMode.EVAL) is None
        assert [d.message for d in reported] == ["Expression nested too deeply."]

    def test_recursion_limit_restored(self, diagnostics: Diagnostics) -> None:
        before = sys.getrecursionlimit()
        run_source("(" * 500 + "1" + ")" * 500, diagnostics)
        assert sys.getrecursionlimit() == before
