"""Shared pytest fixtures for loxexpr tests."""

import pytest

from loxexpr.core.diagnostics import Diagnostic, Diagnostics


@pytest.fixture
def reported() -> list[Diagnostic]:
    """Diagnostics in the order they were reported."""
    return []


@pytest.fixture
def diagnostics(reported: list[Diagnostic]) -> Diagnostics:
    """A collector that records into ``reported`` as errors are raised."""
    return Diagnostics(reporter=reported.append)
