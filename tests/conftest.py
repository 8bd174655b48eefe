"""Pytest configuration and shared fixtures for the wxmark test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from wxmark.exceptions import MathRenderError
from wxmark.options import RendererOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Keep a developer's WXMARK_CONFIG from leaking into tests."""
    monkeypatch.delenv("WXMARK_CONFIG", raising=False)


@pytest.fixture
def fake_math():
    """Math engine stand-in that wraps the formula in a <math> element."""

    def render(formula: str, display: bool) -> str:
        mode = "block" if display else "inline"
        return f'<math display="{mode}">{formula}</math>'

    return render


@pytest.fixture
def failing_math():
    """Math engine stand-in that rejects every formula."""

    def render(formula: str, display: bool) -> str:
        raise MathRenderError(formula)

    return render


@pytest.fixture
def colored_options() -> RendererOptions:
    """Options with a global text color and a paragraph size."""
    return RendererOptions(base={"color": "#112233"}, block={"p": {"fontSize": 15}})

