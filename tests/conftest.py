"""Shared pytest fixtures for linecalc tests."""

import pytest

from linecalc import Interpreter


@pytest.fixture
def interpreter() -> Interpreter:
    """Return a fresh interpreter with an empty variable store."""
    return Interpreter()
