"""Shared fixtures."""

import pytest

from microemitter import reset


@pytest.fixture(autouse=True)
def fresh_default_bus():
    """Give every test an empty process-wide emitter."""
    reset()
    yield
    reset()
