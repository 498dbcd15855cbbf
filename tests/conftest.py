"""Shared pytest fixtures for sigflow tests."""

import pytest

from sigflow import use_runtime


@pytest.fixture(autouse=True)
def runtime():
    """Give every test its own reactive graph."""
    with use_runtime() as rt:
        yield rt
