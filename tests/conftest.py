"""Pytest configuration and fixtures."""

import pytest

from helpers import FakeSession


@pytest.fixture
def make_session():
    """Factory for in-memory remote sessions."""
    return FakeSession
