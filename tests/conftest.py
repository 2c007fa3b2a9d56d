"""Shared test fixtures."""

import pytest

from fakes import make_metadata


@pytest.fixture
def metadata():
    return make_metadata()


@pytest.fixture
def sleeps():
    """Recorded sleep durations; pass ``sleeps.append`` as the sleep function."""
    return []
