"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest
from hypothesis import settings

from maptos_config.env import EnvironmentSnapshot
from tests.maptos_config.helpers import FixedRandomSource

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")


@pytest.fixture
def fixed_rng() -> FixedRandomSource:
    """A random source whose output is known in advance."""
    return FixedRandomSource()


@pytest.fixture
def empty_env() -> EnvironmentSnapshot:
    """A snapshot with no external inputs at all."""
    return EnvironmentSnapshot({})
