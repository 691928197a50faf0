"""
Shared fixtures for the refresh workflow tests.
"""
import pytest

from coffee_finder.config.settings import RefreshSettings
from coffee_finder.models.geo import Location, Place


@pytest.fixture
def place_a() -> Place:
    return Place(name="A", coordinate=Location(10.001, 20.001))


@pytest.fixture
def place_b() -> Place:
    return Place(name="B", coordinate=Location(10.002, 20.002))


@pytest.fixture
def fast_refresh() -> RefreshSettings:
    """Refresh settings with a short debounce so timer tests stay quick."""
    return RefreshSettings(debounce_delay_seconds=0.05)
