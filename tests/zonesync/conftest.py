"""Shared fixtures for zonesync tests."""

import pytest

from zonesync.catalog import TimeZoneCatalog


@pytest.fixture(scope="session")
def catalog() -> TimeZoneCatalog:
    return TimeZoneCatalog()
