"""
Pytest fixtures for slice service tests.
"""

import pytest

from slice_service.config import get_settings


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate tests from slice service settings in the real environment.

    Clears the cached settings so each test sees its own environment.
    """
    for var in (
        "ENVIRONMENT",
        "DEFAULT_SLICE_HEIGHT",
        "DEFAULT_VIEWPORT_SIZE",
        "MAX_SLICES",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
