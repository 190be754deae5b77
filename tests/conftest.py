"""Shared fixtures for the PatternLab test-suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from patternlab.core.settings import load_settings


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Iterator[None]:
    """Rebuild the cached settings after every test.

    Tests that `monkeypatch` environment variables call `cache_clear()`
    themselves; clearing again afterwards keeps their overrides from leaking
    into the next test once `monkeypatch` has restored the environment.
    """
    yield
    load_settings.cache_clear()
