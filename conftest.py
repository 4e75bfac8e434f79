"""Root conftest: suite plugin registration and shared fixtures for all test layers."""

from __future__ import annotations

import os
from unittest.mock import MagicMock, patch

import pytest

from saucedemo_e2e.config.env_config import get_env_config

pytest_plugins = ["saucedemo_e2e.pytest_plugin", "pytester"]

SUITE_ENV_VARS = (
    "BASE_URL",
    "TIMEOUT",
    "EXPECT_TIMEOUT",
    "WORKERS",
    "RETRIES",
    "CI",
    "LOG_LEVEL",
    "SCREENSHOT_MODE",
    "VIDEO_MODE",
    "TRACE_MODE",
    "FAIL_ON_HEALTH_CHECK",
    "NODE_ENV",
    "HEADLESS",
    "OLLAMA_API_URL",
    "OLLAMA_MODEL",
)


@pytest.fixture()
def clean_env():
    """Remove every suite environment variable for the duration of a test."""
    with patch.dict(os.environ, {}, clear=False):
        for name in SUITE_ENV_VARS:
            os.environ.pop(name, None)
        get_env_config.cache_clear()
        yield
    get_env_config.cache_clear()


class FakeClock:
    """Millisecond clock whose ``sleep`` advances time instead of blocking."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, ms: float) -> None:
        self.sleeps.append(ms)
        self.now += ms


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def mock_page() -> MagicMock:
    """A Playwright Page stand-in with a stable URL."""
    page = MagicMock()
    page.url = "https://www.saucedemo.com/"
    return page
