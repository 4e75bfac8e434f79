"""Test-layer conftest: marker registration."""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Pytest configuration hook - wire up markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom markers so --strict-markers does not complain."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated, no browser)")
    config.addinivalue_line("markers", "e2e: End-to-end Playwright tests against SauceDemo")
    config.addinivalue_line("markers", "smoke: Critical-path checks run on every change")
    config.addinivalue_line("markers", "regression: Broader behavioural coverage")
    config.addinivalue_line("markers", "api: HTTP-level tests without a browser tab")
    config.addinivalue_line("markers", "slow: Slow-running tests")
