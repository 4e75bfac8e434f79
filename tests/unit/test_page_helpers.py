"""Unit tests for the shared page helpers (no browser required).

Tests navigation, locator conventions and the self-healing finder using
mocked Playwright Page objects.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from saucedemo_e2e.errors import NavigationTimeoutError, ValidationError, WaitTimeoutError
from saucedemo_e2e.pages.base_page import PageHelpers, validate_relative_path


@pytest.mark.unit
class TestPageHelpersInit:
    """Verify PageHelpers construction and URL building."""

    def test_default_base_url(self):
        helpers = PageHelpers(MagicMock())
        assert helpers.base_url == "https://www.saucedemo.com"

    def test_custom_base_url_strips_trailing_slash(self):
        helpers = PageHelpers(MagicMock(), "https://example.com/")
        assert helpers.base_url == "https://example.com"

    def test_goto_builds_full_url(self):
        page = MagicMock()
        helpers = PageHelpers(page, "https://example.com", navigation_timeout=15_000)
        helpers.goto("/about")
        page.goto.assert_called_once_with("https://example.com/about", wait_until="load", timeout=15_000)

    def test_goto_adds_leading_slash(self):
        page = MagicMock()
        PageHelpers(page, "https://example.com").goto("inventory.html")
        assert page.goto.call_args.args[0] == "https://example.com/inventory.html"

    def test_goto_timeout_becomes_navigation_timeout(self):
        page = MagicMock()
        page.goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded")
        helpers = PageHelpers(page, "https://example.com")

        with pytest.raises(NavigationTimeoutError, match="https://example.com/cart.html"):
            helpers.goto("/cart.html")

    def test_title_delegates_to_page(self):
        page = MagicMock()
        page.title.return_value = "Swag Labs"
        assert PageHelpers(page).title == "Swag Labs"

    def test_url_delegates_to_page(self):
        page = MagicMock()
        page.url = "https://www.saucedemo.com/inventory.html"
        assert PageHelpers(page).url == "https://www.saucedemo.com/inventory.html"

    def test_by_test_id_uses_data_test_attribute(self):
        page = MagicMock()
        PageHelpers(page).by_test_id("shopping-cart-link")
        page.locator.assert_called_once_with('[data-test="shopping-cart-link"]')


@pytest.mark.unit
class TestValidateRelativePath:

    @pytest.mark.parametrize("path", ["/", "/inventory.html", "/cart.html?x=1#top", "checkout-step-one.html"])
    def test_accepts_relative_paths(self, path):
        assert validate_relative_path(path).startswith("/")

    @pytest.mark.parametrize(
        "path",
        ["", "   ", "https://evil.example", "//evil.example/x", "javascript:alert(1)", "/with space", "/<script>"],
    )
    def test_rejects_unsafe_paths(self, path):
        with pytest.raises(ValidationError):
            validate_relative_path(path)

    def test_rejected_path_never_reaches_page(self):
        page = MagicMock()
        with pytest.raises(ValidationError):
            PageHelpers(page).goto("https://evil.example")
        page.goto.assert_not_called()


@pytest.mark.unit
class TestSelfHealingFind:
    """Verify the self-healing locator fallback chain."""

    def test_returns_primary_when_visible(self):
        page = MagicMock()
        locator = MagicMock()
        page.locator.return_value = locator

        result = PageHelpers(page).find("#user-name")

        assert result is locator
        page.locator.assert_called_once_with("#user-name")
        locator.first.wait_for.assert_called_once_with(state="visible", timeout=5_000)

    def test_falls_back_when_primary_fails(self, caplog):
        page = MagicMock()
        primary_locator = MagicMock()
        primary_locator.first.wait_for.side_effect = PlaywrightTimeoutError("not found")
        fallback_locator = MagicMock()
        page.locator.side_effect = [primary_locator, fallback_locator]

        with caplog.at_level(logging.WARNING, logger="saucedemo-e2e"):
            result = PageHelpers(page).find("#user-name", fallbacks=('[data-test="username"]',))

        assert result is fallback_locator
        assert "Self-healed" in caplog.text

    def test_raises_timeout_when_all_fail(self):
        page = MagicMock()
        locator = MagicMock()
        locator.first.wait_for.side_effect = TimeoutError("nope")
        page.locator.return_value = locator

        with pytest.raises(WaitTimeoutError, match="exhausted") as excinfo:
            PageHelpers(page).find("#login-button", fallbacks=("button", ".btn"))

        assert excinfo.value.last_state == ["#login-button", "button", ".btn"]

    def test_tries_all_selectors_in_order(self):
        page = MagicMock()
        failing = MagicMock()
        failing.first.wait_for.side_effect = TimeoutError()
        success = MagicMock()
        page.locator.side_effect = [failing, failing, success]

        result = PageHelpers(page).find("primary", fallbacks=("fallback1", "fallback2"))

        assert result is success
        assert [c.args[0] for c in page.locator.call_args_list] == ["primary", "fallback1", "fallback2"]


@pytest.mark.unit
class TestConvenienceHelpers:

    def test_wait_for_load_defaults_to_network_idle(self):
        page = MagicMock()
        PageHelpers(page).wait_for_load()
        page.wait_for_load_state.assert_called_once_with("networkidle")

    def test_screenshot_is_full_page(self):
        page = MagicMock()
        page.screenshot.return_value = b"png"
        assert PageHelpers(page).screenshot("shot.png") == b"png"
        page.screenshot.assert_called_once_with(path="shot.png", full_page=True)
