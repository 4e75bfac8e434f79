"""Shared navigation and locator helpers for page objects.

Screen objects do not inherit from a base class; each one receives a
``PageHelpers`` instance wrapping the same Playwright ``Page``.  The helper
centralizes guarded navigation, the ``data-test`` locator convention and a
self-healing lookup that walks a list of fallback selectors.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence
from urllib.parse import urlparse

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config.env_config import DEFAULT_BASE_URL
from ..errors import NavigationTimeoutError, ValidationError, WaitTimeoutError

logger = logging.getLogger("saucedemo-e2e.pages")

TEST_ID_ATTRIBUTE = "data-test"

_ALLOWED_PATH = re.compile(r"^[A-Za-z0-9/._~?#&=%+\-]+$")


def validate_relative_path(path: str) -> str:
    """Return *path* as a leading-slash relative path or raise ``ValidationError``."""
    if not isinstance(path, str) or not path.strip():
        raise ValidationError("Navigation path must be a non-empty string")
    if path.startswith("//") or urlparse(path).scheme:
        raise ValidationError(f"Navigation path must be relative, got absolute URL: {path!r}")
    if not _ALLOWED_PATH.match(path):
        raise ValidationError(f"Navigation path contains disallowed characters: {path!r}")
    return path if path.startswith("/") else f"/{path}"


class PageHelpers:
    """Navigation and locator helpers injected into every page object."""

    def __init__(
        self,
        page: Page,
        base_url: str = DEFAULT_BASE_URL,
        navigation_timeout: float = 30_000,
    ) -> None:
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.navigation_timeout = navigation_timeout

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def goto(self, path: str = "/") -> None:
        """Navigate to *path* under the base URL and wait for the load event."""
        url = f"{self.base_url}{validate_relative_path(path)}"
        logger.info("Navigating to %s", url)
        try:
            self.page.goto(url, wait_until="load", timeout=self.navigation_timeout)
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(
                f"Navigation to {url} did not load within {self.navigation_timeout}ms"
            ) from exc

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Locators
    # ------------------------------------------------------------------

    def by_test_id(self, test_id: str) -> Locator:
        """Return a lazy locator for ``[data-test="<test_id>"]``."""
        return self.page.locator(f'[{TEST_ID_ATTRIBUTE}="{test_id}"]')

    def find(
        self,
        primary: str,
        fallbacks: Sequence[str] = (),
        *,
        timeout: float = 5_000,
    ) -> Locator:
        """Locate an element with a self-healing fallback chain.

        Parameters
        ----------
        primary:
            The preferred Playwright selector.
        fallbacks:
            Ordered alternative selectors to try when *primary* is not
            visible within *timeout* ms.
        timeout:
            Milliseconds to wait for each selector before trying the next.

        Returns
        -------
        Locator
            The first locator whose element is visible on the page.

        Raises
        ------
        WaitTimeoutError
            When none of the selectors resolve to a visible element.
        """
        all_selectors = [primary, *fallbacks]
        last_error: Exception | None = None

        for selector in all_selectors:
            try:
                locator = self.page.locator(selector)
                locator.first.wait_for(state="visible", timeout=timeout)
                if selector != primary:
                    logger.warning(
                        "Self-healed: primary '%s' failed, used fallback '%s'",
                        primary,
                        selector,
                    )
                return locator
            except (PlaywrightTimeoutError, TimeoutError) as exc:
                last_error = exc
                logger.debug("Selector '%s' not visible, trying next fallback", selector)

        raise WaitTimeoutError(
            f"Self-healing exhausted all selectors: {all_selectors}",
            last_state=all_selectors,
        ) from last_error

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def wait_for_load(self, state: str = "networkidle") -> None:
        """Wait until the page reaches the given load state."""
        self.page.wait_for_load_state(state)

    def screenshot(self, path: str = "screenshot.png") -> bytes:
        """Capture a full-page screenshot."""
        return self.page.screenshot(path=path, full_page=True)
