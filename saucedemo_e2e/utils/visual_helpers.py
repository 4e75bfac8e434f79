"""Screenshot capture and a naive byte-level comparison."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from playwright.sync_api import Locator, Page

logger = logging.getLogger("saucedemo-e2e.visual")


@dataclass(frozen=True)
class ScreenshotComparison:
    match: bool
    difference: float


def take_element_screenshot(locator: Locator, name: str) -> bytes:
    logger.debug("Taking screenshot of element: %s", name)
    return locator.screenshot()


def take_full_page_screenshot(page: Page, name: str) -> bytes:
    logger.debug("Taking full page screenshot: %s", name)
    return page.screenshot(full_page=True)


def compare_screenshots(first: bytes, second: bytes, threshold: float = 0.1) -> ScreenshotComparison:
    """Compare two encoded screenshots byte by byte.

    Buffers of different length never match.  *threshold* is the largest
    accepted fraction of differing bytes.  Use Playwright's
    ``to_have_screenshot`` or a dedicated service for real visual regression.
    """
    if len(first) != len(second):
        result = ScreenshotComparison(match=False, difference=1.0)
    elif not first:
        result = ScreenshotComparison(match=True, difference=0.0)
    else:
        differences = sum(1 for a, b in zip(first, second) if a != b)
        ratio = differences / len(first)
        result = ScreenshotComparison(match=ratio <= threshold, difference=ratio)

    logger.debug(
        "Screenshot comparison result: match=%s difference=%s threshold=%s",
        result.match,
        result.difference,
        threshold,
    )
    return result


def wait_for_visual_stability(page: Page, timeout: float = 2_000, settle_time: float = 500) -> None:
    """Wait for network idle, then give CSS transitions *settle_time* ms to finish."""
    logger.debug("Waiting for visual stability (timeout: %sms)", timeout)
    page.wait_for_load_state("networkidle", timeout=timeout)
    page.wait_for_timeout(settle_time)
