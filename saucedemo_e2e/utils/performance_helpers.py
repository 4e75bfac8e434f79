"""Page performance measurements from the browser's timing entries."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable

from playwright.sync_api import Page, Response

from ..errors import PageAssertionError

logger = logging.getLogger("saucedemo-e2e.performance")

_METRICS_SCRIPT = """() => {
  const navigation = performance.getEntriesByType('navigation')[0];
  if (!navigation) {
    throw new Error('Navigation timing not available');
  }
  const paint = performance.getEntriesByType('paint');
  const firstPaint = paint.find((entry) => entry.name === 'first-paint');
  const firstContentfulPaint = paint.find((entry) => entry.name === 'first-contentful-paint');
  return {
    load_time: navigation.loadEventEnd - navigation.fetchStart,
    dom_content_loaded: navigation.domContentLoadedEventEnd - navigation.fetchStart,
    first_paint: firstPaint ? firstPaint.startTime : 0,
    first_contentful_paint: firstContentfulPaint ? firstContentfulPaint.startTime : 0,
    time_to_interactive: navigation.domInteractive - navigation.fetchStart,
    total_size: navigation.transferSize,
    request_count: performance.getEntriesByType('resource').length,
  };
}"""

_RESOURCES_SCRIPT = """() => performance.getEntriesByType('resource').map((entry) => ({
  url: entry.name,
  size: entry.transferSize,
  type: entry.initiatorType,
}))"""


@dataclass(frozen=True)
class PerformanceMetrics:
    """Timing snapshot for the current document, all values in ms except sizes."""

    load_time: float
    dom_content_loaded: float
    first_paint: float
    first_contentful_paint: float
    time_to_interactive: float
    total_size: int
    request_count: int

    def to_dict(self) -> dict:
        return asdict(self)


def measure_page_performance(page: Page) -> PerformanceMetrics:
    logger.debug("Measuring page performance")
    raw = page.evaluate(_METRICS_SCRIPT)
    metrics = PerformanceMetrics(
        load_time=float(raw["load_time"]),
        dom_content_loaded=float(raw["dom_content_loaded"]),
        first_paint=float(raw["first_paint"]),
        first_contentful_paint=float(raw["first_contentful_paint"]),
        time_to_interactive=float(raw["time_to_interactive"]),
        total_size=int(raw["total_size"]),
        request_count=int(raw["request_count"]),
    )
    logger.info("Performance metrics collected: %s", metrics.to_dict())
    return metrics


def assert_load_time(page: Page, max_load_time: float) -> PerformanceMetrics:
    """Fail when the page's load time exceeds *max_load_time* ms."""
    metrics = measure_page_performance(page)
    if metrics.load_time > max_load_time:
        raise PageAssertionError(
            f"Page load time {metrics.load_time}ms exceeds maximum {max_load_time}ms"
        )
    logger.info("Page load time %sms is within threshold %sms", metrics.load_time, max_load_time)
    return metrics


def monitor_slow_requests(page: Page, slow_threshold: float = 1_000) -> Callable[[Response], None]:
    """Log a warning for every response slower than *slow_threshold* ms.

    The listener is best-effort and never raises into the test.  It is
    returned so callers can detach it with ``page.remove_listener``.
    """
    logger.debug("Monitoring network requests")

    def on_response(response: Response) -> None:
        try:
            timing = response.request.timing
            duration = float(timing.get("responseEnd", 0)) - float(timing.get("requestStart", 0))
        except (AttributeError, TypeError, ValueError):
            logger.debug("Timing information not available for request")
            return
        if duration > slow_threshold:
            logger.warning("Slow request detected: %s took %sms", response.url, duration)

    page.on("response", on_response)
    return on_response


def get_resource_sizes(page: Page) -> list[dict]:
    logger.debug("Collecting resource sizes")
    resources = page.evaluate(_RESOURCES_SCRIPT)
    logger.debug("Found %d resources", len(resources))
    return resources
