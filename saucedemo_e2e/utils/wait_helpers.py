"""Polling-based wait strategies beyond Playwright's built-in auto-waiting.

Every waiter re-evaluates its probes from scratch on each poll, returns as
soon as the aggregate condition holds and raises ``WaitTimeoutError`` with
the last observed state once the deadline passes.  All durations are in
milliseconds to match Playwright.  ``clock`` (returns ms) and ``sleep``
(takes ms) can be injected to drive the loops deterministically in tests.

Page-bound waits sleep through ``page.wait_for_timeout`` so the sync
Playwright driver keeps dispatching events between polls.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence, TypeVar

from playwright.sync_api import Locator, Page, Request

from ..errors import WaitTimeoutError

logger = logging.getLogger("saucedemo-e2e.wait")

T = TypeVar("T")

Clock = Callable[[], float]
Sleep = Callable[[float], None]
Condition = Callable[[], bool]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


def sleep_ms(duration: float) -> None:
    time.sleep(duration / 1000)


def poll_until(
    evaluate: Callable[[], tuple[bool, T]],
    *,
    timeout: float,
    interval: float,
    describe: Callable[[T], str],
    clock: Clock = monotonic_ms,
    sleep: Sleep = sleep_ms,
) -> T:
    """Call *evaluate* every *interval* ms until it reports done or *timeout* elapses.

    *evaluate* returns ``(done, state)``.  The state of the final poll is
    returned on success and attached to the ``WaitTimeoutError`` otherwise.
    """
    deadline = clock() + timeout
    while True:
        done, state = evaluate()
        if done:
            return state
        if clock() >= deadline:
            raise WaitTimeoutError(describe(state), last_state=state)
        sleep(interval)


def _probe(condition: Condition) -> bool:
    try:
        return bool(condition())
    except Exception as exc:  # a probe that throws is simply not satisfied yet
        logger.debug("Condition probe raised %s; treating as unmet", exc)
        return False


# ---------------------------------------------------------------------------
# Multi-condition waiters
# ---------------------------------------------------------------------------

def wait_for_all(
    conditions: Sequence[Condition],
    timeout: float = 10_000,
    interval: float = 100,
    *,
    clock: Clock = monotonic_ms,
    sleep: Sleep = sleep_ms,
) -> list[bool]:
    """Wait until every condition returns truthy."""
    logger.debug("Waiting for %d conditions (timeout: %sms)", len(conditions), timeout)

    def evaluate() -> tuple[bool, list[bool]]:
        results = [_probe(condition) for condition in conditions]
        return all(results), results

    results = poll_until(
        evaluate,
        timeout=timeout,
        interval=interval,
        describe=lambda state: f"Multiple conditions timeout after {timeout}ms (last results: {state})",
        clock=clock,
        sleep=sleep,
    )
    logger.debug("All conditions met")
    return results


def wait_for_any(
    conditions: Sequence[Condition],
    timeout: float = 10_000,
    interval: float = 100,
    *,
    clock: Clock = monotonic_ms,
    sleep: Sleep = sleep_ms,
) -> int:
    """Wait until at least one condition holds; return the index of the first one."""
    logger.debug("Waiting for any of %d conditions (timeout: %sms)", len(conditions), timeout)

    def evaluate() -> tuple[bool, list[bool]]:
        results = [_probe(condition) for condition in conditions]
        return any(results), results

    results = poll_until(
        evaluate,
        timeout=timeout,
        interval=interval,
        describe=lambda state: f"No condition met within {timeout}ms (last results: {state})",
        clock=clock,
        sleep=sleep,
    )
    return results.index(True)


# ---------------------------------------------------------------------------
# Locator waiters
# ---------------------------------------------------------------------------

def wait_for_element_count(
    locator: Locator,
    expected: int,
    timeout: float = 10_000,
    interval: float = 100,
    *,
    clock: Clock = monotonic_ms,
    sleep: Sleep | None = None,
) -> int:
    """Wait until *locator* resolves to exactly *expected* elements."""
    logger.debug("Waiting for element count %d (timeout: %sms)", expected, timeout)

    last_count: int | None = None

    def evaluate() -> tuple[bool, int | None]:
        nonlocal last_count
        try:
            last_count = locator.count()
        except Exception as exc:
            # keep reporting the previous count
            logger.debug("Element count probe raised %s", exc)
            return False, last_count
        return last_count == expected, last_count

    return poll_until(
        evaluate,
        timeout=timeout,
        interval=interval,
        describe=lambda state: (
            f"Expected {expected} elements within {timeout}ms but last observed count was {state}"
        ),
        clock=clock,
        sleep=sleep or locator.page.wait_for_timeout,
    )


def wait_for_element_stable(
    locator: Locator,
    timeout: float = 10_000,
    stable_time: float = 500,
    interval: float = 100,
    *,
    clock: Clock = monotonic_ms,
    sleep: Sleep | None = None,
) -> dict[str, float] | None:
    """Wait until the element's bounding box stops changing for *stable_time* ms.

    Unlike the boolean waiters, errors raised by the locator propagate.
    """
    logger.debug("Waiting for element stability (timeout: %sms, stable: %sms)", timeout, stable_time)
    state: dict[str, Any] = {"bounds": None, "changed_at": clock()}

    def evaluate() -> tuple[bool, dict[str, float] | None]:
        bounds = locator.bounding_box()
        now = clock()
        if bounds != state["bounds"]:
            state["bounds"] = bounds
            state["changed_at"] = now
        return bounds is not None and now - state["changed_at"] >= stable_time, bounds

    bounds = poll_until(
        evaluate,
        timeout=timeout,
        interval=interval,
        describe=lambda last: f"Element stability timeout after {timeout}ms (last bounds: {last})",
        clock=clock,
        sleep=sleep or locator.page.wait_for_timeout,
    )
    logger.debug("Element is stable")
    return bounds


# ---------------------------------------------------------------------------
# Page waiters
# ---------------------------------------------------------------------------

def wait_for_network_idle(
    page: Page,
    timeout: float = 30_000,
    idle_time: float = 500,
    interval: float = 100,
    *,
    clock: Clock = monotonic_ms,
    sleep: Sleep | None = None,
) -> int:
    """Wait until no request has been issued for *idle_time* ms.

    Returns the number of requests observed while waiting.
    """
    logger.debug("Waiting for network idle (timeout: %sms, idle: %sms)", timeout, idle_time)
    activity = {"last_request": clock(), "count": 0}

    def on_request(_request: Request) -> None:
        activity["last_request"] = clock()
        activity["count"] += 1

    def evaluate() -> tuple[bool, int]:
        return clock() - activity["last_request"] >= idle_time, activity["count"]

    page.on("request", on_request)
    try:
        count = poll_until(
            evaluate,
            timeout=timeout,
            interval=interval,
            describe=lambda seen: f"Network idle timeout after {timeout}ms ({seen} requests observed)",
            clock=clock,
            sleep=sleep or page.wait_for_timeout,
        )
    finally:
        page.remove_listener("request", on_request)

    logger.debug("Network idle achieved after %d requests", count)
    return count
