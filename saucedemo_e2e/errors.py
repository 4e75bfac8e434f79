"""Error taxonomy shared by page objects, waits, config and lifecycle hooks."""

from __future__ import annotations

from typing import Any

GENERIC_ERROR_MESSAGE = "An internal error occurred (details hidden in production mode)"


class SuiteError(Exception):
    """Base class for every error raised by the suite itself."""


class ValidationError(SuiteError, ValueError):
    """Malformed input to a page-object or helper, raised before any browser I/O."""


class PageAssertionError(SuiteError, AssertionError):
    """Expected vs. actual mismatch observed on the page."""


class WaitTimeoutError(SuiteError, TimeoutError):
    """A polled condition never became true before its deadline."""

    def __init__(self, message: str, last_state: Any = None) -> None:
        super().__init__(message)
        self.last_state = last_state


class NavigationTimeoutError(WaitTimeoutError):
    """Navigation did not reach its load milestone in time."""


class EnvironmentConfigError(SuiteError, RuntimeError):
    """Required configuration is missing or insecure in strict mode."""


class HealthCheckError(SuiteError):
    """The target application did not answer the pre-run probe."""


class ApiResponseError(SuiteError):
    """An HTTP call returned a non-success status."""

    def __init__(self, message: str, status: int, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


def public_message(exc: BaseException, production: bool) -> str:
    """Return an error message safe to print into shared CI logs."""
    if production:
        return GENERIC_ERROR_MESSAGE
    return str(exc) or exc.__class__.__name__
