"""Login page object for the SauceDemo sign-in screen."""

from __future__ import annotations

from playwright.sync_api import Page

from ..errors import PageAssertionError, ValidationError
from .base_page import PageHelpers

MAX_USERNAME_LENGTH = 255
MAX_PASSWORD_LENGTH = 2048


def _require_text(value: object, field: str, max_length: int) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required and must be a non-empty string")
    if len(value) > max_length:
        raise ValidationError(f"{field} exceeds maximum length of {max_length} characters")


class LoginPage:
    """Page object for the login form.

    Each field is located through the self-healing finder: the historic
    element ids first, ``data-test`` attributes as fallbacks.
    """

    path = "/"

    # Selector constants – primary + fallbacks
    _USERNAME = "#user-name"
    _USERNAME_FALLBACKS = ('[data-test="username"]', 'input[name="user-name"]')

    _PASSWORD = "#password"
    _PASSWORD_FALLBACKS = ('[data-test="password"]', 'input[type="password"]')

    _SUBMIT = "#login-button"
    _SUBMIT_FALLBACKS = ('[data-test="login-button"]', 'input[type="submit"]')

    _ERROR_TEST_ID = "error"

    def __init__(self, page: Page, helpers: PageHelpers | None = None) -> None:
        self.page = page
        self.helpers = helpers or PageHelpers(page)

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def goto(self) -> None:
        self.helpers.goto(self.path)

    def login(self, username: str, password: str) -> None:
        """Validate credentials, fill both fields and submit."""
        _require_text(username, "Username", MAX_USERNAME_LENGTH)
        _require_text(password, "Password", MAX_PASSWORD_LENGTH)

        self.helpers.find(self._USERNAME, self._USERNAME_FALLBACKS).first.fill(username)
        self.helpers.find(self._PASSWORD, self._PASSWORD_FALLBACKS).first.fill(password)
        self.helpers.find(self._SUBMIT, self._SUBMIT_FALLBACKS).first.click()

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def assert_error_message(self, expected: str, *, timeout: float = 10_000) -> None:
        error = self.helpers.by_test_id(self._ERROR_TEST_ID)
        error.wait_for(state="visible", timeout=timeout)
        actual = error.text_content() or ""
        if expected not in actual:
            raise PageAssertionError(f'Expected error message "{expected}" but got "{actual}"')
