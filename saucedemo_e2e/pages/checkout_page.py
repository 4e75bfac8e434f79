"""Checkout page object covering step one (information), step two and completion."""

from __future__ import annotations

import re

from playwright.sync_api import Page

from ..errors import PageAssertionError, ValidationError
from .base_page import PageHelpers

MAX_NAME_LENGTH = 100
MAX_ZIP_LENGTH = 20
ZIP_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 \-]*$")

ORDER_CONFIRMATION = "Thank you"


def _require_field(value: object, label: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required and cannot be empty")
    if len(value) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters")
    return value


class CheckoutPage:
    """Page object for the multi-step checkout flow."""

    path = "/checkout-step-one.html"

    def __init__(self, page: Page, helpers: PageHelpers | None = None) -> None:
        self.page = page
        self.helpers = helpers or PageHelpers(page)

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def fill_customer_info(self, first_name: str, last_name: str, zip_code: str) -> None:
        """Validate all three fields, then fill the step-one form.

        Raises ``ValidationError`` before touching the page when a field is
        empty, too long, or the zip code has characters other than letters,
        digits, spaces and hyphens.
        """
        _require_field(first_name, "First name", MAX_NAME_LENGTH)
        _require_field(last_name, "Last name", MAX_NAME_LENGTH)
        _require_field(zip_code, "Zip code", MAX_ZIP_LENGTH)
        if not ZIP_PATTERN.match(zip_code.strip()):
            raise ValidationError(
                f"Zip code {zip_code!r} may only contain letters, digits, spaces and hyphens"
            )

        self.helpers.by_test_id("firstName").fill(first_name)
        self.helpers.by_test_id("lastName").fill(last_name)
        self.helpers.by_test_id("postalCode").fill(zip_code)

    def continue_checkout(self) -> None:
        self.helpers.by_test_id("continue").click()

    def finish_checkout(self) -> None:
        self.helpers.by_test_id("finish").click()

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def assert_order_success(self, *, timeout: float = 10_000) -> None:
        self.helpers.by_test_id("checkout-complete-container").wait_for(state="visible", timeout=timeout)
        header = self.helpers.by_test_id("complete-header")
        header.wait_for(state="visible", timeout=timeout)
        text = header.text_content() or ""
        if ORDER_CONFIRMATION not in text:
            raise PageAssertionError(f'Expected success message containing "{ORDER_CONFIRMATION}" but got "{text}"')

    def assert_required_field_error(self, *, timeout: float = 10_000) -> None:
        banner = self.helpers.by_test_id("error")
        banner.wait_for(state="visible", timeout=timeout)
        text = banner.text_content() or ""
        if "required" not in text:
            raise PageAssertionError(f'Expected required field error but got "{text}"')
