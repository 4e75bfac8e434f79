"""Products (inventory) page object."""

from __future__ import annotations

import re

from playwright.sync_api import Page

from ..errors import PageAssertionError
from .base_page import PageHelpers

_ADD_TO_CART = re.compile(r"Add to cart", re.IGNORECASE)


class ProductsPage:
    """Page object for the product listing and the cart badge."""

    path = "/inventory.html"

    _INVENTORY_ITEM = ".inventory_item"
    _CONTAINER_TEST_ID = "inventory-container"
    _CART_LINK_TEST_ID = "shopping-cart-link"
    _CART_BADGE_TEST_ID = "shopping-cart-badge"

    def __init__(self, page: Page, helpers: PageHelpers | None = None) -> None:
        self.page = page
        self.helpers = helpers or PageHelpers(page)

    @property
    def url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def goto(self, path: str | None = None) -> None:
        self.helpers.goto(path or self.path)

    def add_product_to_cart_by_name(self, name: str) -> None:
        """Click "Add to cart" inside the inventory row showing *name*."""
        row = self.page.locator(self._INVENTORY_ITEM).filter(has_text=name)
        row.locator("button").filter(has_text=_ADD_TO_CART).click()

    def open_cart(self) -> None:
        self.helpers.by_test_id(self._CART_LINK_TEST_ID).click()

    def get_cart_badge_count(self) -> int:
        """Return the number on the cart badge, or 0 when no badge is shown."""
        badge = self.helpers.by_test_id(self._CART_BADGE_TEST_ID)
        if not badge.is_visible():
            return 0
        text = (badge.text_content() or "").strip()
        try:
            return int(text or "0")
        except ValueError:
            raise PageAssertionError(f'Expected a numeric cart badge but got "{text}"') from None

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def expect_on_products_page(self, *, timeout: float = 10_000) -> None:
        self.helpers.by_test_id(self._CONTAINER_TEST_ID).wait_for(state="visible", timeout=timeout)
        url = self.page.url
        if self.path not in url:
            raise PageAssertionError(f"Expected to be on products page but was on {url}")
