"""Shopping cart page object."""

from __future__ import annotations

import re

from playwright.sync_api import Locator, Page

from .base_page import PageHelpers

_REMOVE = re.compile(r"Remove", re.IGNORECASE)


class CartPage:
    """Page object for the cart contents and checkout entry point."""

    path = "/cart.html"

    _CART_ITEM = ".cart_item"
    _CHECKOUT_TEST_ID = "checkout"

    def __init__(self, page: Page, helpers: PageHelpers | None = None) -> None:
        self.page = page
        self.helpers = helpers or PageHelpers(page)

    @property
    def url(self) -> str:
        return self.page.url

    def _item(self, name: str) -> Locator:
        return self.page.locator(self._CART_ITEM).filter(has_text=name)

    def expect_cart_item(self, name: str, *, timeout: float = 10_000) -> None:
        self._item(name).wait_for(state="visible", timeout=timeout)

    def remove_item(self, name: str) -> None:
        self._item(name).locator("button").filter(has_text=_REMOVE).click()

    def start_checkout(self) -> None:
        self.helpers.by_test_id(self._CHECKOUT_TEST_ID).click()

    def get_cart_item_count(self) -> int:
        return self.page.locator(self._CART_ITEM).count()
