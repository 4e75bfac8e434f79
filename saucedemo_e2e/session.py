"""Authenticated-session setup used by the ``logged_in_user`` fixture."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from playwright.sync_api import Page

from .data.users import Credential
from .pages.login_page import LoginPage
from .pages.products_page import ProductsPage

logger = logging.getLogger("saucedemo-e2e.session")


@dataclass(frozen=True)
class LoggedInUser:
    """The tab a test runs in, already past the login screen."""

    page: Page
    products_page: ProductsPage


def login_as(login_page: LoginPage, products_page: ProductsPage, credential: Credential) -> LoggedInUser:
    """Open the login screen, sign in and wait for the products page.

    No retry happens here: any validation, timeout or assertion error from
    the page objects propagates unchanged.
    """
    logger.info("Logging in as %s", credential.username)
    login_page.goto()
    login_page.login(credential.username, credential.password)
    products_page.expect_on_products_page()
    return LoggedInUser(page=products_page.page, products_page=products_page)
