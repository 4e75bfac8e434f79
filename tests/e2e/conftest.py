"""Pytest fixtures for the SauceDemo e2e suites (Playwright sync API).

Each test gets its own browser context and tab.  Page objects share one
``PageHelpers`` bound to that tab; ``logged_in_user`` additionally signs in
with the standard account before the test body runs.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from playwright.sync_api import Browser, Page, Playwright, sync_playwright

from saucedemo_e2e.config import EnvConfig, context_options, get_env_config, resolve_project
from saucedemo_e2e.data import ORDER_DATA, STANDARD_USER, OrderInfo
from saucedemo_e2e.errors import HealthCheckError
from saucedemo_e2e.pages import CartPage, CheckoutPage, LoginPage, PageHelpers, ProductsPage
from saucedemo_e2e.reporting import artifact_dir, finish_test_context, should_record
from saucedemo_e2e.session import LoggedInUser, login_as
from saucedemo_e2e.suite_lifecycle import global_setup, global_teardown
from saucedemo_e2e.utils.file_helpers import RESULTS_DIR
from saucedemo_e2e.utils.ollama_helpers import OllamaClient


# ---------------------------------------------------------------------------
# Session: configuration, driver, browser, global setup
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def env_config() -> EnvConfig:
    return get_env_config()


@pytest.fixture(scope="session")
def base_url(env_config: EnvConfig) -> str:
    """Base URL for the application under test."""
    return env_config.base_url


@pytest.fixture(scope="session")
def playwright_instance():
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def browser_project(pytestconfig):
    return resolve_project(pytestconfig.getoption("project"))


@pytest.fixture(scope="session")
def browser(playwright_instance: Playwright, browser_project, env_config: EnvConfig):
    """Launch the browser for the selected project."""
    browser = getattr(playwright_instance, browser_project.browser_name).launch(headless=env_config.headless)
    yield browser
    browser.close()


@pytest.fixture(scope="session", autouse=True)
def suite_lifecycle(playwright_instance: Playwright, env_config: EnvConfig):
    """Global setup (health check) before the first test, teardown after the last."""
    try:
        global_setup(playwright_instance, env_config)
    except HealthCheckError as exc:
        pytest.exit(f"Aborting run: {exc}", returncode=1)
    yield
    global_teardown(env_config, RESULTS_DIR)


# ---------------------------------------------------------------------------
# Per-test browser tab with failure artifacts
# ---------------------------------------------------------------------------

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store test results for use in fixtures."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _failed(node) -> bool:
    return any(getattr(getattr(node, f"rep_{when}", None), "failed", False) for when in ("setup", "call"))


@pytest.fixture
def page(request, browser: Browser, browser_project, playwright_instance: Playwright, env_config: EnvConfig):
    """Create a fresh context and tab for each test, keeping artifacts per policy."""
    attempt = getattr(request.node, "execution_count", 1)
    artifacts = artifact_dir(RESULTS_DIR, request.node.nodeid)
    record_video = should_record(env_config.video_mode, attempt)
    record_trace = should_record(env_config.trace_mode, attempt)

    options = context_options(browser_project, playwright_instance.devices)
    options["base_url"] = env_config.base_url
    if record_video:
        options["record_video_dir"] = str(artifacts / "videos")

    context = browser.new_context(**options)
    context.set_default_timeout(env_config.timeout)
    context.set_default_navigation_timeout(env_config.timeout)
    if record_trace:
        context.tracing.start(screenshots=True, snapshots=True, sources=True)

    page = context.new_page()
    yield page

    finish_test_context(
        context,
        page,
        artifacts,
        failed=_failed(request.node),
        screenshot_mode=env_config.screenshot_mode,
        video_mode=env_config.video_mode if record_video else None,
        trace_mode=env_config.trace_mode if record_trace else None,
    )


# ---------------------------------------------------------------------------
# Page objects
# ---------------------------------------------------------------------------

@pytest.fixture
def page_helpers(page: Page, env_config: EnvConfig) -> PageHelpers:
    return PageHelpers(page, env_config.base_url, navigation_timeout=env_config.timeout)


@pytest.fixture
def login_page(page: Page, page_helpers: PageHelpers) -> LoginPage:
    return LoginPage(page, page_helpers)


@pytest.fixture
def products_page(page: Page, page_helpers: PageHelpers) -> ProductsPage:
    return ProductsPage(page, page_helpers)


@pytest.fixture
def cart_page(page: Page, page_helpers: PageHelpers) -> CartPage:
    return CartPage(page, page_helpers)


@pytest.fixture
def checkout_page(page: Page, page_helpers: PageHelpers) -> CheckoutPage:
    return CheckoutPage(page, page_helpers)


@pytest.fixture
def logged_in_user(login_page: LoginPage, products_page: ProductsPage) -> LoggedInUser:
    """Sign in as the standard user and land on the products page."""
    return login_as(login_page, products_page, STANDARD_USER)


@pytest.fixture
def order_info() -> OrderInfo:
    return ORDER_DATA


# ---------------------------------------------------------------------------
# API clients
# ---------------------------------------------------------------------------

@pytest.fixture
def api_request(playwright_instance: Playwright, env_config: EnvConfig):
    """Playwright request context bound to the application base URL."""
    context = playwright_instance.request.new_context(base_url=env_config.base_url)
    yield context
    context.dispose()


@pytest.fixture
def ollama_client(env_config: EnvConfig):
    with OllamaClient(
        env_config.ollama_api_url,
        env_config.ollama_model,
        production=env_config.is_production,
    ) as client:
        yield client


@pytest.fixture
def pom_source_dir() -> Path:
    """Directory holding the page object sources (used by AI locator checks)."""
    return Path(__file__).resolve().parents[2] / "saucedemo_e2e" / "pages"
