"""Global setup and teardown run once around the e2e session.

Setup probes ``BASE_URL`` in a throwaway Chromium before any test touches
the application.  Whether a failed probe aborts the run or only warns is
controlled by ``FAIL_ON_HEALTH_CHECK``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Playwright

from .config.env_config import EnvConfig
from .errors import EnvironmentConfigError, HealthCheckError, public_message
from .utils.logging_utils import log_step

logger = logging.getLogger("saucedemo-e2e.lifecycle")

HEALTH_CHECK_TIMEOUT = 30_000


def run_health_check(playwright: Playwright, base_url: str, *, timeout: float = HEALTH_CHECK_TIMEOUT) -> int:
    """Load *base_url* in a fresh browser; return the HTTP status or raise ``HealthCheckError``."""
    browser = playwright.chromium.launch()
    try:
        page = browser.new_page()
        response = page.goto(base_url, wait_until="networkidle", timeout=timeout)
        if response is None:
            raise HealthCheckError("Application health check failed: no response")
        if not response.ok:
            raise HealthCheckError(f"Application health check failed: {response.status}")
        return response.status
    finally:
        browser.close()


def global_setup(playwright: Playwright, config: EnvConfig) -> bool:
    """Validate the target and probe it.

    Returns True when the application answered.  A failed probe raises
    ``HealthCheckError`` when ``config.fail_on_health_check`` is set and
    otherwise logs a warning and returns False.
    """
    log_step(logger, "Global Setup")
    if not config.base_url:
        raise EnvironmentConfigError("Base URL is not configured")
    logger.info("Base URL: %s", config.sanitized()["base_url"])

    try:
        run_health_check(playwright, config.base_url)
    except (HealthCheckError, PlaywrightError) as exc:
        message = public_message(exc, config.is_production)
        if config.fail_on_health_check:
            logger.error("Application health check failed: %s", message)
            if isinstance(exc, HealthCheckError):
                raise
            raise HealthCheckError(f"Application health check failed: {message}") from exc
        logger.warning("Application health check failed, continuing anyway: %s", message)
        return False

    logger.info("Application health check passed")
    logger.info("Global setup completed successfully")
    return True


def global_teardown(config: EnvConfig, results_dir: str | Path) -> None:
    log_step(logger, "Global Teardown")
    logger.info("Test execution completed against %s", config.sanitized()["base_url"])
    logger.info("Test results directory: %s", Path(results_dir).resolve())
    logger.info("Global teardown completed successfully")
