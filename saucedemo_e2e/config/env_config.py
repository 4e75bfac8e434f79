"""Environment configuration loader.

Reads every suite setting from the environment once, validates it and
freezes the result into an ``EnvConfig`` record.  Invalid choices and
unparsable numbers fall back to their documented defaults with a warning;
insecure URLs are fatal only when ``NODE_ENV=production``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Sequence

from dotenv import load_dotenv

from ..utils.common import mask_url_credentials, validate_secure_url
from ..utils.ollama_helpers import DEFAULT_OLLAMA_API_URL, DEFAULT_OLLAMA_MODEL

logger = logging.getLogger("saucedemo-e2e.config")

DEFAULT_BASE_URL = "https://www.saucedemo.com"

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")
SCREENSHOT_MODES = ("off", "on", "only-on-failure")
VIDEO_MODES = ("off", "on", "on-first-retry", "retain-on-failure")
TRACE_MODES = ("off", "on", "on-first-retry")


@dataclass(frozen=True)
class EnvConfig:
    """Validated, immutable snapshot of the suite configuration."""

    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30_000
    expect_timeout: int = 10_000
    workers: int | None = None
    retries: int = 0
    ci: bool = False
    log_level: str = "INFO"
    screenshot_mode: str = "only-on-failure"
    video_mode: str = "retain-on-failure"
    trace_mode: str = "on-first-retry"
    fail_on_health_check: bool = False
    runtime_env: str = "development"
    headless: bool = True
    ollama_api_url: str = DEFAULT_OLLAMA_API_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL

    @property
    def is_production(self) -> bool:
        return self.runtime_env.lower() == "production"

    def sanitized(self) -> dict:
        """Non-sensitive view of the configuration, safe to log."""
        return {
            "base_url": mask_url_credentials(self.base_url),
            "timeout": self.timeout,
            "expect_timeout": self.expect_timeout,
            "workers": self.workers,
            "retries": self.retries,
            "ci": self.ci,
            "log_level": self.log_level,
            "screenshot_mode": self.screenshot_mode,
            "video_mode": self.video_mode,
            "trace_mode": self.trace_mode,
            "fail_on_health_check": self.fail_on_health_check,
            "runtime_env": self.runtime_env,
            "headless": self.headless,
            "ollama_api_url": mask_url_credentials(self.ollama_api_url),
            "ollama_model": self.ollama_model,
        }


# ---------------------------------------------------------------------------
# Typed readers
# ---------------------------------------------------------------------------

def _get_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    value = environ.get(key)
    if value is None:
        return default
    return value.strip().lower() == "true"


def _ci_enabled(value: str | None) -> bool:
    # CI runners export CI=true, CI=1 or the provider name
    return bool(value and value.strip()) and value.strip().lower() not in ("false", "0")


def _get_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        logger.warning("Invalid numeric value %r for %s, using default %s", value, key, default)
        return default


def _get_optional_int(environ: Mapping[str, str], key: str) -> int | None:
    value = environ.get(key)
    if value is None or value.strip() in ("", "undefined"):
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning("Invalid numeric value %r for %s, leaving it unset", value, key)
        return None


def _get_choice(environ: Mapping[str, str], key: str, default: str, choices: Sequence[str]) -> str:
    value = environ.get(key, default)
    if value not in choices:
        logger.warning(
            "Invalid value %r for %s. Valid values: %s. Using default %r",
            value,
            key,
            ", ".join(choices),
            default,
        )
        return default
    return value


def _get_url(environ: Mapping[str, str], key: str, default: str, production: bool) -> str:
    return validate_secure_url(environ.get(key, default), key, production=production)


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def load_env_config(environ: Mapping[str, str] | None = None) -> EnvConfig:
    """Build an ``EnvConfig`` from *environ* (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ

    runtime_env = env.get("NODE_ENV", "development")
    production = runtime_env.lower() == "production"
    ci = _ci_enabled(env.get("CI"))

    return EnvConfig(
        base_url=_get_url(env, "BASE_URL", DEFAULT_BASE_URL, production),
        timeout=_get_int(env, "TIMEOUT", 30_000),
        expect_timeout=_get_int(env, "EXPECT_TIMEOUT", 10_000),
        workers=_get_optional_int(env, "WORKERS"),
        retries=_get_int(env, "RETRIES", 2 if ci else 0),
        ci=ci,
        log_level=_get_choice(env, "LOG_LEVEL", "INFO", LOG_LEVELS),
        screenshot_mode=_get_choice(env, "SCREENSHOT_MODE", "only-on-failure", SCREENSHOT_MODES),
        video_mode=_get_choice(env, "VIDEO_MODE", "retain-on-failure", VIDEO_MODES),
        trace_mode=_get_choice(env, "TRACE_MODE", "on-first-retry", TRACE_MODES),
        fail_on_health_check=_get_bool(env, "FAIL_ON_HEALTH_CHECK", False),
        runtime_env=runtime_env,
        headless=_get_bool(env, "HEADLESS", True),
        ollama_api_url=_get_url(env, "OLLAMA_API_URL", DEFAULT_OLLAMA_API_URL, production),
        ollama_model=env.get("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL),
    )


@lru_cache(maxsize=1)
def get_env_config() -> EnvConfig:
    """Return the process-wide configuration, loading ``.env`` on first use."""
    load_dotenv(override=False)
    config = load_env_config()
    logger.info("Environment configuration loaded: %s", config.sanitized())
    return config
