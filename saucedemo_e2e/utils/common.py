"""Shared helpers used by config, API and lifecycle code."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlparse

from ..errors import EnvironmentConfigError

logger = logging.getLogger("saucedemo-e2e.common")

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

SENSITIVE_KEYS = (
    "password",
    "passwd",
    "pass",
    "pwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "accesstoken",
    "access_token",
    "refreshtoken",
    "refresh_token",
    "authorization",
    "auth",
    "credential",
    "private",
    "privatekey",
    "private_key",
)

REDACTED = "***REDACTED***"

_URL_CREDENTIALS = re.compile(r"//[^/@]+@")


def get_error_message(error: BaseException | object) -> str:
    """Return a readable message for any raised object."""
    if isinstance(error, BaseException):
        return str(error) or error.__class__.__name__
    return str(error)


def is_loopback_url(url: str) -> bool:
    try:
        host = urlparse(url).hostname
    except ValueError:
        return False
    return host in LOOPBACK_HOSTS


def validate_secure_url(url: str, key: str | None = None, *, production: bool = False) -> str:
    """Require HTTPS for non-loopback URLs.

    In production an insecure URL raises ``EnvironmentConfigError``; in any
    other runtime mode it is logged as a warning and returned unchanged.
    """
    if not url:
        return url
    if url.lower().startswith("https://") or is_loopback_url(url):
        return url

    if production:
        if key:
            raise EnvironmentConfigError(
                f"Security violation: {key} must use HTTPS in production. Current value: {mask_url_credentials(url)}"
            )
        raise EnvironmentConfigError(
            f"Security violation: URL must use HTTPS in production. URL: {mask_url_credentials(url)}"
        )

    if key:
        logger.warning("Security warning: %s uses HTTP instead of HTTPS; this is rejected in production.", key)
    else:
        logger.warning("Security warning: insecure HTTP URL detected: %s", mask_url_credentials(url))
    return url


def mask_url_credentials(url: str) -> str:
    """Hide ``user:pass@`` segments embedded in a URL."""
    return _URL_CREDENTIALS.sub("//***:***@", url)


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def sanitize_for_logging(data: Any) -> Any:
    """Return a copy of *data* with sensitive-looking keys redacted, recursively."""
    if isinstance(data, dict):
        return {
            key: REDACTED if _is_sensitive(str(key)) else sanitize_for_logging(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item) for item in data]
    return data
