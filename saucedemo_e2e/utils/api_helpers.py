"""API request helpers built on Playwright's ``APIRequestContext``."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from playwright.sync_api import APIRequestContext, APIResponse
from playwright.sync_api import Error as PlaywrightError

from ..errors import ApiResponseError, public_message
from .common import sanitize_for_logging, validate_secure_url

logger = logging.getLogger("saucedemo-e2e.api")


def api_get(
    request_context: APIRequestContext,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, str | int | float | bool] | None = None,
    timeout: float | None = None,
    production: bool = False,
) -> APIResponse:
    """Issue a GET through *request_context* and return the raw response.

    Absolute URLs must be HTTPS unless they point at a loopback host;
    relative URLs resolve against the context's base URL.  Params are
    logged with sensitive keys redacted.
    """
    if "://" in url:
        validate_secure_url(url, production=production)

    logger.info("GET request %s params=%s", url, sanitize_for_logging(dict(params or {})))
    try:
        response = request_context.get(
            url,
            headers=dict(headers) if headers else None,
            params=dict(params) if params else None,
            timeout=timeout,
        )
    except PlaywrightError as exc:
        logger.error("GET request failed: %s", public_message(exc, production))
        raise
    logger.debug("Response received: status=%s", response.status)
    return response


def handle_api_response_error(response: APIResponse, context: str = "API", *, production: bool = False) -> None:
    """Raise ``ApiResponseError`` when *response* is not a 2xx."""
    if response.ok:
        return
    body = response.text()
    status = response.status
    logger.error("%s error: status=%s body=%s", context, status, "<hidden>" if production else body)
    detail = f"{context} error: {status}" if production else f"{context} error: {status} - {body}"
    raise ApiResponseError(detail, status=status, body="" if production else body)


def response_json(response: APIResponse, context: str = "API", *, production: bool = False) -> Any:
    """Check *response* and decode its JSON body."""
    handle_api_response_error(response, context, production=production)
    return response.json()
