"""Unit tests for the Playwright request-context helpers."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from saucedemo_e2e.errors import ApiResponseError, EnvironmentConfigError
from saucedemo_e2e.utils.api_helpers import api_get, handle_api_response_error, response_json


def _response(status: int, body: str = "", ok: bool | None = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.ok = 200 <= status < 300 if ok is None else ok
    response.text.return_value = body
    response.json.return_value = {"status": status}
    return response


@pytest.mark.unit
class TestApiGet:

    def test_relative_url_passed_to_context(self):
        context = MagicMock()
        context.get.return_value = _response(404)

        response = api_get(context, "/api/nonexistent")

        assert response.status == 404
        context.get.assert_called_once_with("/api/nonexistent", headers=None, params=None, timeout=None)

    def test_headers_params_and_timeout_forwarded(self):
        context = MagicMock()
        api_get(context, "/search", headers={"Accept": "application/json"}, params={"q": "bag"}, timeout=5_000)
        context.get.assert_called_once_with(
            "/search", headers={"Accept": "application/json"}, params={"q": "bag"}, timeout=5_000
        )

    def test_sensitive_params_redacted_in_logs(self, caplog):
        context = MagicMock()
        with caplog.at_level(logging.INFO, logger="saucedemo-e2e"):
            api_get(context, "/search", params={"token": "abc123", "q": "bag"})
        assert "abc123" not in caplog.text
        assert "***REDACTED***" in caplog.text

    def test_insecure_absolute_url_rejected_in_production(self):
        context = MagicMock()
        with pytest.raises(EnvironmentConfigError):
            api_get(context, "http://shop.example/api", production=True)
        context.get.assert_not_called()

    def test_transport_errors_reraised(self):
        context = MagicMock()
        context.get.side_effect = PlaywrightError("socket hang up")
        with pytest.raises(PlaywrightError):
            api_get(context, "/api")


@pytest.mark.unit
class TestHandleApiResponseError:

    def test_success_is_silent(self):
        handle_api_response_error(_response(200))

    def test_failure_raises_with_status_and_body(self):
        with pytest.raises(ApiResponseError) as excinfo:
            handle_api_response_error(_response(500, "stack trace here"), "Inventory")

        assert excinfo.value.status == 500
        assert excinfo.value.body == "stack trace here"
        assert str(excinfo.value) == "Inventory error: 500 - stack trace here"

    def test_production_hides_body(self):
        with pytest.raises(ApiResponseError) as excinfo:
            handle_api_response_error(_response(503, "internal detail"), production=True)

        assert excinfo.value.body == ""
        assert "internal detail" not in str(excinfo.value)

    def test_response_json_checks_status_first(self):
        assert response_json(_response(200)) == {"status": 200}
        with pytest.raises(ApiResponseError):
            response_json(_response(404))
