"""Client for a local Ollama server used by the AI-assisted test helpers."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import ApiResponseError
from .common import validate_secure_url

logger = logging.getLogger("saucedemo-e2e.ollama")

DEFAULT_OLLAMA_API_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.1:8b"


class OllamaClient:
    """Thin synchronous wrapper around the Ollama ``/api`` endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_API_URL,
        model: str = DEFAULT_OLLAMA_MODEL,
        *,
        timeout: float = 60.0,
        production: bool = False,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = validate_secure_url(base_url.rstrip("/"), "OLLAMA_API_URL", production=production)
        self.model = model
        self.production = production
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _check(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        body = "" if self.production else response.text
        logger.error("Ollama API error: status=%s", response.status_code)
        detail = f"Ollama API error: {response.status_code}"
        raise ApiResponseError(f"{detail} - {body}" if body else detail, status=response.status_code, body=body)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def generate(self, prompt: str, model: str | None = None, options: dict[str, Any] | None = None) -> str:
        """Return the model's full (non-streamed) response text for *prompt*."""
        payload: dict[str, Any] = {"model": model or self.model, "prompt": prompt, "stream": False}
        if options:
            payload["options"] = options

        logger.info("Ollama generate request model=%s prompt=%s...", payload["model"], prompt[:100])
        response = self._client.post("/api/generate", json=payload)
        self._check(response)

        data = response.json()
        text = data.get("response") or ""
        logger.debug("Ollama response received model=%s done=%s length=%d", data.get("model"), data.get("done"), len(text))
        return text

    def list_models(self) -> dict[str, Any]:
        logger.info("Fetching Ollama models")
        response = self._client.get("/api/tags")
        self._check(response)
        data = response.json()
        logger.info("Ollama models fetched: %d", len(data.get("models") or []))
        return data

    def is_available(self) -> bool:
        try:
            self.list_models()
        except (httpx.HTTPError, ApiResponseError) as exc:
            logger.warning("Ollama API not available: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Prompt templates
    # ------------------------------------------------------------------

    def generate_test_data(self, description: str, fmt: str = "JSON") -> str:
        prompt = (
            f"Generate test data for: {description}.\n"
            f"Please provide the data in {fmt} format.\n"
            "Be concise and only return the data without additional explanation."
        )
        return self.generate(prompt)

    def analyze_test_results(self, test_results: str) -> str:
        prompt = (
            "Analyze the following test results and provide insights:\n"
            f"{test_results}\n\n"
            "Provide a brief analysis focusing on:\n"
            "1. Overall test status\n"
            "2. Key issues or failures\n"
            "3. Recommendations for improvement"
        )
        return self.generate(prompt)

    def verify_page_locators(self, page_object_source: str, html: str, max_html_chars: int = 15_000) -> str:
        """Ask the model whether the page object's selectors exist in *html*."""
        prompt = (
            "You are reviewing Playwright page object selectors.\n"
            "Page object source:\n"
            f"{page_object_source}\n\n"
            "Current page HTML (truncated):\n"
            f"{html[:max_html_chars]}\n\n"
            "For each selector in the page object, say whether it matches an element in the HTML. "
            "Suggest a corrected selector for any that do not."
        )
        return self.generate(prompt)
