"""Utility helpers for logging, waits, API calls, files, test data and diagnostics."""

from .api_helpers import api_get, handle_api_response_error, response_json
from .common import get_error_message, sanitize_for_logging, validate_secure_url
from .file_helpers import ensure_directory, file_exists, read_json, write_json
from .logging_utils import configure_logging, get_logger, log_step
from .ollama_helpers import OllamaClient
from .performance_helpers import PerformanceMetrics, assert_load_time, measure_page_performance
from .visual_helpers import ScreenshotComparison, compare_screenshots
from .wait_helpers import (
    wait_for_all,
    wait_for_any,
    wait_for_element_count,
    wait_for_element_stable,
    wait_for_network_idle,
)

__all__ = [
    "OllamaClient",
    "PerformanceMetrics",
    "ScreenshotComparison",
    "api_get",
    "assert_load_time",
    "compare_screenshots",
    "configure_logging",
    "ensure_directory",
    "file_exists",
    "get_error_message",
    "get_logger",
    "handle_api_response_error",
    "log_step",
    "measure_page_performance",
    "read_json",
    "response_json",
    "sanitize_for_logging",
    "validate_secure_url",
    "wait_for_all",
    "wait_for_any",
    "wait_for_element_count",
    "wait_for_element_stable",
    "wait_for_network_idle",
    "write_json",
]
