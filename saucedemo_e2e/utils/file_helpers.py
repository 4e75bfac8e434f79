"""File helpers for test data, screenshots and result artifacts."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger("saucedemo-e2e.files")

RESULTS_DIR = Path("test-results")
REPORT_DIR = Path("playwright-report")
TEST_DATA_DIR = Path("test-data")


def get_directory_from_env(env_name: str, default_path: str | Path) -> Path:
    """Return a directory path from env, ensuring it exists."""
    configured = os.environ.get(env_name) or str(default_path)
    return ensure_directory(configured)


def ensure_directory(path: str | Path) -> Path:
    directory = Path(path)
    if not directory.exists():
        logger.debug("Creating directory: %s", directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def read_json(file_path: str | Path) -> Any:
    logger.debug("Reading JSON file: %s", file_path)
    try:
        return json.loads(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.error("Failed to read JSON file: %s", file_path)
        raise


def write_json(file_path: str | Path, data: Any, pretty: bool = True) -> Path:
    """Serialize *data* to *file_path*, creating parent directories."""
    path = Path(file_path)
    logger.debug("Writing JSON file: %s", path)
    ensure_directory(path.parent)
    content = json.dumps(data, indent=2 if pretty else None, default=str)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError:
        logger.error("Failed to write JSON file: %s", path)
        raise
    return path


def get_test_data_path(filename: str, base_dir: str | Path | None = None) -> Path:
    return Path(base_dir or Path.cwd()) / TEST_DATA_DIR / filename


def get_screenshot_path(filename: str, results_dir: str | Path = RESULTS_DIR) -> Path:
    """Return a path under ``<results>/screenshots``, creating the directory."""
    return ensure_directory(Path(results_dir) / "screenshots") / filename


def file_exists(file_path: str | Path) -> bool:
    return Path(file_path).exists()
