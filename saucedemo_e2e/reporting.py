"""Result reporting: failure-artifact policy and the JSON results file.

JUnit XML and HTML reports come from pytest's ``--junitxml`` and
pytest-html; this module adds ``results.json`` and decides which
screenshots, videos and traces a finished test keeps.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from .utils.file_helpers import write_json

logger = logging.getLogger("saucedemo-e2e.reporting")

_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


# ---------------------------------------------------------------------------
# Artifact policy
# ---------------------------------------------------------------------------

def should_capture_screenshot(mode: str, failed: bool) -> bool:
    if mode == "on":
        return True
    if mode == "only-on-failure":
        return failed
    return False


def should_record(mode: str, attempt: int) -> bool:
    """Decide whether to start video/trace recording for run number *attempt* (1-based)."""
    if mode == "off":
        return False
    if mode == "on-first-retry":
        return attempt == 2
    return True


def should_keep(mode: str, failed: bool) -> bool:
    """Decide whether a recorded video/trace is kept once the test finished."""
    if mode == "retain-on-failure":
        return failed
    return mode != "off"


def artifact_dir(results_dir: str | Path, nodeid: str) -> Path:
    """Per-test artifact directory derived from the pytest node id."""
    name = _UNSAFE_PATH_CHARS.sub("-", nodeid).strip("-") or "test"
    return Path(results_dir) / "artifacts" / name


def finish_test_context(
    context: Any,
    page: Any,
    artifacts: Path,
    *,
    failed: bool,
    screenshot_mode: str,
    video_mode: str | None = None,
    trace_mode: str | None = None,
) -> None:
    """Save a finished test's artifacts, then close its browser context.

    ``video_mode``/``trace_mode`` are given only when that recording was
    started.  The trace is stopped and the context closed even when the
    screenshot fails; the first error is re-raised afterwards.
    """
    try:
        try:
            if should_capture_screenshot(screenshot_mode, failed):
                artifacts.mkdir(parents=True, exist_ok=True)
                page.screenshot(path=str(artifacts / "screenshot.png"), full_page=True)
        finally:
            if trace_mode is not None:
                if should_keep(trace_mode, failed):
                    artifacts.mkdir(parents=True, exist_ok=True)
                    context.tracing.stop(path=str(artifacts / "trace.zip"))
                else:
                    context.tracing.stop()
    finally:
        # closing the context closes its pages and flushes recorded videos
        context.close()
        if video_mode is not None and not should_keep(video_mode, failed):
            shutil.rmtree(artifacts / "videos", ignore_errors=True)
        logger.debug("Closed browser context for %s", artifacts.name)


# ---------------------------------------------------------------------------
# JSON reporter plugin
# ---------------------------------------------------------------------------

class JsonResultsReporter:
    """pytest plugin that writes one JSON document summarizing the run.

    In production mode failure text is omitted so raw environment detail
    does not leak into shared CI artifacts.
    """

    def __init__(self, path: str | Path, *, production: bool = False) -> None:
        self.path = Path(path)
        self.production = production
        self.results: dict[str, dict[str, Any]] = {}
        self.started_at = datetime.now(timezone.utc)

    def _outcome(self, report: pytest.TestReport) -> str:
        if report.when != "call" and report.failed:
            return "error"
        return report.outcome

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        # setup/teardown only matter when they fail or skip the test
        if report.when != "call" and report.passed:
            return

        entry: dict[str, Any] = {
            "nodeid": report.nodeid,
            "outcome": self._outcome(report),
            "when": report.when,
            "duration": round(report.duration, 3),
        }
        if report.failed and not self.production:
            entry["message"] = report.longreprtext
        self.results[report.nodeid] = entry

    def summary(self) -> dict[str, int]:
        counts = Counter(entry["outcome"] for entry in self.results.values())
        counts["total"] = len(self.results)
        return dict(counts)

    @pytest.hookimpl(trylast=True)
    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        finished_at = datetime.now(timezone.utc)
        payload = {
            "started_at": self.started_at.isoformat(),
            "finished_at": finished_at.isoformat(),
            "duration": round((finished_at - self.started_at).total_seconds(), 3),
            "exit_status": int(exitstatus),
            "summary": self.summary(),
            "tests": list(self.results.values()),
        }
        write_json(self.path, payload)
        logger.info("JSON results written to %s", self.path)
