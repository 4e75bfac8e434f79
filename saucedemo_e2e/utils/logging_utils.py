"""Central logging configuration using a Loguru stdout sink."""

from __future__ import annotations

import logging
import sys

from loguru import logger as loguru_logger

ROOT_LOGGER_NAME = "saucedemo-e2e"

# WARN is accepted as an alias so LOG_LEVEL values map one-to-one.
_LEVEL_ALIASES = {"WARN": "WARNING"}

_LINE_FORMAT = "[{time:YYYY-MM-DDTHH:mm:ss.SSSZ}] [{level}] {extra[logger_name]}: {message}"


def normalize_level(level: str) -> str:
    """Map a user-facing level name onto the stdlib/Loguru spelling."""
    name = (level or "INFO").strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    if name not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Unknown log level: {level!r}")
    return name


def _stdout_sink(message: str) -> None:
    # resolved per call so pytest's capture swaps are honoured
    sys.stdout.write(message)


class InterceptHandler(logging.Handler):
    """Forward stdlib log records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{logging.Formatter().formatException(record.exc_info)}"
        loguru_logger.bind(logger_name=record.name).log(record.levelname, message)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging through a single formatted Loguru sink on stdout."""
    name = normalize_level(level)

    loguru_logger.remove()
    loguru_logger.configure(extra={"logger_name": ROOT_LOGGER_NAME})
    loguru_logger.add(
        _stdout_sink,
        level=name,
        format=_LINE_FORMAT,
        colorize=False,
        enqueue=False,
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(
        handlers=[InterceptHandler()],
        level=getattr(logging, name),
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Create a namespaced logger for a suite component."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_step(logger: logging.Logger, step_name: str) -> None:
    """Write a banner marking the start of a named step."""
    rule = "-" * 40
    logger.info(rule)
    logger.info("STEP: %s", step_name)
    logger.info(rule)
