"""Test sharding: partition selection and the parallel shard runner CLI.

``--shard i/N`` keeps every N-th collected test starting at position i-1,
so N processes started with 1/N … N/N together run each test exactly once.
``saucedemo-shards`` starts those processes and succeeds only when all of
them exit 0.
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

from .errors import ValidationError
from .utils.file_helpers import REPORT_DIR, RESULTS_DIR
from .utils.logging_utils import configure_logging

logger = logging.getLogger("saucedemo-e2e.shards")

T = TypeVar("T")

DEFAULT_SHARDS = 4


@dataclass(frozen=True)
class ShardSpec:
    index: int
    total: int

    def __str__(self) -> str:
        return f"{self.index}/{self.total}"


@dataclass(frozen=True)
class ShardCommand:
    """Concrete pytest invocation for one shard."""

    spec: ShardSpec
    cmd: list[str]
    env: dict[str, str] = field(repr=False)


def parse_shard_spec(value: str) -> ShardSpec:
    """Parse ``"i/N"`` with ``1 <= i <= N``."""
    try:
        index_text, total_text = value.split("/")
        index, total = int(index_text), int(total_text)
    except (AttributeError, ValueError):
        raise ValidationError(f"Shard must look like 'i/N', got {value!r}") from None
    if total < 1 or not 1 <= index <= total:
        raise ValidationError(f"Shard index must be between 1 and {total}, got {value!r}")
    return ShardSpec(index, total)


def select_shard(items: Sequence[T], spec: ShardSpec) -> tuple[list[T], list[T]]:
    """Split *items* into (selected, deselected) for *spec* using round-robin order."""
    selected: list[T] = []
    deselected: list[T] = []
    for position, item in enumerate(items):
        if position % spec.total == spec.index - 1:
            selected.append(item)
        else:
            deselected.append(item)
    return selected, deselected


def results_suffix(spec: ShardSpec | None) -> str:
    return f"-shard-{spec.index}" if spec else ""


def build_shard_commands(
    total: int,
    pytest_args: Sequence[str] = (),
    *,
    python: str = sys.executable,
    base_env: dict[str, str] | None = None,
) -> list[ShardCommand]:
    env = dict(os.environ if base_env is None else base_env)
    args = list(pytest_args)
    if "-m" not in args:
        args = ["-m", "e2e", *args]

    commands = []
    for index in range(1, total + 1):
        spec = ShardSpec(index, total)
        suffix = results_suffix(spec)
        cmd = [
            python,
            "-m",
            "pytest",
            f"--shard={spec}",
            f"--junitxml={(RESULTS_DIR / f'junit{suffix}.xml').as_posix()}",
            f"--html={(REPORT_DIR / f'index{suffix}.html').as_posix()}",
            *args,
        ]
        shard_env = {**env, "SHARD": str(index), "TOTAL_SHARDS": str(total)}
        commands.append(ShardCommand(spec=spec, cmd=cmd, env=shard_env))
    return commands


def run_shards(
    commands: Sequence[ShardCommand],
    *,
    popen: Callable[..., subprocess.Popen] = subprocess.Popen,
) -> int:
    """Start every shard in parallel, wait for all, return 0 only if all passed."""
    logger.info("Running tests with %d shards in parallel", len(commands))
    processes = []
    for command in commands:
        try:
            processes.append((command.spec, popen(command.cmd, env=command.env)))
        except OSError as exc:
            logger.error("Shard %s could not start: %s", command.spec, exc)
            processes.append((command.spec, None))

    failed: list[tuple[ShardSpec, int | None]] = []
    for spec, process in processes:
        code = process.wait() if process is not None else None
        if code != 0:
            logger.error("Shard %s exited with code %s", spec, code)
            failed.append((spec, code))

    if not failed:
        logger.info("All %d shards completed successfully", len(commands))
        return 0

    logger.error("%d of %d shards failed", len(failed), len(commands))
    for spec, code in failed:
        logger.error("  - Shard %s: exit code %s", spec, code)
    logger.info("%d shard(s) succeeded", len(commands) - len(failed))
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="saucedemo-shards",
        description="Run the e2e suite as N parallel pytest shards. Unknown arguments go to pytest.",
    )
    parser.add_argument("shards", nargs="?", type=int, default=DEFAULT_SHARDS, help="number of shards (default: 4)")
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    options, pytest_args = parser.parse_known_args(argv)

    configure_logging(options.log_level)
    if options.shards < 1:
        parser.error("number of shards must be at least 1")

    return run_shards(build_shard_commands(options.shards, pytest_args))


if __name__ == "__main__":
    raise SystemExit(main())
