"""pytest plugin wiring the suite's configuration into the test run.

Registered from the root ``conftest.py``.  Adds ``--project`` and
``--shard``, applies logging, expect-timeout, worker and retry settings
from the environment snapshot, and attaches the JSON results reporter.
"""

from __future__ import annotations

import pytest
from playwright.sync_api import expect

from .config.env_config import EnvConfig, get_env_config
from .config.projects import DEFAULT_PROJECT, PROJECTS
from .errors import EnvironmentConfigError, ValidationError
from .reporting import JsonResultsReporter
from .sharding import ShardSpec, parse_shard_spec, results_suffix, select_shard
from .utils.file_helpers import RESULTS_DIR
from .utils.logging_utils import configure_logging

shard_key = pytest.StashKey[ShardSpec | None]()


def _env() -> EnvConfig:
    try:
        return get_env_config()
    except EnvironmentConfigError as exc:
        raise pytest.UsageError(str(exc)) from exc


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("saucedemo", "SauceDemo e2e suite")
    group.addoption(
        "--project",
        default=DEFAULT_PROJECT,
        choices=sorted(PROJECTS),
        help="browser project to run against (default: %(default)s)",
    )
    group.addoption(
        "--shard",
        default=None,
        metavar="I/N",
        help="run only the I-th of N round-robin partitions of the collected tests",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_cmdline_main(config: pytest.Config) -> None:
    # must run before xdist reads -n; workers inherit the controller's value
    if hasattr(config, "workerinput") or not config.pluginmanager.hasplugin("xdist"):
        return
    workers = _env().workers
    if workers and not getattr(config.option, "numprocesses", None):
        config.option.numprocesses = workers


def pytest_configure(config: pytest.Config) -> None:
    env = _env()

    configure_logging(env.log_level)
    expect.set_options(timeout=env.expect_timeout)

    shard = config.getoption("shard")
    try:
        spec = parse_shard_spec(shard) if shard else None
    except ValidationError as exc:
        raise pytest.UsageError(str(exc)) from exc
    config.stash[shard_key] = spec

    if env.retries and not config.getoption("reruns", None):
        config.option.reruns = env.retries

    # xdist workers report back to the controller, which owns the file
    if not hasattr(config, "workerinput"):
        reporter = JsonResultsReporter(
            RESULTS_DIR / f"results{results_suffix(spec)}.json",
            production=env.is_production,
        )
        config.pluginmanager.register(reporter, "saucedemo-json-results")


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    spec = config.stash.get(shard_key, None)
    if spec is None:
        return
    selected, deselected = select_shard(items, spec)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected
