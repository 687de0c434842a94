"""Default marks and fixtures for tests under `tests/e2e/`.

Provides a test-only `log-demo` command that emits log records at every
level, a CliRunner, an isolated filesystem, and a migrated SQLite database
whose URL is handed to the CLI through the environment.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import pytest
from alembic import command
from click.testing import CliRunner

from eventsite import config
from eventsite.adapters.db.engine import make_engine
from eventsite.adapters.id_generators import SimpleIdGenerator
from eventsite.bootstrap import build_repository, build_uow_factory
from eventsite.entrypoints.cli.main import eventsite

# pylint: disable=redefined-outer-name,unused-argument

E2E_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "e2e"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected below `tests/e2e/` as `e2e` unless it already is."""
    for item in items:
        if E2E_ROOT not in item.path.resolve().parents:
            continue
        if MARKER_NAME not in {marker.name for marker in item.iter_markers()}:
            item.add_marker(pytest.mark.e2e)


@click.command()
def log_demo():
    """Emit one record per level on a project logger and a third-party logger."""
    logger = logging.getLogger("eventsite.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register `log-demo` on the top-level group for the duration of a test."""
    eventsite.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(eventsite, "log-demo")


@pytest.fixture
def runner(monkeypatch):
    """CliRunner with the EVENTSITE settings cleared from the environment."""
    for name in (config.DB_URL_ENVVAR, config.ENV_ENVVAR, config.TX_ATTEMPTS_ENVVAR):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of an empty, unmigrated SQLite file."""
    return f"sqlite+pysqlite:///{tmp_path / 'eventsite.db'}"


@pytest.fixture
def migrated_url(sqlite_url: str) -> str:
    """URL of a SQLite file migrated to head."""
    command.upgrade(config.build_alembic_config(sqlite_url), "head")
    return sqlite_url


@pytest.fixture
def seeded_repository(migrated_url: str):
    """Repository over the migrated file, for arranging data before invoking the CLI."""
    engine = make_engine(migrated_url)
    try:
        yield build_repository(
            build_uow_factory(engine), id_generator=SimpleIdGenerator(length=8)
        )
    finally:
        engine.dispose()
