"""Default marks and environment isolation for tests under `tests/unit/`."""

from pathlib import Path

import pytest

from eventsite import config

# pylint: disable=unused-argument

UNIT_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "unit"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]  # pylint: disable=redefined-outer-name
) -> None:
    """Mark every item collected below `tests/unit/` as `unit` unless it already is."""
    for item in items:
        if UNIT_ROOT not in item.path.resolve().parents:
            continue
        if MARKER_NAME not in {marker.name for marker in item.iter_markers()}:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _no_eventsite_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings from the developer's shell out of unit tests."""
    for name in (config.DB_URL_ENVVAR, config.ENV_ENVVAR, config.TX_ATTEMPTS_ENVVAR):
        monkeypatch.delenv(name, raising=False)
