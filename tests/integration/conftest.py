"""Default marks and shared fixtures for tests under `tests/integration/`."""

from pathlib import Path

import pytest

from eventsite.adapters.id_generators import SimpleIdGenerator
from eventsite.adapters.payments import LocalPaymentsGateway
from eventsite.bootstrap import build_repository, build_uow_factory

# pylint: disable=unused-argument,redefined-outer-name

INTEGRATION_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "integration"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected below `tests/integration/` as `integration` unless it already is."""
    for item in items:
        if INTEGRATION_ROOT not in item.path.resolve().parents:
            continue
        if MARKER_NAME not in {marker.name for marker in item.iter_markers()}:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def sql_repository(engine):
    """EventRepository over the `engine` fixture, with predictable subdomains.

    Tests using it must parametrize `engine` indirectly.
    """
    return build_repository(
        build_uow_factory(engine),
        id_generator=SimpleIdGenerator(length=8),
        payments=LocalPaymentsGateway(SimpleIdGenerator(length=8)),
    )
