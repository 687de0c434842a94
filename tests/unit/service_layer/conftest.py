"""Pytest fixtures for service layer unit tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from eventsite.adapters.id_generators import SimpleIdGenerator
from eventsite.adapters.payments import LocalPaymentsGateway
from eventsite.service_layer.repository import EventRepository

from tests.unit.service_layer.fakes import FakeUoWFactory

# pylint: disable=redefined-outer-name


@pytest.fixture
def uow_factory() -> FakeUoWFactory:
    """Fresh in-memory tables behind a recording unit-of-work factory."""
    return FakeUoWFactory()


@pytest.fixture
def payments() -> LocalPaymentsGateway:
    """Local payments gateway with its own id sequence."""
    return LocalPaymentsGateway(SimpleIdGenerator(length=8))


@pytest.fixture
def repository(uow_factory: FakeUoWFactory, payments: LocalPaymentsGateway) -> EventRepository:
    """Repository over in-memory tables with predictable generated subdomains."""
    return EventRepository(
        uow_factory,
        id_generator=SimpleIdGenerator(length=8),
        payments=payments,
        max_attempts=3,
    )


@pytest.fixture
def now(clock) -> datetime:
    """A single timestamp for tests that need only one."""
    return clock()
