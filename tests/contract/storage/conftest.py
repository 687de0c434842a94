"""Pytest fixtures for the storage port contract tests.

Every test here runs against each backend: the in-memory adapters, the
SQLAlchemy adapters on an in-memory SQLite database and the SQLAlchemy
adapters on Postgres.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

import pytest

from eventsite.adapters.in_memory_adapters import (
    InMemoryEventHistoryLog,
    InMemoryEventTable,
    InMemorySubDomainClaims,
    InMemoryTables,
)
from eventsite.adapters.sqlalchemy_adapters import (
    SqlAlchemyEventHistoryLog,
    SqlAlchemyEventTable,
    SqlAlchemySubDomainClaims,
)
from eventsite.domain.value_objects import (
    EventState,
    PictureSet,
    UiState,
    default_sub_event_details,
)
from eventsite.interfaces.event_table import EventTable, NewEvent
from eventsite.interfaces.history_log import EventHistoryLog
from eventsite.interfaces.subdomain_claims import SubDomainClaims
from tests.fixtures.datagen import T0


@dataclass
class Ports:
    """The three storage ports, sharing one backend."""

    events: EventTable
    history: EventHistoryLog
    subdomains: SubDomainClaims


@pytest.fixture(params=["memory", "sqlite", "postgres"])
def ports(request: pytest.FixtureRequest) -> Iterator[Ports]:
    """Return fresh storage ports for the requested backend.

    SQL backends run inside one transaction that is rolled back afterwards.
    """
    match request.param:
        case "memory":
            tables = InMemoryTables()
            yield Ports(
                InMemoryEventTable(tables),
                InMemoryEventHistoryLog(tables),
                InMemorySubDomainClaims(tables),
            )
        case "sqlite" | "postgres":
            engine_fixture = (
                "sqlite_engine_memory" if request.param == "sqlite" else "postgres_engine"
            )
            engine = request.getfixturevalue(engine_fixture)
            with engine.connect() as connection:
                yield Ports(
                    SqlAlchemyEventTable(connection),
                    SqlAlchemyEventHistoryLog(connection),
                    SqlAlchemySubDomainClaims(connection),
                )
                connection.rollback()
        case _:
            raise ValueError(f"unknown storage backend: {request.param}")


@pytest.fixture
def make_new_event() -> Callable[..., NewEvent]:
    """Factory for insertable events; keyword overrides replace any field."""

    def _make(user_id: str = "u-1", **overrides) -> NewEvent:
        fields = {
            "user_id": user_id,
            "state": EventState.CREATED,
            "title": "",
            "picture_set": PictureSet(),
            "sub_event_details": default_sub_event_details(),
            "ui_state": UiState(),
            "current_active_subdomain": f"site-{user_id}",
            "time_created": T0,
            "time_last_updated": T0,
        }
        fields.update(overrides)
        return NewEvent(**fields)

    return _make
