"""Implementation of EventTable using SQLAlchemy Core."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from eventsite.adapters.db.errors import violates_unique
from eventsite.adapters.db.schema import events
from eventsite.domain.errors import EventAlreadyExistsError
from eventsite.domain.model import Event
from eventsite.domain.value_objects import (
    EventState,
    PictureSet,
    SubEventDetail,
    UiState,
)
from eventsite.interfaces.event_table import EventTable, NewEvent, check_changes

from .base import ConnectionBound

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping


def _to_column_value(name: str, value: Any) -> Any:
    """Convert a domain value into what the `events` column stores."""
    match name:
        case "picture_set" | "ui_state":
            return value.to_json()
        case "sub_event_details":
            return [detail.to_json() for detail in value]
        case _:
            return value


def _row_to_event(row: RowMapping) -> Event:
    return Event(
        id=int(row["id"]),
        user_id=row["user_id"],
        state=EventState(row["state"]),
        title=row["title"],
        picture_set=PictureSet.from_json(row["picture_set"]),
        sub_event_details=tuple(
            SubEventDetail.from_json(raw) for raw in row["sub_event_details"]
        ),
        ui_state=UiState.from_json(row["ui_state"]),
        current_active_subdomain=row["current_active_subdomain"],
        time_created=row["time_created"],
        time_last_updated=row["time_last_updated"],
        time_removed=row["time_removed"],
        subscription_customer_id=row["subscription_customer_id"],
        subscription_id=row["subscription_id"],
        subscription_active=bool(row["subscription_active"]),
    )


class SqlAlchemyEventTable(ConnectionBound, EventTable):
    """EventTable backed by the `events` table."""

    def add(self, new_event: NewEvent) -> Event:
        values = {
            "user_id": new_event.user_id,
            "state": int(new_event.state),
            "title": new_event.title,
            "picture_set": new_event.picture_set.to_json(),
            "sub_event_details": [d.to_json() for d in new_event.sub_event_details],
            "ui_state": new_event.ui_state.to_json(),
            "current_active_subdomain": new_event.current_active_subdomain,
            "time_created": new_event.time_created,
            "time_last_updated": new_event.time_last_updated,
        }
        try:
            row = (
                self._execute(insert(events).values(**values).returning(events))
                .mappings()
                .one()
            )
        except IntegrityError as e:
            if violates_unique(e, "user_id"):
                raise EventAlreadyExistsError(new_event.user_id) from e
            raise
        return _row_to_event(row)

    def get(self, event_id: int) -> Event | None:
        stmt = select(events).where(events.c.id == event_id)
        if not (row := self._execute(stmt).mappings().one_or_none()):
            return None
        return _row_to_event(row)

    def get_by_user(self, user_id: str) -> Event | None:
        stmt = select(events).where(events.c.user_id == user_id)
        if not (row := self._execute(stmt).mappings().one_or_none()):
            return None
        return _row_to_event(row)

    def apply_changes(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> Event | None:
        check_changes(changes)
        values = {name: _to_column_value(name, v) for name, v in changes.items()}
        stmt = (
            update(events)
            .where(events.c.user_id == user_id)
            .values(**values, time_last_updated=now)
            .returning(events)
        )
        if not (row := self._execute(stmt).mappings().one_or_none()):
            return None
        return _row_to_event(row)

    def set_state(self, event_id: int, state: EventState, now: datetime) -> Event:
        stmt = (
            update(events)
            .where(events.c.id == event_id)
            .values(state=int(state), time_last_updated=now)
            .returning(events)
        )
        return _row_to_event(self._execute(stmt).mappings().one())
