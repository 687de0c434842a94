"""Implementation of EventHistoryLog using SQLAlchemy Core."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy import insert, select

from eventsite.adapters.db.schema import event_history
from eventsite.domain.model import EventHistoryEntry
from eventsite.domain.value_objects import EventHistoryType
from eventsite.interfaces.history_log import EventHistoryLog

from .base import ConnectionBound


class SqlAlchemyEventHistoryLog(ConnectionBound, EventHistoryLog):
    """EventHistoryLog backed by the append-only `event_history` table."""

    def append(self, entry: EventHistoryEntry) -> EventHistoryEntry:
        stmt = (
            insert(event_history)
            .values(
                event_id=entry.event_id,
                type=int(entry.type),
                timestamp=entry.timestamp,
                data=entry.data,
            )
            .returning(event_history.c.id)
        )
        new_id = self._execute(stmt).scalar_one()
        return replace(entry, id=int(new_id))

    def read(self, event_id: int) -> list[EventHistoryEntry]:
        stmt = (
            select(event_history)
            .where(event_history.c.event_id == event_id)
            .order_by(event_history.c.timestamp, event_history.c.id)
        )
        return [
            EventHistoryEntry(
                event_id=int(row["event_id"]),
                type=EventHistoryType(row["type"]),
                timestamp=row["timestamp"],
                data=row["data"],
                id=int(row["id"]),
            )
            for row in self._execute(stmt).mappings()
        ]
