"""In-memory EventTable implementation for testing purposes."""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from eventsite.domain.errors import EventAlreadyExistsError
from eventsite.domain.model import Event
from eventsite.domain.value_objects import EventState
from eventsite.interfaces.event_table import EventTable, NewEvent, check_changes

from .tables import InMemoryTables


class InMemoryEventTable(EventTable):
    """EventTable over `InMemoryTables.events`."""

    def __init__(self, tables: InMemoryTables):
        self.tables = tables

    def add(self, new_event: NewEvent) -> Event:
        if self.get_by_user(new_event.user_id) is not None:
            raise EventAlreadyExistsError(new_event.user_id)
        self.tables.last_event_id += 1
        event = Event(
            id=self.tables.last_event_id,
            user_id=new_event.user_id,
            state=new_event.state,
            title=new_event.title,
            picture_set=new_event.picture_set,
            sub_event_details=new_event.sub_event_details,
            ui_state=new_event.ui_state,
            current_active_subdomain=new_event.current_active_subdomain,
            time_created=new_event.time_created,
            time_last_updated=new_event.time_last_updated,
        )
        self.tables.events[event.id] = event
        return event

    def get(self, event_id: int) -> Event | None:
        return self.tables.events.get(event_id)

    def get_by_user(self, user_id: str) -> Event | None:
        for event in self.tables.events.values():
            if event.user_id == user_id:
                return event
        return None

    def apply_changes(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> Event | None:
        check_changes(changes)
        if (event := self.get_by_user(user_id)) is None:
            return None
        updated = replace(event, **changes, time_last_updated=now)
        self.tables.events[event.id] = updated
        return updated

    def set_state(self, event_id: int, state: EventState, now: datetime) -> Event:
        updated = replace(self.tables.events[event_id], state=state, time_last_updated=now)
        self.tables.events[event_id] = updated
        return updated
