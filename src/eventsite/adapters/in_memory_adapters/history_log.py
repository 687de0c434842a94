"""In-memory EventHistoryLog implementation for testing purposes."""

from dataclasses import replace

from eventsite.domain.model import EventHistoryEntry
from eventsite.interfaces.history_log import EventHistoryLog

from .tables import InMemoryTables


class InMemoryEventHistoryLog(EventHistoryLog):
    """EventHistoryLog over `InMemoryTables.history`."""

    def __init__(self, tables: InMemoryTables):
        self.tables = tables

    def append(self, entry: EventHistoryEntry) -> EventHistoryEntry:
        self.tables.last_history_id += 1
        stored = replace(entry, id=self.tables.last_history_id)
        self.tables.history.append(stored)
        return stored

    def read(self, event_id: int) -> list[EventHistoryEntry]:
        entries = [e for e in self.tables.history if e.event_id == event_id]
        return sorted(entries, key=lambda e: (e.timestamp, e.id))
