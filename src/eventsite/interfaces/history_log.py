"""Interface for the append-only event history log.

The log only grows: the contract offers no way to change or delete an entry.
"""

from __future__ import annotations

import abc

from eventsite.domain.model import EventHistoryEntry


class EventHistoryLog(abc.ABC):
    """Append-only audit trail of the mutations applied to events."""

    @abc.abstractmethod
    def append(self, entry: EventHistoryEntry) -> EventHistoryEntry:
        """Persist `entry` and return it with its assigned id."""

    @abc.abstractmethod
    def read(self, event_id: int) -> list[EventHistoryEntry]:
        """Return every entry of an event, ordered by timestamp then id."""
