"""Rows shared by the in-memory adapters."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from eventsite.domain.model import Event, EventHistoryEntry, SubDomainClaim


@dataclass
class InMemoryTables:
    """Plain containers standing in for the three tables.

    Note: not thread-safe; intended for single-threaded tests.
    """

    events: dict[int, Event] = field(default_factory=dict)
    history: list[EventHistoryEntry] = field(default_factory=list)
    claims: list[SubDomainClaim] = field(default_factory=list)
    last_event_id: int = 0
    last_history_id: int = 0
    last_claim_id: int = 0

    def snapshot(self) -> InMemoryTables:
        """Copy of the current rows, used to roll back a unit of work."""
        return copy.deepcopy(self)

    def restore(self, snapshot: InMemoryTables) -> None:
        """Replace the current rows with those of `snapshot`."""
        self.events = snapshot.events
        self.history = snapshot.history
        self.claims = snapshot.claims
        self.last_event_id = snapshot.last_event_id
        self.last_history_id = snapshot.last_history_id
        self.last_claim_id = snapshot.last_claim_id
