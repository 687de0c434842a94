"""The entities the service owns: events, their history entries and their subdomain claims."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .value_objects import (
    EventHistoryType,
    EventState,
    PictureSet,
    SubDomainState,
    SubEventDetail,
    UiState,
)

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Event:
    """Snapshot of a user's event as currently stored.

    There is exactly one event per user. Removal is a state, never a delete.
    """

    id: int
    user_id: str
    state: EventState
    title: str
    picture_set: PictureSet
    sub_event_details: tuple[SubEventDetail, ...]
    ui_state: UiState
    current_active_subdomain: str
    time_created: datetime
    time_last_updated: datetime
    time_removed: datetime | None = None
    subscription_customer_id: str | None = None
    subscription_id: str | None = None
    subscription_active: bool = False

    @property
    def is_removed(self) -> bool:
        """True once the event has been soft-deleted."""
        return self.state is EventState.REMOVED

    def to_json(self) -> dict[str, Any]:
        """Plain JSON view of the event, as shown to API clients and the CLI."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "state": self.state.name.lower(),
            "title": self.title,
            "picture_set": self.picture_set.to_json(),
            "sub_event_details": [s.to_json() for s in self.sub_event_details],
            "ui_state": self.ui_state.to_json(),
            "current_active_subdomain": self.current_active_subdomain,
            "time_created": self.time_created.isoformat(),
            "time_last_updated": self.time_last_updated.isoformat(),
            "time_removed": self.time_removed.isoformat() if self.time_removed else None,
            "subscription_active": self.subscription_active,
        }


@dataclass(frozen=True)
class EventHistoryEntry:
    """One append-only record of a mutation applied to an event.

    `id` is None until the entry has been persisted.
    """

    event_id: int
    type: EventHistoryType
    timestamp: datetime
    data: dict[str, Any] | None = None
    id: int | None = field(default=None, compare=False)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "type": self.type.name.lower(),
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


@dataclass(frozen=True)
class SubDomainClaim:
    """A subdomain granted to an event.

    At most one ACTIVE claim may exist for any given subdomain. Older claims of
    the same event stay ACTIVE so links keep working while DNS catches up.
    """

    id: int
    subdomain: str
    state: SubDomainState
    event_id: int
    user_id: str

    @property
    def is_active(self) -> bool:
        return self.state is SubDomainState.ACTIVE
