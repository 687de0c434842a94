"""Interface for the table of events.

Defines the `EventTable` abstraction, the only way the service layer reads and
writes event rows. One row exists per user; rows are never deleted.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from eventsite.domain.model import Event
from eventsite.domain.value_objects import (
    EventState,
    PictureSet,
    SubEventDetail,
    UiState,
)

# Fields that `apply_changes` may write. Everything else is either immutable
# (id, user_id, time_created) or owned by a dedicated method (state).
MUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "picture_set",
        "sub_event_details",
        "ui_state",
        "current_active_subdomain",
        "subscription_customer_id",
        "subscription_id",
        "subscription_active",
    }
)


@dataclass(frozen=True)
class NewEvent:
    """Everything needed to insert an event; the table assigns the id."""

    user_id: str
    state: EventState
    title: str
    picture_set: PictureSet
    sub_event_details: tuple[SubEventDetail, ...]
    ui_state: UiState
    current_active_subdomain: str
    time_created: datetime
    time_last_updated: datetime


def check_changes(changes: Mapping[str, Any]) -> None:
    """Reject change sets that touch fields outside `MUTABLE_FIELDS`."""
    unknown = set(changes) - MUTABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot change event field(s): {', '.join(sorted(unknown))}")


class EventTable(abc.ABC):
    """Read and write access to event rows within one unit of work."""

    @abc.abstractmethod
    def add(self, new_event: NewEvent) -> Event:
        """Insert a new event and return it with its assigned id.

        Raises:
            EventAlreadyExistsError: If the user already owns an event, removed
                or not.
        """

    @abc.abstractmethod
    def get(self, event_id: int) -> Event | None:
        """Return the event with the given id, or ``None``."""

    @abc.abstractmethod
    def get_by_user(self, user_id: str) -> Event | None:
        """Return the event owned by `user_id`, or ``None``."""

    @abc.abstractmethod
    def apply_changes(
        self, user_id: str, changes: Mapping[str, Any], now: datetime
    ) -> Event | None:
        """Write `changes` and `time_last_updated=now` to the user's event.

        The write happens whatever the event's state; callers inspect the
        returned event to decide what to do next.

        Args:
            user_id: Owner of the event to change.
            changes: Field name to new value, in domain types. Keys must be
                members of `MUTABLE_FIELDS`.
            now: Timestamp of the change.

        Returns:
            The event as stored after the write, or ``None`` if the user has
            no event.

        Raises:
            ValueError: If `changes` names a field that cannot be changed.
        """

    @abc.abstractmethod
    def set_state(self, event_id: int, state: EventState, now: datetime) -> Event:
        """Move an existing event to `state` and return it."""
