"""Lifecycle policy for events.

An event moves between CREATED and ACTIVE on its own, depending on whether its
content looks complete. REMOVED is set from outside the core and is terminal:
no rule here ever leaves it.

Both functions are pure; the service layer decides when to call them and
persists what they return.
"""

from __future__ import annotations

from dataclasses import dataclass

from .model import Event
from .value_objects import EventHistoryType, EventState


@dataclass(frozen=True)
class Transition:
    """A state change together with the history entry that records it."""

    from_state: EventState
    to_state: EventState
    history_type: EventHistoryType


ACTIVATE = Transition(EventState.CREATED, EventState.ACTIVE, EventHistoryType.ACTIVATED)
DEACTIVATE = Transition(
    EventState.ACTIVE, EventState.CREATED, EventHistoryType.DEACTIVATED
)


def looks_active(event: Event) -> bool:
    """Whether the event's content is complete enough to be shown publicly.

    The event needs a title and at least one scheduled sub-event, and every
    scheduled sub-event needs an address, map coordinates and a date and time.
    """
    if not event.title.strip():
        return False
    scheduled = [detail for detail in event.sub_event_details if detail.have_event]
    if not scheduled:
        return False
    return all(detail.is_complete() for detail in scheduled)


def decide_transition(event: Event) -> Transition | None:
    """Decide whether the event should change state given its current content.

    Returns:
        ACTIVATE for a complete CREATED event, DEACTIVATE for an incomplete
        ACTIVE event, otherwise None (including for REMOVED events).
    """
    match event.state:
        case EventState.CREATED if looks_active(event):
            return ACTIVATE
        case EventState.ACTIVE if not looks_active(event):
            return DEACTIVATE
        case _:
            return None
