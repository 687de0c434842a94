"""Module including value objects used across the domain layer.

Content value objects know how to turn themselves into plain JSON-compatible
structures (`to_json`) and back (`from_json`); that is how they are stored in
the JSON columns of the `events` table and in history payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any


class EventState(IntEnum):
    """Lifecycle state of an event.

    CREATED events exist but are not yet complete enough to be public,
    ACTIVE events are served on their subdomains, REMOVED events are
    soft-deleted and never leave that state.
    """

    CREATED = 1
    ACTIVE = 2
    REMOVED = 3


class EventHistoryType(IntEnum):
    """Kind of mutation recorded in an event's history log."""

    CREATED = 1
    UPDATED = 2
    ACTIVATED = 3
    DEACTIVATED = 4
    UI_MARKED_SKIPPED_SETUP_WIZARD = 5
    SUBSCRIBED = 6


class SubDomainState(str, Enum):
    """State of a subdomain claim."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Coordinates:
    """A point on the map, in decimal degrees."""

    latitude: float
    longitude: float

    def to_json(self) -> list[float]:
        return [self.latitude, self.longitude]

    @classmethod
    def from_json(cls, raw: list[float]) -> Coordinates:
        latitude, longitude = raw
        return cls(latitude=float(latitude), longitude=float(longitude))


@dataclass(frozen=True)
class SubEventDetail:
    """One part of the event (e.g. the ceremony or the reception).

    Only sub-events with `have_event` set are shown to guests, and only those
    need a venue and a time.
    """

    slug: str
    display_title: str
    have_event: bool = False
    address: str = ""
    coordinates: Coordinates | None = None
    date_and_time: datetime | None = None

    def is_complete(self) -> bool:
        """Whether a scheduled sub-event has everything guests need to attend it."""
        return (
            bool(self.address.strip())
            and self.coordinates is not None
            and self.date_and_time is not None
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "display_title": self.display_title,
            "have_event": self.have_event,
            "address": self.address,
            "coordinates": self.coordinates.to_json() if self.coordinates else None,
            "date_and_time": (
                self.date_and_time.isoformat() if self.date_and_time else None
            ),
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> SubEventDetail:
        coordinates = raw.get("coordinates")
        date_and_time = raw.get("date_and_time")
        return cls(
            slug=raw["slug"],
            display_title=raw["display_title"],
            have_event=bool(raw.get("have_event", False)),
            address=raw.get("address") or "",
            coordinates=Coordinates.from_json(coordinates) if coordinates else None,
            date_and_time=(
                datetime.fromisoformat(date_and_time) if date_and_time else None
            ),
        )


@dataclass(frozen=True)
class Picture:
    """A reference to an uploaded picture and its place in the set."""

    position: int
    uri: str
    width: int
    height: int

    def to_json(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "uri": self.uri,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> Picture:
        return cls(
            position=int(raw["position"]),
            uri=raw["uri"],
            width=int(raw["width"]),
            height=int(raw["height"]),
        )


@dataclass(frozen=True)
class PictureSet:
    """Ordered collection of pictures; always kept sorted by position."""

    pictures: tuple[Picture, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.pictures, key=lambda picture: picture.position))
        object.__setattr__(self, "pictures", ordered)

    def to_json(self) -> dict[str, Any]:
        return {"pictures": [picture.to_json() for picture in self.pictures]}

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> PictureSet:
        return cls(tuple(Picture.from_json(p) for p in raw.get("pictures", [])))


@dataclass(frozen=True)
class UiState:
    """Flags the frontend keeps on the event; not part of any business rule."""

    show_setup_wizard: bool = True

    def to_json(self) -> dict[str, Any]:
        return {"show_setup_wizard": self.show_setup_wizard}

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> UiState:
        return cls(show_setup_wizard=bool(raw.get("show_setup_wizard", True)))


@dataclass(frozen=True)
class SubscriptionIds:
    """Identifiers handed back by the payments provider for a new subscription."""

    customer_id: str
    subscription_id: str

    def to_json(self) -> dict[str, str]:
        return {
            "customer_id": self.customer_id,
            "subscription_id": self.subscription_id,
        }


@dataclass(frozen=True)
class SubEventTemplate:
    """Slug and title of one of the sub-events every new event starts with."""

    slug: str
    display_title: str


DEFAULT_SUB_EVENTS: tuple[SubEventTemplate, ...] = (
    SubEventTemplate("civil-ceremony", "Civil Ceremony"),
    SubEventTemplate("religious-ceremony", "Religious Ceremony"),
    SubEventTemplate("reception", "Reception"),
)


def default_sub_event_details() -> tuple[SubEventDetail, ...]:
    """The unscheduled sub-events a freshly created event starts with."""
    return tuple(
        SubEventDetail(slug=template.slug, display_title=template.display_title)
        for template in DEFAULT_SUB_EVENTS
    )
