"""Requests accepted by the event repository.

Requests arrive already validated and carry no identity of their own; the
authenticated user id and the timestamp travel next to them.
"""

import abc
from dataclasses import dataclass
from typing import Any

from eventsite.domain.subdomain import normalize_subdomain
from eventsite.domain.value_objects import PictureSet, SubEventDetail
from eventsite.interfaces.unsettable import UNSET, Patchable, is_set


@dataclass(frozen=True)
class Command(abc.ABC):
    """Base class for all commands."""

    @abc.abstractmethod
    def as_payload(self) -> dict[str, Any]:
        """JSON snapshot of the request, stored with its history entry."""


@dataclass(frozen=True)
class CreateEvent(Command):
    """Create the caller's event."""

    title: str = ""

    def as_payload(self) -> dict[str, Any]:
        return {"title": self.title}


@dataclass(frozen=True)
class UpdateEvent(Command):
    """Change some of the fields of the caller's event.

    Fields left as ``UNSET`` are not touched. `subdomain` is the public name
    the owner wants the event served under.
    """

    title: Patchable[str] = UNSET
    picture_set: Patchable[PictureSet] = UNSET
    sub_event_details: Patchable[tuple[SubEventDetail, ...]] = UNSET
    subdomain: Patchable[str] = UNSET

    def changes(self) -> dict[str, Any]:
        """Event fields to write, keyed by column name.

        Raises:
            InvalidSubDomainError: If the requested subdomain is not a valid
                DNS label.
        """
        changes: dict[str, Any] = {}
        if is_set(self.title):
            changes["title"] = self.title
        if is_set(self.picture_set):
            changes["picture_set"] = self.picture_set
        if is_set(self.sub_event_details):
            changes["sub_event_details"] = tuple(self.sub_event_details)
        if is_set(self.subdomain):
            changes["current_active_subdomain"] = normalize_subdomain(self.subdomain)
        return changes

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if is_set(self.title):
            payload["title"] = self.title
        if is_set(self.picture_set):
            payload["picture_set"] = self.picture_set.to_json()
        if is_set(self.sub_event_details):
            payload["sub_event_details"] = [d.to_json() for d in self.sub_event_details]
        if is_set(self.subdomain):
            payload["subdomain"] = self.subdomain
        return payload
