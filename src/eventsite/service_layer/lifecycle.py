"""Transactional protocols that change events.

Every function here runs exactly one unit of work: it enters `uow`, does all
of its reads and writes through it, and commits once at the end. Anything
raised before the commit leaves the database untouched.
"""

import logging
from datetime import datetime

from eventsite.domain.errors import (
    EventNotFoundError,
    EventRemovedError,
    InvalidSubDomainError,
)
from eventsite.domain.lifecycle import decide_transition
from eventsite.domain.model import Event, EventHistoryEntry
from eventsite.domain.value_objects import (
    EventHistoryType,
    EventState,
    PictureSet,
    SubscriptionIds,
    UiState,
    default_sub_event_details,
)
from eventsite.interfaces.event_table import NewEvent
from eventsite.interfaces.id_generator import IdGenerator
from eventsite.interfaces.unit_of_work import AbstractUnitOfWork

from . import claim_manager, commands

logger = logging.getLogger(__name__)


def create_event(
    uow: AbstractUnitOfWork,
    user_id: str,
    cmd: commands.CreateEvent,
    now: datetime,
    id_generator: IdGenerator,
) -> Event:
    """Create the user's event in the CREATED state under a generated subdomain.

    Raises:
        EventAlreadyExistsError: If the user already has an event.
    """
    subdomain = claim_manager.generate_subdomain(id_generator)
    new_event = NewEvent(
        user_id=user_id,
        state=EventState.CREATED,
        title=cmd.title,
        picture_set=PictureSet(),
        sub_event_details=default_sub_event_details(),
        ui_state=UiState(),
        current_active_subdomain=subdomain,
        time_created=now,
        time_last_updated=now,
    )

    with uow:
        event = uow.events.add(new_event)
        claim_manager.claim(uow.subdomains, subdomain, event.id, user_id)
        uow.history.append(
            EventHistoryEntry(event.id, EventHistoryType.CREATED, now, cmd.as_payload())
        )
        uow.commit()

    logger.info("Created event %s for user %s at %s", event.id, user_id, subdomain)
    return event


def update_event(
    uow: AbstractUnitOfWork,
    user_id: str,
    cmd: commands.UpdateEvent,
    now: datetime,
) -> Event:
    """Apply an update and move the event between CREATED and ACTIVE as needed.

    A REMOVED event still receives the field write, which is committed before
    `EventRemovedError` is raised; nothing else happens to it.

    A missing or removed event is reported ahead of a malformed subdomain; in
    that case nothing is written.

    Raises:
        EventNotFoundError: If the user has no event.
        EventRemovedError: If the user's event has been removed.
        InvalidSubDomainError: If the requested subdomain is malformed.
        SubDomainInUseError: If the requested subdomain belongs to someone else.
    """
    try:
        changes = cmd.changes()
    except InvalidSubDomainError:
        with uow:
            _require_live_event(uow, user_id)
        raise

    with uow:
        event = uow.events.apply_changes(user_id, changes, now)
        if event is None:
            raise EventNotFoundError(user_id=user_id)
        if event.is_removed:
            uow.commit()
            raise EventRemovedError(event.id)

        if "current_active_subdomain" in changes:
            claim_manager.claim(
                uow.subdomains, event.current_active_subdomain, event.id, user_id
            )

        uow.history.append(
            EventHistoryEntry(event.id, EventHistoryType.UPDATED, now, cmd.as_payload())
        )

        if transition := decide_transition(event):
            event = uow.events.set_state(event.id, transition.to_state, now)
            uow.history.append(EventHistoryEntry(event.id, transition.history_type, now))
            logger.info(
                "Event %s moved from %s to %s",
                event.id,
                transition.from_state.name,
                transition.to_state.name,
            )

        uow.commit()

    return event


def mark_skipped_setup_wizard(
    uow: AbstractUnitOfWork, user_id: str, now: datetime
) -> Event:
    """Remember that the owner dismissed the setup wizard.

    Raises:
        EventNotFoundError: If the user has no event.
        EventRemovedError: If the user's event has been removed.
    """
    with uow:
        current = _require_live_event(uow, user_id)
        event = uow.events.apply_changes(
            user_id, {"ui_state": UiState(show_setup_wizard=False)}, now
        )
        if event is None:
            raise EventNotFoundError(user_id=user_id)
        uow.history.append(
            EventHistoryEntry(
                current.id, EventHistoryType.UI_MARKED_SKIPPED_SETUP_WIZARD, now
            )
        )
        uow.commit()

    return event


def record_subscription(
    uow: AbstractUnitOfWork, user_id: str, ids: SubscriptionIds, now: datetime
) -> Event:
    """Store a subscription created with the payments provider.

    If the event was subscribed in the meantime (two subscribe calls racing
    past the check before the provider call), the stored ids are kept and the
    surplus ids are logged at WARNING so the extra provider subscription can
    be cancelled by hand.

    Raises:
        EventNotFoundError: If the user has no event.
        EventRemovedError: If the user's event has been removed.
    """
    with uow:
        current = _require_live_event(uow, user_id)
        if current.subscription_active:
            logger.warning(
                "Event %s is already subscribed (%s); not recording surplus "
                "subscription %s of customer %s",
                current.id,
                current.subscription_id,
                ids.subscription_id,
                ids.customer_id,
            )
            return current
        event = uow.events.apply_changes(
            user_id,
            {
                "subscription_customer_id": ids.customer_id,
                "subscription_id": ids.subscription_id,
                "subscription_active": True,
            },
            now,
        )
        if event is None:
            raise EventNotFoundError(user_id=user_id)
        uow.history.append(
            EventHistoryEntry(current.id, EventHistoryType.SUBSCRIBED, now, ids.to_json())
        )
        uow.commit()

    logger.info("Event %s subscribed (%s)", event.id, ids.subscription_id)
    return event


def _require_live_event(uow: AbstractUnitOfWork, user_id: str) -> Event:
    if (event := uow.events.get_by_user(user_id)) is None:
        raise EventNotFoundError(user_id=user_id)
    if event.is_removed:
        raise EventRemovedError(event.id)
    return event
