"""The event repository: the public entry point of the service layer.

`EventRepository` turns each caller request into one unit of work, retries it
when the database aborts it for a serialization conflict, and lets the
expected `EventError` failures through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from eventsite.domain.errors import (
    EventError,
    EventNotFoundError,
    EventRemovedError,
    InvalidSubDomainError,
)
from eventsite.domain.model import Event, EventHistoryEntry
from eventsite.domain.subdomain import normalize_subdomain
from eventsite.domain.value_objects import EventState
from eventsite.interfaces.errors import SerializationConflictError
from eventsite.interfaces.id_generator import IdGenerator
from eventsite.interfaces.payments import PaymentsError, PaymentsGateway
from eventsite.interfaces.unit_of_work import AbstractUnitOfWork

from . import claim_manager, commands, lifecycle

logger = logging.getLogger(__name__)

T = TypeVar("T")

type UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


class EventRepository:
    """Operations on users' events.

    Args:
        uow_factory: Returns a fresh unit of work for every attempt, so that
            concurrent callers never share a connection.
        id_generator: Source of generated subdomains.
        payments: Provider used by `subscribe`.
        max_attempts: How many times a unit of work is tried when it loses a
            serialization race before the conflict is raised.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        id_generator: IdGenerator,
        payments: PaymentsGateway,
        max_attempts: int = 3,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.uow_factory = uow_factory
        self.id_generator = id_generator
        self.payments = payments
        self.max_attempts = max_attempts

    # --- mutations ---

    def create_event(
        self, user_id: str, request: commands.CreateEvent, now: datetime
    ) -> Event:
        """Create the user's event.

        Raises:
            EventAlreadyExistsError: If the user already has an event.
        """
        return self._run(
            "create_event",
            lambda uow: lifecycle.create_event(
                uow, user_id, request, now, self.id_generator
            ),
        )

    def update_event(
        self, user_id: str, request: commands.UpdateEvent, now: datetime
    ) -> Event:
        """Update the user's event; it may become ACTIVE or fall back to CREATED.

        Raises:
            EventNotFoundError: If the user has no event.
            EventRemovedError: If the event has been removed. The field
                changes have been written unless the subdomain was malformed.
            InvalidSubDomainError: If the requested subdomain is malformed and
                the event is live.
            SubDomainInUseError: If the requested subdomain is taken.
        """
        return self._run(
            "update_event",
            lambda uow: lifecycle.update_event(uow, user_id, request, now),
        )

    def mark_skipped_setup_wizard(self, user_id: str, now: datetime) -> Event:
        """Stop showing the setup wizard to the owner.

        Raises:
            EventNotFoundError: If the user has no event.
            EventRemovedError: If the event has been removed.
        """
        return self._run(
            "mark_skipped_setup_wizard",
            lambda uow: lifecycle.mark_skipped_setup_wizard(uow, user_id, now),
        )

    def subscribe(self, user_id: str, payment_token: str, now: datetime) -> Event:
        """Start a paid subscription for the user's event.

        Already subscribed events are returned as they are. The payments
        provider is called outside of any transaction.

        Raises:
            EventNotFoundError: If the user has no event.
            EventRemovedError: If the event has been removed.
            PaymentsError: If the provider refuses the subscription.
        """
        event = self.get_event_by_user(user_id)
        if event.subscription_active:
            logger.debug("Event %s is already subscribed", event.id)
            return event

        try:
            ids = self.payments.create_subscription(user_id, payment_token)
        except PaymentsError as e:
            logger.info("Subscription for event %s refused: %s", event.id, e)
            raise

        return self._run(
            "subscribe",
            lambda uow: lifecycle.record_subscription(uow, user_id, ids, now),
        )

    # --- reads ---

    def get_event_by_user(self, user_id: str) -> Event:
        """Return the user's event.

        Raises:
            EventNotFoundError: If the user has no event.
            EventRemovedError: If the event has been removed.
        """

        def read(uow: AbstractUnitOfWork) -> Event:
            with uow:
                event = uow.events.get_by_user(user_id)
            if event is None:
                raise EventNotFoundError(user_id=user_id)
            if event.is_removed:
                raise EventRemovedError(event.id)
            return event

        return self._run("get_event_by_user", read)

    def get_event_by_subdomain(self, subdomain: str) -> Event:
        """Return the ACTIVE event served under `subdomain`.

        Raises:
            EventNotFoundError: If no ACTIVE event holds the subdomain.
        """
        try:
            normalized = normalize_subdomain(subdomain)
        except InvalidSubDomainError as e:
            raise EventNotFoundError(subdomain=subdomain) from e

        def read(uow: AbstractUnitOfWork) -> Event:
            with uow:
                for active_claim in uow.subdomains.find_active(normalized):
                    event = uow.events.get(active_claim.event_id)
                    if event is not None and event.state is EventState.ACTIVE:
                        return event
            raise EventNotFoundError(subdomain=normalized)

        return self._run("get_event_by_subdomain", read)

    def check_subdomain_available(self, subdomain: str, user_id: str) -> bool:
        """Whether `user_id` could use `subdomain` for their event."""

        def read(uow: AbstractUnitOfWork) -> bool:
            with uow:
                return claim_manager.is_available(uow.subdomains, subdomain, user_id)

        return self._run("check_subdomain_available", read)

    def get_event_history(self, user_id: str) -> list[EventHistoryEntry]:
        """Return the audit trail of the user's event, oldest first.

        Removed events keep their history and are included.

        Raises:
            EventNotFoundError: If the user never had an event.
        """

        def read(uow: AbstractUnitOfWork) -> list[EventHistoryEntry]:
            with uow:
                if (event := uow.events.get_by_user(user_id)) is None:
                    raise EventNotFoundError(user_id=user_id)
                return uow.history.read(event.id)

        return self._run("get_event_history", read)

    # --- plumbing ---

    def _run(self, operation: str, work: Callable[[AbstractUnitOfWork], T]) -> T:
        """Run `work` on a fresh unit of work, retrying serialization conflicts."""
        attempt = 1
        while True:
            logger.debug("%s: attempt %d/%d", operation, attempt, self.max_attempts)
            try:
                return work(self.uow_factory())
            except SerializationConflictError:
                if attempt >= self.max_attempts:
                    logger.warning(
                        "%s: serialization conflict, giving up after %d attempt(s)",
                        operation,
                        attempt,
                    )
                    raise
                logger.warning(
                    "%s: serialization conflict on attempt %d/%d, retrying",
                    operation,
                    attempt,
                    self.max_attempts,
                )
                attempt += 1
            except (EventError, PaymentsError) as e:
                logger.info("%s failed: %s", operation, e)
                raise
            except Exception:  # pylint: disable=broad-except
                logger.exception("Unexpected error in %s", operation)
                raise
