"""Domain-layer error definitions.

The four `EventError` subclasses form the closed set of expected failure
conditions exposed to callers. A transport layer maps each of them to its own
status; nothing here knows about transports.
"""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class InvalidSubDomainError(DomainError, ValueError):
    """Raised when a string cannot be normalized into a valid subdomain label."""

    def __init__(self, subdomain: str) -> None:
        super().__init__(f"'{subdomain}' is not a valid subdomain.")
        self.subdomain = subdomain


# ============================================================================
#                   Event errors (closed taxonomy)
# ============================================================================


class EventError(DomainError):
    """Base class for the expected, caller-recoverable event failures.

    The only subclasses are `EventNotFoundError`, `EventRemovedError`,
    `EventAlreadyExistsError` and `SubDomainInUseError`.
    """


class EventNotFoundError(EventError):
    """Raised when no matching event exists for a user or a subdomain."""

    def __init__(
        self, *, user_id: str | None = None, subdomain: str | None = None
    ) -> None:
        if subdomain is not None:
            message = f"No active event found for subdomain '{subdomain}'."
        else:
            message = f"No event found for user '{user_id}'."
        super().__init__(message)
        self.user_id = user_id
        self.subdomain = subdomain


class EventRemovedError(EventError):
    """Raised when an operation targets an event that has been removed."""

    def __init__(self, event_id: int) -> None:
        super().__init__(f"Event {event_id} has been removed.")
        self.event_id = event_id


class EventAlreadyExistsError(EventError):
    """Raised when a user who already owns an event tries to create another."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User '{user_id}' already has an event.")
        self.user_id = user_id


class SubDomainInUseError(EventError):
    """Raised when a subdomain is actively claimed by a different user."""

    def __init__(self, subdomain: str) -> None:
        super().__init__(f"Subdomain '{subdomain}' is already in use.")
        self.subdomain = subdomain
