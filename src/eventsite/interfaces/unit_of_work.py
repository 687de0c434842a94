"""Unit of Work interface for EVENTSITE.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the event table, the history log and the subdomain claims, with
abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .event_table import EventTable
from .history_log import EventHistoryLog
from .subdomain_claims import SubDomainClaims

DEFAULT_ISOLATION_LEVEL = "SERIALIZABLE"


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    Everything done through `events`, `history` and `subdomains` between
    entering the context and `commit()` becomes visible atomically; leaving
    the context without committing discards it.
    """

    events: EventTable
    history: EventHistoryLog
    subdomains: SubDomainClaims

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
