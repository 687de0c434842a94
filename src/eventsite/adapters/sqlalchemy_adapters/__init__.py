"""SQLAlchemy Core implementations of the storage ports.

Each adapter works on the connection owned by the current unit of work and
never commits on its own.
"""

from .event_table import SqlAlchemyEventTable
from .history_log import SqlAlchemyEventHistoryLog
from .subdomain_claims import SqlAlchemySubDomainClaims

__all__ = [
    "SqlAlchemyEventTable",
    "SqlAlchemyEventHistoryLog",
    "SqlAlchemySubDomainClaims",
]
