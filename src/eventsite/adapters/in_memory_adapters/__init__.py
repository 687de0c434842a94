"""In-memory implementations of the storage ports, for tests.

All three adapters work on one `InMemoryTables` instance, which plays the part
of the database: it holds the rows and enforces the same uniqueness rules as
the real schema.
"""

from .event_table import InMemoryEventTable
from .history_log import InMemoryEventHistoryLog
from .subdomain_claims import InMemorySubDomainClaims
from .tables import InMemoryTables

__all__ = [
    "InMemoryEventTable",
    "InMemoryEventHistoryLog",
    "InMemorySubDomainClaims",
    "InMemoryTables",
]
