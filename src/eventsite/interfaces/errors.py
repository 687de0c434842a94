"""Storage errors shared by every adapter.

Adapters translate driver failures into this small hierarchy so the service
layer can tell a transient infrastructure problem from a broken invariant
without importing any database library.
"""


class StoreError(Exception):
    """Base class for EVENTSITE storage errors."""


class StoreUnavailableError(StoreError):
    """Operational/timeout/connection errors; callers may retry."""


class SerializationConflictError(StoreUnavailableError):
    """The transaction lost a serialization race and was aborted by the database.

    Running the whole unit of work again is safe: nothing it wrote was kept.
    """
