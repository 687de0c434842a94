"""Translation of SQLAlchemy/DBAPI failures into EVENTSITE storage errors.

Integrity errors are left for the adapters, which know which constraint
violation maps onto which domain error. Everything else raised by the driver
becomes a `StoreError` subclass.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError

from eventsite.interfaces.errors import (
    SerializationConflictError,
    StoreUnavailableError,
)

# serialization_failure, deadlock_detected
SERIALIZATION_FAILURE_SQLSTATES = frozenset({"40001", "40P01"})


def sqlstate_of(error: DBAPIError) -> str | None:
    """Return the SQLSTATE reported by the driver, if it reports one."""
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def error_message(error: DBAPIError) -> str:
    """Lower-cased driver message, including any DETAIL line."""
    orig = error.orig
    parts = [str(orig) if orig is not None else str(error)]
    diag = getattr(orig, "diag", None)
    detail = getattr(diag, "message_detail", None)
    if detail:
        parts.append(detail)
    return " ".join(parts).lower()


def violates_unique(error: IntegrityError, column: str) -> bool:
    """Whether `error` is a unique violation whose message names `column`.

    Postgres reports ``duplicate key value violates unique constraint ...
    Key (column)=(...)``; SQLite reports ``UNIQUE constraint failed:
    table.column``.
    """
    message = error_message(error)
    return "unique" in message and column.lower() in message


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Map driver errors raised inside the block onto `StoreError` subclasses.

    Raises:
        IntegrityError: Unchanged, for the caller to interpret.
        SerializationConflictError: The transaction lost a serialization race.
        StoreUnavailableError: Any other driver failure.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DBAPIError as e:
        if sqlstate_of(e) in SERIALIZATION_FAILURE_SQLSTATES:
            raise SerializationConflictError(str(e.orig)) from e
        raise StoreUnavailableError(str(e.orig)) from e
