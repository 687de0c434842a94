"""Connection handling shared by the SQLAlchemy adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from eventsite.adapters.db.errors import translate_store_errors

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult
    from sqlalchemy.sql import Executable

# pylint: disable=too-few-public-methods


class ConnectionBound:
    """Base for adapters that run statements on a unit of work's connection."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def _execute(self, statement: Executable) -> CursorResult[Any]:
        """Execute `statement`, turning driver failures into storage errors.

        Integrity errors pass through untouched so the subclass can map the
        violated constraint onto a domain error.
        """
        with translate_store_errors():
            return self.connection.execute(statement)
