"""Database engine factory and helpers.

Every Engine in EVENTSITE comes from `make_engine`, so all connections are
configured the same way:

- **SQLite**: connection PRAGMAs enforce foreign keys, enable WAL and set a
  busy timeout so concurrent writers queue instead of failing at once.
- **PostgreSQL**: no tuning here. Isolation is chosen per unit of work, never
  on the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

from eventsite.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

SQLITE_BUSY_TIMEOUT_MS = 5000


def url_dialect(url: str | URL) -> DialectName:
    """Return the dialect a SQLAlchemy URL or string points at.

    Raises:
        sqlalchemy.exc.ArgumentError: If `url` cannot be parsed.
        UnsupportedDialect: If the backend is neither PostgreSQL nor SQLite.
    """
    return DialectName.from_string(make_url(str(url)).drivername)


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite the following PRAGMAs are applied on every new connection:
        - ``foreign_keys=ON`` (enforce referential integrity)
        - ``journal_mode=WAL`` (readers don't block the writer)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``busy_timeout`` (wait for the write lock instead of erroring)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.

    Raises:
        UnsupportedDialect: For URLs of any backend other than PostgreSQL or
            SQLite, before anything is connected.
    """
    dialect = url_dialect(url)
    engine = create_engine(url, echo=echo)

    if dialect is DialectName.SQLITE:

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
            cur.close()

    return engine
