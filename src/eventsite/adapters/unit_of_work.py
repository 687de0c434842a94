"""SQLAlchemy-backed Unit of Work for EVENTSITE.

Each unit of work owns one connection from the engine pool and runs a single
transaction at the isolation level it was built with.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from eventsite.adapters.db.errors import translate_store_errors
from eventsite.adapters.sqlalchemy_adapters import (
    SqlAlchemyEventHistoryLog,
    SqlAlchemyEventTable,
    SqlAlchemySubDomainClaims,
)
from eventsite.interfaces.unit_of_work import DEFAULT_ISOLATION_LEVEL, AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    Args:
        engine: Engine to take the connection from.
        isolation_level: Transaction isolation for this unit only, applied
            through the connection's execution options. ``None`` keeps the
            driver default.
    """

    def __init__(
        self, engine: Engine, isolation_level: str | None = DEFAULT_ISOLATION_LEVEL
    ):
        self.engine = engine
        self.isolation_level = isolation_level
        self.connection: Connection

    def __enter__(self):
        with translate_store_errors():
            connection = self.engine.connect()
        if self.isolation_level is not None:
            connection = connection.execution_options(
                isolation_level=self.isolation_level
            )
        self.connection = connection
        logger.debug("Opened unit of work (isolation=%s)", self.isolation_level)
        self.events = SqlAlchemyEventTable(connection)
        self.history = SqlAlchemyEventHistoryLog(connection)
        self.subdomains = SqlAlchemySubDomainClaims(connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def commit(self):
        with translate_store_errors():
            self.connection.commit()

    def rollback(self):
        with translate_store_errors():
            self.connection.rollback()
