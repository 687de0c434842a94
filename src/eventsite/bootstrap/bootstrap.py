"""Wire the event repository to its database and collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from eventsite import config
from eventsite.adapters.db.engine import make_engine
from eventsite.adapters.id_generators import ULIDGenerator
from eventsite.adapters.payments import LocalPaymentsGateway, UnconfiguredPaymentsGateway
from eventsite.adapters.unit_of_work import SqlAlchemyUnitOfWork
from eventsite.interfaces.unit_of_work import DEFAULT_ISOLATION_LEVEL
from eventsite.service_layer.repository import EventRepository, UnitOfWorkFactory

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from eventsite.interfaces.id_generator import IdGenerator
    from eventsite.interfaces.payments import PaymentsGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Long-lived application objects."""

    engine: Engine
    repository: EventRepository


def build_uow_factory(
    engine: Engine, isolation_level: str | None = DEFAULT_ISOLATION_LEVEL
) -> UnitOfWorkFactory:
    """Return a factory handing out a new unit of work on each call."""

    def new_uow() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(engine, isolation_level=isolation_level)

    return new_uow


def build_repository(
    uow_factory: UnitOfWorkFactory,
    *,
    id_generator: IdGenerator | None = None,
    payments: PaymentsGateway | None = None,
    max_attempts: int = config.DEFAULT_TX_ATTEMPTS,
) -> EventRepository:
    """Build the repository, defaulting to ULIDs and the local payments gateway."""
    id_generator = id_generator or ULIDGenerator()
    return EventRepository(
        uow_factory,
        id_generator=id_generator,
        payments=payments or LocalPaymentsGateway(id_generator),
        max_attempts=max_attempts,
    )


def bootstrap(db_url: str | None = None) -> AppContainer:
    """Build the application from the environment.

    Args:
        db_url: Database URL; read from `EVENTSITE_DB_URL` when omitted.

    Raises:
        DatabaseUrlNotSetError: If no URL is given and none is configured.
        InvalidSettingError: If a setting is malformed.
    """
    env = config.get_env()
    max_attempts = config.get_transaction_attempts()
    engine = make_engine(db_url or config.get_db_url())
    payments = (
        LocalPaymentsGateway(ULIDGenerator())
        if config.is_local(env)
        else UnconfiguredPaymentsGateway()
    )
    repository = build_repository(
        build_uow_factory(engine),
        payments=payments,
        max_attempts=max_attempts,
    )
    logger.debug(
        "Bootstrapped for %s (dialect=%s, payments=%s)",
        env.value,
        engine.dialect.name,
        type(payments).__name__,
    )
    return AppContainer(engine=engine, repository=repository)
