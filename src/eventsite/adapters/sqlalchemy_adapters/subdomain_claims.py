"""Implementation of SubDomainClaims using SQLAlchemy Core.

Uniqueness of active claims is left to the partial unique index on
`event_subdomains`; a losing insert surfaces as `SubDomainInUseError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from eventsite.adapters.db.errors import violates_unique
from eventsite.adapters.db.schema import event_subdomains
from eventsite.domain.errors import SubDomainInUseError
from eventsite.domain.model import SubDomainClaim
from eventsite.domain.value_objects import SubDomainState
from eventsite.interfaces.subdomain_claims import SubDomainClaims

from .base import ConnectionBound

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping


def _row_to_claim(row: RowMapping) -> SubDomainClaim:
    return SubDomainClaim(
        id=int(row["id"]),
        subdomain=row["subdomain"],
        state=SubDomainState(row["state"]),
        event_id=int(row["event_id"]),
        user_id=row["user_id"],
    )


class SqlAlchemySubDomainClaims(ConnectionBound, SubDomainClaims):
    """SubDomainClaims backed by the `event_subdomains` table."""

    def find_active(self, subdomain: str) -> list[SubDomainClaim]:
        stmt = (
            select(event_subdomains)
            .where(
                event_subdomains.c.subdomain == subdomain,
                event_subdomains.c.state == SubDomainState.ACTIVE.value,
            )
            .order_by(event_subdomains.c.id)
        )
        return [_row_to_claim(row) for row in self._execute(stmt).mappings()]

    def add_active(self, subdomain: str, event_id: int, user_id: str) -> SubDomainClaim:
        stmt = (
            insert(event_subdomains)
            .values(
                subdomain=subdomain,
                state=SubDomainState.ACTIVE.value,
                event_id=event_id,
                user_id=user_id,
            )
            .returning(event_subdomains)
        )
        try:
            row = self._execute(stmt).mappings().one()
        except IntegrityError as e:
            if violates_unique(e, "subdomain"):
                raise SubDomainInUseError(subdomain) from e
            raise
        return _row_to_claim(row)
