"""In-memory SubDomainClaims implementation for testing purposes."""

from eventsite.domain.errors import SubDomainInUseError
from eventsite.domain.model import SubDomainClaim
from eventsite.domain.value_objects import SubDomainState
from eventsite.interfaces.subdomain_claims import SubDomainClaims

from .tables import InMemoryTables


class InMemorySubDomainClaims(SubDomainClaims):
    """SubDomainClaims over `InMemoryTables.claims`.

    Mirrors the partial unique index: a second ACTIVE claim for the same
    subdomain is refused.
    """

    def __init__(self, tables: InMemoryTables):
        self.tables = tables

    def find_active(self, subdomain: str) -> list[SubDomainClaim]:
        return [c for c in self.tables.claims if c.subdomain == subdomain and c.is_active]

    def add_active(self, subdomain: str, event_id: int, user_id: str) -> SubDomainClaim:
        if self.find_active(subdomain):
            raise SubDomainInUseError(subdomain)
        self.tables.last_claim_id += 1
        claim = SubDomainClaim(
            id=self.tables.last_claim_id,
            subdomain=subdomain,
            state=SubDomainState.ACTIVE,
            event_id=event_id,
            user_id=user_id,
        )
        self.tables.claims.append(claim)
        return claim
