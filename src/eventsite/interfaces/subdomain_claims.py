"""Interface for subdomain claim storage.

Claims are only ever inserted. The storage guarantees that at most one ACTIVE
claim exists for any subdomain, so two transactions racing for the same name
cannot both succeed.
"""

from __future__ import annotations

import abc

from eventsite.domain.model import SubDomainClaim


class SubDomainClaims(abc.ABC):
    """Rows of the subdomain claim table visible to one unit of work."""

    @abc.abstractmethod
    def find_active(self, subdomain: str) -> list[SubDomainClaim]:
        """Return the ACTIVE claims for a normalized subdomain (zero or one)."""

    @abc.abstractmethod
    def add_active(self, subdomain: str, event_id: int, user_id: str) -> SubDomainClaim:
        """Insert a new ACTIVE claim.

        Raises:
            SubDomainInUseError: If another ACTIVE claim for the subdomain
                exists, including one committed concurrently.
        """
