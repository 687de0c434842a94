"""Subdomain claim manager.

The only code that writes subdomain claims. It runs inside the caller's unit
of work, so a claim commits or rolls back together with the event change that
needed it.
"""

import logging

from eventsite.domain.errors import SubDomainInUseError
from eventsite.domain.model import SubDomainClaim
from eventsite.domain.subdomain import is_valid_subdomain, normalize_subdomain
from eventsite.interfaces.id_generator import IdGenerator
from eventsite.interfaces.subdomain_claims import SubDomainClaims

logger = logging.getLogger(__name__)


def is_available(claims: SubDomainClaims, subdomain: str, requesting_user_id: str) -> bool:
    """Whether `requesting_user_id` could claim `subdomain` right now.

    A subdomain is available when nobody holds it, or when every active claim
    on it already belongs to the requesting user. Invalid names are never
    available.
    """
    if not is_valid_subdomain(subdomain):
        return False
    held = claims.find_active(normalize_subdomain(subdomain))
    return all(c.user_id == requesting_user_id for c in held)


def claim(
    claims: SubDomainClaims, subdomain: str, event_id: int, user_id: str
) -> SubDomainClaim:
    """Claim `subdomain` for an event.

    Re-claiming a subdomain the user already holds returns the existing claim.
    Claims the event held before stay active.

    Raises:
        SubDomainInUseError: If another user holds the subdomain, including
            when a concurrent transaction wins the race for it.
        InvalidSubDomainError: If `subdomain` is not a valid DNS label.
    """
    normalized = normalize_subdomain(subdomain)
    for existing in claims.find_active(normalized):
        if existing.user_id != user_id:
            logger.info("Subdomain %s is held by another user", normalized)
            raise SubDomainInUseError(normalized)
        logger.debug("Subdomain %s already claimed by event %s", normalized, existing.event_id)
        return existing

    new_claim = claims.add_active(normalized, event_id, user_id)
    logger.debug("Event %s claimed subdomain %s", event_id, normalized)
    return new_claim


def generate_subdomain(id_generator: IdGenerator) -> str:
    """A fresh subdomain for a new event: the lowercased id from `id_generator`."""
    return normalize_subdomain(id_generator.new_id())
