"""Naming rules for public subdomains.

A subdomain is a single DNS label: 1 to 64 lowercase letters, digits or
hyphens, neither starting nor ending with a hyphen. Everything that is stored
or compared goes through `normalize_subdomain` first.
"""

import re

from .errors import InvalidSubDomainError

MAX_SUBDOMAIN_LENGTH = 64

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]{0,62}[a-z0-9])?$")


def normalize_subdomain(raw: str) -> str:
    """Return the canonical form of a subdomain.

    Args:
        raw: The subdomain as typed or generated.

    Returns:
        The stripped, lowercased subdomain.

    Raises:
        InvalidSubDomainError: If the canonical form is not a valid DNS label.
    """
    candidate = (raw or "").strip().lower()
    if not SUBDOMAIN_PATTERN.fullmatch(candidate):
        raise InvalidSubDomainError(raw)
    return candidate


def is_valid_subdomain(raw: str) -> bool:
    """Whether `raw` normalizes into a valid subdomain."""
    try:
        normalize_subdomain(raw)
    except InvalidSubDomainError:
        return False
    return True
