"""Tri-state handling for partial updates.

This module defines the ``UNSET`` sentinel and the type aliases used by update
requests, where the *presence* of a field means "change it":

* ``UNSET``: the field was not supplied and is left unchanged.
* concrete ``T``: the field is explicitly updated to a new value.
* ``None`` (only for `Unsettable` fields): the field is explicitly cleared.
"""

from dataclasses import dataclass
from typing import TypeGuard, TypeVar


def _get_unset() -> "_UnsetType":
    # Factory used by pickle to retrieve the one true instance.
    return UNSET


@dataclass(frozen=True)
class _UnsetType:
    """Sentinel to mark fields intentionally left unset in patches.

    This is distinct from `None`, which indicates an explicit clearing of a value.
    """

    def __bool__(self) -> bool:  # falsy to simplify conditionals
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self):  # keep singleton on pickle
        return (_get_unset, ())


# Singleton instance
UNSET = _UnsetType()

T = TypeVar("T")
type Unsettable[T] = T | _UnsetType | None
type Patchable[T] = T | _UnsetType


def is_set(value: T | _UnsetType) -> TypeGuard[T]:
    """Return True if a patch field was supplied (even if it is ``None``)."""
    return not isinstance(value, _UnsetType)
