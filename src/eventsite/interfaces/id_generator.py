"""Port for the source of fresh identifiers.

The repository asks for one whenever a new event needs a subdomain of its
own; the value is normalized before it is claimed, so generators need only
return something unique.
"""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Hands out identifiers that are unique for the lifetime of the store."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an identifier never returned before."""
