"""ID generators for EVENTSITE.

Generated subdomains and local subscription ids come from here.
"""

import threading

from ulid import monotonic

from eventsite.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers made of a
    timestamp and a random component. This generator uses the `ulid-py`
    library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """A simple ID generator that produces sequential, zero-padded IDs.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length

    def new_id(self) -> str:
        """Generate a new unique identifier."""
        self._counter += 1
        return f"{self._counter:0{self._length}d}"
