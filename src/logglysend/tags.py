"""
Tags attached to every batch sent by a client.
"""

import threading
from typing import Iterator, List


class TagRegistry:
    """
    Append-only list of tags.

    The lock is shared with the client's buffer so that tag reads and
    writes are serialized with buffer mutations.
    """

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._tags: List[str] = []

    def add(self, *tags: str) -> None:
        """Append tags. Duplicates are kept."""
        with self._lock:
            self._tags.extend(tags)

    def header(self) -> str:
        """Return the tags as a comma-delimited string."""
        with self._lock:
            return ",".join(self._tags)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._tags))

    def __len__(self) -> int:
        with self._lock:
            return len(self._tags)
