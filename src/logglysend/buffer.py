"""
In-memory buffer of serialized messages.
"""

import logging
import threading
from typing import List, Optional, TextIO

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 100


class MessageBuffer:
    """
    Ordered, growable list of encoded messages.

    Every operation runs under the lock handed in by the owning client.
    The buffer never flushes by itself: ``append`` reports when the size
    threshold is reached and the caller decides what to do about it once
    the lock is released.
    """

    def __init__(
        self,
        lock: threading.Lock,
        size: int = DEFAULT_BUFFER_SIZE,
        writer: Optional[TextIO] = None,
    ):
        """
        Initialize MessageBuffer.

        Args:
            lock: Lock guarding the buffer and the writer
            size: Number of entries at which a flush should happen
            writer: Optional text stream every entry is echoed to
        """
        self._lock = lock
        self._entries: List[bytes] = []
        self.size = size
        self.writer = writer

    def append(self, data: bytes, echo: str) -> bool:
        """
        Add one entry.

        Args:
            data: Encoded entry as it will be sent
            echo: Text written to ``writer`` when one is set

        Returns:
            True if the buffer has reached its size threshold
        """
        with self._lock:
            if self.writer is not None:
                try:
                    self.writer.write(echo)
                except (OSError, ValueError) as exc:
                    logger.warning("writer failed: %s", exc)

            self._entries.append(data)
            count = len(self._entries)
            logger.debug("buffer (%d/%d)", count, self.size)
            return count >= self.size

    def drain(self) -> List[bytes]:
        """Remove and return all buffered entries."""
        with self._lock:
            entries = self._entries
            self._entries = []
            return entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
