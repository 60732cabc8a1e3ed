"""
Drains the buffer into batches, on demand and on a timer.
"""

import logging
import threading
from typing import Optional

from .buffer import MessageBuffer
from .errors import TransportError
from .sender import BulkSender
from .tags import TagRegistry

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL = 5.0


class Flusher:
    """
    Turns buffered entries into batches and hands them to the sender.

    A flush takes the whole buffer in one locked step and sends it with
    the lock released, so any number of flushes may run at once: each one
    owns a disjoint snapshot. Failed batches are dropped.
    """

    def __init__(
        self,
        buffer: MessageBuffer,
        tags: TagRegistry,
        sender: BulkSender,
        interval: float = DEFAULT_FLUSH_INTERVAL,
    ):
        self.buffer = buffer
        self.tags = tags
        self.sender = sender
        self.interval = interval

        self._stop_event = threading.Event()
        self._flush_thread: Optional[threading.Thread] = None

    def flush(self) -> bool:
        """
        Send everything currently buffered as one batch.

        Returns:
            True if the batch was accepted or there was nothing to send,
            False if the endpoint answered with an error status

        Raises:
            TransportError: if the endpoint could not be reached
        """
        entries = self.buffer.drain()
        if not entries:
            logger.debug("no messages to flush")
            return True

        logger.debug("flushing %d messages", len(entries))
        body = b"\n".join(entries)
        return self.sender.send_batch(body, len(entries), self.tags.header())

    def _flush_quietly(self) -> None:
        try:
            self.flush()
        except TransportError as exc:
            logger.warning("dropped batch: %s", exc)

    def trigger(self) -> None:
        """Flush in a background thread and return immediately."""
        threading.Thread(target=self._flush_quietly, daemon=True).start()

    def _flush_loop(self) -> None:
        """Background thread that periodically flushes the buffer."""
        while not self._stop_event.wait(self.interval):
            logger.debug("interval %.3fs reached", self.interval)
            self._flush_quietly()

    def start(self) -> None:
        """Start the periodic flush thread."""
        if self._flush_thread is not None:
            return
        self._stop_event.clear()
        self._flush_thread = threading.Thread(
            target=self._flush_loop, daemon=True
        )
        self._flush_thread.start()

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the periodic flush thread and wait for it to exit."""
        self._stop_event.set()
        if self._flush_thread is not None:
            self._flush_thread.join(timeout=timeout)
            self._flush_thread = None

    @property
    def running(self) -> bool:
        return self._flush_thread is not None and self._flush_thread.is_alive()
