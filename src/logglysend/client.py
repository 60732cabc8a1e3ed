"""
Main client class for logglysend.
"""

import logging
import socket
import threading
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Dict, Optional, TextIO, Union

import requests

from .buffer import DEFAULT_BUFFER_SIZE, MessageBuffer
from .errors import TransportError
from .flusher import DEFAULT_FLUSH_INTERVAL, Flusher
from .message import Message, enrich, serialize
from .sender import BulkSender
from .tags import TagRegistry

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

API = "https://logs-01.loggly.com/bulk/{token}"


def build_endpoint(token: str, template: str = API) -> str:
    """Substitute ``token`` into the bulk endpoint template."""
    return template.replace("{token}", token, 1)


class LogLevel(IntEnum):
    """Log levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class Client:
    """
    Buffered client for the Loggly bulk endpoint.

    Features:
    - Buffered sending (by count or timer)
    - Background flush thread
    - Tags and default fields applied to everything sent
    - Best-effort delivery: failed batches are dropped, never retried

    Example:
        client = Client("my-token", "web", "production")

        client.send({"event": "signup", "user_id": 123})
        client.info("Application started")
        client.error("Something went wrong", extra={"order_id": 7})

        # Flush what is left and stop the timer on shutdown
        client.close()
    """

    def __init__(
        self,
        token: str,
        *tags: str,
        level: LogLevel = LogLevel.INFO,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        flush_interval: float = DEFAULT_FLUSH_INTERVAL,
        endpoint: Optional[str] = None,
        defaults: Optional[Message] = None,
        writer: Optional[TextIO] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize Client and start the periodic flush thread.

        Args:
            token: Customer token, embedded in the endpoint URL
            tags: Initial tags for every batch
            level: Minimum level accepted by the level helpers
            buffer_size: Number of messages that triggers a flush
            flush_interval: Seconds between automatic flushes
            endpoint: Override the URL derived from ``token``
            defaults: Fields added to every message that lacks them
            writer: Optional text stream every message is echoed to
            session: Custom requests.Session to post with
            timeout: Request timeout in seconds
        """
        self.token = token
        self.level = level

        self.defaults: Message = {}
        try:
            self.defaults["hostname"] = socket.gethostname()
        except OSError:
            pass
        if defaults:
            self.defaults.update(defaults)

        self._lock = threading.Lock()
        self._tags = TagRegistry(self._lock)
        self._buffer = MessageBuffer(self._lock, buffer_size, writer)
        self._sender = BulkSender(
            endpoint or build_endpoint(token), timeout=timeout, session=session
        )
        self._flusher = Flusher(
            self._buffer, self._tags, self._sender, flush_interval
        )

        self.tag(*tags)
        self._flusher.start()

    @classmethod
    def from_config(cls, config: "ClientConfig", **kwargs: Any) -> "Client":
        """Build a client from a ``ClientConfig``."""
        options: Dict[str, Any] = {
            "level": config.level,
            "buffer_size": config.buffer_size,
            "flush_interval": config.flush_interval,
            "endpoint": config.endpoint,
        }
        options.update(kwargs)
        return cls(config.token, *config.tags, **options)

    @property
    def buffer_size(self) -> int:
        return self._buffer.size

    @buffer_size.setter
    def buffer_size(self, value: int) -> None:
        self._buffer.size = value

    @property
    def flush_interval(self) -> float:
        return self._flusher.interval

    @flush_interval.setter
    def flush_interval(self, value: float) -> None:
        self._flusher.interval = value

    @property
    def endpoint(self) -> str:
        return self._sender.endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._sender.endpoint = value

    @property
    def writer(self) -> Optional[TextIO]:
        return self._buffer.writer

    @writer.setter
    def writer(self, value: Optional[TextIO]) -> None:
        with self._lock:
            self._buffer.writer = value

    def send(self, record: Message) -> None:
        """
        Buffer a message for sending.

        Raises:
            SerializationError: if the message cannot be encoded; nothing
                is buffered in that case
        """
        data = serialize(enrich(record, self.defaults))
        self._append(data, data.decode("utf-8") + "\n")

    def write(self, data: Union[bytes, str]) -> int:
        """Buffer raw data as a single entry, bypassing enrichment."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._append(data, data.decode("utf-8", errors="replace"))
        return len(data)

    def _append(self, data: bytes, echo: str) -> None:
        if self._buffer.append(data, echo):
            self._flusher.trigger()

    def tag(self, *tags: str) -> None:
        """Add tags for all subsequent batches."""
        self._tags.add(*tags)

    def tags_header(self) -> str:
        """Return the comma-delimited tag list."""
        return self._tags.header()

    def flush(self) -> bool:
        """
        Send buffered messages now.

        Returns:
            False if the endpoint rejected the batch, True otherwise

        Raises:
            TransportError: if the endpoint could not be reached; the batch
                is dropped
        """
        return self._flusher.flush()

    def pending_count(self) -> int:
        """Get the number of buffered messages."""
        return len(self._buffer)

    def _log(
        self,
        level: LogLevel,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Internal logging method."""
        if level < self.level:
            return

        self.send({**(extra or {}), "level": level.name, "message": message})

    def debug(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log a debug message."""
        self._log(LogLevel.DEBUG, message, extra)

    def info(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, message, extra)

    def warning(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, message, extra)

    def error(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log an error message."""
        self._log(LogLevel.ERROR, message, extra)

    def critical(
        self, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log a critical message."""
        self._log(LogLevel.CRITICAL, message, extra)

    def close(self) -> None:
        """Stop the flush thread and send remaining messages."""
        self._flusher.stop()

        try:
            self.flush()
        except TransportError as exc:
            logger.warning("final flush failed: %s", exc)

        self._sender.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
