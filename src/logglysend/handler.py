"""
Standard logging handler for integration with Python's logging module.
"""

import json
import logging
from typing import Any, Dict, Optional

from .client import Client
from .errors import TransportError
from .message import Message

logger = logging.getLogger(__name__)

# Loggers used while sending a batch; shipping their records would recurse.
_OWN_LOGGERS = ("logglysend", "requests", "urllib3")

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RECORD_ATTRS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "asctime", "taskName",
    )
)


class LogglyHandler(logging.Handler):
    """
    Python logging handler that ships records through a ``Client``.

    Example:
        import logging
        from logglysend import LogglyHandler

        handler = LogglyHandler("my-token", tags=("web",), buffer_size=50)

        logger = logging.getLogger("my_app")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

        logger.info("Hello from standard logging!")

        # Don't forget to close on shutdown
        handler.close()
    """

    def __init__(
        self,
        token: Optional[str] = None,
        client: Optional[Client] = None,
        tags: tuple = (),
        level: int = logging.NOTSET,
        **client_kwargs: Any,
    ):
        """
        Initialize LogglyHandler.

        Args:
            token: Token for a client owned by this handler
            client: Existing client to ship through (not closed by the handler)
            tags: Initial tags for an owned client
            level: Minimum log level to process
            client_kwargs: Extra keyword arguments for an owned client
        """
        super().__init__(level)

        if client is None and not token:
            raise ValueError("either token or client is required")

        self._owns_client = client is None
        self.client = client if client is not None else Client(
            token, *tags, **client_kwargs
        )

    def _format_record(self, record: logging.LogRecord) -> Message:
        """Convert LogRecord to a message."""
        entry: Dict[str, Any] = {
            "timestamp": int(record.created * 1000),
            "level": record.levelname,
            "message": self.format(record),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            formatter = self.formatter or logging.Formatter()
            entry["exception"] = formatter.formatException(record.exc_info)

        extra_attrs = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            try:
                json.dumps(value)
                extra_attrs[key] = value
            except (TypeError, ValueError):
                extra_attrs[key] = str(value)

        if extra_attrs:
            entry["extra"] = extra_attrs

        return entry

    def emit(self, record: logging.LogRecord) -> None:
        """Process a log record."""
        if record.name.split(".", 1)[0] in _OWN_LOGGERS:
            return

        try:
            self.client.send(self._format_record(record))
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        """Send buffered records now. Transport failures are dropped."""
        try:
            self.client.flush()
        except TransportError as exc:
            logger.warning("dropped batch: %s", exc)

    def close(self) -> None:
        """Close the handler and its owned client."""
        if self._owns_client:
            self.client.close()
        super().close()
