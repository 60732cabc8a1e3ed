"""
Buffered Python client for shipping JSON logs to the Loggly bulk endpoint.
"""

from ._version import __version__
from .client import API, Client, LogLevel, build_endpoint
from .config import ClientConfig, load_config
from .errors import LogglySendError, SerializationError, TransportError
from .handler import LogglyHandler
from .message import Message, enrich, merge, serialize

__all__ = [
    "API",
    "Client",
    "ClientConfig",
    "LogLevel",
    "LogglyHandler",
    "LogglySendError",
    "Message",
    "SerializationError",
    "TransportError",
    "__version__",
    "build_endpoint",
    "enrich",
    "load_config",
    "merge",
    "serialize",
]
