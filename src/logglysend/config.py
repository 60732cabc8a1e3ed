"""Configuration loaded from environment variables."""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .buffer import DEFAULT_BUFFER_SIZE
from .client import LogLevel
from .flusher import DEFAULT_FLUSH_INTERVAL


@dataclass(frozen=True)
class ClientConfig:
    token: str
    tags: Tuple[str, ...] = field(default_factory=tuple)
    endpoint: Optional[str] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    flush_interval: float = DEFAULT_FLUSH_INTERVAL
    level: LogLevel = LogLevel.INFO


def _parse_level(name: str) -> LogLevel:
    try:
        return LogLevel[name.strip().upper()]
    except KeyError:
        raise ValueError(f"unknown log level: {name!r}") from None


def load_config() -> ClientConfig:
    """Build ClientConfig from LOGGLY_* environment variables."""
    token = os.environ.get("LOGGLY_TOKEN", "")
    if not token:
        raise ValueError("LOGGLY_TOKEN is required")

    tags = tuple(
        t.strip()
        for t in os.environ.get("LOGGLY_TAGS", "").split(",")
        if t.strip()
    )
    return ClientConfig(
        token=token,
        tags=tags,
        endpoint=os.environ.get("LOGGLY_ENDPOINT") or None,
        buffer_size=int(
            os.environ.get("LOGGLY_BUFFER_SIZE", DEFAULT_BUFFER_SIZE)
        ),
        flush_interval=float(
            os.environ.get("LOGGLY_FLUSH_INTERVAL", DEFAULT_FLUSH_INTERVAL)
        ),
        level=_parse_level(os.environ.get("LOGGLY_LEVEL", "INFO")),
    )
