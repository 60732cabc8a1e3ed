"""
Message model: default-field merging, timestamps and JSON encoding.
"""

import json
import time
from typing import Dict, List, Optional, TypeAlias, Union

from .errors import SerializationError

JSONValue: TypeAlias = Union[
    str,
    int,
    float,
    bool,
    None,
    Dict[str, "JSONValue"],
    List["JSONValue"],
]

Message: TypeAlias = Dict[str, JSONValue]


def now_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def merge(target: Message, *sources: Message) -> Message:
    """
    Copy every key of each source into ``target``.

    Sources are applied in order, so later sources overwrite earlier ones
    and all of them overwrite ``target``.

    Returns:
        The mutated ``target``
    """
    for source in sources:
        for key, value in source.items():
            target[key] = value
    return target


def enrich(record: Message, defaults: Optional[Message] = None) -> Message:
    """
    Build the outbound form of ``record``.

    Defaults only fill keys the record does not set. A ``timestamp`` is
    added when the record has none. ``record`` itself is left untouched.
    """
    entry = merge({}, defaults or {}, record)
    if "timestamp" not in entry:
        entry["timestamp"] = now_millis()
    return entry


def serialize(message: Message) -> bytes:
    """
    Encode a message as a single line of UTF-8 JSON.

    Raises:
        SerializationError: if a value is not representable in JSON
            (unsupported type, circular reference, NaN or infinity)
    """
    try:
        return json.dumps(message, ensure_ascii=False, allow_nan=False).encode(
            "utf-8"
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
