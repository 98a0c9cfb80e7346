"""Attribute groups: handler-bound attributes, per-record extras and their JSON form."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
import json
import logging
from typing import Any

from pydantic import BaseModel

# Standard LogRecord attribute names to exclude from extra-field output.
_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "message",
        "asctime",
        "thread",
        "threadName",
        "taskName",
        "getMessage",
    }
)

# Third-party / display-only attributes to never include in output (uvicorn ANSI color
# codes, structlog ProcessorFormatter bookkeeping).
_EXCLUDE_EXTRAS = frozenset({"color_message", "_record", "_from_structlog"})


class AttributeSerializationError(ValueError):
    """Raised when merged attributes cannot be encoded as JSON."""


@dataclass(frozen=True)
class GroupOrAttrs:
    """One entry of a handler's attribute chain.

    Either ``group`` is set (a named scope for everything bound after it)
    or ``attrs`` holds the key-value pairs of one ``with_attrs`` call.
    """

    group: str = ""
    attrs: tuple[tuple[str, Any], ...] = ()


def to_pairs(attrs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> tuple[tuple[str, Any], ...]:
    """Snapshot attributes given as a mapping or as key-value pairs."""
    if isinstance(attrs, Mapping):
        return tuple(attrs.items())
    return tuple((key, value) for key, value in attrs)


def record_attrs(record: logging.LogRecord) -> dict[str, Any]:
    """Extract user-supplied extra fields from a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and key not in _EXCLUDE_EXTRAS
    }


def merge_attrs(chain: Sequence[GroupOrAttrs], extras: Mapping[str, Any]) -> dict[str, Any]:
    """Merge the handler chain and the record's extras into one mapping.

    A group entry nests everything that follows it, including ``extras``,
    under the group name. Later keys overwrite earlier ones. Groups that
    end up with nothing in them are dropped.
    """
    merged: dict[str, Any] = {}
    current = merged
    path: list[tuple[dict[str, Any], str]] = []

    for entry in chain:
        if entry.group:
            nested: dict[str, Any] = {}
            current[entry.group] = nested
            path.append((current, entry.group))
            current = nested
        else:
            current.update(entry.attrs)

    current.update(extras)

    for parent, name in reversed(path):
        if parent.get(name) == {}:
            del parent[name]

    return merged


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_attrs(attrs: Mapping[str, Any]) -> str:
    """Encode attributes as a compact single-line JSON object.

    Raises:
        AttributeSerializationError: If a key or value cannot be represented.
    """
    try:
        return json.dumps(
            attrs,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise AttributeSerializationError(str(e)) from e


__all__ = [
    "AttributeSerializationError",
    "GroupOrAttrs",
    "encode_attrs",
    "merge_attrs",
    "record_attrs",
    "to_pairs",
]
