"""Walker — turns a Python object graph into DsonWriter events."""

from __future__ import annotations

import dataclasses
import datetime as dt
import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any
from urllib.parse import ParseResult, SplitResult

from .errors import SerializationError
from .logging import get_logger
from .values import VALUE_TYPES
from .writer import DsonWriter

logger = get_logger(__name__)


def walk(value: Any, writer: DsonWriter) -> None:
    """Write *value* and everything reachable from it to *writer*."""
    _Walker(writer).walk(value)


class _Walker:
    def __init__(self, writer: DsonWriter) -> None:
        self.writer = writer
        self._active: set[int] = set()  # ids of containers being written

    # -- Dispatch -------------------------------------------------------

    def walk(self, value: Any) -> None:
        w = self.writer

        if value is None:
            w.write_null()
        elif isinstance(value, VALUE_TYPES):
            w.write_value(value)
        elif isinstance(value, bool):
            w.write_bool(value)
        elif isinstance(value, Enum):
            self.walk(value.value)
        elif isinstance(value, int):
            w.write_integer(value)
        elif isinstance(value, float):
            w.write_float(value)
        elif isinstance(value, Decimal):
            w.write_decimal(value)
        elif isinstance(value, str):
            w.write_string(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            w.write_bytes(value)
        elif isinstance(value, uuid.UUID):
            w.write_guid(value)
        elif isinstance(value, dt.timedelta):
            w.write_timespan(value)
        elif isinstance(value, (dt.datetime, dt.date, dt.time)):
            w.write_datetime(value)
        elif isinstance(value, (ParseResult, SplitResult)):
            w.write_uri(value.geturl())
        elif isinstance(value, Mapping):
            self._walk_object(value, value.items())
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            self._walk_object(
                value,
                ((f.name, getattr(value, f.name)) for f in dataclasses.fields(value)),
            )
        elif isinstance(value, (set, frozenset)):
            self._walk_array(value, sorted(value, key=repr))
        elif isinstance(value, Iterable):
            self._walk_array(value, value)
        elif hasattr(value, "__dict__"):
            self._walk_object(
                value,
                ((k, v) for k, v in vars(value).items() if not k.startswith("_")),
            )
        else:
            raise SerializationError(
                f"Cannot serialize object of type {type(value).__name__}"
            )

    # -- Containers -----------------------------------------------------

    def _enter(self, container: Any) -> None:
        key = id(container)
        if key in self._active:
            logger.debug("Self referencing loop at %s object", type(container).__name__)
            raise SerializationError(
                f"Self referencing loop detected for object of type {type(container).__name__}"
            )
        self._active.add(key)

    def _leave(self, container: Any) -> None:
        self._active.discard(id(container))

    def _walk_object(self, container: Any, items: Iterable[tuple[Any, Any]]) -> None:
        self._enter(container)
        self.writer.write_start_object()
        for key, item in items:
            self.writer.write_property_name(_property_name(key))
            self.walk(item)
        self.writer.write_end_object()
        self._leave(container)

    def _walk_array(self, container: Any, items: Iterable[Any]) -> None:
        self._enter(container)
        self.writer.write_start_array()
        for item in items:
            self.walk(item)
        self.writer.write_end_array()
        self._leave(container)


def _property_name(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return str(key.value)
    if isinstance(key, (dt.datetime, dt.date, dt.time)):
        return key.isoformat()
    return str(key)
