"""DsonWriter — forward-only emitter of DSON tokens.

The writer receives structural and value events (start/end of objects and
arrays, property names, primitive values) and writes the matching words to a
text stream.  It tracks one frame per open container to decide which
delimiter, space or indent precedes each token.

Usage::

    with DsonWriter(stream) as w:
        w.write_start_object()
        w.write_property_name("hello")
        w.write_string("world")
        w.write_end_object()
    # stream now holds: such "hello" is "world" wow
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import TextIO

from .errors import InvalidStateError, UnsupportedConstructError
from .logging import get_logger
from .settings import Formatting, WriterSettings
from .values import (
    Value,
    VBool,
    VBytes,
    VDateTime,
    VFloat,
    VGuid,
    VInt,
    VText,
    VTimeSpan,
    VUInt,
    VUri,
    _Null,
    format_bytes,
    format_datetime,
    format_decimal,
    format_float,
    format_guid,
    format_integer,
    format_timespan,
    format_uri,
    quote_string,
)

logger = get_logger(__name__)


class FrameKind(Enum):
    OBJECT = auto()
    ARRAY = auto()


@dataclass(slots=True)
class _Frame:
    kind: FrameKind
    has_child: bool = False
    awaiting_value: bool = False  # property name written, value still to come


class DsonWriter:
    """Write DSON to *stream* one event at a time.

    The writer owns *stream* until :meth:`close`; when
    ``settings.close_output`` is true, closing the writer closes the stream.
    """

    def __init__(self, stream: TextIO, settings: WriterSettings | None = None) -> None:
        if stream is None:
            raise ValueError("stream must not be None")
        self._stream = stream
        self._settings = settings or WriterSettings()
        self._vocab = self._settings.vocabulary
        self._indented = self._settings.formatting is Formatting.INDENTED
        self._indent_unit = self._settings.indent_unit
        self._stack: list[_Frame] = []
        self._has_content = False
        self._completed = False  # a whole top-level value has been written
        self._closed = False

    # -- State ----------------------------------------------------------

    @property
    def settings(self) -> WriterSettings:
        return self._settings

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    @property
    def closed(self) -> bool:
        return self._closed

    def _top(self) -> _Frame | None:
        return self._stack[-1] if self._stack else None

    # -- Low-level output -----------------------------------------------

    def _ensure_space(self) -> None:
        if self._has_content:
            self._stream.write(" ")

    def _write_internal(self, text: str) -> None:
        self._has_content = True
        self._stream.write(text)

    def _write_indent(self) -> None:
        self._stream.write("\n")
        if self._indent_unit:
            self._stream.write(self._indent_unit * len(self._stack))
        self._has_content = False

    def _write_token(self, text: str) -> None:
        self._ensure_space()
        self._write_internal(text)

    # -- Separator decisions --------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise InvalidStateError("Cannot write to a closed DsonWriter")

    def _before_value(self) -> None:
        """Write the delimiter and indent that precede a value or container start."""
        self._check_open()
        frame = self._top()
        if frame is None:
            if self._completed:
                raise InvalidStateError("The document is already complete")
            return

        if frame.kind is FrameKind.OBJECT:
            if not frame.awaiting_value:
                raise InvalidStateError("A value inside an object must follow a property name")
            frame.awaiting_value = False
            frame.has_child = True
            return

        if frame.has_child:
            self._write_internal(self._vocab.array_delimiter)
        if self._indented:
            self._write_indent()
        frame.has_child = True

    def _before_property(self) -> _Frame:
        self._check_open()
        frame = self._top()
        if frame is None or frame.kind is not FrameKind.OBJECT:
            raise InvalidStateError("A property name can only be written inside an object")
        if frame.awaiting_value:
            raise InvalidStateError("The previous property has no value yet")

        if frame.has_child:
            self._write_internal(self._vocab.object_delimiter)
        if self._indented:
            self._write_indent()
        return frame

    # -- Containers -----------------------------------------------------

    def write_start_object(self) -> None:
        self._before_value()
        self._write_token(self._vocab.object_start)
        self._stack.append(_Frame(FrameKind.OBJECT))
        logger.trace("start object at depth %d", len(self._stack))

    def write_start_array(self) -> None:
        self._before_value()
        self._write_token(self._vocab.array_start)
        self._stack.append(_Frame(FrameKind.ARRAY))
        logger.trace("start array at depth %d", len(self._stack))

    def _write_end(self, kind: FrameKind) -> None:
        self._check_open()
        frame = self._top()
        if frame is None:
            raise InvalidStateError(
                f"Cannot end {kind.name.lower()}: no container is open"
            )
        if frame.kind is not kind:
            raise InvalidStateError(
                f"Cannot end {kind.name.lower()}: the innermost open container "
                f"is an {frame.kind.name.lower()}"
            )

        if frame.awaiting_value:
            self.write_null()

        self._stack.pop()
        if self._indented and frame.has_child:
            self._write_indent()

        word = self._vocab.object_end if kind is FrameKind.OBJECT else self._vocab.array_end
        self._write_token(word)
        if not self._stack:
            self._completed = True
        logger.trace("end %s, depth now %d", kind.name.lower(), len(self._stack))

    def write_end_object(self) -> None:
        self._write_end(FrameKind.OBJECT)

    def write_end_array(self) -> None:
        self._write_end(FrameKind.ARRAY)

    def write_end(self) -> None:
        """Close whichever container is innermost."""
        frame = self._top()
        if frame is None:
            self._check_open()
            raise InvalidStateError("Cannot end a container: none is open")
        self._write_end(frame.kind)

    def write_property_name(self, name: str) -> None:
        frame = self._before_property()
        self._write_token(quote_string(name))
        self._write_internal(" " + self._vocab.property_separator)
        frame.has_child = True
        frame.awaiting_value = True

    # -- Values ---------------------------------------------------------

    def _write_value_token(self, text: str) -> None:
        self._before_value()
        self._write_token(text)
        if not self._stack:
            self._completed = True

    def write_null(self) -> None:
        self._write_value_token(self._vocab.null)

    def write_bool(self, value: bool) -> None:
        self._write_value_token(self._vocab.true if value else self._vocab.false)

    def write_string(self, value: str | None) -> None:
        if value is None:
            self.write_null()
            return
        self._write_value_token(quote_string(value))

    def write_integer(self, value: int) -> None:
        self._write_value_token(format_integer(value))

    def write_float(self, value: float) -> None:
        self._write_value_token(format_float(value, self._vocab.exponent))

    def write_decimal(self, value: Decimal) -> None:
        self._write_value_token(format_decimal(value, self._vocab.exponent))

    def write_bytes(self, value: bytes | bytearray | memoryview | None) -> None:
        if value is None:
            self.write_null()
            return
        self._write_value_token(format_bytes(value))

    def write_guid(self, value: uuid.UUID) -> None:
        self._write_value_token(format_guid(value))

    def write_timespan(self, value: dt.timedelta) -> None:
        self._write_value_token(format_timespan(value))

    def write_uri(self, value: str | None) -> None:
        if value is None:
            self.write_null()
            return
        self._write_value_token(format_uri(value))

    def write_datetime(self, value: dt.datetime | dt.date | dt.time) -> None:
        self._write_value_token(format_datetime(value))

    def write_value(self, value: Value) -> None:
        """Write any member of the :data:`~dson_core.values.Value` union."""
        if isinstance(value, _Null):
            self.write_null()
        elif isinstance(value, VBool):
            self.write_bool(value.value)
        elif isinstance(value, (VInt, VUInt)):
            self.write_integer(value.value)
        elif isinstance(value, VFloat):
            if isinstance(value.value, Decimal):
                self.write_decimal(value.value)
            else:
                self.write_float(value.value)
        elif isinstance(value, VText):
            self.write_string(value.value)
        elif isinstance(value, VBytes):
            self.write_bytes(value.value)
        elif isinstance(value, VGuid):
            self.write_guid(value.value)
        elif isinstance(value, VTimeSpan):
            self.write_timespan(value.value)
        elif isinstance(value, VUri):
            self.write_uri(value.value)
        elif isinstance(value, VDateTime):
            self.write_datetime(value.value)
        else:
            raise TypeError(f"Not a DSON value: {value!r}")

    # -- Constructs DSON cannot spell -----------------------------------

    def write_comment(self, text: str) -> None:
        raise UnsupportedConstructError("Cannot write a comment as DSON")

    def write_start_constructor(self, name: str) -> None:
        raise UnsupportedConstructError("Cannot write a constructor as DSON")

    def write_raw(self, text: str) -> None:
        raise UnsupportedConstructError("Cannot write raw JSON as DSON")

    def write_raw_value(self, text: str) -> None:
        raise UnsupportedConstructError("Cannot write raw JSON as DSON")

    def write_undefined(self) -> None:
        raise UnsupportedConstructError("Cannot write undefined as DSON")

    # -- Resource handling ----------------------------------------------

    def flush(self) -> None:
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        """Flush, then close the stream if the settings say the writer owns it."""
        if self._closed:
            return
        self._closed = True
        if self._stack:
            logger.debug("Closing DsonWriter with %d container(s) still open", len(self._stack))
        try:
            self.flush()
        finally:
            if self._settings.close_output:
                self._stream.close()

    def __enter__(self) -> DsonWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
