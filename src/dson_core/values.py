"""Value types for DSON Core and the text form of each primitive token."""

from __future__ import annotations

import base64
import datetime as dt
import json
import math
import re
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


# ---------------------------------------------------------------------------
# Null — singleton for absent values
# ---------------------------------------------------------------------------

class _Null:
    """Singleton standing in for a null value."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = _Null()


# ---------------------------------------------------------------------------
# Primitive values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VBool:
    value: bool


@dataclass(frozen=True, slots=True)
class VInt:
    value: int


@dataclass(frozen=True, slots=True)
class VUInt:
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"VUInt cannot hold a negative number: {self.value}")


@dataclass(frozen=True, slots=True)
class VFloat:
    value: float | Decimal


@dataclass(frozen=True, slots=True)
class VText:
    value: str | None  # None is written as null


@dataclass(frozen=True, slots=True)
class VBytes:
    value: bytes


@dataclass(frozen=True, slots=True)
class VGuid:
    value: uuid.UUID


@dataclass(frozen=True, slots=True)
class VTimeSpan:
    value: dt.timedelta


@dataclass(frozen=True, slots=True)
class VUri:
    value: str


@dataclass(frozen=True, slots=True)
class VDateTime:
    value: dt.datetime | dt.date | dt.time


Value = Union[
    _Null, VBool, VInt, VUInt, VFloat, VText, VBytes, VGuid, VTimeSpan, VUri, VDateTime
]

VALUE_TYPES: tuple[type, ...] = (
    _Null, VBool, VInt, VUInt, VFloat, VText, VBytes, VGuid, VTimeSpan, VUri, VDateTime
)


# ---------------------------------------------------------------------------
# Token text
# ---------------------------------------------------------------------------

# json.dumps leaves these alone, but they break lines in many editors
_EXTRA_ESCAPES = {
    "\u0085": "\\u0085",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# lone surrogates are valid JSON escapes but cannot be encoded as UTF-8
_SURROGATE = re.compile(r"[\ud800-\udfff]")


def quote_string(text: str) -> str:
    """Return *text* as a double-quoted literal with JSON escaping."""
    quoted = json.dumps(text, ensure_ascii=False)
    for raw, escaped in _EXTRA_ESCAPES.items():
        if raw in quoted:
            quoted = quoted.replace(raw, escaped)
    return _SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), quoted)


def substitute_exponent(text: str, exponent_word: str) -> str:
    """Replace the exponent marker of a numeric literal with *exponent_word*.

    ``"9.9e+20"`` with ``"very"`` becomes ``"9.9very+20"``.  Text without an
    exponent is returned unchanged.
    """
    for marker in ("e", "E"):
        if marker in text:
            mantissa, _, exponent = text.partition(marker)
            return f"{mantissa}{exponent_word}{exponent}"
    return text


def format_integer(value: int) -> str:
    return str(int(value))


def format_float(value: float, exponent_word: str = "E") -> str:
    """Shortest round-trip text of *value*.

    Non-finite values use the words ``NaN``, ``Infinity`` and ``-Infinity``.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return substitute_exponent(repr(value), exponent_word)


def format_decimal(value: Decimal, exponent_word: str = "E") -> str:
    if value.is_nan():
        return "NaN"
    if value.is_infinite():
        return "Infinity" if value > 0 else "-Infinity"
    return substitute_exponent(str(value), exponent_word)


def format_bytes(value: bytes | bytearray | memoryview) -> str:
    return '"' + base64.b64encode(bytes(value)).decode("ascii") + '"'


def format_guid(value: uuid.UUID) -> str:
    return str(value)


def format_timespan(value: dt.timedelta) -> str:
    """Format a duration as ``[-][d.]hh:mm:ss[.fffffff]``.

    The fraction has seven digits (100 ns units) and is only present when
    the duration is not a whole number of seconds.
    """
    total_us = value // dt.timedelta(microseconds=1)
    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)

    days, rem = divmod(total_us, 86_400_000_000)
    hours, rem = divmod(rem, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    seconds, micros = divmod(rem, 1_000_000)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if micros:
        text = f"{text}.{micros * 10:07d}"
    return sign + text


def format_uri(value: str) -> str:
    return str(value)


def format_datetime(value: dt.datetime | dt.date | dt.time) -> str:
    """ISO-8601 text of a date, time or datetime."""
    return value.isoformat()
