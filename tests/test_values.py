"""Tests for dson_core.values token formatting."""

import datetime as dt
import json
import uuid
from decimal import Decimal

import pytest

from dson_core.values import (
    Null,
    VUInt,
    format_bytes,
    format_datetime,
    format_decimal,
    format_float,
    format_guid,
    format_integer,
    format_timespan,
    quote_string,
    substitute_exponent,
)


# ---------------------------------------------------------------------------
# Null
# ---------------------------------------------------------------------------

def test_null_is_singleton():
    from dson_core.values import _Null
    assert _Null() is Null

def test_null_is_falsy():
    assert not Null

def test_uint_rejects_negative():
    with pytest.raises(ValueError):
        VUInt(-1)


# ---------------------------------------------------------------------------
# quote_string
# ---------------------------------------------------------------------------

def test_quote_plain():
    assert quote_string("doge") == '"doge"'

def test_quote_escapes_quote_and_backslash():
    assert quote_string('a"b\\c') == '"a\\"b\\\\c"'

def test_quote_escapes_control_characters():
    assert quote_string("\n\t\x01") == '"\\n\\t\\u0001"'

def test_quote_escapes_line_separators():
    assert quote_string("a\u2028b\u2029c\u0085") == '"a\\u2028b\\u2029c\\u0085"'

def test_quote_escapes_lone_surrogates():
    out = quote_string("a\ud800b\udfff")
    assert out == '"a\\ud800b\\udfff"'
    assert json.loads(out) == "a\ud800b\udfff"
    out.encode("utf-8")

def test_quote_keeps_non_ascii():
    assert quote_string("ドージ") == '"ドージ"'


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def test_format_integer():
    assert format_integer(-12) == "-12"
    assert format_integer(0) == "0"

def test_format_float_plain():
    assert format_float(3.25) == "3.25"
    assert format_float(1.0) == "1.0"

def test_format_float_exponent():
    assert format_float(9.9e20) == "9.9E+20"
    assert format_float(1e-05) == "1E-05"

def test_format_float_exponent_word():
    assert format_float(9.9e20, "very") == "9.9very+20"

def test_format_float_non_finite():
    assert format_float(float("nan")) == "NaN"
    assert format_float(float("inf")) == "Infinity"
    assert format_float(float("-inf")) == "-Infinity"

def test_format_decimal():
    assert format_decimal(Decimal("1E+3"), "very") == "1very+3"
    assert format_decimal(Decimal("-0.50")) == "-0.50"
    assert format_decimal(Decimal("NaN")) == "NaN"

def test_substitute_exponent_without_exponent():
    assert substitute_exponent("42", "very") == "42"


# ---------------------------------------------------------------------------
# Other primitives
# ---------------------------------------------------------------------------

def test_format_bytes():
    assert format_bytes("how now brown cow".encode()) == '"aG93IG5vdyBicm93biBjb3c="'
    assert format_bytes(b"") == '""'

def test_format_guid():
    g = uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e")
    assert format_guid(g) == "0f8fad5b-d9cb-469f-a165-70867728950e"

@pytest.mark.parametrize(
    "delta, expected",
    [
        (dt.timedelta(0), "00:00:00"),
        (dt.timedelta(hours=1, minutes=2, seconds=3), "01:02:03"),
        (dt.timedelta(days=1, hours=2, minutes=3, seconds=4, microseconds=500), "1.02:03:04.0005000"),
        (dt.timedelta(minutes=-90), "-01:30:00"),
    ],
)
def test_format_timespan(delta, expected):
    assert format_timespan(delta) == expected

def test_format_datetime():
    assert format_datetime(dt.datetime(2026, 10, 18, 9, 30, 15)) == "2026-10-18T09:30:15"
    assert format_datetime(dt.date(2026, 10, 18)) == "2026-10-18"
    assert format_datetime(dt.time(7, 5)) == "07:05:00"

def test_format_datetime_keeps_offset():
    value = dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc)
    assert format_datetime(value) == "2026-01-01T00:00:00+00:00"
