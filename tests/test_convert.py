"""Tests for dumps/dump and the object-graph walker."""

import datetime as dt
import enum
import io
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from urllib.parse import urlparse

import pytest

from dson_core import (
    Formatting,
    SerializationError,
    VText,
    WriterSettings,
    dump,
    dumps,
)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def test_serialize_object_indented():
    assert dumps({"hello": "world"}, formatting="indented") == 'such\n  "hello" is "world"\nwow'

def test_serialize_array():
    out = dumps({"hello": "world", "people": ["James", "Brendon", "Amy"]})
    assert out == (
        'such "hello" is "world" next "people" is '
        'many "James" next "Brendon" next "Amy" many wow'
    )

def test_serialize_array_dogeon_indented():
    out = dumps(
        {"hello": "world", "people": ["James", "Brendon", "Amy"]},
        formatting=Formatting.INDENTED,
        vocabulary="dogeon",
    )
    assert out == (
        'such\n  "hello" is "world",\n  "people" is so\n'
        '    "James" and\n    "Brendon" and\n    "Amy"\n  many\nwow'
    )

def test_serialize_byte_array():
    out = dumps({"hello": "world", "people": "how now brown cow".encode()})
    assert out == 'such "hello" is "world" next "people" is "aG93IG5vdyBicm93biBjb3c=" wow'

def test_settings_object_and_overrides():
    settings = WriterSettings(formatting=Formatting.INDENTED, indent_size=4)
    assert dumps([1], settings) == "many\n    1\nmany"
    assert dumps([1], settings, indent_size=1) == "many\n 1\nmany"

def test_scalars():
    assert dumps(None) == "nullish"
    assert dumps(True) == "notfalse"
    assert dumps(False) == "nottrue"
    assert dumps(7) == "7"
    assert dumps(9.9e20) == "9.9E+20"
    assert dumps("wow") == '"wow"'

def test_null_under_dogeon():
    assert dumps(None, vocabulary="dogeon") == "empty"


# ---------------------------------------------------------------------------
# Python types
# ---------------------------------------------------------------------------

class Color(enum.Enum):
    RED = "red"
    BLUE = 2


@dataclass
class Point:
    x: int
    y: int
    tags: list[str] = field(default_factory=list)


class Plain:
    def __init__(self):
        self.name = "doge"
        self._secret = "hidden"


def test_dataclass():
    assert dumps(Point(1, 2, ["a"])) == 'such "x" is 1 next "y" is 2 next "tags" is many "a" many wow'

def test_plain_object_public_attributes():
    assert dumps(Plain()) == 'such "name" is "doge" wow'

def test_enum_uses_value():
    assert dumps([Color.RED, Color.BLUE]) == 'many "red" next 2 many'

def test_non_string_keys():
    assert dumps({1: "a", Color.RED: "b"}) == 'such "1" is "a" next "red" is "b" wow'

def test_tuple_and_generator():
    assert dumps((1, 2)) == "many 1 next 2 many"
    assert dumps(i * i for i in range(3)) == "many 0 next 1 next 4 many"

def test_set_is_sorted():
    assert dumps({3, 1, 2}) == "many 1 next 2 next 3 many"

def test_special_scalars():
    out = dumps(
        [
            uuid.UUID(int=1),
            dt.timedelta(seconds=5),
            dt.date(2026, 10, 18),
            Decimal("1.5"),
            urlparse("https://dogeon.xyz/about"),
            bytearray(b"abc"),
        ]
    )
    assert out == (
        "many 00000000-0000-0000-0000-000000000001 next 00:00:05 next 2026-10-18 "
        'next 1.5 next https://dogeon.xyz/about next "YWJj" many'
    )

def test_value_instances_pass_through():
    assert dumps({"v": VText("x")}) == 'such "v" is "x" wow'


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_self_referencing_dict():
    d = {}
    d["self"] = d
    with pytest.raises(SerializationError, match="Self referencing loop"):
        dumps(d)

def test_self_referencing_list():
    items = []
    items.append(items)
    with pytest.raises(SerializationError):
        dumps(items)

def test_shared_reference_is_not_a_loop():
    shared = {"a": 1}
    assert dumps([shared, shared]) == 'many such "a" is 1 wow next such "a" is 1 wow many'

def test_unserializable_object():
    with pytest.raises(SerializationError, match="object"):
        dumps(object())


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------

def test_dump_leaves_stream_open():
    buf = io.StringIO()
    dump({"a": [1, 2]}, buf)
    assert not buf.closed
    assert buf.getvalue() == 'such "a" is many 1 next 2 many wow'

def test_dump_ignores_close_output():
    buf = io.StringIO()
    dump([], buf, WriterSettings(close_output=True))
    assert not buf.closed
