"""Convenience API: serialize whole object graphs to DSON text."""

from __future__ import annotations

import io
from typing import Any, TextIO

from .settings import WriterSettings
from .walker import walk
from .writer import DsonWriter


def dumps(value: Any, settings: WriterSettings | None = None, **overrides: Any) -> str:
    """Serialize *value* to a DSON string.

    *overrides* replace individual settings, e.g. ``formatting="indented"``
    or ``vocabulary="dogeon"``::

        >>> dumps({"hello": "world"})
        'such "hello" is "world" wow'
    """
    buf = io.StringIO()
    dump(value, buf, settings, **overrides)
    return buf.getvalue()


def dump(
    value: Any,
    fp: TextIO,
    settings: WriterSettings | None = None,
    **overrides: Any,
) -> None:
    """Serialize *value* as DSON into the text stream *fp*.

    *fp* belongs to the caller: it is flushed but never closed.
    """
    settings = (settings or WriterSettings()).merged(**overrides).merged(close_output=False)
    with DsonWriter(fp, settings) as writer:
        walk(value, writer)
