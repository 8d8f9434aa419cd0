"""Error types for DSON Core."""

from __future__ import annotations


class DsonCoreError(Exception):
    """Base class for every error raised by dson_core."""

    kind: str = "dson"


class UnsupportedConstructError(DsonCoreError):
    """The event has no DSON spelling (comments, constructors, raw text, undefined)."""

    kind = "unsupported_construct"


class InvalidStateError(DsonCoreError):
    """The event does not fit the writer's current nesting state."""

    kind = "invalid_state"


class ConfigurationError(DsonCoreError, ValueError):
    kind = "configuration"


class SerializationError(DsonCoreError):
    """The traversal could not turn an object into writer events."""

    kind = "serialization"
