"""DSON Core — writes object graphs as DSON, JSON spelled with doge words."""

from .convert import dump, dumps
from .errors import (
    ConfigurationError,
    DsonCoreError,
    InvalidStateError,
    SerializationError,
    UnsupportedConstructError,
)
from .settings import Formatting, WriterSettings, load_settings
from .values import (
    Null,
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
)
from .vocabulary import DEFAULT_VOCABULARY, DOGEON_VOCABULARY, Vocabulary, get_vocabulary
from .walker import walk
from .writer import DsonWriter

__all__ = [
    "dumps",
    "dump",
    "walk",
    "DsonWriter",
    "Formatting",
    "WriterSettings",
    "load_settings",
    "Vocabulary",
    "DEFAULT_VOCABULARY",
    "DOGEON_VOCABULARY",
    "get_vocabulary",
    "Null",
    "Value",
    "VBool",
    "VBytes",
    "VDateTime",
    "VFloat",
    "VGuid",
    "VInt",
    "VText",
    "VTimeSpan",
    "VUInt",
    "VUri",
    "DsonCoreError",
    "UnsupportedConstructError",
    "InvalidStateError",
    "ConfigurationError",
    "SerializationError",
]
