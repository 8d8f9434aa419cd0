"""Writer settings and their TOML loader."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from .errors import ConfigurationError
from .logging import get_logger
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, coerce_vocabulary

logger = get_logger(__name__)


class Formatting(Enum):
    COMPACT = "compact"
    INDENTED = "indented"

    @classmethod
    def parse(cls, value: Formatting | str) -> Formatting:
        if isinstance(value, Formatting):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown formatting {value!r} (choose from: {choices})"
            ) from None


@dataclass(frozen=True)
class WriterSettings:
    """Options read by DsonWriter.

    - ``formatting``: one line (COMPACT) or one token group per line (INDENTED)
    - ``indent_char`` / ``indent_size``: indent unit repeated once per depth level
    - ``close_output``: whether ``close()`` also closes the destination stream
    - ``vocabulary``: the words written for each token
    """

    formatting: Formatting = Formatting.COMPACT
    indent_char: str = " "
    indent_size: int = 2
    close_output: bool = True
    vocabulary: Vocabulary = field(default=DEFAULT_VOCABULARY)

    def __post_init__(self) -> None:
        if not isinstance(self.formatting, Formatting):
            raise ConfigurationError(f"formatting must be a Formatting, got {self.formatting!r}")
        if not isinstance(self.indent_char, str) or len(self.indent_char) != 1:
            raise ConfigurationError(
                f"indent_char must be a single character, got {self.indent_char!r}"
            )
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise ConfigurationError(f"indent_size must be an integer, got {self.indent_size!r}")
        if self.indent_size < 0:
            raise ConfigurationError(
                f"indent_size must be zero or greater, got {self.indent_size}"
            )
        if not isinstance(self.vocabulary, Vocabulary):
            raise ConfigurationError(f"vocabulary must be a Vocabulary, got {self.vocabulary!r}")

    @property
    def indent_unit(self) -> str:
        return self.indent_char * self.indent_size

    def merged(self, **overrides: Any) -> WriterSettings:
        """Return a copy with *overrides* applied (same keys as ``from_mapping``)."""
        if not overrides:
            return self
        return replace(self, **_normalize(overrides))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> WriterSettings:
        """Build settings from plain data, e.g. a parsed TOML table.

        ``formatting`` may be a string, ``vocabulary`` a preset name or a table
        of word overrides (see :func:`dson_core.vocabulary.coerce_vocabulary`).
        """
        return cls(**_normalize(data))


_FIELD_NAMES = frozenset(f.name for f in fields(WriterSettings))


def _normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    kwargs = {key.replace("-", "_"): value for key, value in data.items()}
    unknown = sorted(set(kwargs) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")
    if "formatting" in kwargs:
        kwargs["formatting"] = Formatting.parse(kwargs["formatting"])
    if "vocabulary" in kwargs:
        kwargs["vocabulary"] = coerce_vocabulary(kwargs["vocabulary"])
    return kwargs


def load_settings(path: Path | str) -> WriterSettings:
    """Read writer settings from a TOML file.

    Settings live in a ``[dson]`` table, or ``[tool.dson]`` inside a
    ``pyproject.toml``.  A file without either table yields the defaults.
    """
    path = Path(path)
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(path.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.error("Error loading TOML from %s: %s", path, exc)
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    except TomlkitParseError as exc:
        logger.error("Error decoding TOML from %s: %s", path, exc)
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc

    data: dict[str, Any] = doc.unwrap()
    if path.name == "pyproject.toml":
        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            raise ConfigurationError(f"[tool] in {path} must be a table")
        table = tool.get("dson")
    else:
        table = data.get("dson")
    if table is None:
        logger.debug("No DSON settings in %s, using defaults", path)
        return WriterSettings()
    if not isinstance(table, dict):
        raise ConfigurationError(f"DSON settings in {path} must be a table")

    logger.debug("Loaded DSON settings from %s: %s", path, table)
    return WriterSettings.from_mapping(table)
