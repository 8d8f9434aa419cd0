"""Vocabulary — the words DSON spells its structure with."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .errors import ConfigurationError


@dataclass(frozen=True)
class Vocabulary:
    """Words written for each structural and value token.

    The two delimiters are written verbatim between siblings, so they carry
    their own leading whitespace (``" next"``, ``","``).  Every other word is
    separated from its neighbours by the writer.
    """

    object_start: str = "such"
    object_end: str = "wow"
    property_separator: str = "is"
    object_delimiter: str = " next"
    array_start: str = "many"
    array_end: str = "many"
    array_delimiter: str = " next"
    null: str = "nullish"
    true: str = "notfalse"
    false: str = "nottrue"
    exponent: str = "E"

    def __post_init__(self) -> None:
        for f in fields(self):
            word = getattr(self, f.name)
            if not isinstance(word, str) or not word.strip():
                raise ConfigurationError(
                    f"Vocabulary word {f.name!r} must be a non-empty string, got {word!r}"
                )

    def with_overrides(self, overrides: Mapping[str, Any]) -> Vocabulary:
        """Return a copy with some words replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown vocabulary word(s): {', '.join(unknown)}")
        return replace(self, **dict(overrides))


DEFAULT_VOCABULARY = Vocabulary()

# Words from the dogeon.xyz notation
DOGEON_VOCABULARY = Vocabulary(
    object_delimiter=",",
    array_start="so",
    array_delimiter=" and",
    null="empty",
    true="yes",
    false="no",
    exponent="very",
)

VOCABULARIES: dict[str, Vocabulary] = {
    "default": DEFAULT_VOCABULARY,
    "dogeon": DOGEON_VOCABULARY,
}


def get_vocabulary(name: str) -> Vocabulary:
    try:
        return VOCABULARIES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(VOCABULARIES)
        raise ConfigurationError(
            f"Unknown vocabulary {name!r} (choose from: {choices})"
        ) from None


def coerce_vocabulary(source: Vocabulary | str | Mapping[str, Any] | None) -> Vocabulary:
    """Build a Vocabulary from a preset name, a mapping of overrides or an instance.

    A mapping may name its base preset under the ``"preset"`` key; the
    remaining keys override individual words.
    """
    if source is None:
        return DEFAULT_VOCABULARY
    if isinstance(source, Vocabulary):
        return source
    if isinstance(source, str):
        return get_vocabulary(source)
    if isinstance(source, Mapping):
        overrides = dict(source)
        base = get_vocabulary(str(overrides.pop("preset", "default")))
        return base.with_overrides(overrides)
    raise ConfigurationError(f"Cannot build a vocabulary from {type(source).__name__}")
