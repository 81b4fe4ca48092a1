"""
Known value tables.

The library keeps lists of field values it has already seen (artists,
publishers, genres). Each list is paired with a case-folded lookup so
inconsistently cased values can be mapped back to their canonical form:

    normalize_known_values({"artists": ["DJ Sy"]})
    => {"artists": KnownValues(clean=("DJ Sy",), normal={"dj sy": "DJ Sy"})}
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from loguru import logger

DEFAULT_CATEGORIES = ("artists", "publishers", "genres")


@dataclass(frozen=True)
class KnownValues:
    """Canonical values of one category plus their lowercase lookup."""

    clean: tuple[str, ...] = ()
    normal: dict[str, str] = field(default_factory=dict)


def build_known_values(values: Iterable[str]) -> KnownValues:
    """Build a single category table; later case-fold collisions win."""
    clean = tuple(values)
    normal: dict[str, str] = {}

    for value in clean:
        key = value.lower()
        if key in normal and normal[key] != value:
            logger.debug(f"Known value {value!r} replaces {normal[key]!r} for {key!r}")
        normal[key] = value

    return KnownValues(clean=clean, normal=normal)


def normalize_known_values(
    knowns: Mapping[str, Iterable[str]],
) -> dict[str, KnownValues]:
    """Normalize every category of raw known values."""
    return {category: build_known_values(values) for category, values in knowns.items()}


def empty_known_values() -> dict[str, KnownValues]:
    """Known value tables for the default categories, all empty."""
    return {category: KnownValues() for category in DEFAULT_CATEGORIES}
