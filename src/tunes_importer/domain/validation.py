"""
Field value validation against known library values.

A validation event produces a Validations collection: an ordered, immutable
sequence of ValidationResult records. Collections can be merged, resolved to
their most severe level, and asked to apply their automatic fixes to a value.

Fixers are referenced by FixerId and dispatched through a registry, so two
results share a fixer exactly when their ids are equal.
"""

import re
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from loguru import logger
from rapidfuzz import fuzz

from .knowns import KnownValues

# Similar knowns must score strictly above this ratio (0.0 - 1.0)
SIMILARITY_CUTOFF = 0.75


class Level(str, Enum):
    """Validation levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VALID = "valid"


# Most severe first
LEVEL_PRECEDENCE = (Level.ERROR, Level.WARNING, Level.INFO, Level.VALID)


class AutoFixType(str, Enum):
    """When an automatic fix may be applied."""

    IMMEDIATE = "immediate"  # While the value is being edited
    POST_EDIT = "post_edit"  # Once the operator has finished editing


class KnownRule(str, Enum):
    """Outcome of checking a value against known values."""

    KNOWN = "KNOWN"  # Known value
    CASING = "CASING"  # Inconsistently cased
    SIMILAR = "SIMILAR"  # Similar to a known value
    UNKNOWN = "UNKNOWN"  # Value is not known


class FixerId(str, Enum):
    """Identifiers of registered automatic fixers."""

    KNOWN_CASING = "known_casing"
    SIMILAR_KNOWN = "similar_known"


Fixer = Callable[[str, Mapping[str, Any]], str]

_FIXERS: dict[FixerId, Fixer] = {}


def register_fixer(fixer_id: FixerId, fixer: Fixer) -> None:
    """Register the function applied for a fixer id."""
    _FIXERS[fixer_id] = fixer


def get_fixer(fixer_id: FixerId) -> Fixer:
    """Look up a registered fixer.

    Raises:
        ValueError: If no fixer is registered for the id
    """
    try:
        return _FIXERS[fixer_id]
    except KeyError:
        raise ValueError(f"No fixer registered for {fixer_id!r}") from None


def _fix_known_casing(value: str, fields: Mapping[str, Any]) -> str:
    return fields.get("knownValue", value)


def _fix_similar_known(value: str, fields: Mapping[str, Any]) -> str:
    # Only unambiguous suggestions are applied
    similar = fields.get("similarKnowns") or []
    return similar[0] if len(similar) == 1 else value


register_fixer(FixerId.KNOWN_CASING, _fix_known_casing)
register_fixer(FixerId.SIMILAR_KNOWN, _fix_similar_known)


@dataclass(frozen=True)
class ValidationTemplate:
    """Caller-supplied description of a validation outcome."""

    level: Level
    message: Optional[str] = None
    auto_fix: Optional[AutoFixType] = None
    fixer: Optional[FixerId] = None


@dataclass(frozen=True)
class ValidationResult:
    """A single validation outcome with its rendered message."""

    level: Level
    message: Optional[str] = None
    fields: Mapping[str, Any] = field(default_factory=dict)
    auto_fix: Optional[AutoFixType] = None
    fixer: Optional[FixerId] = None
    rule: Optional[KnownRule] = None
    field_name: Optional[str] = None


@dataclass(frozen=True)
class TypeMapping:
    """Validation templates for every KnownRule."""

    known: ValidationTemplate
    casing: ValidationTemplate
    similar: ValidationTemplate
    unknown: ValidationTemplate

    def template_for(self, rule: KnownRule) -> ValidationTemplate:
        match rule:
            case KnownRule.KNOWN:
                return self.known
            case KnownRule.CASING:
                return self.casing
            case KnownRule.SIMILAR:
                return self.similar
            case KnownRule.UNKNOWN:
                return self.unknown

    @classmethod
    def from_dict(cls, mapping: Mapping[KnownRule | str, ValidationTemplate]) -> "TypeMapping":
        """Build a mapping keyed by rule (or rule name).

        Raises:
            ValueError: If a rule has no template
        """
        by_rule = {KnownRule(key): template for key, template in mapping.items()}
        missing = [rule.value for rule in KnownRule if rule not in by_rule]
        if missing:
            raise ValueError(f"Type mapping is missing templates for: {', '.join(missing)}")

        return cls(
            known=by_rule[KnownRule.KNOWN],
            casing=by_rule[KnownRule.CASING],
            similar=by_rule[KnownRule.SIMILAR],
            unknown=by_rule[KnownRule.UNKNOWN],
        )


# Named placeholder, e.g. {knownValue}
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _render_message(message: Optional[str], fields: Mapping[str, Any]) -> Optional[str]:
    """Substitute {name} placeholders; anything else in the template is literal."""
    if not isinstance(message, str):
        return message

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        return str(fields[name]) if name in fields else match.group(0)

    return _PLACEHOLDER.sub(substitute, message)


@dataclass(frozen=True)
class Validations:
    """Ordered collection of validation results for one validation event."""

    items: tuple[ValidationResult, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ValidationResult]:
        return iter(self.items)

    def add(
        self,
        template: ValidationTemplate,
        fields: Optional[Mapping[str, Any]] = None,
        *,
        rule: Optional[KnownRule] = None,
        field_name: Optional[str] = None,
    ) -> "Validations":
        return add(self, template, fields, rule=rule, field_name=field_name)

    def merge(self, other: "Validations") -> "Validations":
        return merge(self, other)

    def level(self) -> Optional[Level]:
        return level(self)

    def auto_fix(
        self, value: str, types: Sequence[AutoFixType] = (AutoFixType.IMMEDIATE,)
    ) -> tuple[str, "Validations"]:
        return auto_fix(self, value, types)


def add(
    validations: Validations,
    template: ValidationTemplate,
    fields: Optional[Mapping[str, Any]] = None,
    *,
    rule: Optional[KnownRule] = None,
    field_name: Optional[str] = None,
) -> Validations:
    """Return a new collection with the template rendered and appended."""
    fields = dict(fields or {})
    result = ValidationResult(
        level=template.level,
        message=_render_message(template.message, fields),
        fields=fields,
        auto_fix=template.auto_fix,
        fixer=template.fixer,
        rule=rule,
        field_name=field_name,
    )
    return replace(validations, items=validations.items + (result,))


def merge(validations: Validations, other: Validations) -> Validations:
    """Concatenate two collections, keeping both orders."""
    return replace(validations, items=validations.items + other.items)


def level(validations: Validations) -> Optional[Level]:
    """Most severe level present, or None for an empty collection."""
    present = {result.level for result in validations.items}
    return next((lvl for lvl in LEVEL_PRECEDENCE if lvl in present), None)


def auto_fix(
    validations: Validations,
    value: str,
    types: Sequence[AutoFixType] = (AutoFixType.IMMEDIATE,),
) -> tuple[str, Validations]:
    """
    Apply the automatic fixes of the given types to a value.

    Fixers run in collection order. When a fixer changes the value, every
    remaining result using that fixer is considered resolved and dropped. A
    fixer that returns its input unchanged keeps its result.

    Args:
        validations: Collection to take fixers from
        value: Value to fix
        types: Auto-fix types to apply

    Returns:
        Tuple of (fixed value, remaining validations)
    """
    candidates = [
        result
        for result in validations.items
        if result.auto_fix in types and result.fixer is not None
    ]
    if not candidates:
        return value, validations

    remaining = list(validations.items)
    new_value = value

    for result in candidates:
        if not any(item is result for item in remaining):
            continue

        old_value = new_value
        new_value = get_fixer(result.fixer)(old_value, result.fields)

        if new_value != old_value:
            logger.debug(f"Auto-fixed {old_value!r} -> {new_value!r} ({result.fixer.value})")
            remaining = [item for item in remaining if item.fixer != result.fixer]

    return new_value, replace(validations, items=tuple(remaining))


def similarity(a: str, b: str) -> float:
    """Similarity ratio of two strings in the range 0.0 - 1.0."""
    return fuzz.ratio(a, b) / 100.0


def find_similar(
    value: str,
    candidates: Sequence[str],
    cutoff: float = SIMILARITY_CUTOFF,
    scorer: Optional[Callable[[str, str], float]] = None,
) -> list[str]:
    """Candidates scoring strictly above the cutoff, in candidate order."""
    scorer = scorer or similarity
    return [candidate for candidate in candidates if scorer(value, candidate) > cutoff]


def validate_from_knowns(
    value: str,
    knowns: Optional[KnownValues],
    type_mapping: TypeMapping,
    field_name: Optional[str] = None,
    cutoff: float = SIMILARITY_CUTOFF,
    scorer: Optional[Callable[[str, str], float]] = None,
) -> Validations:
    """
    Validate a value given a table of known values.

    The checks below run in order; the first one that applies ends validation:

     1. KNOWN: the value exists in the list of known values.
     2. CASING: the value matches a known value case-insensitively.
     3. SIMILAR: the value is similar to one or more known values.
     4. UNKNOWN: nothing like the value has been seen before.

    Message fields available to templates:

      - value:         The value provided.
      - knownValue:    The known value for CASING.
      - similarKnowns: The similar values list for SIMILAR.
      - similarList:   The comma-joined similar values for SIMILAR.

    Args:
        value: Value to validate
        knowns: Known values of the field's category (None skips validation)
        type_mapping: Templates to use per rule
        field_name: Field name recorded on the results
        cutoff: Similarity cutoff for SIMILAR
        scorer: Similarity function, defaults to a rapidfuzz ratio

    Returns:
        Validations with at most one result
    """
    validations = Validations()

    if knowns is None:
        return validations

    def emit(rule: KnownRule, fields: dict[str, Any]) -> Validations:
        return validations.add(type_mapping.template_for(rule), fields, rule=rule, field_name=field_name)

    if value in knowns.clean:
        return emit(KnownRule.KNOWN, {"value": value})

    known_value = knowns.normal.get(value.lower())
    if known_value is not None:
        return emit(KnownRule.CASING, {"value": value, "knownValue": known_value})

    # An empty corpus has nothing to be similar to
    similar_knowns = find_similar(value, knowns.clean, cutoff, scorer) if knowns.clean else []

    if similar_knowns:
        return emit(
            KnownRule.SIMILAR,
            {
                "value": value,
                "similarKnowns": similar_knowns,
                "similarList": ", ".join(similar_knowns),
            },
        )

    return emit(KnownRule.UNKNOWN, {"value": value})
