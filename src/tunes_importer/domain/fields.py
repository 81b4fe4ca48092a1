"""
Field-level validation used by the track editor.

Connects editable track fields to the known value category they are checked
against and supplies the default validation templates for each category.
"""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger

from .validation import (
    SIMILARITY_CUTOFF,
    AutoFixType,
    FixerId,
    Level,
    TypeMapping,
    ValidationTemplate,
    Validations,
    auto_fix,
    validate_from_knowns,
)

if TYPE_CHECKING:
    from tunes_importer.store.state import State

# Field -> known value category it is validated against
FIELD_KNOWN_CATEGORIES = {
    "artist": "artists",
    "remixer": "artists",
    "publisher": "publishers",
    "genre": "genres",
}


def known_type_mapping(noun: str) -> TypeMapping:
    """Default validation templates for a known value category.

    Args:
        noun: Singular display name of the category (e.g. "artist")
    """
    return TypeMapping(
        known=ValidationTemplate(
            level=Level.VALID,
            message=f"{{value}} is a known {noun}",
        ),
        casing=ValidationTemplate(
            level=Level.WARNING,
            message=f"Casing differs from the known {noun} {{knownValue}}",
            auto_fix=AutoFixType.IMMEDIATE,
            fixer=FixerId.KNOWN_CASING,
        ),
        similar=ValidationTemplate(
            level=Level.WARNING,
            message=f"{{value}} is similar to the known {noun}(s) {{similarList}}",
            auto_fix=AutoFixType.POST_EDIT,
            fixer=FixerId.SIMILAR_KNOWN,
        ),
        unknown=ValidationTemplate(
            level=Level.WARNING,
            message=f"{{value}} is a new {noun}",
        ),
    )


CATEGORY_TYPE_MAPPINGS = {
    "artists": known_type_mapping("artist"),
    "publishers": known_type_mapping("publisher"),
    "genres": known_type_mapping("genre"),
}


def validate_field(
    state: "State",
    field_name: str,
    value: Any,
    cutoff: float = SIMILARITY_CUTOFF,
) -> Validations:
    """Validate a field value against the known values in the state.

    Fields without a known value category, non-string values and empty
    values produce an empty (implicitly valid) collection.
    """
    category = FIELD_KNOWN_CATEGORIES.get(field_name)
    if category is None or not isinstance(value, str) or value == "":
        return Validations()

    return validate_from_knowns(
        value,
        state.known_values.get(category),
        CATEGORY_TYPE_MAPPINGS[category],
        field_name=field_name,
        cutoff=cutoff,
    )


def prepare_field_edit(
    state: "State",
    field_name: str,
    value: Any,
    auto_fix_types: Sequence[AutoFixType] = (AutoFixType.IMMEDIATE,),
    cutoff: float = SIMILARITY_CUTOFF,
) -> tuple[Any, Validations]:
    """
    Validate an edited value and apply its automatic fixes.

    The returned value is what should be committed with a modify-field
    action; the returned validations are what is left to show the operator.

    Returns:
        Tuple of (value to commit, remaining validations)
    """
    validations = validate_field(state, field_name, value, cutoff)
    if not validations:
        return value, validations

    return auto_fix(validations, value, auto_fix_types)


def compute_autofixes(
    state: "State",
    track_ids: Iterable[str],
    field_names: Optional[Iterable[str]] = None,
    auto_fix_types: Sequence[AutoFixType] = (AutoFixType.IMMEDIATE, AutoFixType.POST_EDIT),
    cutoff: float = SIMILARITY_CUTOFF,
) -> dict[str, dict[str, Any]]:
    """
    Collect automatic corrections for tracks.

    Only values that a fixer actually changes are included, so the result
    can be dispatched directly as an autofix-fields action.

    Returns:
        Mapping of track ID to the corrected fields of that track
    """
    field_names = list(field_names) if field_names is not None else list(FIELD_KNOWN_CATEGORIES)
    fixes: dict[str, dict[str, Any]] = {}

    for track_id in track_ids:
        track = state.tracks.get(track_id)
        if track is None:
            continue

        for field_name in field_names:
            value = track.get(field_name)
            validations = validate_field(state, field_name, value, cutoff)
            if not validations:
                continue

            fixed, _ = auto_fix(validations, value, auto_fix_types)
            if fixed != value:
                fixes.setdefault(track_id, {})[field_name] = fixed

    if fixes:
        logger.debug(f"Computed auto-fixes for {len(fixes)} track(s)")

    return fixes
