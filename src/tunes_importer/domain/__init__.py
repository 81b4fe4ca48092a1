"""Domain logic - known values, validation and the track tree.

This package handles:
- Known value normalization
- Validation of field values against known values
- Field to known value category wiring
- Grouping tracks by directory and numbering them
"""

# Known values
from .knowns import KnownValues, build_known_values, empty_known_values, normalize_known_values

# Validation
from .validation import (
    SIMILARITY_CUTOFF,
    AutoFixType,
    FixerId,
    KnownRule,
    Level,
    TypeMapping,
    ValidationResult,
    ValidationTemplate,
    Validations,
    auto_fix,
    validate_from_knowns,
)

# Field wiring
from .fields import FIELD_KNOWN_CATEGORIES, compute_autofixes, prepare_field_edit, validate_field

# Track tree
from .tree import TrackGroup, TrackNumbering, build_tree, compute_track_numbers, format_track_numbers

__all__ = [
    # Known values
    "KnownValues",
    "build_known_values",
    "empty_known_values",
    "normalize_known_values",
    # Validation
    "SIMILARITY_CUTOFF",
    "AutoFixType",
    "FixerId",
    "KnownRule",
    "Level",
    "TypeMapping",
    "ValidationResult",
    "ValidationTemplate",
    "Validations",
    "auto_fix",
    "validate_from_knowns",
    # Fields
    "FIELD_KNOWN_CATEGORIES",
    "compute_autofixes",
    "prepare_field_edit",
    "validate_field",
    # Track tree
    "TrackGroup",
    "TrackNumbering",
    "build_tree",
    "compute_track_numbers",
    "format_track_numbers",
]
