"""
Actions consumed by the track state reducer.

The creators below only package their arguments; all behavior lives in the
reducer. The async task layer (library lookups, uploads, saving) dispatches
the same actions once its work completes.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import uuid4


class ActionType(str, Enum):
    """Kinds of state transitions."""

    TRACK_DETAILS = "TRACK_DETAILS"
    TRACK_REMOVED = "TRACK_REMOVED"
    TRACK_PROCESSING = "TRACK_PROCESSING"
    TRACK_UPDATE = "TRACK_UPDATE"
    SET_ARTWORK = "SET_ARTWORK"
    AUTOFIX_FIELDS = "AUTOFIX_FIELDS"
    REPLACE_KNOWNS = "REPLACE_KNOWNS"
    TOGGLE_SELECT_ALL = "TOGGLE_SELECT_ALL"
    TOGGLE_SELECT = "TOGGLE_SELECT"
    CLEAR_SELECTED = "CLEAR_SELECTED"
    REORDER_GROUPS = "REORDER_GROUPS"
    NUMBER_SELECTED = "NUMBER_SELECTED"
    MODIFY_FIELD = "MODIFY_FIELD"
    ARTWORK_SELECT = "ARTWORK_SELECT"
    ARTWORK_REMOVE = "ARTWORK_REMOVE"
    ARTWORK_ADD = "ARTWORK_ADD"
    SAVE_TRACKS = "SAVE_TRACKS"
    SAVE_PROCESSING = "SAVE_PROCESSING"
    TRACK_SAVED = "TRACK_SAVED"


@dataclass(frozen=True)
class Action:
    """Tagged action record."""

    type: ActionType | str
    data: Mapping[str, Any] = field(default_factory=dict)


def track_details(items: Iterable[Mapping[str, Any]]) -> Action:
    """Tracks loaded (or reloaded) from the library."""
    return Action(ActionType.TRACK_DETAILS, {"items": list(items)})


def track_removed(items: Iterable[Mapping[str, Any] | str]) -> Action:
    """Tracks removed from the import; items are tracks or track IDs."""
    return Action(ActionType.TRACK_REMOVED, {"items": list(items)})


def track_processing(items: Iterable[Mapping[str, Any]]) -> Action:
    """Processes started; each item has an "id" and a "process" tag."""
    return Action(ActionType.TRACK_PROCESSING, {"items": list(items)})


def track_update(items: Iterable[Mapping[str, Any]]) -> Action:
    """Partial track updates; each item may name its "completedProcess"."""
    return Action(ActionType.TRACK_UPDATE, {"items": list(items)})


def set_artwork(items: Mapping[str, Any]) -> Action:
    return Action(ActionType.SET_ARTWORK, {"items": dict(items)})


def autofix_fields(items: Mapping[str, Mapping[str, Any]]) -> Action:
    """Corrected fields per track ID."""
    return Action(ActionType.AUTOFIX_FIELDS, {"items": dict(items)})


def replace_knowns(knowns: Mapping[str, Iterable[str]]) -> Action:
    return Action(ActionType.REPLACE_KNOWNS, {"knowns": {k: list(v) for k, v in knowns.items()}})


def toggle_select_all(toggle: bool) -> Action:
    return Action(ActionType.TOGGLE_SELECT_ALL, {"toggle": toggle})


def toggle_select(toggle: bool, tracks: Iterable[str]) -> Action:
    return Action(ActionType.TOGGLE_SELECT, {"toggle": toggle, "tracks": list(tracks)})


def clear_selected() -> Action:
    return Action(ActionType.CLEAR_SELECTED)


def reorder_groups(old_index: int, new_index: int) -> Action:
    return Action(ActionType.REORDER_GROUPS, {"old_index": old_index, "new_index": new_index})


def number_selected() -> Action:
    return Action(ActionType.NUMBER_SELECTED)


def modify_field(focused_track_id: str, field_name: str, value: Any) -> Action:
    """Edit a field of the focused track and every selected track."""
    return Action(
        ActionType.MODIFY_FIELD,
        {"focused_track_id": focused_track_id, "field": field_name, "value": value},
    )


def artwork_select(focused_track_id: str, index: Optional[int]) -> Action:
    return Action(ActionType.ARTWORK_SELECT, {"focused_track_id": focused_track_id, "index": index})


def artwork_remove(focused_track_id: str, index: int) -> Action:
    return Action(ActionType.ARTWORK_REMOVE, {"focused_track_id": focused_track_id, "index": index})


def artwork_add(focused_track_id: str, artwork: Any, key: Optional[str] = None) -> Action:
    """Add artwork to the focused and selected tracks.

    The artwork key is generated here so that applying the action is
    deterministic.
    """
    return Action(
        ActionType.ARTWORK_ADD,
        {"focused_track_id": focused_track_id, "artwork": artwork, "key": key or uuid4().hex},
    )


def save_tracks() -> Action:
    """Begin saving the selected tracks."""
    return Action(ActionType.SAVE_TRACKS)


def save_processing() -> Action:
    return Action(ActionType.SAVE_PROCESSING)


def track_saved(items: Iterable[Mapping[str, Any] | str]) -> Action:
    return Action(ActionType.TRACK_SAVED, {"items": list(items)})
