"""Read-only queries over state snapshots, used when rendering."""

from typing import Any, Optional

from tunes_importer.domain.tree import TrackGroup

from .state import State


def is_selected(state: State, track_id: str) -> bool:
    return track_id in state.selected_tracks


def all_selected(state: State) -> bool:
    """True when there are tracks and every one of them is selected."""
    return bool(state.tracks) and state.selected_tracks.issuperset(state.tracks)


def group_selected(state: State, group: TrackGroup) -> bool:
    """True when every track of the group is selected."""
    return all(track_id in state.selected_tracks for track_id in group.tracks)


def display_path_parts(group: TrackGroup) -> tuple[str, ...]:
    """Path parts to show for a group; tracks at the import root have none."""
    return () if group.path_parts[:1] == (".",) else group.path_parts


def modified_fields(state: State, track_id: str) -> dict[str, Any]:
    """
    Fields of a track that differ from the pristine copy.

    Returns:
        Mapping of field name to the edited value
    """
    track = state.tracks.get(track_id, {})
    pristine = state.tracks_pristine.get(track_id, {})
    return {key: value for key, value in track.items() if pristine.get(key) != value}


def has_unsaved_changes(state: State, track_id: str) -> bool:
    return bool(modified_fields(state, track_id))


def track_processes(state: State, track_id: str) -> tuple[str, ...]:
    return state.processes.get(track_id, ())


def is_saving(state: State) -> bool:
    """True while a save is preparing or has tracks left to save."""
    save = state.save_process
    return save.preparing or bool(save.target_tracks)


def save_progress(state: State) -> tuple[int, int]:
    """
    Progress of the current save.

    Returns:
        Tuple of (saved count, total count)
    """
    save = state.save_process
    total = save.total or 0
    return total - len(save.target_tracks), total


def selected_artwork(state: State, track_id: str) -> Optional[Any]:
    """Artwork object currently selected for a track, if any."""
    track = state.tracks.get(track_id, {})
    index = track.get("artworkSelected")
    artwork = track.get("artwork") or []

    if not isinstance(index, int) or not 0 <= index < len(artwork):
        return None
    return state.artwork.get(artwork[index])
