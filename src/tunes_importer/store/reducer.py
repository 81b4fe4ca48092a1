"""
Track state reducer - pure state transitions.

reduce(state, action) never mutates its input: every structure a transition
touches is copied and replaced, everything else is shared with the previous
snapshot. Unknown actions return the state unchanged. Stale track IDs are
tolerated; an edit to a missing track creates a record holding only the
edited fields.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import Any
from uuid import uuid4

from loguru import logger

from tunes_importer.domain.knowns import normalize_known_values
from tunes_importer.domain.tree import build_tree, compute_track_numbers, move_group

from .actions import Action, ActionType
from .state import State, Track

Handler = Callable[[State, Mapping[str, Any]], State]


def _clean_nulls(track: Mapping[str, Any]) -> Track:
    return {key: "" if value is None else value for key, value in track.items()}


def _item_id(item: Mapping[str, Any] | str) -> str:
    return item if isinstance(item, str) else item["id"]


def _edit_targets(state: State, focused_track_id: str) -> list[str]:
    """Tracks an edit applies to: the selection plus the focused track, each once."""
    return list(dict.fromkeys([*state.selected_tracks, focused_track_id]))


def _merge_track(tracks: dict[str, Track], track_id: str, fields: Mapping[str, Any]) -> None:
    tracks[track_id] = {**tracks.get(track_id, {}), **fields}


def _track_details(state: State, data: Mapping[str, Any]) -> State:
    loaded = {item["id"]: item for item in map(_clean_nulls, data["items"])}
    tracks = {**state.tracks, **loaded}

    return replace(
        state,
        tracks=tracks,
        tracks_pristine={**state.tracks_pristine, **loaded},
        track_tree=build_tree(tracks),
    )


def _track_removed(state: State, data: Mapping[str, Any]) -> State:
    removed = {_item_id(item) for item in data["items"]}
    tracks = {k: v for k, v in state.tracks.items() if k not in removed}

    return replace(
        state,
        tracks=tracks,
        tracks_pristine={k: v for k, v in state.tracks_pristine.items() if k not in removed},
        track_tree=build_tree(tracks),
    )


def _track_processing(state: State, data: Mapping[str, Any]) -> State:
    processes = dict(state.processes)
    for item in data["items"]:
        processes[item["id"]] = (*processes.get(item["id"], ()), item["process"])

    return replace(state, processes=processes)


def _track_update(state: State, data: Mapping[str, Any]) -> State:
    tracks = dict(state.tracks)
    processes = dict(state.processes)

    for item in data["items"]:
        fields = {k: v for k, v in item.items() if k != "completedProcess"}
        track_id = fields["id"]
        _merge_track(tracks, track_id, fields)

        if track_id not in processes:
            continue

        remaining = list(processes[track_id])
        completed = item.get("completedProcess")
        if completed in remaining:
            remaining.remove(completed)

        if remaining:
            processes[track_id] = tuple(remaining)
        else:
            del processes[track_id]

    return replace(state, tracks=tracks, processes=processes)


def _set_artwork(state: State, data: Mapping[str, Any]) -> State:
    return replace(state, artwork={**state.artwork, **data["items"]})


def _autofix_fields(state: State, data: Mapping[str, Any]) -> State:
    tracks = dict(state.tracks)
    for track_id, fixed_fields in data["items"].items():
        _merge_track(tracks, track_id, fixed_fields)

    return replace(state, tracks=tracks)


def _replace_knowns(state: State, data: Mapping[str, Any]) -> State:
    return replace(state, known_values=normalize_known_values(data["knowns"]))


def _toggle_select_all(state: State, data: Mapping[str, Any]) -> State:
    selected = frozenset(state.tracks) if data["toggle"] else frozenset()
    return replace(state, selected_tracks=selected)


def _toggle_select(state: State, data: Mapping[str, Any]) -> State:
    tracks = set(data["tracks"])
    if data["toggle"]:
        selected = state.selected_tracks | tracks
    else:
        selected = state.selected_tracks - tracks

    return replace(state, selected_tracks=frozenset(selected))


def _clear_selected(state: State, data: Mapping[str, Any]) -> State:
    return replace(state, selected_tracks=frozenset())


def _reorder_groups(state: State, data: Mapping[str, Any]) -> State:
    tree = move_group(state.track_tree, data["old_index"], data["new_index"])
    return replace(state, track_tree=tree)


def _number_selected(state: State, data: Mapping[str, Any]) -> State:
    numbering = compute_track_numbers(state.track_tree, state.selected_tracks)
    if not numbering:
        return state

    tracks = dict(state.tracks)
    for number in numbering:
        _merge_track(tracks, number.id, {"track": number.track, "disc": number.disc})

    return replace(state, tracks=tracks)


def _modify_field(state: State, data: Mapping[str, Any]) -> State:
    tracks = dict(state.tracks)
    for track_id in _edit_targets(state, data["focused_track_id"]):
        _merge_track(tracks, track_id, {data["field"]: data["value"]})

    return replace(state, tracks=tracks)


def _artwork_select(state: State, data: Mapping[str, Any]) -> State:
    tracks = dict(state.tracks)
    _merge_track(tracks, data["focused_track_id"], {"artworkSelected": data["index"]})
    return replace(state, tracks=tracks)


def _artwork_remove(state: State, data: Mapping[str, Any]) -> State:
    track_id, index = data["focused_track_id"], data["index"]
    track = state.tracks.get(track_id)
    if track is None:
        return state

    artwork = list(track.get("artwork") or [])
    if not 0 <= index < len(artwork):
        return state
    del artwork[index]

    # Keep the selection pointing at the same artwork
    selected = track.get("artworkSelected")
    if isinstance(selected, int):
        if selected == index:
            selected = None
        elif selected > index:
            selected -= 1

    tracks = dict(state.tracks)
    _merge_track(tracks, track_id, {"artwork": artwork, "artworkSelected": selected})
    return replace(state, tracks=tracks)


def _artwork_add(state: State, data: Mapping[str, Any]) -> State:
    key = data.get("key") or uuid4().hex
    tracks = dict(state.tracks)

    for track_id in _edit_targets(state, data["focused_track_id"]):
        existing = list(tracks.get(track_id, {}).get("artwork") or [])
        _merge_track(
            tracks,
            track_id,
            {"artwork": [*existing, key], "artworkSelected": len(existing)},
        )

    return replace(state, tracks=tracks, artwork={**state.artwork, key: data["artwork"]})


def _save_tracks(state: State, data: Mapping[str, Any]) -> State:
    save_process = replace(
        state.save_process,
        preparing=True,
        target_tracks=frozenset(state.selected_tracks),
        total=len(state.selected_tracks),
    )
    return replace(state, save_process=save_process)


def _save_processing(state: State, data: Mapping[str, Any]) -> State:
    return replace(state, save_process=replace(state.save_process, preparing=False))


def _track_saved(state: State, data: Mapping[str, Any]) -> State:
    saved = {_item_id(item) for item in data["items"]}
    target_tracks = state.save_process.target_tracks - saved
    return replace(state, save_process=replace(state.save_process, target_tracks=target_tracks))


_HANDLERS: dict[ActionType, Handler] = {
    ActionType.TRACK_DETAILS: _track_details,
    ActionType.TRACK_REMOVED: _track_removed,
    ActionType.TRACK_PROCESSING: _track_processing,
    ActionType.TRACK_UPDATE: _track_update,
    ActionType.SET_ARTWORK: _set_artwork,
    ActionType.AUTOFIX_FIELDS: _autofix_fields,
    ActionType.REPLACE_KNOWNS: _replace_knowns,
    ActionType.TOGGLE_SELECT_ALL: _toggle_select_all,
    ActionType.TOGGLE_SELECT: _toggle_select,
    ActionType.CLEAR_SELECTED: _clear_selected,
    ActionType.REORDER_GROUPS: _reorder_groups,
    ActionType.NUMBER_SELECTED: _number_selected,
    ActionType.MODIFY_FIELD: _modify_field,
    ActionType.ARTWORK_SELECT: _artwork_select,
    ActionType.ARTWORK_REMOVE: _artwork_remove,
    ActionType.ARTWORK_ADD: _artwork_add,
    ActionType.SAVE_TRACKS: _save_tracks,
    ActionType.SAVE_PROCESSING: _save_processing,
    ActionType.TRACK_SAVED: _track_saved,
}


def reduce(state: State, action: Action) -> State:
    """Apply one action to a state snapshot, returning the next snapshot."""
    handler = _HANDLERS.get(action.type)
    if handler is None:
        logger.trace(f"Ignoring unknown action {action.type!r}")
        return state

    logger.debug(f"Applying {handler.__name__.lstrip('_')}")
    return handler(state, action.data)


def reduce_all(state: State, actions: Iterable[Action]) -> State:
    """Apply actions in order."""
    for action in actions:
        state = reduce(state, action)
    return state
