"""
Track tree: grouping of tracks by the directory they live in.

Ordering is significant. It determines how groups are displayed and is what
automatic track numbering follows, regardless of the order tracks were
selected in.
"""

import hashlib
import posixpath
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

# Directory of tracks at the import root
ROOT_PATH = "."


@dataclass(frozen=True)
class TrackGroup:
    """Tracks sharing one directory path.

    Attributes:
        id: md5 hex digest of the directory path
        path_parts: Directory path split into its segments
        tracks: Track IDs in file path order
    """

    id: str
    path_parts: tuple[str, ...]
    tracks: tuple[str, ...]


@dataclass(frozen=True)
class TrackNumbering:
    """Computed track and disc numbers for one track."""

    id: str
    track: str
    disc: str


def group_id(path: str) -> str:
    """Stable group identifier for a directory path."""
    return hashlib.md5(path.encode("utf-8")).hexdigest()


def build_tree(tracks: Mapping[str, Mapping[str, Any]]) -> tuple[TrackGroup, ...]:
    """
    Group tracks by directory.

    Tracks are sorted by file path (stable for equal paths); groups appear in
    the order their directory is first seen in that sorted list.

    Args:
        tracks: Mapping of track ID to track

    Returns:
        Tuple of track groups
    """
    sorted_ids = sorted(tracks, key=lambda track_id: tracks[track_id].get("filePath") or "")

    grouped: dict[str, list[str]] = {}
    for track_id in sorted_ids:
        directory = posixpath.dirname(tracks[track_id].get("filePath") or "") or ROOT_PATH
        grouped.setdefault(directory, []).append(track_id)

    return tuple(
        TrackGroup(id=group_id(path), path_parts=tuple(path.split("/")), tracks=tuple(ids))
        for path, ids in grouped.items()
    )


def move_group(tree: Sequence[TrackGroup], old_index: int, new_index: int) -> tuple[TrackGroup, ...]:
    """Move one group to a new position; all others keep their relative order."""
    groups = list(tree)
    if not 0 <= old_index < len(groups):
        return tuple(groups)

    group = groups.pop(old_index)
    groups.insert(max(0, min(new_index, len(groups))), group)
    return tuple(groups)


def format_track_numbers(number: int, total: int) -> str:
    """Format a position as "n/total", n zero-padded to the width of total.

    >>> format_track_numbers(3, 12)
    '03/12'
    """
    width = len(str(total))
    return f"{number:0{width}d}/{total}"


def compute_track_numbers(
    tree: Sequence[TrackGroup], selection: Collection[str]
) -> list[TrackNumbering]:
    """
    Compute track and disc numbers for the selected tracks.

    Each group with selected tracks is a disc, numbered by its position among
    those groups. Tracks are numbered by their position among the selected
    tracks of their group.

    Args:
        tree: Track groups in display order
        selection: Selected track IDs

    Returns:
        Numbering for every selected track that belongs to the tree
    """
    discs: list[list[str]] = []
    for group in tree:
        selected = [track_id for track_id in group.tracks if track_id in selection]
        if selected:
            discs.append(selected)

    return [
        TrackNumbering(
            id=track_id,
            track=format_track_numbers(track_index, len(track_ids)),
            disc=format_track_numbers(disc_index, len(discs)),
        )
        for disc_index, track_ids in enumerate(discs, start=1)
        for track_index, track_id in enumerate(track_ids, start=1)
    ]
