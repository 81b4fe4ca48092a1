"""Track editor state - immutable snapshots.

Every transition produces a new State; nested structures that change are
replaced wholesale and never mutated after the snapshot is published.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from tunes_importer.domain.knowns import KnownValues, empty_known_values
from tunes_importer.domain.tree import TrackGroup

# A track is a flat mapping of metadata fields, keyed by "id"
Track = dict[str, Any]


@dataclass(frozen=True)
class SaveProcess:
    """Progress of the current bulk save."""

    preparing: bool = False
    target_tracks: frozenset[str] = frozenset()  # IDs still waiting to be saved
    total: Optional[int] = None  # Number of tracks the save started with


@dataclass(frozen=True)
class State:
    """
    Complete track editor state.

    Attributes:
        tracks: Track ID -> track, including unsaved edits
        tracks_pristine: Track ID -> track as last loaded, used to detect edits
        processes: Track ID -> process tags currently running for the track
        artwork: Artwork key -> artwork object
        track_tree: Tracks grouped by directory, in display order
        selected_tracks: IDs of selected tracks (unordered)
        save_process: Progress of the bulk save
        known_values: Category -> known values from the library
    """

    tracks: dict[str, Track] = field(default_factory=dict)
    tracks_pristine: dict[str, Track] = field(default_factory=dict)
    processes: dict[str, tuple[str, ...]] = field(default_factory=dict)
    artwork: dict[str, Any] = field(default_factory=dict)
    track_tree: tuple[TrackGroup, ...] = ()
    selected_tracks: frozenset[str] = frozenset()
    save_process: SaveProcess = field(default_factory=SaveProcess)
    known_values: dict[str, KnownValues] = field(default_factory=empty_known_values)


def create_initial_state() -> State:
    """Create initial editor state."""
    return State()
