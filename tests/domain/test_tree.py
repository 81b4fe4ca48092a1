"""Tests for the track tree builder and track numbering."""

import hashlib

import pytest

from tunes_importer.domain.tree import (
    TrackGroup,
    build_tree,
    compute_track_numbers,
    format_track_numbers,
    group_id,
    move_group,
)


def md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


@pytest.fixture
def tracks() -> dict[str, dict]:
    """Three tracks in two directories, inserted out of path order."""
    return {
        "t2": {"id": "t2", "filePath": "A/2.mp3"},
        "t3": {"id": "t3", "filePath": "B/3.mp3"},
        "t1": {"id": "t1", "filePath": "A/1.mp3"},
    }


class TestBuildTree:
    """Tests for grouping tracks by directory."""

    def test_groups_by_directory(self, tracks: dict[str, dict]) -> None:
        tree = build_tree(tracks)

        assert tree == (
            TrackGroup(id=md5("A"), path_parts=("A",), tracks=("t1", "t2")),
            TrackGroup(id=md5("B"), path_parts=("B",), tracks=("t3",)),
        )

    def test_rebuild_is_identical(self, tracks: dict[str, dict]) -> None:
        assert build_tree(tracks) == build_tree(dict(reversed(list(tracks.items()))))

    def test_groups_follow_sorted_paths(self) -> None:
        """Group order comes from the sorted paths, not insertion order."""
        tree = build_tree(
            {
                "z": {"id": "z", "filePath": "Zeta/1.mp3"},
                "a": {"id": "a", "filePath": "Alpha/1.mp3"},
                "m": {"id": "m", "filePath": "Mid/1.mp3"},
            }
        )

        assert [g.path_parts for g in tree] == [("Alpha",), ("Mid",), ("Zeta",)]

    def test_nested_path_parts(self) -> None:
        tree = build_tree({"t": {"id": "t", "filePath": "DJ Tools Vol 5/Disc 1/01.mp3"}})

        assert tree[0].path_parts == ("DJ Tools Vol 5", "Disc 1")
        assert tree[0].id == group_id("DJ Tools Vol 5/Disc 1")

    def test_root_tracks(self) -> None:
        tree = build_tree({"t": {"id": "t", "filePath": "01.mp3"}})

        assert tree[0].path_parts == (".",)
        assert tree[0].id == md5(".")

    def test_empty(self) -> None:
        assert build_tree({}) == ()


class TestMoveGroup:
    """Tests for reordering groups."""

    @pytest.fixture
    def groups(self) -> tuple[TrackGroup, ...]:
        return tuple(TrackGroup(id=name, path_parts=(name,), tracks=()) for name in "abc")

    def test_move_down(self, groups: tuple[TrackGroup, ...]) -> None:
        assert [g.id for g in move_group(groups, 0, 2)] == ["b", "c", "a"]

    def test_move_up(self, groups: tuple[TrackGroup, ...]) -> None:
        assert [g.id for g in move_group(groups, 2, 0)] == ["c", "a", "b"]

    def test_same_index(self, groups: tuple[TrackGroup, ...]) -> None:
        assert move_group(groups, 1, 1) == groups

    def test_out_of_range(self, groups: tuple[TrackGroup, ...]) -> None:
        assert move_group(groups, 5, 0) == groups
        assert [g.id for g in move_group(groups, 0, 10)] == ["b", "c", "a"]


class TestFormatTrackNumbers:
    """Tests for number formatting."""

    @pytest.mark.parametrize(
        "number,total,expected",
        [(1, 2, "1/2"), (3, 9, "3/9"), (3, 12, "03/12"), (10, 10, "10/10"), (7, 100, "007/100")],
    )
    def test_zero_padded_to_total(self, number: int, total: int, expected: str) -> None:
        assert format_track_numbers(number, total) == expected


class TestComputeTrackNumbers:
    """Tests for numbering selected tracks."""

    def test_all_selected(self, tracks: dict[str, dict]) -> None:
        numbering = compute_track_numbers(build_tree(tracks), {"t1", "t2", "t3"})

        assert [(n.id, n.track, n.disc) for n in numbering] == [
            ("t1", "1/2", "1/2"),
            ("t2", "2/2", "1/2"),
            ("t3", "1/1", "2/2"),
        ]

    def test_only_selected_are_numbered(self, tracks: dict[str, dict]) -> None:
        numbering = compute_track_numbers(build_tree(tracks), {"t2", "t3"})

        assert [(n.id, n.track, n.disc) for n in numbering] == [
            ("t2", "1/1", "1/2"),
            ("t3", "1/1", "2/2"),
        ]

    def test_groups_without_selection_are_not_discs(self, tracks: dict[str, dict]) -> None:
        numbering = compute_track_numbers(build_tree(tracks), {"t3"})

        assert [(n.id, n.track, n.disc) for n in numbering] == [("t3", "1/1", "1/1")]

    def test_follows_tree_order(self, tracks: dict[str, dict]) -> None:
        tree = move_group(build_tree(tracks), 1, 0)
        numbering = compute_track_numbers(tree, {"t1", "t2", "t3"})

        assert [(n.id, n.disc) for n in numbering] == [("t3", "1/2"), ("t1", "2/2"), ("t2", "2/2")]

    def test_track_numbers_are_contiguous(self) -> None:
        tracks = {f"t{i:02d}": {"id": f"t{i:02d}", "filePath": f"A/{i:02d}.mp3"} for i in range(12)}
        selection = {"t01", "t04", "t05", "t11"}

        numbering = compute_track_numbers(build_tree(tracks), selection)

        assert {n.id for n in numbering} == selection
        assert [n.track for n in numbering] == ["1/4", "2/4", "3/4", "4/4"]

    def test_unknown_ids_ignored(self, tracks: dict[str, dict]) -> None:
        assert compute_track_numbers(build_tree(tracks), {"missing"}) == []
