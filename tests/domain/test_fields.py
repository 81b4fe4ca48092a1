"""Tests for field validation wiring."""

import pytest

from tunes_importer.domain.fields import (
    CATEGORY_TYPE_MAPPINGS,
    FIELD_KNOWN_CATEGORIES,
    compute_autofixes,
    prepare_field_edit,
    validate_field,
)
from tunes_importer.domain.validation import AutoFixType, KnownRule, Level
from tunes_importer.store import actions
from tunes_importer.store.reducer import reduce_all
from tunes_importer.store.state import State, create_initial_state


@pytest.fixture
def state() -> State:
    """State with known values and two loaded tracks."""
    return reduce_all(
        create_initial_state(),
        [
            actions.replace_knowns(
                {
                    "artists": ["DJ Sy", "Noisia"],
                    "publishers": ["Hardcore Underground"],
                    "genres": ["Drum & Bass"],
                }
            ),
            actions.track_details(
                [
                    {"id": "t1", "filePath": "A/1.mp3", "artist": "dj sy", "genre": "Drum & Bass"},
                    {"id": "t2", "filePath": "A/2.mp3", "artist": "DJ Si", "publisher": "hardcore underground"},
                ]
            ),
        ],
    )


class TestValidateField:
    """Tests for validate_field."""

    def test_artist_uses_artist_knowns(self, state: State) -> None:
        validations = validate_field(state, "artist", "dj sy")

        assert [r.rule for r in validations] == [KnownRule.CASING]
        assert validations.items[0].field_name == "artist"

    def test_remixer_uses_artist_knowns(self, state: State) -> None:
        validations = validate_field(state, "remixer", "Noisia")

        assert [r.rule for r in validations] == [KnownRule.KNOWN]
        assert validations.level() == Level.VALID

    def test_field_without_category(self, state: State) -> None:
        assert len(validate_field(state, "title", "Anything")) == 0

    def test_empty_value(self, state: State) -> None:
        assert len(validate_field(state, "artist", "")) == 0

    def test_missing_category_table(self) -> None:
        state = reduce_all(create_initial_state(), [actions.replace_knowns({"artists": ["DJ Sy"]})])

        assert len(validate_field(state, "genre", "Hardcore")) == 0

    def test_default_messages(self, state: State) -> None:
        validations = validate_field(state, "genre", "drum & bass")

        assert validations.items[0].message == "Casing differs from the known genre Drum & Bass"

    def test_every_category_has_a_mapping(self) -> None:
        assert set(FIELD_KNOWN_CATEGORIES.values()) <= set(CATEGORY_TYPE_MAPPINGS)


class TestPrepareFieldEdit:
    """Tests for preparing an edited value."""

    def test_casing_fixed_immediately(self, state: State) -> None:
        value, validations = prepare_field_edit(state, "artist", "dj sy")

        assert value == "DJ Sy"
        assert len(validations) == 0

    def test_similar_left_for_operator(self, state: State) -> None:
        value, validations = prepare_field_edit(state, "artist", "DJ Si")

        assert value == "DJ Si"
        assert [r.rule for r in validations] == [KnownRule.SIMILAR]

    def test_non_string_value_passes_through(self, state: State) -> None:
        value, validations = prepare_field_edit(state, "bpm", 174)

        assert value == 174
        assert len(validations) == 0


class TestComputeAutofixes:
    """Tests for collecting corrections across tracks."""

    def test_collects_changed_fields_only(self, state: State) -> None:
        fixes = compute_autofixes(state, ["t1", "t2"])

        assert fixes == {
            "t1": {"artist": "DJ Sy"},
            "t2": {"artist": "DJ Sy", "publisher": "Hardcore Underground"},
        }

    def test_immediate_only(self, state: State) -> None:
        fixes = compute_autofixes(state, ["t1", "t2"], auto_fix_types=[AutoFixType.IMMEDIATE])

        assert fixes == {
            "t1": {"artist": "DJ Sy"},
            "t2": {"publisher": "Hardcore Underground"},
        }

    def test_restricted_fields(self, state: State) -> None:
        fixes = compute_autofixes(state, ["t1", "t2"], field_names=["publisher"])

        assert fixes == {"t2": {"publisher": "Hardcore Underground"}}

    def test_missing_tracks_skipped(self, state: State) -> None:
        assert compute_autofixes(state, ["missing"]) == {}

    def test_fixes_apply_through_reducer(self, state: State) -> None:
        fixed = reduce_all(state, [actions.autofix_fields(compute_autofixes(state, ["t1", "t2"]))])

        assert compute_autofixes(fixed, ["t1", "t2"]) == {}
        assert fixed.tracks["t2"]["artist"] == "DJ Sy"
