"""Tests for the tunes-importer command line."""

import json
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from tunes_importer.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run each command in a temp dir with its own XDG directories and log sinks."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("TUNES_IMPORTER_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def tracks_file(tmp_path: Path) -> Path:
    path = tmp_path / "tracks.json"
    path.write_text(
        json.dumps(
            [
                {"id": "t2", "filePath": "A/2.mp3"},
                {"id": "t1", "filePath": "A/1.mp3"},
                {"id": "t3", "filePath": "3.mp3"},
            ]
        )
    )
    return path


@pytest.fixture
def knowns_file(tmp_path: Path) -> Path:
    path = tmp_path / "knowns.json"
    path.write_text(json.dumps({"artists": ["DJ Sy", "Noisia"], "genres": ["Drum & Bass"]}))
    return path


class TestTreeCommand:
    """Tests for the tree subcommand."""

    def test_groups(self, tracks_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["tree", str(tracks_file)]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "(root)",
            "  3.mp3",
            "A",
            "  A/1.mp3",
            "  A/2.mp3",
            "3 tracks in 2 groups",
        ]

    def test_numbering(self, tracks_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["tree", str(tracks_file), "--number"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "  3.mp3  [1/2 1/1]"
        assert lines[3] == "  A/1.mp3  [2/2 1/2]"
        assert lines[4] == "  A/2.mp3  [2/2 2/2]"

    def test_writes_log_file(self, tracks_file: Path, tmp_path: Path) -> None:
        main(["tree", str(tracks_file)])
        logger.remove()  # close the file sink

        log_file = tmp_path / "data" / "tunes-importer" / "tunes-importer.log"
        assert "3 tracks in 2 groups" in log_file.read_text()

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["tree", str(tmp_path / "missing.json")]) == 1
        assert "Could not read tracks" in capsys.readouterr().out

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{")

        assert main(["tree", str(path)]) == 1

    def test_tracks_without_ids(self, tmp_path: Path) -> None:
        path = tmp_path / "tracks.json"
        path.write_text(json.dumps([{"filePath": "A/1.mp3"}]))

        assert main(["tree", str(path)]) == 1


class TestValidateCommand:
    """Tests for the validate subcommand."""

    def test_casing_fixed(self, knowns_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(knowns_file), "artist", "dj sy"]) == 0

        out = capsys.readouterr().out
        assert "→ DJ Sy" in out
        assert out.splitlines()[-1] == "Level: valid"

    def test_no_fix_reports_casing(self, knowns_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(knowns_file), "artist", "dj sy", "--no-fix"]) == 0

        out = capsys.readouterr().out
        assert "CASING" in out
        assert "Casing differs from the known artist DJ Sy" in out
        assert "→" not in out
        assert out.splitlines()[-1] == "Level: warning"

    def test_similar_left_unfixed(self, knowns_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(knowns_file), "artist", "DJ Si"]) == 0

        out = capsys.readouterr().out
        assert "DJ Si is similar to the known artist(s) DJ Sy" in out
        assert "→" not in out

    def test_known_value(self, knowns_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(knowns_file), "genre", "Drum & Bass"]) == 0

        out = capsys.readouterr().out
        assert "Drum & Bass is a known genre" in out
        assert out.splitlines()[-1] == "Level: valid"

    def test_config_cutoff(
        self, knowns_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A stricter cutoff from --config turns a similar value into a new one."""
        config_path = tmp_path / "strict.toml"
        config_path.write_text("[validation]\nsimilarity_cutoff = 0.95\n")

        main(["--config", str(config_path), "validate", str(knowns_file), "artist", "DJ Si"])

        assert "DJ Si is a new artist" in capsys.readouterr().out

    def test_invalid_knowns(self, tmp_path: Path) -> None:
        path = tmp_path / "knowns.json"
        path.write_text(json.dumps({"artists": "DJ Sy"}))

        assert main(["validate", str(path), "artist", "DJ Sy"]) == 1


class TestNoCommand:
    def test_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 0
        assert "tree" in capsys.readouterr().out
