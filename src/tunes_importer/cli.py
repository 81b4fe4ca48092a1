"""
Tunes Importer CLI - inspect track groupings and known-value validation

Reads track and known value listings exported by the library as JSON and
runs them through the same store and validation code the editor uses.
"""

import argparse
import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from tunes_importer.core import Config, get_log_file_path, load_config, log, setup_loguru
from tunes_importer.domain.fields import prepare_field_edit, validate_field
from tunes_importer.store import Store, actions, selectors


def _read_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def run_tree(tracks_path: str, number: bool = False) -> int:
    """Print the directory grouping of a JSON list of tracks.

    Args:
        tracks_path: JSON file holding a list of track objects
        number: Number all tracks and show the computed disc/track numbers

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        items = _read_json(tracks_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read tracks from {tracks_path}: {e}")
        print(f"❌ Could not read tracks: {e}")
        return 1

    if not isinstance(items, list) or not all(isinstance(t, dict) and "id" in t for t in items):
        print('❌ Tracks file must contain a list of objects with an "id"')
        return 1

    store = Store()
    store.dispatch(actions.track_details(items))

    if number:
        store.dispatch(actions.toggle_select_all(True))
        store.dispatch(actions.number_selected())

    state = store.state
    for group in state.track_tree:
        parts = selectors.display_path_parts(group)
        print("/".join(parts) if parts else "(root)")
        for track_id in group.tracks:
            track = state.tracks[track_id]
            numbers = f"  [{track.get('disc')} {track.get('track')}]" if number else ""
            print(f"  {track.get('filePath')}{numbers}")

    log(f"{len(state.tracks)} tracks in {len(state.track_tree)} groups")
    return 0


def run_validate(
    knowns_path: str,
    field_name: str,
    value: str,
    config: Optional[Config] = None,
    auto_fix: bool = True,
) -> int:
    """Validate a field value against a JSON object of known value lists.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        knowns = _read_json(knowns_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read known values from {knowns_path}: {e}")
        print(f"❌ Could not read known values: {e}")
        return 1

    if not isinstance(knowns, dict) or not all(isinstance(v, list) for v in knowns.values()):
        print("❌ Known values file must map categories to lists of values")
        return 1

    config = config or load_config()
    cutoff = config.validation.similarity_cutoff

    store = Store()
    store.dispatch(actions.replace_knowns(knowns))

    if auto_fix and config.validation.auto_fix_on_edit:
        fixed, validations = prepare_field_edit(store.state, field_name, value, cutoff=cutoff)
    else:
        fixed, validations = value, validate_field(store.state, field_name, value, cutoff)

    for result in validations:
        rule = result.rule.value if result.rule else "-"
        print(f"{result.level.value:<8} {rule:<8} {result.message}")

    if fixed != value:
        print(f"→ {fixed}")

    level = validations.level()
    print(f"Level: {level.value if level else 'valid'}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the tunes-importer command."""
    parser = argparse.ArgumentParser(
        description="Tunes Importer - normalize, tag, and import new music",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml (default: ./config.toml or the XDG config dir)",
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    tree_parser = subparsers.add_parser("tree", help="Show tracks grouped by directory")
    tree_parser.add_argument("tracks", help="JSON file containing a list of tracks")
    tree_parser.add_argument(
        "--number",
        action="store_true",
        help="Compute disc and track numbers for all tracks",
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a field value against known values"
    )
    validate_parser.add_argument("knowns", help="JSON file mapping categories to value lists")
    validate_parser.add_argument("field", help="Track field name (e.g. artist, genre)")
    validate_parser.add_argument("value", help="Value to validate")
    validate_parser.add_argument(
        "--no-fix",
        action="store_true",
        help="Do not apply immediate automatic fixes",
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        console_output=config.logging.console_output,
    )

    if args.subcommand == "tree":
        return run_tree(args.tracks, number=args.number)

    if args.subcommand == "validate":
        return run_validate(
            args.knowns, args.field, args.value, config=config, auto_fix=not args.no_fix
        )

    parser.print_help()
    return 0
