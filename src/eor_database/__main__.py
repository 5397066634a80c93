"""
Command-line entry point for EOR Database.
Usage: python -m eor_database <command> [options]
"""

import argparse
import logging
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from . import __version__
from .crossref import CrossReferenceResolver, RelationResult
from .errors import EorDatabaseError
from .game_data import DatasetStore
from .game_data.labels import (
    item_sub_type_label,
    item_type_label,
    light_mode_label,
    npc_speed_label,
    npc_type_label,
    weather_type_label,
)
from .game_data.listing import LISTINGS, SearchParams, npc_speeds, shop_names
from .game_data.models import GameMap, Item, Npc, Record
from .refresh import RefreshService
from .rendering import MapPreviewRenderer
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging

logger = logging.getLogger(f"{__name__}.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eor_database",
        description="Browse the Endless Online static datasets.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", type=Path, default=None, help="INI settings file")
    parser.add_argument("--profile", default="default", help="Settings profile")
    parser.add_argument("--data-dir", type=Path, default=None, help="Override the dump directory")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("validate", help="Load every collection and print record counts")

    refresh = commands.add_parser("refresh", help="Download fresh dumps from the API")
    refresh.add_argument("--key", required=True, help="Shared refresh key")

    for entity in ("item", "npc", "map", "quest"):
        show = commands.add_parser(entity, help=f"Show a {entity} and its relations")
        show.add_argument("id", type=int)

    listing = commands.add_parser("list", help="List a collection")
    listing.add_argument("collection", choices=sorted(LISTINGS))
    listing.add_argument("--name", default="", help="Case-insensitive name filter")
    listing.add_argument("--type", default="all", help="Type code filter or 'all'")
    listing.add_argument("--page", default="1", help="1-based page number")

    commands.add_parser("shops", help="List shop names referenced by items")
    commands.add_parser("speeds", help="List distinct NPC spawn speeds")

    preview = commands.add_parser("preview", help="Write the preview PNG of a map")
    preview.add_argument("map_id", type=int)
    preview.add_argument("-o", "--output", type=Path, required=True)

    find = commands.add_parser("find", help="Write a map preview marking one tile")
    find.add_argument("map_id", type=int)
    find.add_argument("x", type=int)
    find.add_argument("y", type=int)
    find.add_argument("-o", "--output", type=Path, required=True)

    return parser


def emit(payload: Any) -> None:
    """Write a JSON document to stdout."""
    sys.stdout.buffer.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


def relation_payload(result: RelationResult) -> Dict[str, Any]:
    return {
        "status": result.status.value,
        "rows": list(result.rows),
        "omitted": result.omitted,
        "error": str(result.error) if result.error else None,
    }


def map_summary(game_map: GameMap) -> Dict[str, Any]:
    """Serializable view of a map without its sparse tile grids."""
    skipped = ("spec_tiles", "layers", "npc_cells", "warp_cells")
    data = {f.name: getattr(game_map, f.name) for f in fields(game_map) if f.name not in skipped}
    data["layers"] = [layer.name for layer in game_map.layers]
    data["spec_tile_count"] = len(game_map.spec_tiles)
    return data


def entity_labels(record: Record) -> Dict[str, str]:
    """Display labels of the enumerated codes of a record."""
    if isinstance(record, Item):
        return {
            "type": item_type_label(record.item_type),
            "sub_type": item_sub_type_label(record.item_sub_type),
        }
    if isinstance(record, Npc):
        return {
            "type": npc_type_label(record.behavior),
            "speed": npc_speed_label(int(record.default_speed)),
        }
    if isinstance(record, GameMap):
        return {
            "light_mode": light_mode_label(record.daymode),
            "weather": weather_type_label(record.weather_type),
        }
    return {}


def show_entity(store: DatasetStore, entity: str, entity_id: int) -> int:
    lookups = {
        "item": store.get_item,
        "npc": store.get_npc,
        "map": store.get_map,
        "quest": store.get_quest,
    }
    record = lookups[entity](entity_id)
    if record is None:
        logger.error(f"No {entity} with id {entity_id}")
        return 1

    resolver = CrossReferenceResolver(store)
    payload: Dict[str, Any] = {
        entity: map_summary(record) if isinstance(record, GameMap) else record,
        "labels": entity_labels(record),
        "relations": {
            name: relation_payload(result)
            for name, result in resolver.relations(entity, entity_id).items()
        },
    }
    if entity == "quest":
        payload["start_npc"] = resolver.quest_start_npc(entity_id)
        start_map = resolver.quest_start_map(entity_id)
        payload["start_map"] = {"id": start_map.id, "name": start_map.name} if start_map else None
    emit(payload)
    return 0


def run(args: argparse.Namespace, settings: AppSettings) -> int:
    store = DatasetStore(args.data_dir or settings.data_dir)
    preview_dir = settings.preview_dir if args.data_dir is None else args.data_dir / "maps"
    renderer = MapPreviewRenderer(store, preview_dir)

    if args.command == "validate":
        counts = store.preload()
        emit({collection.value: count for collection, count in counts.items()})
        return 0

    if args.command == "refresh":
        report = RefreshService(settings, store, renderer).refresh(args.key)
        emit(report)
        return 0

    if args.command in ("item", "npc", "map", "quest"):
        return show_entity(store, args.command, args.id)

    if args.command == "list":
        search = SearchParams(name=args.name, type=args.type, page=args.page)
        emit(LISTINGS[args.collection](store, search, settings.page_size))
        return 0

    if args.command == "shops":
        emit(shop_names(store))
        return 0

    if args.command == "speeds":
        emit(npc_speeds(store))
        return 0

    if args.command == "preview":
        args.output.write_bytes(renderer.render_preview(args.map_id))
        logger.info(f"Wrote preview of map {args.map_id} to {args.output}")
        return 0

    if args.command == "find":
        args.output.write_bytes(renderer.render_preview_with_arrow(args.map_id, args.x, args.y))
        logger.info(f"Wrote marked preview of map {args.map_id} to {args.output}")
        return 0

    raise ValueError(f"Unhandled command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = AppSettings(args.settings, profile=args.profile)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)
    logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    try:
        return run(args, settings)
    except EorDatabaseError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
