# main.py
"""Generate a dungeon from the configured world settings and print it."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List

import structlog
import yaml

from game.config import (
    CONFIG_FILE,
    ConfigError,
    dungeon_seed_from_data,
    load_yaml_config,
    world_config_from_data,
)
from game.game_state import GameState
from game.world.errors import GenerationError
from utils.logging_utils import setup_logging

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a rooms-and-corridors dungeon and print it as text."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"World config YAML (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the generator (default: dungeon_seed from config, else random)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        data = load_yaml_config(args.config, "Main")
        config = world_config_from_data(data)
        seed = args.seed if args.seed is not None else dungeon_seed_from_data(data)
    except (FileNotFoundError, ConfigError, yaml.YAMLError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        gs = GameState.new(config, seed=seed)
    except GenerationError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1

    layout = gs.layout
    print(gs.render_text())
    print(
        f"seed={gs.rng.initial_seed} rooms={len(layout.rooms)} "
        f"rejected={layout.rejected} spawn={layout.spawn} "
        f"floor={gs.game_map.floor_count()}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
