# game/config.py
"""World configuration.

The five generation parameters are startup constants, loaded from the
``world`` section of ``config/config.yaml`` when a file is given and
otherwise taken from the defaults below.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import structlog
import yaml

log = structlog.get_logger()

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
KEYBINDINGS_FILE = CONFIG_DIR / "keybindings.toml"


class ConfigError(ValueError):
    """Configuration values that cannot produce a valid world."""


@dataclass(frozen=True)
class WorldConfig:
    width: int = 80
    height: int = 45
    max_rooms: int = 30
    room_min_size: int = 6
    room_max_size: int = 10

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{f.name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("width and height must be positive")
        if self.max_rooms < 0:
            raise ConfigError("max_rooms must not be negative")
        # Smaller rooms have no floor between their walls
        if self.room_min_size < 2:
            raise ConfigError("room_min_size must be at least 2")
        if self.room_min_size > self.room_max_size:
            raise ConfigError(
                f"room_min_size ({self.room_min_size}) exceeds "
                f"room_max_size ({self.room_max_size})"
            )
        # A room needs at least one valid top-left position on each axis
        if self.room_max_size >= self.width or self.room_max_size >= self.height:
            raise ConfigError(
                f"room_max_size ({self.room_max_size}) must be smaller than the "
                f"map ({self.width}x{self.height})"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WorldConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning("Ignoring unknown world config keys", keys=unknown)
        return cls(**{k: v for k, v in data.items() if k in known})


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a generic YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_name} config must be a mapping: {config_path}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def world_config_from_data(data: Mapping[str, Any]) -> WorldConfig:
    """Builds a :class:`WorldConfig` from the ``world`` section of parsed YAML."""
    world = data.get("world") or {}
    if not isinstance(world, dict):
        raise ConfigError("'world' section must be a mapping")
    config = WorldConfig.from_mapping(world)
    log.debug("World config resolved", config=config)
    return config


def dungeon_seed_from_data(data: Mapping[str, Any]) -> int | None:
    seed = data.get("dungeon_seed")
    if seed is None:
        return None
    if not isinstance(seed, int) or isinstance(seed, bool):
        raise ConfigError(f"dungeon_seed must be an integer, got {seed!r}")
    return seed


def load_world_config(config_path: Path = CONFIG_FILE) -> WorldConfig:
    return world_config_from_data(load_yaml_config(config_path, "Main"))
