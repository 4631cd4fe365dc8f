# game/input_map.py
"""
Maps key names to game actions.

Reading keys is the display layer's job; it hands over a key name such as
``"up"`` or ``"alt+enter"`` and receives one of the action objects below.
Only :class:`MoveAction` is interpreted by the core.
"""
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

import structlog

from game.config import KEYBINDINGS_FILE
from game.constants import Direction

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MoveAction:
    dx: int
    dy: int

    @classmethod
    def toward(cls, direction: Direction) -> "MoveAction":
        return cls(direction.dx, direction.dy)


@dataclass(frozen=True)
class ToggleFullscreenAction:
    pass


@dataclass(frozen=True)
class QuitAction:
    pass


Action = Union[MoveAction, ToggleFullscreenAction, QuitAction]

ACTION_NAMES: Dict[str, Action] = {
    "move_up": MoveAction.toward(Direction.UP),
    "move_down": MoveAction.toward(Direction.DOWN),
    "move_left": MoveAction.toward(Direction.LEFT),
    "move_right": MoveAction.toward(Direction.RIGHT),
    "toggle_fullscreen": ToggleFullscreenAction(),
    "quit": QuitAction(),
}

DEFAULT_BINDINGS: Dict[str, str] = {
    "up": "move_up",
    "down": "move_down",
    "left": "move_left",
    "right": "move_right",
    "alt+enter": "toggle_fullscreen",
    "escape": "quit",
}


MODIFIER_KEYS = frozenset({"alt", "ctrl", "shift", "meta"})


def normalize_key(key: str) -> str:
    """Lower-case and sort modifiers so ``"Enter+Alt"`` equals ``"alt+enter"``."""
    parts = [p.strip().lower() for p in key.split("+") if p.strip()]
    modifiers = sorted({p for p in parts if p in MODIFIER_KEYS})
    base = [p for p in parts if p not in MODIFIER_KEYS]
    return "+".join(modifiers + base)


class KeyMap:
    def __init__(self, bindings: Dict[str, str] | None = None):
        self._actions: Dict[str, Action] = {}
        for key, action_name in (bindings or DEFAULT_BINDINGS).items():
            action = ACTION_NAMES.get(action_name)
            if action is None:
                log.warning("Unknown action in keybindings", key=key, action=action_name)
                continue
            self._actions[normalize_key(key)] = action
        log.debug("KeyMap built", bindings=len(self._actions))

    def __len__(self) -> int:
        return len(self._actions)

    def resolve(self, key: str) -> Action | None:
        """Action bound to ``key``, or ``None`` for unbound keys."""
        return self._actions.get(normalize_key(key))


def load_keymap(path: Path = KEYBINDINGS_FILE) -> KeyMap:
    """Loads key bindings from TOML, falling back to the built-in defaults."""
    if not path.is_file():
        log.warning("Keybindings file not found, using defaults", path=str(path))
        return KeyMap()
    try:
        with path.open("rb") as f:  # tomllib requires bytes mode
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        log.error("Error parsing keybindings TOML", path=str(path), error=str(e))
        raise
    bindings = data.get("bindings", {})
    log.info("Keybindings loaded", path=str(path), count=len(bindings))
    return KeyMap(bindings)
