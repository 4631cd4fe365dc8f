from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import structlog

from game.constants import Color

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from game.world.game_map import GameMap

log = structlog.get_logger()


@dataclass
class Entity:
    """Something with a position on the map that the renderer draws."""

    x: int
    y: int
    glyph: str
    color: Color
    name: str = ""

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def move_by(self, dx: int, dy: int, game_map: GameMap) -> bool:
        """Step by ``(dx, dy)`` unless the target is blocked or off the map.

        Returns ``True`` if the entity moved.  A refused move leaves the
        position untouched and is not an error.
        """
        target_x, target_y = self.x + dx, self.y + dy
        # is_blocked treats out-of-bounds as blocked
        if game_map.is_blocked(target_x, target_y):
            return False
        self.x, self.y = target_x, target_y
        return True
