from enum import Enum
from typing import Final, Tuple

Color = Tuple[int, int, int]

WHITE: Final[Color] = (255, 255, 255)
YELLOW: Final[Color] = (255, 255, 0)

PLAYER_GLYPH: Final[str] = "@"
NPC_GLYPH: Final[str] = "@"


class Direction(Enum):
    """Axis-aligned unit steps, as ``(dx, dy)`` with y growing downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


__all__ = ["Color", "Direction", "WHITE", "YELLOW", "PLAYER_GLYPH", "NPC_GLYPH"]
