# game/world/tiles.py
from typing import Final, NamedTuple


class Tile(NamedTuple):
    """State of a single map cell.

    ``blocked`` cells cannot be entered; ``block_sight`` cells are opaque to
    field-of-view.  The generator only ever produces the two canonical tiles
    below, where both flags agree, but callers must not rely on that.
    """

    blocked: bool
    block_sight: bool

    @classmethod
    def empty(cls) -> "Tile":
        return cls(blocked=False, block_sight=False)

    @classmethod
    def wall(cls) -> "Tile":
        return cls(blocked=True, block_sight=True)

    @property
    def walkable(self) -> bool:
        return not self.blocked

    @property
    def transparent(self) -> bool:
        return not self.block_sight


TILE_ID_FLOOR: Final[int] = 0
TILE_ID_WALL: Final[int] = 1

TILE_EMPTY: Final[Tile] = Tile.empty()
TILE_WALL: Final[Tile] = Tile.wall()

TILE_TYPES: Final[dict[int, Tile]] = {
    TILE_ID_FLOOR: TILE_EMPTY,
    TILE_ID_WALL: TILE_WALL,
}

# Text dump characters
TILE_CHARS: Final[dict[int, str]] = {
    TILE_ID_FLOOR: ".",
    TILE_ID_WALL: "#",
}
