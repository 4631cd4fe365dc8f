# game/world/game_map.py
from typing import Iterable, Protocol

import numpy as np
import structlog

from game.world.errors import MapSealedError, OutOfBoundsError
from game.world.rect import Rect
from game.world.tiles import TILE_CHARS, TILE_ID_FLOOR, TILE_ID_WALL, TILE_TYPES, Tile

log = structlog.get_logger()


class Glyph(Protocol):
    x: int
    y: int
    glyph: str


def _lookup_table(attribute: str) -> np.ndarray:
    """Per tile id flag table, indexed by the values stored in ``GameMap.tiles``."""
    table = np.zeros(max(TILE_TYPES) + 1, dtype=bool)
    for tile_id, tile in TILE_TYPES.items():
        table[tile_id] = getattr(tile, attribute)
    return table


_BLOCKED = _lookup_table("blocked")
_BLOCK_SIGHT = _lookup_table("block_sight")


class GameMap:
    """Fixed size grid of tiles, indexed ``tiles[y, x]``.

    A map starts out entirely wall and is carved in place by the generator.
    Once :meth:`seal` is called the tile array is read-only for the rest of
    the session; movement and visibility only ever read it.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height
        self._sealed = False
        # C order so rows are contiguous for slicing and text dumps
        self.tiles: np.ndarray = np.full(
            (height, width), fill_value=TILE_ID_WALL, dtype=np.uint8, order="C"
        )
        log.debug("GameMap initialized", width=width, height=height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """End the generation phase. Later carving raises :class:`MapSealedError`."""
        self.tiles.flags.writeable = False
        self._sealed = True
        log.debug("GameMap sealed", floor_tiles=self.floor_count())

    # --- Queries ---

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self._width, self._height)

    def get_tile(self, x: int, y: int) -> Tile:
        self.require_in_bounds(x, y)
        return TILE_TYPES[int(self.tiles[y, x])]

    def is_blocked(self, x: int, y: int) -> bool:
        """Out of bounds counts as blocked."""
        if not self.in_bounds(x, y):
            return True
        return bool(_BLOCKED[self.tiles[y, x]])

    def is_walkable(self, x: int, y: int) -> bool:
        return not self.is_blocked(x, y)

    def is_transparent(self, x: int, y: int) -> bool:
        """Checks if the tile at (x, y) is transparent (for FOV)."""
        if not self.in_bounds(x, y):
            return False
        return not bool(_BLOCK_SIGHT[self.tiles[y, x]])

    def floor_count(self) -> int:
        return int(np.count_nonzero(self.tiles == TILE_ID_FLOOR))

    # --- Whole-grid views for the renderer and field-of-view ---

    def blocked_map(self) -> np.ndarray:
        return _BLOCKED[self.tiles]

    def walkable_map(self) -> np.ndarray:
        return ~_BLOCKED[self.tiles]

    def transparency_map(self) -> np.ndarray:
        """Boolean ``(height, width)`` array, True where light passes."""
        return ~_BLOCK_SIGHT[self.tiles]

    # --- Carving ---

    def _check_writable(self, operation: str) -> None:
        if self._sealed:
            log.error("Carve attempted on sealed map", operation=operation)
            raise MapSealedError(f"{operation} called after the map was sealed")

    def carve_room(self, rect: Rect) -> None:
        """Set the interior of ``rect`` to floor, leaving its border untouched."""
        self._check_writable("carve_room")
        rows, cols = rect.interior
        if rows.start >= rows.stop or cols.start >= cols.stop:
            log.debug("Room has no interior", rect=rect)
            return
        # Both corners in bounds means the whole interior is
        self.require_in_bounds(cols.start, rows.start)
        self.require_in_bounds(cols.stop - 1, rows.stop - 1)
        self.tiles[rows, cols] = TILE_ID_FLOOR
        log.debug("Carved room", rect=rect)

    def carve_h_tunnel(self, x1: int, x2: int, y: int) -> None:
        self._check_writable("carve_h_tunnel")
        lo, hi = min(x1, x2), max(x1, x2)
        self.require_in_bounds(lo, y)
        self.require_in_bounds(hi, y)
        self.tiles[y, lo : hi + 1] = TILE_ID_FLOOR
        log.debug("Carved horizontal tunnel", x_range=(lo, hi), y=y)

    def carve_v_tunnel(self, y1: int, y2: int, x: int) -> None:
        self._check_writable("carve_v_tunnel")
        lo, hi = min(y1, y2), max(y1, y2)
        self.require_in_bounds(x, lo)
        self.require_in_bounds(x, hi)
        self.tiles[lo : hi + 1, x] = TILE_ID_FLOOR
        log.debug("Carved vertical tunnel", x=x, y_range=(lo, hi))

    # --- Debug output ---

    def to_text(self, entities: Iterable[Glyph] = ()) -> str:
        """Render the map as rows of characters, entities drawn over tiles."""
        rows = [[TILE_CHARS.get(int(t), "?") for t in row] for row in self.tiles]
        for entity in entities:
            if self.in_bounds(entity.x, entity.y):
                rows[entity.y][entity.x] = entity.glyph
        return "\n".join("".join(row) for row in rows)
