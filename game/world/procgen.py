# game/world/procgen.py
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import structlog

from game.config import WorldConfig
from game.world.errors import GenerationError
from game.world.game_map import GameMap
from game.world.rect import Rect
from game_rng import GameRNG

log = structlog.get_logger()


@dataclass
class DungeonLayout:
    """Result of a generation run.

    ``spawn`` is ``None`` when no room could be placed; use
    :meth:`require_spawn` where a spawn point is mandatory.
    """

    rooms: List[Rect] = field(default_factory=list)
    spawn: Optional[Tuple[int, int]] = None
    attempts: int = 0
    rejected: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.rooms

    def require_spawn(self) -> Tuple[int, int]:
        if self.spawn is None:
            log.error(
                "Dungeon has no rooms", attempts=self.attempts, rejected=self.rejected
            )
            raise GenerationError(
                f"no room could be placed in {self.attempts} attempts; "
                "check map size and room size bounds"
            )
        return self.spawn


def connect_points(
    game_map: GameMap, start: Tuple[int, int], end: Tuple[int, int], rng: GameRNG
) -> None:
    """Carve an L-shaped corridor between two points.

    The elbow sits at ``(end_x, start_y)`` when the horizontal leg goes first
    and at ``(start_x, end_y)`` otherwise; a coin flip picks which.
    """
    (x1, y1), (x2, y2) = start, end
    if rng.coin_flip() == "heads":
        game_map.carve_h_tunnel(x1, x2, y1)
        game_map.carve_v_tunnel(y1, y2, x2)
        order = "horizontal_first"
    else:
        game_map.carve_v_tunnel(y1, y2, x1)
        game_map.carve_h_tunnel(x1, x2, y2)
        order = "vertical_first"
    log.debug("Connected points", start=start, end=end, order=order)


def _random_room(config: WorldConfig, rng: GameRNG) -> Rect:
    w = rng.get_int(config.room_min_size, config.room_max_size)
    h = rng.get_int(config.room_min_size, config.room_max_size)
    x = rng.get_int(0, config.width - w - 1)
    y = rng.get_int(0, config.height - h - 1)
    return Rect.new(x, y, w, h)


def generate_dungeon(
    game_map: GameMap, config: WorldConfig, rng: GameRNG
) -> DungeonLayout:
    """Place up to ``config.max_rooms`` rooms and chain them with corridors.

    Each attempt draws one candidate room and drops it if it touches any room
    accepted so far; failed attempts are not retried.  Every accepted room
    after the first is joined to the one accepted just before it, so all
    rooms are reachable from the first room's center, which becomes the
    spawn point.
    """
    if (game_map.width, game_map.height) != (config.width, config.height):
        log.error(
            "Map size does not match config",
            map_size=(game_map.width, game_map.height),
            config_size=(config.width, config.height),
        )
        raise ValueError("GameMap dimensions must match WorldConfig")

    log.info(
        "Starting dungeon generation",
        width=config.width,
        height=config.height,
        max_rooms=config.max_rooms,
        seed=rng.initial_seed,
    )
    layout = DungeonLayout()

    for attempt in range(config.max_rooms):
        layout.attempts += 1
        new_room = _random_room(config, rng)

        if any(new_room.intersects_with(other) for other in layout.rooms):
            layout.rejected += 1
            log.debug("Rejected overlapping room", attempt=attempt, rect=new_room)
            continue

        game_map.carve_room(new_room)
        new_center = new_room.center

        if not layout.rooms:
            layout.spawn = new_center
        else:
            connect_points(game_map, layout.rooms[-1].center, new_center, rng)

        layout.rooms.append(new_room)
        log.debug("Accepted room", attempt=attempt, rect=new_room, center=new_center)

    if layout.is_empty:
        log.warning(
            "Dungeon generation placed no rooms",
            attempts=layout.attempts,
            room_size=(config.room_min_size, config.room_max_size),
        )
    else:
        log.info(
            "Dungeon generation complete",
            rooms=len(layout.rooms),
            rejected=layout.rejected,
            spawn=layout.spawn,
        )
    return layout


def make_map(config: WorldConfig, rng: GameRNG) -> Tuple[GameMap, DungeonLayout]:
    """Allocate a fresh map, generate into it and seal it."""
    game_map = GameMap(config.width, config.height)
    layout = generate_dungeon(game_map, config, rng)
    game_map.seal()
    return game_map, layout


def reachable_from(game_map: GameMap, x: int, y: int) -> np.ndarray:
    """Flood fill over walkable cells from ``(x, y)`` using 4-neighbours.

    Returns a ``(height, width)`` boolean array; all False if the start cell
    is blocked.
    """
    game_map.require_in_bounds(x, y)
    walkable = game_map.walkable_map()
    visited = np.zeros_like(walkable, dtype=bool)
    if not walkable[y, x]:
        return visited

    visited[y, x] = True
    queue = deque([(x, y)])
    while queue:
        cx, cy = queue.popleft()
        for dx, dy in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            nx, ny = cx + dx, cy + dy
            if (
                game_map.in_bounds(nx, ny)
                and walkable[ny, nx]
                and not visited[ny, nx]
            ):
                visited[ny, nx] = True
                queue.append((nx, ny))
    return visited
