from itertools import combinations

import numpy as np
import pytest

from game.config import WorldConfig
from game.world.errors import GenerationError
from game.world.game_map import GameMap
from game.world.procgen import (
    DungeonLayout,
    connect_points,
    generate_dungeon,
    make_map,
    reachable_from,
)
from game.world.rect import Rect
from game_rng import GameRNG

SEEDS = range(20)


def _generate(config, seed):
    return make_map(config, GameRNG(seed=seed))


@pytest.mark.parametrize("seed", SEEDS)
def test_accepted_rooms_never_intersect(world_config, seed):
    _, layout = _generate(world_config, seed)
    assert layout.rooms
    for a, b in combinations(layout.rooms, 2):
        assert not a.intersects_with(b)


@pytest.mark.parametrize("seed", SEEDS)
def test_every_room_reachable_from_spawn(world_config, seed):
    game_map, layout = _generate(world_config, seed)
    spawn_x, spawn_y = layout.require_spawn()
    reachable = reachable_from(game_map, spawn_x, spawn_y)
    for room in layout.rooms:
        cx, cy = room.center
        assert reachable[cy, cx], f"room {room} cut off from spawn"


@pytest.mark.parametrize("seed", SEEDS)
def test_all_floor_is_connected(small_config, seed):
    game_map, layout = _generate(small_config, seed)
    reachable = reachable_from(game_map, *layout.require_spawn())
    assert np.array_equal(reachable, game_map.walkable_map())


@pytest.mark.parametrize("seed", SEEDS)
def test_layout_bookkeeping(world_config, seed):
    game_map, layout = _generate(world_config, seed)
    assert layout.spawn == layout.rooms[0].center
    assert layout.attempts == world_config.max_rooms
    assert layout.rejected + len(layout.rooms) == layout.attempts
    assert game_map.sealed


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_fit_and_map_edge_stays_solid(world_config, seed):
    game_map, layout = _generate(world_config, seed)
    for room in layout.rooms:
        assert world_config.room_min_size <= room.x2 - room.x1 <= world_config.room_max_size
        assert world_config.room_min_size <= room.y2 - room.y1 <= world_config.room_max_size
        assert room.x1 >= 0 and room.y1 >= 0
        assert room.x2 < world_config.width and room.y2 < world_config.height
    blocked = game_map.blocked_map()
    assert blocked[0, :].all() and blocked[-1, :].all()
    assert blocked[:, 0].all() and blocked[:, -1].all()


def test_room_interiors_are_carved(world_config):
    game_map, layout = _generate(world_config, 99)
    for room in layout.rooms:
        rows, cols = room.interior
        assert game_map.walkable_map()[rows, cols].all()


def test_same_seed_same_dungeon(world_config):
    map_a, layout_a = _generate(world_config, 42)
    map_b, layout_b = _generate(world_config, 42)
    assert np.array_equal(map_a.tiles, map_b.tiles)
    assert layout_a.rooms == layout_b.rooms
    assert layout_a.spawn == layout_b.spawn


def test_different_seeds_differ(world_config):
    map_a, _ = _generate(world_config, 1)
    map_b, _ = _generate(world_config, 2)
    assert not np.array_equal(map_a.tiles, map_b.tiles)


def test_zero_attempts_leaves_map_solid():
    config = WorldConfig(width=20, height=20, max_rooms=0, room_min_size=3, room_max_size=5)
    game_map, layout = _generate(config, 5)
    assert layout.is_empty
    assert layout.spawn is None
    assert game_map.floor_count() == 0
    with pytest.raises(GenerationError):
        layout.require_spawn()


def test_single_attempt_places_spawn_room_without_corridor():
    config = WorldConfig(width=20, height=20, max_rooms=1, room_min_size=4, room_max_size=4)
    game_map, layout = _generate(config, 3)
    assert len(layout.rooms) == 1
    (room,) = layout.rooms
    # interior only: no corridor is carved for the first room
    assert game_map.floor_count() == (room.x2 - room.x1 - 1) * (room.y2 - room.y1 - 1)
    assert layout.spawn == room.center


def test_generator_rejects_mismatched_map(world_config, rng):
    with pytest.raises(ValueError):
        generate_dungeon(GameMap(10, 10), world_config, rng)


def test_disjoint_rooms_connected_by_l_corridor(blank_map):
    a = Rect.new(0, 0, 4, 4)
    b = Rect.new(5, 5, 4, 4)
    assert not a.intersects_with(b)
    blank_map.carve_room(a)
    blank_map.carve_room(b)
    connect_points(blank_map, a.center, b.center, GameRNG(seed=8))

    (x1, y1), (x2, y2) = a.center, b.center
    horizontal_first = [(x, y1) for x in range(x1, x2 + 1)] + [
        (x2, y) for y in range(y1, y2 + 1)
    ]
    vertical_first = [(x1, y) for y in range(y1, y2 + 1)] + [
        (x, y2) for x in range(x1, x2 + 1)
    ]
    assert all(blank_map.is_walkable(x, y) for x, y in horizontal_first) or all(
        blank_map.is_walkable(x, y) for x, y in vertical_first
    )
    assert reachable_from(blank_map, x1, y1)[y2, x2]


def test_corridor_orders_both_occur():
    elbows = set()
    for seed in range(30):
        game_map = GameMap(10, 10)
        connect_points(game_map, (2, 2), (7, 7), GameRNG(seed=seed))
        elbows.add((game_map.is_walkable(7, 2), game_map.is_walkable(2, 7)))
    assert elbows == {(True, False), (False, True)}


def test_reachable_from_blocked_cell_is_empty(blank_map):
    assert not reachable_from(blank_map, 3, 3).any()


def test_layout_defaults():
    layout = DungeonLayout()
    assert layout.is_empty
    assert layout.attempts == 0


class ScriptedRNG:
    """Replays fixed draws so a generation run can be laid out by hand."""

    def __init__(self, ints, seed=None):
        self.initial_seed = seed
        self._ints = list(ints)

    def get_int(self, a, b):
        value = self._ints.pop(0)
        assert a <= value <= b
        return value

    def coin_flip(self):
        return "heads"


def test_rejected_room_leaves_no_trace():
    config = WorldConfig(width=20, height=20, max_rooms=3, room_min_size=4, room_max_size=4)
    # (w, h, x, y) per attempt; the second room overlaps the first
    rng = ScriptedRNG([4, 4, 0, 0, 4, 4, 3, 3, 4, 4, 10, 10])
    game_map, layout = make_map(config, rng)

    assert layout.attempts == 3
    assert layout.rejected == 1
    assert layout.rooms == [Rect.new(0, 0, 4, 4), Rect.new(10, 10, 4, 4)]
    assert layout.spawn == (2, 2)
    assert not game_map.walkable_map()[4:7, 4:7].any()

    expected = GameMap(20, 20)
    expected.carve_room(Rect.new(0, 0, 4, 4))
    expected.carve_room(Rect.new(10, 10, 4, 4))
    expected.carve_h_tunnel(2, 12, 2)
    expected.carve_v_tunnel(2, 12, 12)
    assert np.array_equal(game_map.tiles, expected.tiles)
