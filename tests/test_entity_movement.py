import pytest

from game.constants import WHITE
from game.entities.entity import Entity
from game.world.game_map import GameMap
from game.world.rect import Rect
from game.world.tiles import TILE_ID_FLOOR


def _room_map():
    """5x5 map with a carved 3x3 interior at (1..3, 1..3)."""
    game_map = GameMap(5, 5)
    game_map.carve_room(Rect.new(0, 0, 4, 4))
    game_map.seal()
    return game_map


def _open_map():
    game_map = GameMap(5, 5)
    game_map.tiles[:] = TILE_ID_FLOOR
    return game_map


def test_move_into_empty_cell():
    game_map = _room_map()
    player = Entity(1, 1, "@", WHITE)
    assert player.move_by(1, 0, game_map) is True
    assert player.position == (2, 1)
    assert player.move_by(0, 1, game_map) is True
    assert player.position == (2, 2)


@pytest.mark.parametrize("dx, dy", [(-1, 0), (0, -1)])
def test_move_into_wall_is_noop(dx, dy):
    game_map = _room_map()
    player = Entity(1, 1, "@", WHITE)
    assert player.move_by(dx, dy, game_map) is False
    assert player.position == (1, 1)


def test_long_move_lands_exactly_on_target():
    game_map = _room_map()
    player = Entity(1, 1, "@", WHITE)
    assert player.move_by(2, 2, game_map) is True
    assert player.position == (3, 3)


@pytest.mark.parametrize(
    "start, delta",
    [
        ((0, 0), (-1, 0)),
        ((0, 0), (0, -1)),
        ((4, 4), (1, 0)),
        ((4, 4), (0, 1)),
        ((2, 2), (10, 10)),
        ((2, 2), (-100, 0)),
    ],
)
def test_move_off_grid_is_rejected(start, delta):
    game_map = _open_map()
    entity = Entity(*start, "@", WHITE)
    assert entity.move_by(*delta, game_map) is False
    assert entity.position == start


def test_zero_delta_on_floor_succeeds():
    game_map = _open_map()
    entity = Entity(2, 2, "@", WHITE)
    assert entity.move_by(0, 0, game_map) is True
    assert entity.position == (2, 2)
