import pytest

from game.config import WorldConfig
from game.world.game_map import GameMap
from game_rng import GameRNG


@pytest.fixture
def rng():
    return GameRNG(seed=1234)


@pytest.fixture
def world_config():
    return WorldConfig()


@pytest.fixture
def small_config():
    return WorldConfig(width=30, height=20, max_rooms=12, room_min_size=4, room_max_size=7)


@pytest.fixture
def blank_map():
    """10x10 map, all wall."""
    return GameMap(10, 10)
