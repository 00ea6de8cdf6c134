import pytest

from yarl.core.random import RandomSource
from yarl.dungeon.generator import TwoRoomGenerator, UniformFillGenerator
from yarl.dungeon.pathfinding import find_path_bfs
from yarl.dungeon.tiles import TileKind
from yarl.exceptions import ConfigurationError


@pytest.mark.parametrize("seed", [1, 2])
def test_two_rooms_connected(seed):
    game_map = TwoRoomGenerator(80, 45, connect=True, rng=RandomSource(seed)).generate()
    grid = game_map.grid

    assert game_map.player_spawn == (25, 22)
    assert grid.kind_at(25, 22) is TileKind.FLOOR
    assert grid.kind_at(40, 22) is TileKind.FLOOR
    assert find_path_bfs(grid, (25, 22), (40, 22)) == 15
    assert not game_map.is_wall_between((25, 22), (40, 22))


def test_two_rooms_without_tunnel_are_separated():
    game_map = TwoRoomGenerator(80, 45, connect=False).generate()
    assert find_path_bfs(game_map.grid, (25, 22), (40, 22)) is None
    assert game_map.is_wall_between((25, 22), (40, 22))
    assert game_map.stairs_down is None


def test_two_rooms_need_room_to_fit():
    with pytest.raises(ConfigurationError):
        TwoRoomGenerator(40, 40)


def test_uniform_fill():
    game_map = UniformFillGenerator(9, 7).generate()
    assert game_map.player_spawn == (4, 3)
    assert game_map.center == (4, 3)
    assert game_map.grid.count(TileKind.FLOOR) == 63


def test_uniform_fill_other_kind():
    game_map = UniformFillGenerator(4, 4, TileKind.WALL).generate()
    assert game_map.grid.count(TileKind.WALL) == 16
    assert game_map.reachable_floor() == set()
