from yarl.core.vector import Vec3
from yarl.dungeon.generator import TextMapGenerator, UniformFillGenerator
from yarl.dungeon.sight import MonsterAIState, perceive

PILLAR = "#######\n#@....#\n#..#..#\n#.....#\n#######"


def test_states_by_distance():
    game_map = UniformFillGenerator(9, 9).generate()
    monster = Vec3()
    assert perceive(game_map, monster, Vec3(1.0, 0.0, 0.0)) is MonsterAIState.ATTACKING
    assert perceive(game_map, monster, Vec3(5.0, 0.0, 0.0)) is MonsterAIState.PURSUING
    assert perceive(game_map, monster, Vec3(0.0, 0.0, 12.0)) is MonsterAIState.IDLE


def test_wall_hides_player():
    game_map = TextMapGenerator(PILLAR).generate()
    monster = game_map.grid_to_world(1, 2)
    assert perceive(game_map, monster, game_map.grid_to_world(5, 2), vision_range=20.0) is MonsterAIState.IDLE
    assert perceive(game_map, game_map.grid_to_world(1, 1), game_map.grid_to_world(5, 1), vision_range=20.0) is (
        MonsterAIState.PURSUING
    )
