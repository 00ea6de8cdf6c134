import pytest

from yarl.config import GenerationSettings, build_settings, parse_args
from yarl.core.random import RandomSource
from yarl.dungeon.difficulty import load_floor_tables
from yarl.dungeon.factory import DungeonFactory
from yarl.dungeon.generator import RoomsGenerator, TextMapGenerator, TwoRoomGenerator, UniformFillGenerator
from yarl.dungeon.population import MonsterKind
from yarl.dungeon.tiles import TileKind
from yarl.exceptions import ConfigurationError


def test_defaults():
    settings = GenerationSettings().validate()
    assert (settings.width, settings.height) == (80, 45)
    assert settings.max_rooms == 30
    assert (settings.room_min_size, settings.room_max_size) == (6, 10)


def test_env_settings(monkeypatch):
    monkeypatch.setenv("YARL_ALGORITHM", "uniform")
    monkeypatch.setenv("YARL_WIDTH", "20")
    monkeypatch.setenv("YARL_HEIGHT", "10")
    monkeypatch.setenv("YARL_SEED", "42")
    settings = GenerationSettings.from_env()
    assert settings.seed == 42

    game_map = DungeonFactory.generate(settings)
    assert (game_map.width, game_map.height) == (20, 10)
    assert game_map.grid.count(TileKind.FLOOR) == 200


def test_env_string_seed():
    settings = GenerationSettings.from_env({"YARL_SEED": "crypt-of-ages"})
    assert settings.seed == "crypt-of-ages"


def test_env_bad_integer():
    with pytest.raises(ConfigurationError):
        GenerationSettings.from_env({"YARL_WIDTH": "wide"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"algorithm": "bsp"},
        {"algorithm": "text"},
        {"floor": 0},
        {"room_min_size": 9, "room_max_size": 7},
        {"max_items_per_room": -2},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ConfigurationError):
        GenerationSettings(**kwargs).validate()


@pytest.mark.parametrize(
    "algorithm,cls",
    [
        ("rooms", RoomsGenerator),
        ("uniform", UniformFillGenerator),
        ("two_rooms", TwoRoomGenerator),
        ("two_rooms_open", TwoRoomGenerator),
        ("bsp", RoomsGenerator),
    ],
)
def test_factory_picks_generator(algorithm, cls):
    gen = DungeonFactory.build_generator(GenerationSettings(algorithm=algorithm, seed=1))
    assert isinstance(gen, cls)


def test_factory_text_generator():
    gen = DungeonFactory.build_generator(GenerationSettings(algorithm="text", text=".@"))
    assert isinstance(gen, TextMapGenerator)
    assert gen.generate().player_spawn == (1, 0)


@pytest.mark.parametrize(
    "floor,budget,monsters",
    [
        (1, 2, [(MonsterKind.ORC, 0.8), (MonsterKind.TROLL, 0.2)]),
        (6, 5, [(MonsterKind.ORC, 0.4), (MonsterKind.TROLL, 0.6)]),
    ],
)
def test_factory_passes_tier_tables(floor, budget, monsters):
    tables = load_floor_tables()
    gen = DungeonFactory.build_generator(GenerationSettings(seed=1, floor=floor), tables=tables)
    assert gen.max_monsters_per_room == budget
    assert list(gen.monster_table) == monsters
    assert list(gen.item_table) == tables.item_table(floor)


def test_factory_uses_floor_tier_budget():
    gen = DungeonFactory.build_generator(GenerationSettings(seed=1, floor=6))
    assert gen.max_monsters_per_room == 5
    assert gen.max_items_per_room == 2

    gen = DungeonFactory.build_generator(GenerationSettings(seed=1, floor=6, max_monsters_per_room=0))
    assert gen.max_monsters_per_room == 0


def test_factory_is_deterministic_per_seed():
    settings = GenerationSettings(seed=123)
    a = DungeonFactory.generate(settings)
    b = DungeonFactory.generate(settings)
    assert a.grid.snapshot() == b.grid.snapshot()
    assert a.monsters == b.monsters
    assert a.reachable_floor()


def test_factory_accepts_explicit_rng():
    settings = GenerationSettings(seed=123)
    a = DungeonFactory.generate(settings, rng=RandomSource(5))
    b = DungeonFactory.generate(settings, rng=RandomSource(5))
    assert a.grid == b.grid


def test_command_line_overrides_environment():
    args = parse_args(["--algorithm", "uniform", "--width", "12", "--height", "8", "--seed", "5"])
    settings = build_settings(args, environ={"YARL_WIDTH": "30", "YARL_FLOOR": "3"})
    assert settings.algorithm == "uniform"
    assert (settings.width, settings.height) == (12, 8)
    assert settings.seed == 5
    assert settings.floor == 3


def test_text_flag_loads_file(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("..\n.@\n", encoding="utf-8")
    settings = build_settings(parse_args(["--text", str(path)]), environ={})
    assert settings.algorithm == "text"
    assert settings.text == "..\n.@\n"
