import json

from yarl.config import GenerationSettings
from yarl.dungeon.population import ItemKind, MonsterKind
from yarl.dungeon.tiles import TileKind
from yarl.game import DungeonRun, generate_floor


def test_descend_enters_at_previous_staircase():
    run = DungeonRun(GenerationSettings(seed=99))
    first = run.start()
    assert run.floor == 1
    assert first.stairs_down is not None

    second = run.descend()
    assert run.floor == 2
    assert run.current_map is second
    assert second.player_spawn == first.stairs_down
    assert second.is_walkable(second.player_spawn)
    assert second.stairs_down is not None
    assert second.grid[second.stairs_down].kind is TileKind.STAIRCASE_DOWN
    assert second.stairs_down in second.reachable_floor()


def test_descend_before_start_generates_first_floor():
    run = DungeonRun(GenerationSettings(seed=3, floor=2))
    game_map = run.descend()
    assert run.floor == 2
    assert run.current_map is game_map


def test_runs_are_reproducible():
    def play(seed):
        run = DungeonRun(GenerationSettings(seed=seed))
        run.start()
        run.descend()
        return run.descend()

    a = play("same")
    b = play("same")
    assert a.grid.snapshot() == b.grid.snapshot()
    assert a.player_spawn == b.player_spawn
    assert a.monsters == b.monsters


def test_deeper_floors_use_deeper_tiers():
    run = DungeonRun(GenerationSettings(seed=7, floor=6))
    run.start()
    assert run.generator.max_monsters_per_room == 5
    assert list(run.generator.monster_table) == [(MonsterKind.ORC, 0.4), (MonsterKind.TROLL, 0.6)]


def test_descent_switches_tier():
    run = DungeonRun(GenerationSettings(seed=7, floor=3))
    run.start()
    assert run.generator.max_monsters_per_room == 2
    assert list(run.generator.monster_table) == [(MonsterKind.ORC, 0.8), (MonsterKind.TROLL, 0.2)]

    run.descend()
    assert run.floor == 4
    assert run.generator.max_monsters_per_room == 3
    assert list(run.generator.monster_table) == [(MonsterKind.ORC, 0.65), (MonsterKind.TROLL, 0.35)]
    assert list(run.generator.item_table) == [(ItemKind.HEAL_POTION, 0.5), (ItemKind.LIGHTNING, 0.5)]


def test_summary_is_json_serialisable():
    run = DungeonRun(GenerationSettings(seed=11))
    run.start()
    summary = run.summary()
    decoded = json.loads(json.dumps(summary))
    assert decoded["floor"] == 1
    assert decoded["width"] == 80
    assert decoded["seed_hex"] == run.rngm.get_master_seed_hex()
    assert decoded["reachable_cells"] > 0
    assert all(m["kind"] in ("orc", "troll") for m in decoded["monsters"])


def test_generate_floor_helper():
    data = generate_floor(GenerationSettings(seed=5), 3)
    assert data["floor"] == 3
    assert data == generate_floor(GenerationSettings(seed=5), 3)
