import pytest

from yarl.core.vector import Vec3
from yarl.dungeon.codec import MapTextCodec, MapWriter
from yarl.dungeon.generator import TextMapGenerator, UniformFillGenerator
from yarl.dungeon.population import ItemKind, ItemSpawn, MonsterKind, MonsterSpawn
from yarl.dungeon.tiles import TileKind
from yarl.exceptions import (
    EmptyInputError,
    GenerationError,
    MalformedMapError,
    MapFormatError,
    UnknownGlyphError,
)

BOX = "#####\n#@.>#\n#####"


def test_round_trip_small_map():
    game_map = TextMapGenerator("..\n.@").generate()
    assert game_map.player_spawn == (1, 1)
    assert game_map.grid.count(TileKind.FLOOR) == 4
    assert game_map.to_text() == "..\n.@"


def test_round_trip_with_stairs():
    game_map = TextMapGenerator(BOX).generate()
    assert game_map.player_spawn == (1, 1)
    assert game_map.stairs_down == (3, 1)
    assert game_map.grid.kind_at(3, 1) is TileKind.STAIRCASE_DOWN
    assert game_map.grid.kind_at(1, 1) is TileKind.FLOOR
    assert game_map.to_text() == BOX


@pytest.mark.parametrize("text", ["", "\n"])
def test_empty_text(text):
    with pytest.raises(EmptyInputError) as excinfo:
        TextMapGenerator(text).generate()
    assert isinstance(excinfo.value, GenerationError)


def test_unknown_glyph():
    with pytest.raises(UnknownGlyphError) as excinfo:
        MapTextCodec().parse(".x\n.@")
    assert excinfo.value.glyph == "x"
    assert isinstance(excinfo.value, MapFormatError)
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("text", ["...\n.@", "..\n..", "@.\n.@"])
def test_malformed_maps(text):
    with pytest.raises(MalformedMapError):
        MapTextCodec().parse(text)


def test_space_is_empty_tile():
    game_map = TextMapGenerator("# @").generate()
    assert game_map.grid.kind_at(1, 0) is TileKind.EMPTY


def test_overlay_glyphs_stand_on_floor():
    parsed = MapTextCodec().parse("@o!\nT?.")
    assert parsed.player == (0, 0)
    assert parsed.monsters == [
        MonsterSpawn((1, 0), MonsterKind.ORC),
        MonsterSpawn((0, 1), MonsterKind.TROLL),
    ]
    assert parsed.items == [
        ItemSpawn((2, 0), ItemKind.HEAL_POTION),
        ItemSpawn((1, 1), ItemKind.LIGHTNING),
    ]
    assert parsed.grid.count(TileKind.FLOOR) == 6


def test_text_generator_ignores_overlay_occupants():
    game_map = TextMapGenerator("@o!").generate()
    assert game_map.monsters == []
    assert game_map.items == []
    assert game_map.to_text() == "@.."


def test_serialize_overlay_order():
    codec = MapTextCodec()
    grid = codec.parse("...\n..@").grid
    text = codec.serialize(
        grid,
        player=(2, 1),
        items=[ItemSpawn((0, 0), ItemKind.HEAL_POTION), ItemSpawn((1, 0), ItemKind.LIGHTNING)],
        monsters=[MonsterSpawn((1, 0), MonsterKind.TROLL), MonsterSpawn((2, 1), MonsterKind.ORC)],
    )
    assert text == "!T.\n..@"


def test_serialize_rejects_out_of_bounds_overlay():
    codec = MapTextCodec()
    grid = codec.parse(".@").grid
    with pytest.raises(IndexError):
        codec.serialize(grid, player=(2, 0))


def test_render_window_is_clipped():
    codec = MapTextCodec()
    grid = codec.parse(BOX).grid
    assert codec.render_window(grid, (1, 0), (3, 2)) == "###\n..>"
    assert codec.render_window(grid, (1, 0), (3, 2), player=(1, 1)) == "###\n@.>"
    assert codec.render_window(grid, (3, 2), (10, 10)) == "##"
    assert codec.render_window(grid, (-2, -2), (3, 3)) == "#"


def test_glyph_table_must_be_bijective():
    with pytest.raises(ValueError):
        MapTextCodec({TileKind.WALL: "#", TileKind.FLOOR: "#"})


def test_map_writer_converts_world_positions():
    game_map = UniformFillGenerator(5, 5).generate()
    text = MapWriter().write(
        game_map,
        player=Vec3(0.0, 0.0, 0.0),
        items=[(Vec3(4.0, 0.0, 0.0), ItemKind.HEAL_POTION)],
        monsters=[(Vec3(-4.0, 0.0, -4.0), MonsterKind.ORC)],
    )
    assert text.split("\n") == [".....", ".o...", "..@!.", ".....", "....."]
