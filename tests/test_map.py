import pytest

import hexworld.world as world_module
from hexworld.biomes import BIOME_PROFILES, Biome
from hexworld.geometry import axial_distance, axial_to_pixel
from hexworld.hex import Tile, Visibility
from hexworld.pois import PoiType
from hexworld.rng import SeededRandom, tile_rng
from hexworld.settings import (
    ConfigurationError,
    HexagonShape,
    MapSettings,
    NoiseSettings,
    RectangleShape,
)
from hexworld.world import GenerationAborted, generate, generate_map, select_home


def test_generation_is_deterministic():
    for seed in (0, 42, -7, 20240317):
        a = generate(seed, HexagonShape(6), poi_count=10)
        b = generate(seed, HexagonShape(6), poi_count=10)
        assert a.snapshot() == b.snapshot()


def test_different_seeds_give_different_terrain():
    a = generate(1, HexagonShape(5))
    b = generate(2, HexagonShape(5))
    assert [t.elevation for t in a.tiles] != [t.elevation for t in b.tiles]


def test_hexagon_map_is_complete_and_unique():
    hex_map = generate(3, HexagonShape(5))
    coords = [t.coord for t in hex_map.tiles]
    assert len(coords) == 3 * 25 + 15 + 1
    assert len(set(coords)) == len(coords)
    assert all(max(abs(q), abs(r), abs(q + r)) <= 5 for q, r in coords)


def test_rectangle_map_is_complete_and_unique():
    hex_map = generate(3, RectangleShape(cols=8, rows=5))
    assert len(hex_map) == 40
    offsets = {(t.col, t.row) for t in hex_map.tiles}
    assert offsets == {(c, r) for c in range(8) for r in range(5)}
    assert len({t.coord for t in hex_map.tiles}) == 40


def test_samples_are_clamped():
    hex_map = generate(99, HexagonShape(8))
    for tile in hex_map.tiles:
        assert -1.0 <= tile.elevation <= 1.0
        assert -1.0 <= tile.moisture <= 1.0
        assert 0.0 <= tile.auxiliary <= 1.0


def test_auxiliary_field_can_be_disabled():
    hex_map = generate(5, HexagonShape(3), NoiseSettings(auxiliary_octaves=0))
    assert all(t.auxiliary is None for t in hex_map.tiles)


def test_pixel_positions_and_corners():
    hex_map = generate(5, HexagonShape(3), hex_size=20.0)
    for tile in hex_map.tiles:
        x, y = axial_to_pixel(tile.q, tile.r, 20.0)
        assert (tile.x, tile.y) == pytest.approx((x, y))
        assert len(tile.corners) == 6


@pytest.mark.parametrize("profile", sorted(BIOME_PROFILES))
def test_biomes_are_order_independent(profile):
    hex_map = generate(12, HexagonShape(6), profile=profile)
    policy = BIOME_PROFILES[profile]
    for tile in reversed(hex_map.tiles):
        rng = tile_rng(tile.q, tile.r, 12)
        assert policy.classify(tile.elevation, tile.moisture, tile.auxiliary, rng) is tile.biome
        assert tile.biome in policy.biomes


def test_poi_placement():
    hex_map = generate(77, HexagonShape(4), poi_count=20)
    tagged = [t for t in hex_map.tiles if t.poi is not None]
    assert len(tagged) == 20
    indices = SeededRandom(77 + 100).shuffle_indices(len(hex_map.tiles))
    assert hex_map.tiles[indices[0]].poi is PoiType.SETTLEMENT
    assert hex_map.settlements == [t for t in hex_map.tiles if t.poi is PoiType.SETTLEMENT]


def test_poi_count_is_clamped():
    hex_map = generate(4, HexagonShape(2), poi_count=0)
    tagged = [t for t in hex_map.tiles if t.poi is not None]
    assert len(tagged) == 1
    assert tagged[0].poi is PoiType.SETTLEMENT

    hex_map = generate(4, HexagonShape(2), poi_count=1000)
    assert all(t.poi is not None for t in hex_map.tiles)


def test_home_is_settlement_closest_to_center():
    hex_map = generate(31, HexagonShape(8), poi_count=30)
    best = min(axial_distance((0, 0), s.coord) for s in hex_map.settlements)
    assert hex_map.home_tile.is_settlement
    assert axial_distance((0, 0), hex_map.original_settlement) == best
    assert hex_map.player_position == hex_map.original_settlement


def test_select_home_fallbacks():
    tiles = [Tile(q=1, r=0), Tile(q=0, r=0), Tile(q=0, r=1)]
    assert select_home(tiles, (0, 0)) == (0, 0)
    assert select_home(tiles, (5, 5)) == (1, 0)
    tiles[2].poi = PoiType.SETTLEMENT
    assert select_home(tiles, (0, 0)) == (0, 1)


def test_seed_42_radius_3_scenario():
    hex_map = generate(42, HexagonShape(3), poi_count=1, no_fog=False)
    assert len(hex_map) == 37
    settlements = [t for t in hex_map.tiles if t.poi is PoiType.SETTLEMENT]
    assert len(settlements) == 1
    home = hex_map.original_settlement
    assert home == settlements[0].coord
    for tile in hex_map.tiles:
        dist = axial_distance(home, tile.coord)
        if dist <= 1:
            assert tile.visibility is Visibility.EXPLORED
        elif dist == 2:
            assert tile.visibility is Visibility.VISIBLE
        else:
            assert tile.visibility is Visibility.UNEXPLORED


def test_no_fog_explores_everything():
    hex_map = generate(42, HexagonShape(4), no_fog=True)
    assert all(t.visibility is Visibility.EXPLORED for t in hex_map.tiles)


def test_rectangle_home_and_neighbors():
    hex_map = generate(8, RectangleShape(cols=9, rows=7, odd_rows_shifted=False), poi_count=6)
    home = hex_map.player_tile
    assert home.is_settlement
    for neighbor in hex_map.neighbors(home.coord):
        assert axial_distance(home.coord, neighbor.coord) == 1
        assert neighbor.visibility is Visibility.EXPLORED


@pytest.mark.parametrize(
    "settings",
    [
        MapSettings(shape=HexagonShape(-1)),
        MapSettings(shape=RectangleShape(cols=0, rows=4)),
        MapSettings(shape=RectangleShape(cols=4, rows=-2)),
        MapSettings(shape=HexagonShape(3), hex_size=0),
        MapSettings(shape=HexagonShape(3), profile="tropical"),
        MapSettings(shape=HexagonShape(3), noise=NoiseSettings(elevation_octaves=0)),
    ],
)
def test_invalid_settings_fail_before_noise(monkeypatch, settings):
    def no_noise(*args, **kwargs):
        raise AssertionError("noise built for invalid settings")

    monkeypatch.setattr(world_module, "NoiseField", no_noise)
    with pytest.raises(ConfigurationError):
        generate_map(settings)


def test_radius_zero_map():
    hex_map = generate(1, HexagonShape(0), poi_count=5)
    assert len(hex_map) == 1
    assert hex_map.player_tile.is_settlement
    assert hex_map.player_tile.visibility is Visibility.EXPLORED


def test_abort_hook():
    with pytest.raises(GenerationAborted):
        generate(1, HexagonShape(3), should_abort=lambda: True)

    calls = []

    def abort_on_second_batch():
        calls.append(1)
        return len(calls) > 1

    with pytest.raises(GenerationAborted):
        generate(1, HexagonShape(25), should_abort=abort_on_second_batch)
    assert len(calls) == 2

    hex_map = generate(1, HexagonShape(3), should_abort=lambda: False)
    assert len(hex_map) == 37


def test_ruined_profile_uses_auxiliary_field():
    hex_map = generate(11, HexagonShape(20), profile="ruined")
    for tile in hex_map.tiles:
        if tile.biome is Biome.OVERGROWN_RUINS:
            assert tile.auxiliary > 0.72
            assert 0.05 < tile.elevation < 0.55

    hex_map = generate(11, HexagonShape(20), NoiseSettings(auxiliary_octaves=0), profile="ruined")
    assert all(t.biome is not Biome.OVERGROWN_RUINS for t in hex_map.tiles)
