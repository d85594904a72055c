import pytest

from expedition import settings
from expedition.describe import CAMP_TEXT, HOME_TEXT, SCAN_TEXT, describe_tile, percent
from expedition.events import EventBus, MoveRejected, PlayerMoved, VisibilityChanged
from expedition.session import Expedition, default_map_settings
from hexworld.biomes import BIOME_INFO, EXPEDITION_COSTS
from hexworld.hex import Visibility
from hexworld.settings import HexagonShape, MapSettings


@pytest.fixture
def expedition():
    return Expedition.start(
        MapSettings(seed=42, shape=HexagonShape(8), profile="expedition", poi_count=12)
    )


def outward_step(expedition):
    """Two moves from home that end next to unexplored tiles."""
    hex_map = expedition.map
    home = expedition.position
    for first in hex_map.neighbors(home):
        for second in hex_map.neighbors(first.coord):
            if hex_map.distance(home, second.coord) != 2:
                continue
            if any(n.visibility is Visibility.UNEXPLORED for n in hex_map.neighbors(second.coord)):
                return first.coord, second.coord
    raise AssertionError("no outward step found")


def test_default_map_settings_follow_constants():
    map_settings = default_map_settings()
    assert map_settings.seed == settings.MAP_SEED
    assert map_settings.shape == HexagonShape(settings.HEX_MAP_RADIUS)
    assert map_settings.poi_count == settings.POI_COUNT
    assert default_map_settings(seed=7).seed == 7


def test_session_starts_at_home(expedition):
    assert expedition.position == expedition.home
    assert expedition.at_home
    assert expedition.steps == 0
    assert expedition.travel_cost == 0
    assert expedition.path == [expedition.home]
    assert {t.coord for t in expedition.reachable()} == {
        t.coord for t in expedition.map.neighbors(expedition.home)
    }


def test_move_records_cost_and_path(expedition):
    first, second = outward_step(expedition)
    assert expedition.move_to(first)
    assert expedition.move_to(second)
    expected = sum(EXPEDITION_COSTS[expedition.map.get(c).biome] for c in (first, second))
    assert expedition.travel_cost == expected
    assert expedition.path == [expedition.home, first, second]
    assert expedition.steps == 2
    assert expedition.distance_km == 2 * settings.HEX_KM
    assert not expedition.at_home


def test_default_profile_costs_one_per_step():
    session = Expedition.start(MapSettings(seed=3, shape=HexagonShape(4), poi_count=3))
    target = session.reachable()[0].coord
    assert session.move_to(target)
    assert session.travel_cost == 1


def test_events_are_published(expedition):
    received = []
    expedition.events.subscribe(received.append)
    first, second = outward_step(expedition)

    expedition.move_to(first)
    assert received == [PlayerMoved(origin=expedition.home, destination=first, cost=expedition.travel_cost)]

    received.clear()
    expedition.move_to(second)
    assert isinstance(received[0], VisibilityChanged)
    assert received[0].coords[0] == second
    assert all(expedition.map.get(c).visibility is Visibility.VISIBLE for c in received[0].coords[1:])
    assert isinstance(received[1], PlayerMoved)
    assert received[1].destination == second


def test_rejected_move_returns_false(expedition):
    received = []
    expedition.events.subscribe(received.append, MoveRejected)
    before = expedition.map.snapshot()
    assert not expedition.move_to((40, 40))
    assert not expedition.move_to(expedition.position)
    assert expedition.map.snapshot() == before
    assert expedition.path == [expedition.home]
    assert expedition.travel_cost == 0
    assert [e.target for e in received] == [(40, 40), expedition.home]


def test_event_bus_filters_and_unsubscribes():
    bus = EventBus()
    moves, everything = [], []
    bus.subscribe(moves.append, PlayerMoved)
    bus.subscribe(everything.append)
    bus.publish(VisibilityChanged(coords=((0, 0),)))
    bus.publish(PlayerMoved(origin=(0, 0), destination=(1, 0), cost=1))
    assert len(moves) == 1
    assert len(everything) == 2

    bus.unsubscribe(everything.append)
    bus.publish(PlayerMoved(origin=(1, 0), destination=(0, 0), cost=1))
    assert len(moves) == 2
    assert len(everything) == 2


def test_describe_home(expedition):
    report = describe_tile(expedition, expedition.home)
    stats = dict(report.stats)
    assert report.title == "⬢ Current Position"
    assert report.description == HOME_TEXT
    assert stats["Point of Interest"] == "Settlement"
    assert stats["AI Threat Level"] == "Monitoring"
    assert "Traversal Cost" in stats
    assert not report.can_move
    assert report.hint is None


def test_describe_after_leaving_home(expedition):
    first, _ = outward_step(expedition)
    expedition.move_to(first)

    camp = describe_tile(expedition, first)
    assert camp.description == CAMP_TEXT

    home = describe_tile(expedition, expedition.home)
    assert home.title == BIOME_INFO[expedition.map.home_tile.biome].name
    assert home.description not in (HOME_TEXT, CAMP_TEXT)
    assert home.description == describe_tile(expedition, expedition.home).description
    assert home.can_move
    assert home.hint == "Move here"


def test_describe_fogged_tiles(expedition):
    hex_map = expedition.map
    visible = next(t for t in hex_map.tiles if t.visibility is Visibility.VISIBLE)
    report = describe_tile(expedition, visible.coord)
    assert report.title == BIOME_INFO[visible.biome].name
    assert report.description == SCAN_TEXT
    assert dict(report.stats)["Status"] == "Out of Range"

    hidden = next(t for t in hex_map.tiles if t.visibility is Visibility.UNEXPLORED)
    report = describe_tile(expedition, hidden.coord)
    assert report.title == "Unexplored"
    assert report.stats == []
    assert "too far" in report.description

    assert describe_tile(expedition, (99, 99)) is None


@pytest.mark.parametrize(
    "value, expected",
    [(-1.0, 0), (0.0, 50), (1.0, 100), (0.5, 75), (-0.99, 1)],
)
def test_percent(value, expected):
    assert percent(value) == expected


@pytest.mark.parametrize("target", [None, (1.5, 0.0), (0, 1, 2), ("q", "r")])
def test_malformed_target_is_rejected(expedition, target):
    received = []
    expedition.events.subscribe(received.append, MoveRejected)
    before = expedition.map.snapshot()
    assert not expedition.move_to(target)
    assert not expedition.can_move_to(target)
    assert expedition.map.snapshot() == before
    assert [e.target for e in received] == [target]
