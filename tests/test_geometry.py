import math

import pytest

from hexworld.geometry import (
    AXIAL_DIRECTIONS,
    HexagonLayout,
    OffsetLayout,
    axial_distance,
    axial_to_offset,
    axial_to_pixel,
    hex_corners,
    hexagon_coords,
    layout_for,
    offset_to_axial,
    pixel_to_axial,
)
from hexworld.settings import ConfigurationError, HexagonShape, RectangleShape


@pytest.mark.parametrize("radius", [0, 1, 2, 10, 63])
def test_hexagon_count(radius):
    coords = hexagon_coords(radius)
    assert len(coords) == 3 * radius * radius + 3 * radius + 1
    assert len(set(coords)) == len(coords)
    assert len(HexagonLayout(radius)) == len(coords)


def test_radius_zero_is_single_origin_tile():
    assert hexagon_coords(0) == [(0, 0)]
    assert HexagonLayout(0).neighbors((0, 0)) == []


def test_distance_metric():
    assert axial_distance((0, 0), (0, 0)) == 0
    assert axial_distance((0, 0), (2, -1)) == 2
    assert axial_distance((0, 0), (3, 3)) == 6
    assert axial_distance((-2, 1), (1, -3)) == 4
    coords = hexagon_coords(3)
    for a in coords[::5]:
        for b in coords[::3]:
            assert axial_distance(a, b) == axial_distance(b, a)
            assert isinstance(axial_distance(a, b), int)


def test_neighbors_are_at_distance_one():
    layout = HexagonLayout(4)
    for coord in layout.coords():
        neighbors = layout.neighbors(coord)
        assert len(neighbors) <= 6
        for n in neighbors:
            assert axial_distance(coord, n) == 1
            assert layout.contains(n)


def test_hexagon_edge_tiles_have_fewer_neighbors():
    layout = HexagonLayout(2)
    assert len(layout.neighbors((0, 0))) == 6
    assert len(layout.neighbors((2, 0))) == 3
    assert len(layout.neighbors((1, 1))) == 4


def test_axial_to_pixel_pointy_top():
    x, y = axial_to_pixel(1, 0, 10)
    assert x == pytest.approx(math.sqrt(3) * 10)
    assert y == 0
    x, y = axial_to_pixel(0, 1, 10)
    assert x == pytest.approx(math.sqrt(3) * 5)
    assert y == pytest.approx(15)


def test_pixel_to_axial_inverts_projection():
    for q, r in hexagon_coords(4):
        x, y = axial_to_pixel(q, r, 38)
        assert pixel_to_axial(x, y, 38) == (q, r)
        assert pixel_to_axial(x + 5, y - 5, 38) == (q, r)


def test_hex_corners():
    corners = hex_corners(100, 50, 20)
    assert len(corners) == 6
    for cx, cy in corners:
        assert math.hypot(cx - 100, cy - 50) == pytest.approx(20)
    # first corner sits at -30 degrees
    assert corners[0][0] == pytest.approx(100 + 20 * math.cos(math.radians(-30)))
    assert corners[0][1] == pytest.approx(40)


@pytest.mark.parametrize("odd", [True, False])
def test_offset_axial_round_trip(odd):
    for row in range(-3, 6):
        for col in range(-2, 5):
            q, r = offset_to_axial(col, row, odd)
            assert r == row
            assert axial_to_offset(q, r, odd) == (col, row)


def test_odd_r_conversion():
    assert offset_to_axial(0, 0) == (0, 0)
    assert offset_to_axial(3, 1) == (3, 1)
    assert offset_to_axial(3, 2) == (2, 2)
    assert offset_to_axial(3, 3) == (2, 3)


@pytest.mark.parametrize("odd", [True, False])
def test_offset_neighbors_match_axial_directions(odd):
    layout = OffsetLayout(7, 5, odd_rows_shifted=odd)
    coords = list(layout.coords())
    assert len(coords) == 35 == len(set(coords))
    for coord in coords:
        expected = {
            (coord[0] + dq, coord[1] + dr)
            for dq, dr in AXIAL_DIRECTIONS
            if layout.contains((coord[0] + dq, coord[1] + dr))
        }
        assert set(layout.neighbors(coord)) == expected


def test_offset_layout_bounds_and_center():
    layout = OffsetLayout(4, 3)
    assert layout.contains(offset_to_axial(3, 2))
    assert not layout.contains(offset_to_axial(4, 2))
    assert not layout.contains(offset_to_axial(0, 3))
    assert layout.offset(layout.center()) == (2, 1)


def test_layout_validation():
    with pytest.raises(ConfigurationError):
        HexagonLayout(-1)
    with pytest.raises(ConfigurationError):
        OffsetLayout(0, 5)
    assert isinstance(layout_for(HexagonShape(3)), HexagonLayout)
    assert isinstance(layout_for(RectangleShape(3, 4)), OffsetLayout)
