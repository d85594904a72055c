from __future__ import annotations

"""
Pointy-top hex grid math.

Axial ``(q, r)`` is the canonical coordinate for distance and adjacency. Two map
layouts are supported: a hexagon of a given radius around the origin, and a
rectangle of offset ``(col, row)`` cells where every other row is shifted by
half a hex.
"""

import math
from typing import Iterator, List, Optional, Tuple

from .settings import ConfigurationError, HexagonShape, RectangleShape

Coordinate = Tuple[int, int]
Point = Tuple[float, float]

SQRT3 = math.sqrt(3.0)

# Axial hex directions: E, NE, NW, W, SW, SE
AXIAL_DIRECTIONS: List[Coordinate] = [
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
]

# (dcol, drow) offsets for rows shifted half a hex to the right, and for the others
_SHIFTED_ROW_NEIGHBORS: List[Coordinate] = [(1, 0), (1, -1), (0, -1), (-1, 0), (0, 1), (1, 1)]
_UNSHIFTED_ROW_NEIGHBORS: List[Coordinate] = [(1, 0), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1)]


def axial_to_pixel(q: int, r: int, size: float) -> Point:
    """Centre of the hex at ``(q, r)`` for a pointy-top grid of the given corner radius."""
    return SQRT3 * size * (q + r / 2.0), 1.5 * size * r


def axial_round(q: float, r: float) -> Coordinate:
    """Round fractional axial coordinates to the containing hex."""
    x, z = q, r
    y = -x - z
    rx, ry, rz = round(x), round(y), round(z)
    x_diff = abs(rx - x)
    y_diff = abs(ry - y)
    z_diff = abs(rz - z)
    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry
    return int(rx), int(rz)


def pixel_to_axial(x: float, y: float, size: float) -> Coordinate:
    """Inverse of :func:`axial_to_pixel`, snapped to the nearest hex."""
    q = (SQRT3 / 3.0 * x - y / 3.0) / size
    r = (2.0 / 3.0 * y) / size
    return axial_round(q, r)


def offset_to_axial(col: int, row: int, odd_rows_shifted: bool = True) -> Coordinate:
    """
    Convert offset ``(col, row)`` to axial.

    With ``odd_rows_shifted`` (odd-r) ``q = col - floor(row / 2)``; otherwise
    (even-r) ``q = col - ceil(row / 2)``.
    """
    parity = row & 1
    if odd_rows_shifted:
        q = col - (row - parity) // 2
    else:
        q = col - (row + parity) // 2
    return q, row


def axial_to_offset(q: int, r: int, odd_rows_shifted: bool = True) -> Coordinate:
    parity = r & 1
    if odd_rows_shifted:
        col = q + (r - parity) // 2
    else:
        col = q + (r + parity) // 2
    return col, r


def hex_corners(cx: float, cy: float, size: float) -> List[Point]:
    """Six vertices of a pointy-top hex, at angles ``60°·i − 30°``."""
    corners: List[Point] = []
    for i in range(6):
        angle = math.radians(60 * i - 30)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def axial_distance(a: Coordinate, b: Coordinate) -> int:
    """Exact hex-grid distance between two axial coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def hexagon_coords(radius: int) -> List[Coordinate]:
    """All ``(q, r)`` with ``max(|q|, |r|, |q + r|) <= radius``; ``3R² + 3R + 1`` entries."""
    coords: List[Coordinate] = []
    for q in range(-radius, radius + 1):
        r_min = max(-radius, -q - radius)
        r_max = min(radius, -q + radius)
        for r in range(r_min, r_max + 1):
            coords.append((q, r))
    return coords


class GridLayout:
    """Common interface of the supported map shapes."""

    def coords(self) -> Iterator[Coordinate]:
        raise NotImplementedError

    def contains(self, coord: Coordinate) -> bool:
        raise NotImplementedError

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        raise NotImplementedError

    def center(self) -> Coordinate:
        raise NotImplementedError

    def pixel(self, coord: Coordinate, size: float) -> Point:
        raise NotImplementedError

    def noise_position(self, coord: Coordinate, frequency: float) -> Point:
        raise NotImplementedError

    def offset(self, coord: Coordinate) -> Optional[Coordinate]:
        """Offset ``(col, row)`` of ``coord`` for row-based layouts, ``None`` otherwise."""
        return None

    def __len__(self) -> int:
        return sum(1 for _ in self.coords())


class HexagonLayout(GridLayout):
    """Hexagon-shaped map of ``radius`` steps around the origin."""

    def __init__(self, radius: int) -> None:
        if radius < 0:
            raise ConfigurationError(f"radius must be >= 0, got {radius}")
        self.radius = int(radius)

    def coords(self) -> Iterator[Coordinate]:
        return iter(hexagon_coords(self.radius))

    def contains(self, coord: Coordinate) -> bool:
        q, r = coord
        return max(abs(q), abs(r), abs(q + r)) <= self.radius

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        q, r = coord
        result: List[Coordinate] = []
        for dq, dr in AXIAL_DIRECTIONS:
            n = (q + dq, r + dr)
            if self.contains(n):
                result.append(n)
        return result

    def center(self) -> Coordinate:
        return (0, 0)

    def pixel(self, coord: Coordinate, size: float) -> Point:
        return axial_to_pixel(coord[0], coord[1], size)

    def noise_position(self, coord: Coordinate, frequency: float) -> Point:
        extent = max(2 * self.radius, 1)
        q, r = coord
        return (
            (q + self.radius) / extent * frequency,
            (r + self.radius) / extent * frequency,
        )

    def __len__(self) -> int:
        return 3 * self.radius * self.radius + 3 * self.radius + 1

    def __repr__(self) -> str:
        return f"HexagonLayout(radius={self.radius})"


class OffsetLayout(GridLayout):
    """Rectangular map of ``cols`` × ``rows`` offset cells, centred on the origin in pixels."""

    def __init__(self, cols: int, rows: int, odd_rows_shifted: bool = True) -> None:
        if cols <= 0 or rows <= 0:
            raise ConfigurationError(f"cols and rows must be positive, got {cols}x{rows}")
        self.cols = int(cols)
        self.rows = int(rows)
        self.odd_rows_shifted = bool(odd_rows_shifted)

    def _row_shifted(self, row: int) -> bool:
        return (row & 1) == (1 if self.odd_rows_shifted else 0)

    def coords(self) -> Iterator[Coordinate]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield offset_to_axial(col, row, self.odd_rows_shifted)

    def offset(self, coord: Coordinate) -> Coordinate:
        return axial_to_offset(coord[0], coord[1], self.odd_rows_shifted)

    def contains(self, coord: Coordinate) -> bool:
        col, row = self.offset(coord)
        return 0 <= col < self.cols and 0 <= row < self.rows

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        col, row = self.offset(coord)
        table = _SHIFTED_ROW_NEIGHBORS if self._row_shifted(row) else _UNSHIFTED_ROW_NEIGHBORS
        result: List[Coordinate] = []
        for dcol, drow in table:
            ncol, nrow = col + dcol, row + drow
            if 0 <= ncol < self.cols and 0 <= nrow < self.rows:
                result.append(offset_to_axial(ncol, nrow, self.odd_rows_shifted))
        return result

    def center(self) -> Coordinate:
        return offset_to_axial(self.cols // 2, self.rows // 2, self.odd_rows_shifted)

    def pixel(self, coord: Coordinate, size: float) -> Point:
        x, y = axial_to_pixel(coord[0], coord[1], size)
        total_w = self.cols * SQRT3 * size
        total_h = self.rows * 1.5 * size
        return x - total_w / 2.0, y - total_h / 2.0

    def noise_position(self, coord: Coordinate, frequency: float) -> Point:
        col, row = self.offset(coord)
        extent = max(self.cols - 1, self.rows - 1, 1)
        return col / extent * frequency, row / extent * frequency

    def __len__(self) -> int:
        return self.cols * self.rows

    def __repr__(self) -> str:
        return f"OffsetLayout(cols={self.cols}, rows={self.rows}, odd_rows_shifted={self.odd_rows_shifted})"


def layout_for(shape: HexagonShape | RectangleShape) -> GridLayout:
    """Build the grid layout described by a shape configuration."""
    if isinstance(shape, HexagonShape):
        return HexagonLayout(shape.radius)
    if isinstance(shape, RectangleShape):
        return OffsetLayout(shape.cols, shape.rows, shape.odd_rows_shifted)
    raise ConfigurationError(f"Unsupported map shape: {shape!r}")


__all__ = [
    "AXIAL_DIRECTIONS",
    "Coordinate",
    "GridLayout",
    "HexagonLayout",
    "OffsetLayout",
    "Point",
    "axial_distance",
    "axial_round",
    "axial_to_offset",
    "axial_to_pixel",
    "hex_corners",
    "hexagon_coords",
    "layout_for",
    "offset_to_axial",
    "pixel_to_axial",
]
