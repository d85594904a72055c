from __future__ import annotations

"""Data model for a single map tile."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .biomes import Biome
from .pois import PoiType

Coordinate = Tuple[int, int]
Point = Tuple[float, float]


class Visibility(Enum):
    """Fog-of-war state. Transitions only ever move towards EXPLORED."""

    UNEXPLORED = "unexplored"
    VISIBLE = "visible"
    EXPLORED = "explored"

    @property
    def rank(self) -> int:
        return _VISIBILITY_RANK[self]


_VISIBILITY_RANK: Dict[Visibility, int] = {
    Visibility.UNEXPLORED: 0,
    Visibility.VISIBLE: 1,
    Visibility.EXPLORED: 2,
}


@dataclass
class Tile:
    """
    Represents a single hex tile of a generated map.

    Core Attributes:
      q, r: Axial coordinate, unique within the map.
      x, y: Pixel centre, fixed at generation.
      corners: Six polygon vertices around (x, y).
      elevation, moisture: Noise samples clamped to [-1, 1].
      auxiliary: Auxiliary noise in [0, 1], or None when that field is disabled.
      biome: Classified Biome.
      poi: Optional point of interest.
      visibility: Fog-of-war state; the only field that changes after generation.
      col, row: Offset coordinate on rectangular maps, None on hexagon maps.
    """

    q: int
    r: int
    x: float = 0.0
    y: float = 0.0
    corners: List[Point] = field(default_factory=list)
    elevation: float = 0.0
    moisture: float = 0.0
    auxiliary: Optional[float] = None
    biome: Biome = Biome.FLAT_PLAINS
    poi: Optional[PoiType] = None
    visibility: Visibility = Visibility.UNEXPLORED
    col: Optional[int] = None
    row: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.biome, Biome):
            raise TypeError(f"biome must be a Biome, not {type(self.biome)}")
        if not -1.0 <= self.elevation <= 1.0 or not -1.0 <= self.moisture <= 1.0:
            raise ValueError("elevation and moisture must lie in [-1, 1]")

    @property
    def coord(self) -> Coordinate:
        return (self.q, self.r)

    @property
    def is_settlement(self) -> bool:
        return self.poi is PoiType.SETTLEMENT

    def __repr__(self) -> str:
        base = f"Tile(coord={self.coord}, biome={self.biome.value}, visibility={self.visibility.value}"
        if self.poi is not None:
            base += f", poi={self.poi.name}"
        return base + ")"

    def to_json(self) -> Dict[str, Union[str, float, int, None, Dict[str, int]]]:
        """
        Serializes the generated attributes to a JSON-friendly dict.
        """
        return {
            "coord": {"q": self.q, "r": self.r},
            "x": self.x,
            "y": self.y,
            "elevation": self.elevation,
            "moisture": self.moisture,
            "auxiliary": self.auxiliary,
            "biome": self.biome.value,
            "poi": self.poi.value if self.poi is not None else None,
            "visibility": self.visibility.value,
        }


__all__ = ["Coordinate", "Tile", "Visibility"]
