from __future__ import annotations

"""Renderer-neutral text for the tile information panel."""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from hexworld.biomes import BIOME_INFO, describe_biome
from hexworld.hex import Coordinate, Visibility
from hexworld.pois import POI_INFO, PoiType, describe_poi
from hexworld.rng import SeededRandom, tile_seed

if TYPE_CHECKING:
    from .session import Expedition

# Keeps description picks apart from the biome stream of the same tile
DESCRIPTION_SEED_OFFSET = 0x5EED

HOME_TEXT = (
    "Your tribe's home. Generations have adapted to this land. The orbital AI "
    "watches, calculating, waiting for signs of unsustainable expansion."
)
CAMP_TEXT = (
    "Current expedition position. Your scouts have surveyed this area and "
    "established temporary camp."
)
SCAN_TEXT = "Biome identified via orbital scan."


@dataclass
class TileReport:
    title: str
    description: str
    stats: List[Tuple[str, str]] = field(default_factory=list)
    hint: Optional[str] = None
    can_move: bool = False


def percent(value: float) -> int:
    """Map a [-1, 1] sample to a 0-100 index, rounding halves up."""
    return int(math.floor((value + 1.0) / 2.0 * 100.0 + 0.5))


def describe_tile(expedition: "Expedition", coord: Coordinate) -> Optional[TileReport]:
    """
    Build the info panel for the tile at ``coord``.

    Unexplored tiles reveal nothing but whether they can be reached; visible
    tiles show their biome; explored tiles show the full survey. Returns None
    for coordinates that are not on the map.
    """
    hex_map = expedition.map
    tile = hex_map.get(coord)
    if tile is None:
        return None

    can_move = expedition.can_move_to(tile.coord)
    grid = ("Grid Position", f"{tile.q}, {tile.r}")

    if tile.visibility is Visibility.UNEXPLORED:
        if can_move:
            text = "Move here to explore."
        else:
            text = "This region is too far from your current position. Move closer to explore."
        return TileReport(title="Unexplored", description=text, can_move=can_move)

    biome = BIOME_INFO[tile.biome]
    if tile.visibility is Visibility.VISIBLE:
        status = "Move & Survey" if can_move else "Out of Range"
        return TileReport(
            title=biome.name,
            description=SCAN_TEXT,
            stats=[grid, ("Status", status)],
            can_move=can_move,
        )

    at_position = tile.coord == expedition.position
    rng = SeededRandom(tile_seed(tile.q, tile.r, hex_map.seed) + DESCRIPTION_SEED_OFFSET)
    if at_position and tile.coord == expedition.home:
        text = HOME_TEXT
    elif at_position:
        text = CAMP_TEXT
    elif tile.poi is not None:
        text = describe_poi(tile.poi, rng)
    else:
        text = describe_biome(tile.biome, rng)

    monitored = at_position or tile.poi is PoiType.SETTLEMENT
    stats = [
        grid,
        ("Elevation Index", f"{percent(tile.elevation)}%"),
        ("Moisture Index", f"{percent(tile.moisture)}%"),
    ]
    if tile.poi is not None:
        stats.append(("Point of Interest", POI_INFO[tile.poi].name))
    if hex_map.profile.costs is not None:
        stats.append(("Traversal Cost", str(hex_map.profile.traversal_cost(tile.biome))))
    stats.append(("AI Threat Level", "Monitoring" if monitored else "Nominal"))

    return TileReport(
        title="⬢ Current Position" if at_position else biome.name,
        description=text,
        stats=stats,
        hint="Move here" if can_move else None,
        can_move=can_move,
    )


__all__ = ["TileReport", "describe_tile", "percent"]
