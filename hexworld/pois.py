from __future__ import annotations

"""Points of interest placed on top of biome tiles; a tile carries at most one."""

from enum import Enum
from typing import Dict, List

from .biomes import BiomeInfo
from .rng import SeededRandom


class PoiType(Enum):
    SETTLEMENT = "settlement"
    RUINS = "ruins"


POI_INFO: Dict[PoiType, BiomeInfo] = {
    PoiType.SETTLEMENT: BiomeInfo("Settlement", (200, 136, 42, 255), (232, 184, 74, 255), "◉"),
    PoiType.RUINS: BiomeInfo("Ruins", (74, 58, 106, 255), (106, 90, 154, 255), "▲"),
}

# Placement order; the first entry is the type forced onto the first shuffled slot
POI_TYPES: List[PoiType] = [PoiType.SETTLEMENT, PoiType.RUINS]

POI_DESCRIPTIONS: Dict[PoiType, List[str]] = {
    PoiType.SETTLEMENT: [
        "Active tribal settlement; population estimated 200-800.",
        "Cultivated perimeter; smoke signals suggest ritual activity.",
        "Resource extraction radius limited; orbital threshold not exceeded.",
    ],
    PoiType.RUINS: [
        "Pre-collapse megastructure remnants; structural collapse risk.",
        "Salvage activity detected; scavenger tribe territory.",
        "Archaeological stratigraphy: several civilizational layers visible.",
    ],
}


def describe_poi(poi: PoiType, rng: SeededRandom) -> str:
    options = POI_DESCRIPTIONS.get(poi)
    return rng.choice(options) if options else ""


__all__ = ["POI_DESCRIPTIONS", "POI_INFO", "POI_TYPES", "PoiType", "describe_poi"]
