from __future__ import annotations

from .biomes import (
    BIOME_INFO,
    BIOME_PROFILES,
    Biome,
    BiomeProfile,
    BiomeRule,
    ThresholdCascade,
    TieredLookup,
    classify,
    register_biome_profile,
)
from .geometry import (
    HexagonLayout,
    OffsetLayout,
    axial_distance,
    axial_to_pixel,
    hex_corners,
    hexagon_coords,
    offset_to_axial,
)
from .hex import Tile, Visibility
from .noise import NoiseField, build_noise
from .pois import POI_TYPES, PoiType
from .rng import SeededRandom, tile_rng
from .settings import (
    ConfigurationError,
    HexagonShape,
    MapSettings,
    NoiseSettings,
    RectangleShape,
)
from .visibility import IllegalMove, MoveError, MoveOutcome, OutOfBoundsMove, can_move_to, move_to
from .world import GenerationAborted, HexMap, generate, generate_map

__all__ = [
    "BIOME_INFO",
    "BIOME_PROFILES",
    "Biome",
    "BiomeProfile",
    "BiomeRule",
    "ConfigurationError",
    "GenerationAborted",
    "HexMap",
    "HexagonLayout",
    "HexagonShape",
    "IllegalMove",
    "MapSettings",
    "MoveError",
    "MoveOutcome",
    "NoiseField",
    "NoiseSettings",
    "OffsetLayout",
    "OutOfBoundsMove",
    "POI_TYPES",
    "PoiType",
    "RectangleShape",
    "SeededRandom",
    "ThresholdCascade",
    "TieredLookup",
    "Tile",
    "Visibility",
    "axial_distance",
    "axial_to_pixel",
    "build_noise",
    "can_move_to",
    "classify",
    "generate",
    "generate_map",
    "hex_corners",
    "hexagon_coords",
    "move_to",
    "offset_to_axial",
    "register_biome_profile",
    "tile_rng",
]
