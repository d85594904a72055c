from __future__ import annotations

"""
world.py

Map generation: noise fields, biome classification, point-of-interest
placement, home selection and the starting fog of war.

Everything is derived from the seed. Noise fields are built from the seed
offset by fixed constants, each tile's random decisions come from a stream
seeded by its own position, and POI placement uses its own stream, so the same
settings always produce the same map.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Optional

from .biomes import BiomeProfile, get_profile
from .geometry import Coordinate, GridLayout, axial_distance, hex_corners, layout_for
from .hex import Tile, Visibility
from .noise import NoiseField
from .pois import POI_TYPES, PoiType
from .rng import SeededRandom, tile_rng
from .settings import MapSettings, MapShape, NoiseSettings
from .visibility import reveal_initial

logger = logging.getLogger("hexworld.world")
logger.addHandler(logging.NullHandler())

ELEVATION_SEED_OFFSET = 1
MOISTURE_SEED_OFFSET = 3
AUXILIARY_SEED_OFFSET = 5
POI_SEED_OFFSET = 100

# Number of tiles generated between two polls of the abort hook
ABORT_CHECK_INTERVAL = 1024


class GenerationAborted(RuntimeError):
    """Raised when the abort hook passed to :func:`generate_map` asks to stop."""


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


# ─────────────────────────────────────────────────────────────────────────────
# == MAP CONTAINER ==

class HexMap:
    """
    A generated map and the exploration pointer that moves across it.

    Tiles keep their generation order in ``tiles`` and are indexed by axial
    coordinate. After generation only tile visibility and ``player_position``
    change, and only through :mod:`hexworld.visibility`.
    """

    __slots__ = (
        "settings",
        "layout",
        "profile",
        "tiles",
        "_index",
        "settlements",
        "original_settlement",
        "player_position",
    )

    def __init__(
        self,
        settings: MapSettings,
        layout: GridLayout,
        profile: BiomeProfile,
        tiles: List[Tile],
    ) -> None:
        self.settings = settings
        self.layout = layout
        self.profile = profile
        self.tiles: List[Tile] = tiles
        self._index: Dict[Coordinate, Tile] = {t.coord: t for t in tiles}
        if len(self._index) != len(tiles):
            raise ValueError("duplicate tile coordinates")
        self.settlements: List[Tile] = []
        self.original_settlement: Coordinate = layout.center()
        self.player_position: Coordinate = self.original_settlement

    @property
    def seed(self) -> int:
        return self.settings.seed

    @property
    def center(self) -> Coordinate:
        return self.layout.center()

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __contains__(self, coord: Coordinate) -> bool:
        return tuple(coord) in self._index

    def get(self, coord: Coordinate) -> Optional[Tile]:
        """Return the tile at ``coord``, or None if it is not on the map."""
        return self._index.get(tuple(coord))

    def neighbors(self, coord: Coordinate) -> List[Tile]:
        """Up to six adjacent tiles; positions off the map are omitted."""
        return [self._index[c] for c in self.layout.neighbors(tuple(coord)) if c in self._index]

    def distance(self, a: Coordinate, b: Coordinate) -> int:
        return axial_distance(a, b)

    @property
    def player_tile(self) -> Tile:
        return self._index[self.player_position]

    @property
    def home_tile(self) -> Tile:
        return self._index[self.original_settlement]

    def tiles_with(self, visibility: Visibility) -> List[Tile]:
        return [t for t in self.tiles if t.visibility is visibility]

    def snapshot(self) -> Dict[str, object]:
        """Plain-data copy of the full map state, used to compare maps and detect changes."""
        return {
            "tiles": [t.to_json() for t in self.tiles],
            "player_position": self.player_position,
            "original_settlement": self.original_settlement,
        }

    def __repr__(self) -> str:
        return (
            f"HexMap(seed={self.seed}, layout={self.layout!r}, tiles={len(self.tiles)}, "
            f"profile={self.profile.name}, player={self.player_position})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# == GENERATION STEPS ==

class _NoiseStack:
    """The elevation, moisture and optional auxiliary fields of one map."""

    def __init__(self, seed: int, noise: NoiseSettings) -> None:
        self.settings = noise
        self.elevation = NoiseField(SeededRandom(seed + ELEVATION_SEED_OFFSET), noise.elevation_octaves)
        self.moisture = NoiseField(SeededRandom(seed + MOISTURE_SEED_OFFSET), noise.moisture_octaves)
        self.auxiliary: Optional[NoiseField] = None
        if noise.auxiliary_octaves > 0:
            self.auxiliary = NoiseField(
                SeededRandom(seed + AUXILIARY_SEED_OFFSET), noise.auxiliary_octaves
            )


def _generate_tile(
    coord: Coordinate,
    layout: GridLayout,
    fields: _NoiseStack,
    profile: BiomeProfile,
    settings: MapSettings,
) -> Tile:
    q, r = coord
    noise = fields.settings
    nx, ny = layout.noise_position(coord, noise.frequency)

    elevation = _clamp(fields.elevation(nx, ny) * noise.elevation_scale, -1.0, 1.0)
    moisture = _clamp(
        fields.moisture(nx + noise.moisture_offset, ny + noise.moisture_offset) * noise.moisture_scale,
        -1.0,
        1.0,
    )
    auxiliary: Optional[float] = None
    if fields.auxiliary is not None:
        raw = fields.auxiliary(nx + noise.auxiliary_offset, ny + noise.auxiliary_offset)
        auxiliary = _clamp(raw * 0.5 + 0.5, 0.0, 1.0)

    biome = profile.classify(elevation, moisture, auxiliary, tile_rng(q, r, settings.seed))

    x, y = layout.pixel(coord, settings.hex_size)
    offset = layout.offset(coord)
    return Tile(
        q=q,
        r=r,
        x=x,
        y=y,
        corners=hex_corners(x, y, settings.hex_size - settings.corner_inset),
        elevation=elevation,
        moisture=moisture,
        auxiliary=auxiliary,
        biome=biome,
        col=offset[0] if offset else None,
        row=offset[1] if offset else None,
    )


def place_pois(tiles: List[Tile], poi_count: int, seed: int) -> int:
    """
    Tag ``poi_count`` tiles (clamped to ``[1, len(tiles)]``) with points of interest.

    Tile indices are shuffled with a stream seeded from ``seed + 100``. The first
    shuffled tile is always a settlement; the rest draw their type from
    ``POI_TYPES`` with the same stream. Returns the number of tiles tagged.
    """
    if not tiles:
        return 0
    count = max(1, min(poi_count, len(tiles)))
    if count != poi_count:
        logger.debug("poi_count %d clamped to %d", poi_count, count)
    rng = SeededRandom(seed + POI_SEED_OFFSET)
    indices = rng.shuffle_indices(len(tiles))
    for slot in range(count):
        tile = tiles[indices[slot]]
        tile.poi = PoiType.SETTLEMENT if slot == 0 else rng.choice(POI_TYPES)
    return count


def select_home(tiles: List[Tile], center: Coordinate) -> Coordinate:
    """
    Pick the settlement closest to ``center``; ties go to the earliest tile.
    Without settlements, fall back to the centre tile, then the first tile.
    """
    best: Optional[Tile] = None
    best_dist = math.inf
    for tile in tiles:
        if not tile.is_settlement:
            continue
        dist = axial_distance(center, tile.coord)
        if dist < best_dist:
            best, best_dist = tile, dist
    if best is not None:
        return best.coord
    for tile in tiles:
        if tile.coord == center:
            return tile.coord
    return tiles[0].coord


def generate_map(
    settings: MapSettings,
    *,
    should_abort: Optional[Callable[[], bool]] = None,
) -> HexMap:
    """
    Build a complete map from ``settings``.

    Args:
        settings: Seed, shape, noise, biome profile and POI parameters.
        should_abort: Optional hook polled between batches of tiles; returning
            True stops generation.

    Raises:
        ConfigurationError: if the settings describe an impossible map. Raised
            before any noise field is built.
        GenerationAborted: if ``should_abort`` asked to stop.
    """
    settings.validate()
    layout = layout_for(settings.shape)
    profile = get_profile(settings.profile)
    fields = _NoiseStack(settings.seed, settings.noise)

    tiles: List[Tile] = []
    for index, coord in enumerate(layout.coords()):
        if should_abort is not None and index % ABORT_CHECK_INTERVAL == 0 and should_abort():
            logger.info("Generation aborted after %d tiles", index)
            raise GenerationAborted(f"aborted after {index} tiles")
        tiles.append(_generate_tile(coord, layout, fields, profile, settings))

    hex_map = HexMap(settings, layout, profile, tiles)
    place_pois(tiles, settings.poi_count, settings.seed)
    hex_map.settlements = [t for t in tiles if t.is_settlement]

    home = select_home(tiles, layout.center())
    hex_map.original_settlement = home
    hex_map.player_position = home
    reveal_initial(hex_map, settings.no_fog)

    logger.info(
        "Generated %d tiles (seed=%d, profile=%s), %d settlements, home at %s",
        len(tiles),
        settings.seed,
        profile.name,
        len(hex_map.settlements),
        home,
    )
    return hex_map


def generate(
    seed: int,
    shape: MapShape,
    noise: Optional[NoiseSettings] = None,
    poi_count: int = 40,
    no_fog: bool = False,
    **kwargs,
) -> HexMap:
    """
    Positional front end to :func:`generate_map`.

    Extra keyword arguments (``profile``, ``hex_size``, ``corner_inset``) go to
    :class:`MapSettings`; ``should_abort`` is passed through.
    """
    should_abort = kwargs.pop("should_abort", None)
    settings = MapSettings(
        seed=seed,
        shape=shape,
        noise=noise if noise is not None else NoiseSettings(),
        poi_count=poi_count,
        no_fog=no_fog,
        **kwargs,
    )
    return generate_map(settings, should_abort=should_abort)


__all__ = [
    "ABORT_CHECK_INTERVAL",
    "GenerationAborted",
    "HexMap",
    "generate",
    "generate_map",
    "place_pois",
    "select_home",
]
