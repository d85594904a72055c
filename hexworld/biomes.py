from __future__ import annotations

"""
Biome tags, display data and the two interchangeable classification policies.

``ThresholdCascade`` walks an ordered list of :class:`BiomeRule` objects and
returns the first match. Rule ranges overlap on purpose, so the order of the
list is part of its meaning. ``TieredLookup`` buckets elevation and moisture
into low/mid/high and reads a 3×3 table.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from .rng import SeededRandom

Color = Tuple[int, int, int, int]


class Biome(Enum):
    # wilderness profile
    FLAT_PLAINS = "flat_plains"
    ROLLING_HILLS = "rolling_hills"
    STEEP_MOUNTAINS = "steep_mountains"
    LOWLANDS = "lowlands"
    VALLEYS = "valleys"
    PLATEAUS = "plateaus"
    VOLCANIC = "volcanic"
    # ruined profile
    OVERGROWN_RUINS = "overgrown_ruins"
    # structured / expedition profiles
    SCRUBLAND = "scrubland"
    HIGHLAND = "highland"
    ALPINE_FOREST = "alpine_forest"
    WASTELAND = "wasteland"
    GRASSLAND = "grassland"
    FOREST = "forest"
    SALT_FLAT = "salt_flat"
    WETLANDS = "wetlands"
    DEEP_WATER = "deep_water"


@dataclass(frozen=True)
class BiomeInfo:
    name: str
    color: Color
    border: Color
    symbol: str


BIOME_INFO: Dict[Biome, BiomeInfo] = {
    Biome.FLAT_PLAINS: BiomeInfo("Flat Plains", (154, 171, 122, 255), (170, 187, 138, 255), "·"),
    Biome.ROLLING_HILLS: BiomeInfo("Rolling Hills", (107, 142, 78, 255), (138, 170, 110, 255), "∿"),
    Biome.STEEP_MOUNTAINS: BiomeInfo("Steep Mountains", (90, 90, 106, 255), (122, 122, 138, 255), "▲"),
    Biome.LOWLANDS: BiomeInfo("Lowlands", (74, 122, 90, 255), (106, 154, 122, 255), "∼"),
    Biome.VALLEYS: BiomeInfo("Valleys", (61, 122, 74, 255), (90, 154, 106, 255), "⌒"),
    Biome.PLATEAUS: BiomeInfo("Plateaus", (138, 122, 90, 255), (170, 154, 122, 255), "▬"),
    Biome.VOLCANIC: BiomeInfo("Volcanic", (90, 48, 40, 255), (122, 69, 58, 255), "◇"),
    Biome.OVERGROWN_RUINS: BiomeInfo("Overgrown Ruins", (96, 84, 112, 255), (128, 116, 146, 255), "⌂"),
    Biome.SCRUBLAND: BiomeInfo("Scrubland", (122, 110, 90, 255), (154, 142, 122, 255), "○"),
    Biome.HIGHLAND: BiomeInfo("Highland", (106, 98, 88, 255), (138, 130, 120, 255), "▲"),
    Biome.ALPINE_FOREST: BiomeInfo("Alpine Forest", (45, 74, 72, 255), (61, 106, 104, 255), "♦"),
    Biome.WASTELAND: BiomeInfo("Wasteland", (184, 149, 106, 255), (200, 168, 122, 255), "×"),
    Biome.GRASSLAND: BiomeInfo("Grassland", (107, 122, 90, 255), (138, 154, 122, 255), "·"),
    Biome.FOREST: BiomeInfo("Forest", (61, 92, 74, 255), (90, 124, 106, 255), "♦"),
    Biome.SALT_FLAT: BiomeInfo("Salt Flat", (196, 190, 178, 255), (216, 210, 200, 255), "▢"),
    Biome.WETLANDS: BiomeInfo("Wetlands", (90, 96, 72, 255), (122, 128, 88, 255), "∼"),
    Biome.DEEP_WATER: BiomeInfo("Deep Water", (26, 61, 58, 255), (42, 93, 88, 255), "≈"),
}

BIOME_DESCRIPTIONS: Dict[Biome, List[str]] = {
    Biome.FLAT_PLAINS: [
        "Open grassland; horizon unbroken. Wind patterns stable.",
        "Former cropland; soil recovery ongoing. Nomadic herds observed.",
        "Wide sight lines; minimal cover. Seasonal burns maintain diversity.",
    ],
    Biome.ROLLING_HILLS: [
        "Gentle slopes; drainage networks intact. Mixed grass and scrub.",
        "Crest and trough topography; microclimates varied.",
        "Livestock corridors; soil stable on moderate grades.",
    ],
    Biome.STEEP_MOUNTAINS: [
        "Exposed rock; snowline visible. Sparse vegetation at elevation.",
        "Vertical relief; avalanche risk. Strategic overlooks.",
        "Alpine conditions; seasonal access only.",
    ],
    Biome.LOWLANDS: [
        "Low elevation; drainage slow. Wet-season pooling observed.",
        "Floodplain adjacency; sediment-rich. Reed and sedge dominant.",
        "Water table near surface; cultivation possible with drainage.",
    ],
    Biome.VALLEYS: [
        "Sheltered topography; moisture retained. Riparian vegetation present.",
        "Between higher ground; seasonal streams. Fertile substrate.",
        "Corridor for movement; mixed woodland and meadow.",
    ],
    Biome.PLATEAUS: [
        "Elevated flat terrain; tableland. Wind-scoured, dry summers.",
        "Ancient uplift; erosion-resistant cap. Grazing and limited crops.",
        "Wide views; defensible margins. Scattered outcrops.",
    ],
    Biome.VOLCANIC: [
        "Thermal signature; lava flows or cinder. Sparse colonization.",
        "Volcanic soil where weathered; fertility patchy. Fumarole activity.",
        "Hazard zone; unstable substrate. Mineral deposits detected.",
    ],
    Biome.OVERGROWN_RUINS: [
        "Collapsed street grid under scrub; foundations traceable from orbit.",
        "Vine-bound towers; salvage routes worn into the rubble.",
        "Buried transit lines; ground unstable, metal signatures strong.",
    ],
    Biome.SCRUBLAND: [
        "Arid slope; drought-adapted scrub, sparse canopy.",
        "Thin soil; rock outcrops, seasonal flash runoff.",
        "Low biomass; grazing pressure, fire-adapted seed bank.",
    ],
    Biome.HIGHLAND: [
        "Elevated plateau; cold drainage, wind exposure.",
        "Mixed grass and stone; short growing season.",
        "Upland pasture; limited timber, strategic sight lines.",
    ],
    Biome.ALPINE_FOREST: [
        "High moisture at elevation; conifer and hardy deciduous.",
        "Snowmelt-fed; dense understory, fungal networks intact.",
        "Canopy edge; bird migration corridor, cold-air pooling.",
    ],
    Biome.WASTELAND: [
        "Warm ochre substrate; low water retention, high albedo.",
        "Sparse colonization; dust storms, thermal variance.",
        "Saline patches; halophyte clusters, abandoned infrastructure.",
    ],
    Biome.GRASSLAND: [
        "Mid-elevation prairie; seasonal rains, fire cycle.",
        "Deep soil; grazing guilds, seed dispersal functional.",
        "Open canopy; raptor perch, ungulate migration route.",
    ],
    Biome.FOREST: [
        "Closed canopy; moisture retained, humus accumulation.",
        "Mixed deciduous; coppice recovery, edge habitat.",
        "Riparian adjacency; amphibian diversity, downed wood.",
    ],
    Biome.SALT_FLAT: [
        "Pale crust; evaporite deposits, hypersaline lens.",
        "Minimal vegetation; brine pools, wind-scoured surface.",
        "Pre-collapse extraction scars; substrate compaction.",
    ],
    Biome.WETLANDS: [
        "Murky olive-green; emergent reed, standing water.",
        "Anoxic substrate; methane flux, peat accumulation.",
        "Amphibian breeding; waterfowl stopover, silt deposition.",
    ],
    Biome.DEEP_WATER: [
        "Dark teal; pelagic zone, low light penetration.",
        "Thermal stratification; cold bottom layer, nutrient upwell.",
        "Submerged structure; salvage hazard, chemosynthetic margin.",
    ],
}


def describe_biome(biome: Biome, rng: SeededRandom) -> str:
    """Pick one flavour line for ``biome`` using the caller's stream."""
    options = BIOME_DESCRIPTIONS.get(biome)
    return rng.choice(options) if options else ""


# ─────────────────────────────────────────────────────────────────────────────
# == THRESHOLD CASCADE ==

def _above(value: Optional[float], bound: Optional[float]) -> bool:
    return bound is None or (value is not None and value > bound)


def _below(value: Optional[float], bound: Optional[float]) -> bool:
    return bound is None or (value is not None and value < bound)


@dataclass(frozen=True)
class BiomeRule:
    """
    One step of a threshold cascade.

    All bounds are exclusive and ``None`` means unbounded. A rule with auxiliary
    bounds never matches a tile sampled without the auxiliary field. When
    ``chance`` is set, a single draw is taken from the tile stream after the
    bounds have matched, and the rule only applies if the draw is below it.
    """

    biome: Biome
    min_elevation: Optional[float] = None
    max_elevation: Optional[float] = None
    min_moisture: Optional[float] = None
    max_moisture: Optional[float] = None
    min_auxiliary: Optional[float] = None
    max_auxiliary: Optional[float] = None
    chance: Optional[float] = None

    def matches(
        self,
        elevation: float,
        moisture: float,
        auxiliary: Optional[float],
        rng: SeededRandom,
    ) -> bool:
        if not (
            _above(elevation, self.min_elevation)
            and _below(elevation, self.max_elevation)
            and _above(moisture, self.min_moisture)
            and _below(moisture, self.max_moisture)
            and _above(auxiliary, self.min_auxiliary)
            and _below(auxiliary, self.max_auxiliary)
        ):
            return False
        if self.chance is not None:
            return rng() < self.chance
        return True


@dataclass(frozen=True)
class ThresholdCascade:
    """Ordered rules; the first match wins, ``fallback`` applies when none do."""

    rules: Tuple[BiomeRule, ...]
    fallback: Biome

    def classify(
        self,
        elevation: float,
        moisture: float,
        auxiliary: Optional[float],
        rng: SeededRandom,
    ) -> Biome:
        for rule in self.rules:
            if rule.matches(elevation, moisture, auxiliary, rng):
                return rule.biome
        return self.fallback

    @property
    def biomes(self) -> Tuple[Biome, ...]:
        seen: List[Biome] = []
        for biome in [r.biome for r in self.rules] + [self.fallback]:
            if biome not in seen:
                seen.append(biome)
        return tuple(seen)


WILDERNESS_RULES: Tuple[BiomeRule, ...] = (
    BiomeRule(Biome.VOLCANIC, chance=0.015),
    BiomeRule(Biome.LOWLANDS, max_elevation=-0.2),
    BiomeRule(Biome.VALLEYS, max_elevation=0.05, min_moisture=0.2),
    BiomeRule(Biome.LOWLANDS, max_elevation=0.05),
    BiomeRule(Biome.STEEP_MOUNTAINS, min_elevation=0.55),
    BiomeRule(Biome.PLATEAUS, min_elevation=0.4),
    BiomeRule(Biome.ROLLING_HILLS, min_elevation=0.22),
    BiomeRule(Biome.FLAT_PLAINS, min_elevation=0.08),
    BiomeRule(Biome.VALLEYS, min_moisture=0.3),
)

# Ruins surface where the auxiliary field peaks on ground above the lowlands
RUIN_RULE = BiomeRule(Biome.OVERGROWN_RUINS, min_elevation=0.05, max_elevation=0.55, min_auxiliary=0.72)

RUINED_RULES: Tuple[BiomeRule, ...] = (WILDERNESS_RULES[0], RUIN_RULE) + WILDERNESS_RULES[1:]


# ─────────────────────────────────────────────────────────────────────────────
# == TIERED LOOKUP ==

class Tier(Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


TIER_THRESHOLD = 0.34


def tier_of(value: float) -> Tier:
    """Bucket a [-1, 1] sample: below -0.34 low, up to and including 0.34 mid, else high."""
    if value < -TIER_THRESHOLD:
        return Tier.LOW
    if value <= TIER_THRESHOLD:
        return Tier.MID
    return Tier.HIGH


#                    low moisture       mid moisture      high moisture
# high elevation     Scrubland          Highland          Alpine Forest
# mid elevation      Wasteland          Grassland         Forest
# low elevation      Salt Flat          Wetlands          Deep Water
TIERED_TABLE: Dict[Tuple[Tier, Tier], Biome] = {
    (Tier.HIGH, Tier.LOW): Biome.SCRUBLAND,
    (Tier.HIGH, Tier.MID): Biome.HIGHLAND,
    (Tier.HIGH, Tier.HIGH): Biome.ALPINE_FOREST,
    (Tier.MID, Tier.LOW): Biome.WASTELAND,
    (Tier.MID, Tier.MID): Biome.GRASSLAND,
    (Tier.MID, Tier.HIGH): Biome.FOREST,
    (Tier.LOW, Tier.LOW): Biome.SALT_FLAT,
    (Tier.LOW, Tier.MID): Biome.WETLANDS,
    (Tier.LOW, Tier.HIGH): Biome.DEEP_WATER,
}


@dataclass(frozen=True)
class TieredLookup:
    """
    3×3 elevation/moisture table. ``rare`` optionally names a biome and the
    probability with which it overrides the table, drawn from the tile stream.
    """

    table: Mapping[Tuple[Tier, Tier], Biome] = field(default_factory=lambda: dict(TIERED_TABLE))
    rare: Optional[Tuple[Biome, float]] = None

    def classify(
        self,
        elevation: float,
        moisture: float,
        auxiliary: Optional[float],
        rng: SeededRandom,
    ) -> Biome:
        if self.rare is not None:
            biome, chance = self.rare
            if rng() < chance:
                return biome
        return self.table[(tier_of(elevation), tier_of(moisture))]

    @property
    def biomes(self) -> Tuple[Biome, ...]:
        values = list(self.table.values())
        if self.rare is not None:
            values.append(self.rare[0])
        return tuple(dict.fromkeys(values))


# ─────────────────────────────────────────────────────────────────────────────
# == PROFILES ==

@dataclass(frozen=True)
class BiomeProfile:
    """A named classification policy plus optional per-biome traversal cost."""

    name: str
    policy: ThresholdCascade | TieredLookup
    costs: Optional[Mapping[Biome, int]] = None

    @property
    def biomes(self) -> Tuple[Biome, ...]:
        return self.policy.biomes

    def classify(
        self,
        elevation: float,
        moisture: float,
        auxiliary: Optional[float],
        rng: SeededRandom,
    ) -> Biome:
        return self.policy.classify(elevation, moisture, auxiliary, rng)

    def traversal_cost(self, biome: Biome) -> int:
        """Cost of entering a tile of ``biome``; 1 when the profile carries no costs."""
        if self.costs is None:
            return 1
        return self.costs.get(biome, 1)


EXPEDITION_COSTS: Dict[Biome, int] = {
    Biome.GRASSLAND: 1,
    Biome.SALT_FLAT: 1,
    Biome.WASTELAND: 2,
    Biome.SCRUBLAND: 2,
    Biome.FOREST: 2,
    Biome.HIGHLAND: 2,
    Biome.WETLANDS: 3,
    Biome.ALPINE_FOREST: 3,
    Biome.DEEP_WATER: 4,
}

BIOME_PROFILES: Dict[str, BiomeProfile] = {
    "wilderness": BiomeProfile(
        name="wilderness",
        policy=ThresholdCascade(rules=WILDERNESS_RULES, fallback=Biome.LOWLANDS),
    ),
    "structured": BiomeProfile(name="structured", policy=TieredLookup()),
    "expedition": BiomeProfile(name="expedition", policy=TieredLookup(), costs=EXPEDITION_COSTS),
    "ruined": BiomeProfile(
        name="ruined",
        policy=ThresholdCascade(rules=RUINED_RULES, fallback=Biome.LOWLANDS),
    ),
}


def register_biome_profile(profile: BiomeProfile) -> None:
    """Register or replace a profile so it can be selected by name in ``MapSettings``."""
    BIOME_PROFILES[profile.name] = profile


def get_profile(name: str) -> BiomeProfile:
    """Look up a profile by name. Raises KeyError for unknown names."""
    return BIOME_PROFILES[name]


def classify(
    elevation: float,
    moisture: float,
    auxiliary: Optional[float],
    rng: SeededRandom,
    profile: str | BiomeProfile = "wilderness",
) -> Biome:
    """Classify one sample with a named or explicit profile."""
    if isinstance(profile, str):
        profile = get_profile(profile)
    return profile.classify(elevation, moisture, auxiliary, rng)


__all__ = [
    "BIOME_DESCRIPTIONS",
    "BIOME_INFO",
    "BIOME_PROFILES",
    "Biome",
    "BiomeInfo",
    "BiomeProfile",
    "BiomeRule",
    "EXPEDITION_COSTS",
    "RUINED_RULES",
    "RUIN_RULE",
    "TIERED_TABLE",
    "ThresholdCascade",
    "Tier",
    "TieredLookup",
    "WILDERNESS_RULES",
    "classify",
    "describe_biome",
    "get_profile",
    "register_biome_profile",
    "tier_of",
]
