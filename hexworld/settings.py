from __future__ import annotations

"""Configuration dataclasses for map generation."""

from dataclasses import dataclass, field
from typing import Union


class ConfigurationError(ValueError):
    """Raised when generation parameters describe an impossible map."""


@dataclass(frozen=True)
class HexagonShape:
    """Hexagon-shaped map: every axial coordinate within ``radius`` steps of the origin."""

    radius: int = 63


@dataclass(frozen=True)
class RectangleShape:
    """Rectangular map of offset rows; ``odd_rows_shifted`` selects odd-r over even-r."""

    cols: int = 40
    rows: int = 30
    odd_rows_shifted: bool = True


MapShape = Union[HexagonShape, RectangleShape]


@dataclass(frozen=True)
class NoiseSettings:
    """
    Noise field parameters.

    ``frequency`` is how many noise periods the whole map spans. Elevation and
    moisture samples are multiplied by their ``*_scale`` before clamping to
    [-1, 1]. The auxiliary field feeds rules with auxiliary bounds, such as the
    ruin rule of the ``ruined`` profile; setting ``auxiliary_octaves`` to 0 skips it.
    """

    elevation_octaves: int = 5
    moisture_octaves: int = 4
    auxiliary_octaves: int = 3
    frequency: float = 3.5
    elevation_scale: float = 1.5
    moisture_scale: float = 1.5
    moisture_offset: float = 100.0
    auxiliary_offset: float = 200.0


@dataclass
class MapSettings:
    seed: int = 0
    shape: MapShape = field(default_factory=HexagonShape)
    noise: NoiseSettings = field(default_factory=NoiseSettings)
    profile: str = "wilderness"
    hex_size: float = 38.0
    poi_count: int = 40
    no_fog: bool = False
    # Corner polygons are drawn this many pixels inside the hex so borders do not overlap
    corner_inset: float = 1.0

    def validate(self) -> None:
        """
        Check every parameter that would make generation impossible.

        Raises:
            ConfigurationError: describing the first offending value.
        """
        from .biomes import BIOME_PROFILES

        shape = self.shape
        if isinstance(shape, HexagonShape):
            if shape.radius < 0:
                raise ConfigurationError(f"radius must be >= 0, got {shape.radius}")
        elif isinstance(shape, RectangleShape):
            if shape.cols <= 0 or shape.rows <= 0:
                raise ConfigurationError(
                    f"cols and rows must be positive, got {shape.cols}x{shape.rows}"
                )
        else:
            raise ConfigurationError(f"Unsupported map shape: {shape!r}")

        if self.hex_size <= 0:
            raise ConfigurationError(f"hex_size must be positive, got {self.hex_size}")
        if self.corner_inset < 0 or self.corner_inset >= self.hex_size:
            raise ConfigurationError(
                f"corner_inset must lie in [0, hex_size), got {self.corner_inset}"
            )
        if self.profile not in BIOME_PROFILES:
            valid = ", ".join(sorted(BIOME_PROFILES))
            raise ConfigurationError(f"Unknown biome profile '{self.profile}'. Valid values: {valid}")

        noise = self.noise
        if noise.elevation_octaves < 1 or noise.moisture_octaves < 1:
            raise ConfigurationError("elevation and moisture noise need at least one octave")
        if noise.auxiliary_octaves < 0:
            raise ConfigurationError("auxiliary_octaves cannot be negative")
        if noise.frequency <= 0:
            raise ConfigurationError(f"frequency must be positive, got {noise.frequency}")


__all__ = [
    "ConfigurationError",
    "HexagonShape",
    "MapSettings",
    "MapShape",
    "NoiseSettings",
    "RectangleShape",
]
