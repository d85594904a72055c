"""Colours used by the map viewer, independent of any drawing backend."""

from __future__ import annotations

from typing import Tuple

from hexworld.biomes import BIOME_INFO
from hexworld.hex import Tile, Visibility
from hexworld.rng import tile_rng

Color = Tuple[int, int, int, int]

UNEXPLORED_FILL: Color = (10, 8, 5, 255)
UNEXPLORED_BORDER: Color = (26, 21, 16, 77)
SETTLEMENT_GLOW: Color = (232, 184, 74, 46)
PLAYER_MARKER: Color = (255, 215, 128, 255)
MOVE_HIGHLIGHT: Color = (232, 184, 74, 230)
SELECTED_OUTLINE: Color = (255, 215, 128, 255)


def shade_color(color: Color, factor: float) -> Color:
    """Scale the RGB channels of ``color`` by ``factor``, capped at 255; alpha is kept."""
    r, g, b, a = color
    return (
        min(255, int(r * factor)),
        min(255, int(g * factor)),
        min(255, int(b * factor)),
        a,
    )


def with_alpha(color: Color, alpha: float) -> Color:
    return (color[0], color[1], color[2], int(max(0.0, min(1.0, alpha)) * 255))


def tile_shade(tile: Tile, seed: int) -> float:
    """Per-tile brightness jitter in [0.85, 1.15), stable for a given seed."""
    return 0.85 + tile_rng(tile.q, tile.r, seed)() * 0.3


def tile_colors(tile: Tile, seed: int) -> Tuple[Color, Color]:
    """
    Fill and border colours for ``tile`` under fog of war. Visible tiles are
    drawn dimmed, unexplored tiles as plain darkness.
    """
    if tile.visibility is Visibility.UNEXPLORED:
        return UNEXPLORED_FILL, UNEXPLORED_BORDER
    info = BIOME_INFO[tile.biome]
    shade = tile_shade(tile, seed)
    if tile.visibility is Visibility.VISIBLE:
        return shade_color(info.color, shade * 0.4), with_alpha(info.border, 0.25)
    return shade_color(info.color, shade), with_alpha(info.border, 0.5)


__all__ = [
    "MOVE_HIGHLIGHT",
    "PLAYER_MARKER",
    "SELECTED_OUTLINE",
    "SETTLEMENT_GLOW",
    "UNEXPLORED_BORDER",
    "UNEXPLORED_FILL",
    "shade_color",
    "tile_colors",
    "tile_shade",
    "with_alpha",
]
