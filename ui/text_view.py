"""Plain-text rendering of a map for terminals and logs."""

from __future__ import annotations

from typing import Dict, List, Tuple

from hexworld.biomes import BIOME_INFO
from hexworld.hex import Tile, Visibility
from hexworld.pois import POI_INFO
from hexworld.world import HexMap

PLAYER_GLYPH = "@"
VISIBLE_GLYPH = "?"
UNEXPLORED_GLYPH = " "


def tile_glyph(tile: Tile, hex_map: HexMap) -> str:
    if tile.coord == hex_map.player_position:
        return PLAYER_GLYPH
    if tile.visibility is Visibility.UNEXPLORED:
        return UNEXPLORED_GLYPH
    if tile.visibility is Visibility.VISIBLE:
        return VISIBLE_GLYPH
    if tile.poi is not None:
        return POI_INFO[tile.poi].symbol
    return BIOME_INFO[tile.biome].symbol


def render_text(hex_map: HexMap) -> str:
    """
    Draw the map one character per hex, each row shifted half a hex so that
    neighbours stay adjacent on screen. Trailing spaces are stripped.
    """
    cells: Dict[Tuple[int, int], str] = {}
    for tile in hex_map.tiles:
        # Doubled column keeps the half-hex row shift on integer columns
        cells[(tile.r, 2 * tile.q + tile.r)] = tile_glyph(tile, hex_map)

    min_col = min(c for _, c in cells)
    min_row = min(r for r, _ in cells)
    max_row = max(r for r, _ in cells)
    width = max(c for _, c in cells) - min_col + 1

    grid: List[List[str]] = [[" "] * width for _ in range(max_row - min_row + 1)]
    for (row, col), glyph in cells.items():
        grid[row - min_row][col - min_col] = glyph
    return "\n".join("".join(line).rstrip() for line in grid)


def legend(hex_map: HexMap) -> List[str]:
    """One ``symbol name`` line per biome of the map's profile, then POIs and markers."""
    rows = [f"{BIOME_INFO[b].symbol} {BIOME_INFO[b].name}" for b in hex_map.profile.biomes]
    rows += [f"{info.symbol} {info.name}" for info in POI_INFO.values()]
    rows.append(f"{PLAYER_GLYPH} You")
    rows.append(f"{VISIBLE_GLYPH} Scanned, not surveyed")
    return rows


__all__ = ["legend", "render_text", "tile_glyph"]
