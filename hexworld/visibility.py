from __future__ import annotations

"""
Fog-of-war state machine.

Tiles move ``UNEXPLORED -> VISIBLE -> EXPLORED`` and never back. The only
transition after generation is :func:`move_to`, which re-validates adjacency
itself instead of trusting the caller.
"""

import logging
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from .geometry import axial_distance
from .hex import Coordinate, Tile, Visibility

if TYPE_CHECKING:
    from .world import HexMap

logger = logging.getLogger("hexworld.visibility")
logger.addHandler(logging.NullHandler())

# Radius around home that starts explored, and the ring beyond it that starts visible
EXPLORED_RADIUS = 1
VISIBLE_RADIUS = 2


class MoveError(ValueError):
    """Base class for rejected moves. No state changes when one is raised."""

    def __init__(self, target: Coordinate, message: str) -> None:
        super().__init__(message)
        self.target = target


class OutOfBoundsMove(MoveError):
    """Raised when the target coordinate is not part of the map."""


class IllegalMove(MoveError):
    """Raised when the target is not a neighbour of the player, or is the player tile itself."""


@dataclass(frozen=True)
class MoveOutcome:
    origin: Coordinate
    destination: Coordinate
    # Every coordinate whose visibility changed, destination first when it changed
    changed: Tuple[Coordinate, ...]


def promote(tile: Tile, state: Visibility) -> bool:
    """Raise ``tile`` to ``state`` if that is an improvement. Returns True if it changed."""
    if state.rank > tile.visibility.rank:
        tile.visibility = state
        return True
    return False


def reveal_initial(hex_map: "HexMap", no_fog: bool = False) -> None:
    """
    Set the starting fog around the player position.

    The home tile and its neighbours start explored and the ring at distance two
    starts visible. With ``no_fog`` every tile starts explored.
    """
    home = hex_map.player_position
    for tile in hex_map.tiles:
        if no_fog:
            tile.visibility = Visibility.EXPLORED
            continue
        dist = axial_distance(home, tile.coord)
        if dist <= EXPLORED_RADIUS:
            tile.visibility = Visibility.EXPLORED
        elif dist == VISIBLE_RADIUS:
            tile.visibility = Visibility.VISIBLE
        else:
            tile.visibility = Visibility.UNEXPLORED


def _as_coordinate(target: object) -> Optional[Coordinate]:
    """Return ``target`` as an integer ``(q, r)`` pair, or None if it is not one."""
    try:
        q, r = target  # type: ignore[misc]
        return (operator.index(q), operator.index(r))
    except (TypeError, ValueError):
        return None


def validate_move(hex_map: "HexMap", target: Coordinate) -> Tile:
    """
    Return the target tile if the player may step onto it.

    Raises:
        OutOfBoundsMove: if ``target`` is not an integer ``(q, r)`` pair on the map.
        IllegalMove: if ``target`` is the current position or not adjacent to it.
    """
    coord = _as_coordinate(target)
    tile = hex_map.get(coord) if coord is not None else None
    if tile is None:
        raise OutOfBoundsMove(target, f"{target!r} is not on the map")
    current = hex_map.player_position
    if coord == current:
        raise IllegalMove(coord, f"{coord} is the current position")
    if axial_distance(current, coord) != 1:
        raise IllegalMove(coord, f"{coord} is not adjacent to {current}")
    return tile


def can_move_to(hex_map: "HexMap", target: Coordinate) -> bool:
    try:
        validate_move(hex_map, target)
    except MoveError:
        return False
    return True


def move_to(hex_map: "HexMap", target: Coordinate) -> MoveOutcome:
    """
    Move the player one step and update the fog.

    The target becomes explored, the player pointer moves onto it, and every
    unexplored neighbour of the target becomes visible. Tiles already visible
    or explored keep their state.

    Raises:
        MoveError: the move is rejected and the map is left untouched.
    """
    tile = validate_move(hex_map, target)
    origin = hex_map.player_position

    changed: List[Coordinate] = []
    if promote(tile, Visibility.EXPLORED):
        changed.append(tile.coord)
    hex_map.player_position = tile.coord
    for neighbor in hex_map.neighbors(tile.coord):
        if neighbor.visibility is Visibility.UNEXPLORED:
            promote(neighbor, Visibility.VISIBLE)
            changed.append(neighbor.coord)

    logger.debug("Player moved %s -> %s, %d tiles revealed", origin, tile.coord, len(changed))
    return MoveOutcome(origin=origin, destination=tile.coord, changed=tuple(changed))


__all__ = [
    "EXPLORED_RADIUS",
    "IllegalMove",
    "MoveError",
    "MoveOutcome",
    "OutOfBoundsMove",
    "VISIBLE_RADIUS",
    "can_move_to",
    "move_to",
    "promote",
    "reveal_initial",
    "validate_move",
]
