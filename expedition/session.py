from __future__ import annotations

"""
session.py

One player's exploration of a generated map. The session owns its map, runs
moves through the fog-of-war state machine, keeps a travel ledger and notifies
observers. Renderers read tiles and call :meth:`Expedition.move_to`; they never
change tile state themselves.
"""

import logging
from typing import List, Optional

from hexworld.hex import Coordinate, Tile
from hexworld.settings import HexagonShape, MapSettings
from hexworld.visibility import MoveError, can_move_to, move_to
from hexworld.world import HexMap, generate_map

from . import settings
from .events import EventBus, MoveRejected, PlayerMoved, VisibilityChanged

logger = logging.getLogger("expedition.Expedition")
logger.addHandler(logging.NullHandler())


def default_map_settings(seed: Optional[int] = None) -> MapSettings:
    """Map settings built from the constants in :mod:`expedition.settings`."""
    return MapSettings(
        seed=settings.MAP_SEED if seed is None else seed,
        shape=HexagonShape(radius=settings.HEX_MAP_RADIUS),
        profile=settings.BIOME_PROFILE,
        hex_size=float(settings.HEX_SIZE),
        poi_count=settings.POI_COUNT,
        no_fog=settings.DEBUG_NO_FOG,
    )


class Expedition:
    """
    Session state for a single explorer.

    Attributes:
        map: The generated HexMap this session explores.
        events: Bus on which PlayerMoved, VisibilityChanged and MoveRejected are published.
        path: Every position occupied so far, starting with home.
        travel_cost: Sum of the traversal cost of every tile entered.
    """

    def __init__(self, hex_map: HexMap, events: Optional[EventBus] = None) -> None:
        self.map = hex_map
        self.events = events if events is not None else EventBus()
        self.path: List[Coordinate] = [hex_map.player_position]
        self.travel_cost = 0

    @classmethod
    def start(cls, map_settings: Optional[MapSettings] = None, **kwargs) -> "Expedition":
        """Generate a map and open a session on it."""
        hex_map = generate_map(map_settings or default_map_settings(), **kwargs)
        return cls(hex_map)

    # Convenience accessors -------------------------------------------------
    @property
    def position(self) -> Coordinate:
        return self.map.player_position

    @property
    def home(self) -> Coordinate:
        return self.map.original_settlement

    @property
    def at_home(self) -> bool:
        return self.position == self.home

    @property
    def steps(self) -> int:
        return len(self.path) - 1

    @property
    def distance_km(self) -> int:
        return self.steps * settings.HEX_KM

    def can_move_to(self, target: Coordinate) -> bool:
        """True if ``target`` is a neighbour of the current position."""
        return can_move_to(self.map, target)

    def reachable(self) -> List[Tile]:
        """Tiles the player can step onto from the current position."""
        return self.map.neighbors(self.position)

    def move_to(self, target: Coordinate) -> bool:
        """
        Step onto ``target``. Returns False and leaves all state untouched when the
        move is not allowed.
        """
        try:
            outcome = move_to(self.map, target)
        except MoveError as e:
            logger.debug("Rejected move to %s: %s", e.target, e)
            self.events.publish(MoveRejected(target=e.target, reason=str(e)))
            return False

        tile = self.map.player_tile
        cost = self.map.profile.traversal_cost(tile.biome)
        self.travel_cost += cost
        self.path.append(outcome.destination)

        if outcome.changed:
            self.events.publish(VisibilityChanged(coords=outcome.changed))
        self.events.publish(PlayerMoved(origin=outcome.origin, destination=outcome.destination, cost=cost))
        return True

    def __repr__(self) -> str:
        return f"Expedition(position={self.position}, steps={self.steps}, travel_cost={self.travel_cost})"


__all__ = ["Expedition", "default_map_settings"]
