from __future__ import annotations

from .describe import TileReport, describe_tile
from .events import EventBus, MoveRejected, PlayerMoved, VisibilityChanged
from .session import Expedition, default_map_settings

__all__ = [
    "EventBus",
    "Expedition",
    "MoveRejected",
    "PlayerMoved",
    "TileReport",
    "VisibilityChanged",
    "default_map_settings",
    "describe_tile",
]
