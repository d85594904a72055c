from __future__ import annotations

"""Notifications published by an exploration session for renderers and other observers."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Optional, Tuple, Type

from hexworld.hex import Coordinate

logger = logging.getLogger("expedition.events")
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class Event:
    """Base class for session notifications."""


@dataclass(frozen=True)
class PlayerMoved(Event):
    origin: Coordinate
    destination: Coordinate
    cost: int


@dataclass(frozen=True)
class VisibilityChanged(Event):
    coords: Tuple[Coordinate, ...]


@dataclass(frozen=True)
class MoveRejected(Event):
    target: Coordinate
    reason: str


Handler = Callable[[Event], None]


class EventBus:
    """
    Minimal synchronous publish/subscribe.

    Handlers subscribed to a type receive that type and its subclasses; handlers
    subscribed with ``event_type=None`` receive everything. Handlers under the same key run in
    subscription order and exceptions propagate to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Optional[Type[Event]], List[Handler]] = defaultdict(list)

    def subscribe(self, handler: Handler, event_type: Optional[Type[Event]] = None) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, handler: Handler, event_type: Optional[Type[Event]] = None) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: Event) -> None:
        logger.debug("Publishing %s", event)
        for event_type, handlers in list(self._handlers.items()):
            if event_type is None or isinstance(event, event_type):
                for handler in list(handlers):
                    handler(event)


__all__ = ["Event", "EventBus", "MoveRejected", "PlayerMoved", "VisibilityChanged"]
