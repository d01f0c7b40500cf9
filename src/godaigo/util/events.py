"""Typed event bus: decoupled notification of board changes.

The board service emits these after each mutation has fully resolved, so
handlers always observe a consistent board.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Type

from godaigo.models.hex import HexCoord
from godaigo.models.stone import StoneType

T = TypeVar("T")


# -- Board events --------------------------------------------------------

@dataclass(frozen=True)
class StonePlaced:
    """A stone was set on a hex (possibly replacing another)."""
    coord: HexCoord
    stone: StoneType
    previous: Optional[StoneType]


@dataclass(frozen=True)
class StoneRemoved:
    """A hex was explicitly cleared."""
    coord: HexCoord
    previous: Optional[StoneType]


@dataclass(frozen=True)
class HexRevealed:
    """A hex left the fog of war."""
    coord: HexCoord


# -- Interaction events --------------------------------------------------

@dataclass(frozen=True)
class WaterChainConsumed:
    """A whole Water chain touching an active Fire was cleared."""
    fire: HexCoord
    members: frozenset[HexCoord]


@dataclass(frozen=True)
class StoneBurned:
    """A stone next to an active Fire was cleared."""
    fire: HexCoord
    target: HexCoord
    stone: StoneType


# -- Player events -------------------------------------------------------

@dataclass(frozen=True)
class PlayerMoved:
    """The player token moved one hex."""
    origin: HexCoord
    destination: HexCoord
    cost: int


@dataclass(frozen=True)
class TurnEnded:
    """Action points were restored for a new turn."""
    action_points: int


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(HexRevealed, lambda e: print(e.coord))
        bus.emit(HexRevealed(coord=HexCoord(0, 1)))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in self._handlers.get(type(event), []):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
