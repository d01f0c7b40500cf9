"""Stone model: the five elemental stone types and their display registry.

Resolution logic works on ``StoneType`` identity alone. ``STONE_REGISTRY``
is only consulted at the rendering boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class UnknownStoneType(ValueError):
    """A stone identifier outside the five elements was supplied."""


class StoneType(Enum):
    """The closed set of elemental stones."""

    EARTH = "earth"
    WATER = "water"
    FIRE = "fire"
    WIND = "wind"
    VOID = "void"

    @classmethod
    def parse(cls, value: Any) -> StoneType:
        """Resolve a stone type from an enum member or a case-insensitive name.

        Raises:
            UnknownStoneType: If ``value`` names no element.
        """
        if isinstance(value, StoneType):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnknownStoneType(f"Unknown stone type: {value!r}")

    def __str__(self) -> str:
        return self.value


def check_occupant(value: Any) -> Optional[StoneType]:
    """Validate a hex occupant: a ``StoneType`` or ``None`` for empty.

    Unlike :meth:`StoneType.parse` this does not accept names; the engine
    only takes typed values.
    """
    if value is None or isinstance(value, StoneType):
        return value
    raise UnknownStoneType(f"Not a stone type: {value!r}")


@dataclass(frozen=True)
class StoneInfo:
    """Display data for a stone type."""

    name: str
    color: str
    symbol: str


STONE_REGISTRY: dict[StoneType, StoneInfo] = {
    StoneType.EARTH: StoneInfo("Earth", "#69d83a", "地"),
    StoneType.WATER: StoneInfo("Water", "#5894f4", "水"),
    StoneType.FIRE: StoneInfo("Fire", "#ed1b43", "火"),
    StoneType.WIND: StoneInfo("Wind", "#ffce00", "風"),
    StoneType.VOID: StoneInfo("Void", "#9458f4", "空"),
}
