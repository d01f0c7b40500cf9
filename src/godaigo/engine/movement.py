"""Movement cost model.

Costs are derived from the current stone layout on every query and never
cached, so they always reflect the latest placements, removals and reveals.

Base cost of entering a hex:
    empty 1, Void 1, Wind 0, Earth and Fire impassable,
    Water by the stones directly next to it (Void 1, active Wind 0, Fire or
    Earth impassable, none of these 2).

Wind zones override the base cost for a single step: moving between two
wind-zone hexes costs 0, entering or leaving a wind zone costs 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from godaigo.engine.connectivity import (
    adjacent_mimic_type,
    is_active_wind,
    is_wind_mimicking_water,
)
from godaigo.models.grid import HexGrid, StoneLayout
from godaigo.models.hex import HexCoord
from godaigo.models.stone import StoneType, UnknownStoneType
from godaigo.util import constants

Cost = Union[int, float]


@dataclass(frozen=True)
class MovableHex:
    """A neighbor the player can currently step onto."""
    coord: HexCoord
    cost: int


class MovementCostModel:
    """Per-hex and per-step movement costs over a grid.

    Args:
        grid: The board to price moves on.
        water_cost: Cost of a Water hex with nothing to imitate next to it.
    """

    def __init__(self, grid: HexGrid, water_cost: int = constants.WATER_COST) -> None:
        self._grid = grid
        self._water_cost = water_cost

    # -- Base cost -------------------------------------------------------

    def base_cost(self, coord: HexCoord, layout: Optional[StoneLayout] = None) -> Cost:
        """Cost of entering ``coord`` ignoring wind zones."""
        if not self._grid.is_valid(coord):
            return constants.IMPASSABLE
        if layout is None:
            layout = self._grid.layout()
        return self._stone_cost(layout, coord, layout.get(coord))

    def _stone_cost(self, layout: StoneLayout, coord: HexCoord, stone: Optional[StoneType]) -> Cost:
        if stone is None:
            return constants.EMPTY_COST
        if stone is StoneType.EARTH or stone is StoneType.FIRE:
            return constants.IMPASSABLE
        if stone is StoneType.WIND:
            return constants.WIND_COST
        if stone is StoneType.VOID:
            return constants.VOID_COST
        if stone is StoneType.WATER:
            mimic = adjacent_mimic_type(layout, coord)
            if mimic is None:
                return self._water_cost
            return self._stone_cost(layout, coord, mimic)
        raise UnknownStoneType(f"No movement cost for {stone!r}")

    # -- Wind zones ------------------------------------------------------

    def in_wind_zone(self, coord: HexCoord, layout: Optional[StoneLayout] = None) -> bool:
        """True if ``coord`` holds or touches an active Wind or a Wind-mimicking Water."""
        if layout is None:
            layout = self._grid.layout()
        if _is_wind_source(layout, coord):
            return True
        return any(_is_wind_source(layout, nb) for nb in coord.neighbors())

    # -- Transitions -----------------------------------------------------

    def cost_from(self, origin: HexCoord, destination: HexCoord) -> Cost:
        """Cost of stepping from ``origin`` to ``destination``.

        Returns ``IMPASSABLE`` if the destination is absent or unrevealed.
        """
        if not self._grid.is_valid(destination):
            return constants.IMPASSABLE
        layout = self._grid.layout()
        from_zone = self.in_wind_zone(origin, layout)
        to_zone = self.in_wind_zone(destination, layout)
        if from_zone and to_zone:
            return constants.WIND_ZONE_COST
        if from_zone or to_zone:
            return constants.WIND_ZONE_EDGE_COST
        return self.base_cost(destination, layout)

    def movable_hexes(self, player: HexCoord, budget: int) -> list[MovableHex]:
        """Valid neighbors of ``player`` with a finite cost within ``budget``.

        Neighbors are returned in direction order.
        """
        results: list[MovableHex] = []
        for nb in player.neighbors():
            if not self._grid.is_valid(nb):
                continue
            cost = self.cost_from(player, nb)
            if cost != constants.IMPASSABLE and cost <= budget:
                results.append(MovableHex(coord=nb, cost=int(cost)))
        return results


def _is_wind_source(layout: StoneLayout, coord: HexCoord) -> bool:
    return is_active_wind(layout, coord) or is_wind_mimicking_water(layout, coord)
