"""Elemental interaction rules.

Resolves the consequences of a stone change across the whole board:
- Fire next to Fire: nothing happens.
- An active Fire clears every Water chain with a member next to it, the
  whole chain at once.
- An active Fire clears every Earth stone directly next to it.
- A Fire with a Void neighbor is neutralized and clears nothing.

The whole board is evaluated on every change because extending a chain can
connect a distant part of it to an existing Fire. Clearing Water or Earth
never creates or activates a Fire, so one evaluation reaches the fixed point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from godaigo.engine.connectivity import active_fires, water_components
from godaigo.models.grid import StoneLayout
from godaigo.models.hex import HexCoord
from godaigo.models.stone import StoneType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumedChain:
    """A Water chain cleared by the Fire at ``fire``."""
    fire: HexCoord
    members: frozenset[HexCoord]


@dataclass(frozen=True)
class BurnedStone:
    """An Earth stone cleared by the Fire at ``fire``."""
    fire: HexCoord
    target: HexCoord
    stone: StoneType


@dataclass
class Resolution:
    """Outcome of one interaction pass.

    Attributes:
        origin: The hex whose change triggered the pass.
        chains: Water chains to clear.
        burned: Single stones to clear.
    """

    origin: HexCoord
    chains: list[ConsumedChain] = field(default_factory=list)
    burned: list[BurnedStone] = field(default_factory=list)

    @property
    def cleared(self) -> dict[HexCoord, StoneType]:
        """Every hex that loses its stone, with the stone it held."""
        result: dict[HexCoord, StoneType] = {}
        for chain in self.chains:
            for coord in chain.members:
                result[coord] = StoneType.WATER
        for burn in self.burned:
            result[burn.target] = burn.stone
        return result

    @property
    def is_empty(self) -> bool:
        return not self.chains and not self.burned


def _sort_key(coord: HexCoord) -> tuple[int, int]:
    return coord.q, coord.r


def resolve_interactions(layout: StoneLayout, origin: HexCoord) -> Resolution:
    """Decide which stones an active Fire destroys on the current board.

    Pure: the layout is not modified. Apply ``Resolution.cleared`` to the
    grid to commit the result.

    Args:
        layout: Stone snapshot taken after the triggering change.
        origin: Hex that changed (recorded on the result).

    Returns:
        The chains and stones to clear; empty when nothing qualifies.
    """
    resolution = Resolution(origin=origin)
    fires = sorted(active_fires(layout), key=_sort_key)
    if not fires:
        return resolution
    fire_set = set(fires)

    for component in water_components(layout):
        culprit = _adjacent_fire(component, fire_set)
        if culprit is not None:
            resolution.chains.append(ConsumedChain(fire=culprit, members=component))

    burned_targets: set[HexCoord] = set()
    for fire in fires:
        for nb in fire.neighbors():
            if layout.get(nb) is StoneType.EARTH and nb not in burned_targets:
                burned_targets.add(nb)
                resolution.burned.append(BurnedStone(fire=fire, target=nb, stone=StoneType.EARTH))

    if not resolution.is_empty:
        log.debug("Interactions at %r: %d chain(s), %d burned stone(s)",
                  origin, len(resolution.chains), len(resolution.burned))
    return resolution


def _adjacent_fire(component: frozenset[HexCoord], fires: set[HexCoord]) -> HexCoord | None:
    """First active Fire (in coordinate order) touching the chain."""
    touching = {nb for coord in component for nb in coord.neighbors()} & fires
    if not touching:
        return None
    return min(touching, key=_sort_key)
