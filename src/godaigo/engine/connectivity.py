"""Connectivity over the stone layout.

Provides the shared breadth-first traversal used by interaction resolution,
movement costs and dirty-region expansion:
- Same-type connected components (Water chains)
- Neighbor queries (Void neutralization, active Wind)
- Chain mimicry (which element a Water chain imitates)
- Water-to-Water connections for the rendering boundary

Every function is pure: it takes a ``StoneLayout`` snapshot and keeps no
traversal state between calls. Only hexes present in the layout (revealed
and occupied) are traversable, so absent and unrevealed hexes act as
boundaries.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from godaigo.models.grid import StoneLayout
from godaigo.models.hex import HexCoord
from godaigo.models.stone import StoneType

# Movement-cost mimicry: Void > Wind(active) > Fire > Earth
COST_MIMIC_PRIORITY: tuple[StoneType, ...] = (
    StoneType.VOID,
    StoneType.WIND,
    StoneType.FIRE,
    StoneType.EARTH,
)

# Chain indicator drawn on Water stones: Earth > Fire > Wind(active) > Void
INDICATOR_MIMIC_PRIORITY: tuple[StoneType, ...] = (
    StoneType.EARTH,
    StoneType.FIRE,
    StoneType.WIND,
    StoneType.VOID,
)


def is_water(stone: StoneType) -> bool:
    return stone is StoneType.WATER


# -- Components ------------------------------------------------------------

def connected_component(
    layout: StoneLayout,
    start: HexCoord,
    same: Callable[[StoneType], bool],
) -> frozenset[HexCoord]:
    """Collect the maximal set of hexes connected to ``start`` through stones matching ``same``.

    Args:
        layout: Stone snapshot.
        start: First hex of the component.
        same: Predicate a stone must satisfy to belong to the component.

    Returns:
        The component members, or an empty set if ``start`` itself does not
        match.
    """
    stone = layout.get(start)
    if stone is None or not same(stone):
        return frozenset()

    queue: deque[HexCoord] = deque([start])
    visited: set[HexCoord] = {start}
    while queue:
        current = queue.popleft()
        for nb in current.neighbors():
            if nb in visited:
                continue
            nb_stone = layout.get(nb)
            if nb_stone is not None and same(nb_stone):
                visited.add(nb)
                queue.append(nb)
    return frozenset(visited)


def water_component(layout: StoneLayout, start: HexCoord) -> frozenset[HexCoord]:
    """The Water chain containing ``start`` (empty if ``start`` holds no Water)."""
    return connected_component(layout, start, is_water)


def water_components(layout: StoneLayout) -> list[frozenset[HexCoord]]:
    """Every Water chain on the board."""
    seen: set[HexCoord] = set()
    components: list[frozenset[HexCoord]] = []
    for coord, stone in layout.items():
        if stone is StoneType.WATER and coord not in seen:
            component = water_component(layout, coord)
            seen |= component
            components.append(component)
    return components


def water_components_touching(
    layout: StoneLayout, coords: Iterable[HexCoord]
) -> list[frozenset[HexCoord]]:
    """Water chains that contain, or are adjacent to, any of ``coords``."""
    seeds: set[HexCoord] = set()
    for coord in coords:
        seeds.add(coord)
        seeds.update(coord.neighbors())

    seen: set[HexCoord] = set()
    components: list[frozenset[HexCoord]] = []
    for seed in seeds:
        if seed in seen or layout.get(seed) is not StoneType.WATER:
            continue
        component = water_component(layout, seed)
        seen |= component
        components.append(component)
    return components


def fringe(members: Iterable[HexCoord]) -> set[HexCoord]:
    """Coordinates adjacent to ``members`` that are not members themselves."""
    members = set(members)
    result: set[HexCoord] = set()
    for coord in members:
        result.update(coord.neighbors())
    return result - members


# -- Neighbor rules --------------------------------------------------------

def has_adjacent(layout: StoneLayout, coord: HexCoord, stone: StoneType) -> bool:
    """True if any direct neighbor of ``coord`` holds ``stone``."""
    return any(layout.get(nb) is stone for nb in coord.neighbors())


def is_void_adjacent(layout: StoneLayout, coord: HexCoord) -> bool:
    return has_adjacent(layout, coord, StoneType.VOID)


def is_active_wind(layout: StoneLayout, coord: HexCoord) -> bool:
    """A Wind stone with no Void next to it."""
    return layout.get(coord) is StoneType.WIND and not is_void_adjacent(layout, coord)


def is_active_fire(layout: StoneLayout, coord: HexCoord) -> bool:
    """A Fire stone whose aura is not neutralized by an adjacent Void."""
    return layout.get(coord) is StoneType.FIRE and not is_void_adjacent(layout, coord)


def active_fires(layout: StoneLayout) -> list[HexCoord]:
    return [c for c, s in layout.items() if s is StoneType.FIRE and not is_void_adjacent(layout, c)]


# -- Mimicry ---------------------------------------------------------------

def mimic_candidates(layout: StoneLayout, component: Iterable[HexCoord]) -> set[StoneType]:
    """Non-Water elements next to any member of a Water chain.

    Wind only qualifies while active.
    """
    found: set[StoneType] = set()
    for coord in fringe(component):
        stone = layout.get(coord)
        if stone is None or stone is StoneType.WATER:
            continue
        if stone is StoneType.WIND and not is_active_wind(layout, coord):
            continue
        found.add(stone)
    return found


def mimicked_type(
    layout: StoneLayout,
    component: Iterable[HexCoord],
    priority: Sequence[StoneType] = COST_MIMIC_PRIORITY,
) -> Optional[StoneType]:
    """The single element a Water chain imitates, picked by ``priority``.

    Returns None when no qualifying element touches the chain.
    """
    candidates = mimic_candidates(layout, component)
    for stone in priority:
        if stone in candidates:
            return stone
    return None


def water_mimic_type(
    layout: StoneLayout,
    coord: HexCoord,
    priority: Sequence[StoneType] = COST_MIMIC_PRIORITY,
) -> Optional[StoneType]:
    """Mimicked element of the chain holding ``coord`` (None if not Water)."""
    component = water_component(layout, coord)
    if not component:
        return None
    return mimicked_type(layout, component, priority)


def adjacent_mimic_type(
    layout: StoneLayout,
    coord: HexCoord,
    priority: Sequence[StoneType] = COST_MIMIC_PRIORITY,
) -> Optional[StoneType]:
    """Element a single Water hex imitates from its own neighbors only.

    Prices the hex itself; chain-wide mimicry is used for wind zones and
    the indicator.
    """
    if layout.get(coord) is not StoneType.WATER:
        return None
    return mimicked_type(layout, [coord], priority)


def indicator_mimic_type(layout: StoneLayout, coord: HexCoord) -> Optional[StoneType]:
    """Mimicked element shown on a Water stone's indicator."""
    return water_mimic_type(layout, coord, INDICATOR_MIMIC_PRIORITY)


def is_wind_mimicking_water(layout: StoneLayout, coord: HexCoord) -> bool:
    return water_mimic_type(layout, coord) is StoneType.WIND


# -- Rendering boundary ----------------------------------------------------

@dataclass(frozen=True)
class WaterConnection:
    """A link between two adjacent Water stones."""

    start: HexCoord
    end: HexCoord
    mimic: Optional[StoneType]


def water_connections(layout: StoneLayout) -> list[WaterConnection]:
    """Every adjacent Water pair once, tagged with its chain's indicator mimic type."""
    connections: list[WaterConnection] = []
    for component in water_components(layout):
        mimic = mimicked_type(layout, component, INDICATOR_MIMIC_PRIORITY)
        for coord in sorted(component, key=lambda c: (c.q, c.r)):
            for nb in coord.neighbors():
                if nb in component and (nb.q, nb.r) > (coord.q, coord.r):
                    connections.append(WaterConnection(coord, nb, mimic))
    return connections
