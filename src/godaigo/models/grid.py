"""Hexagonal board model.

Holds every hex of a fixed-radius board around the origin, its stone
occupant and its fog-of-war flag. Hexes are created once and never removed;
only their state changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from godaigo.models.hex import ORIGIN, HexCoord
from godaigo.models.stone import StoneType

StoneLayout = Mapping[HexCoord, StoneType]
"""Read-only view of the stones on revealed hexes (empty hexes are absent)."""


@dataclass
class Hex:
    """A single board cell.

    Attributes:
        coord: Axial position (unique key).
        stone: Occupying stone, or None when empty.
        revealed: Fog-of-war flag. Only ever flips from False to True.
    """

    coord: HexCoord
    stone: Optional[StoneType] = None
    revealed: bool = False


@dataclass
class HexGrid:
    """The board as a fixed hexagon of ``radius`` rings around the origin.

    Attributes:
        radius: Board radius in hex steps.
        hexes: All hexes by coordinate. Keys are never added or removed after
            construction.
    """

    radius: int
    hexes: dict[HexCoord, Hex] = field(default_factory=dict)

    @classmethod
    def build(cls, radius: int, reveal_extent: int) -> HexGrid:
        """Create an empty board.

        A hex starts revealed when both ``|q|`` and ``|r|`` are within
        ``reveal_extent``.
        """
        grid = cls(radius=radius)
        for coord in ORIGIN.disk(radius):
            revealed = abs(coord.q) <= reveal_extent and abs(coord.r) <= reveal_extent
            grid.hexes[coord] = Hex(coord=coord, revealed=revealed)
        return grid

    # -- Queries ---------------------------------------------------------

    def __contains__(self, coord: object) -> bool:
        return coord in self.hexes

    def __iter__(self) -> Iterator[Hex]:
        return iter(self.hexes.values())

    def __len__(self) -> int:
        return len(self.hexes)

    def get(self, coord: HexCoord) -> Optional[Hex]:
        return self.hexes.get(coord)

    def is_valid(self, coord: HexCoord) -> bool:
        """True iff the hex exists and is revealed."""
        h = self.hexes.get(coord)
        return h is not None and h.revealed

    def occupant(self, coord: HexCoord) -> Optional[StoneType]:
        h = self.hexes.get(coord)
        return h.stone if h is not None else None

    def revealed_coords(self) -> list[HexCoord]:
        return [h.coord for h in self.hexes.values() if h.revealed]

    def layout(self) -> StoneLayout:
        """Snapshot of the stones on revealed hexes.

        Unrevealed hexes are left out so that every traversal treats them as
        boundaries.
        """
        return MappingProxyType({
            h.coord: h.stone for h in self.hexes.values()
            if h.revealed and h.stone is not None
        })

    # -- Mutation --------------------------------------------------------

    def put(self, coord: HexCoord, stone: Optional[StoneType]) -> Optional[StoneType]:
        """Replace the occupant of an existing hex and return the previous one.

        Raises:
            KeyError: If ``coord`` is not on the board.
        """
        h = self.hexes[coord]
        previous = h.stone
        h.stone = stone
        return previous

    def reveal(self, coord: HexCoord) -> bool:
        """Reveal a hex. Returns True only if it was hidden before."""
        h = self.hexes.get(coord)
        if h is None or h.revealed:
            return False
        h.revealed = True
        return True
