"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs roughly east
- r axis runs roughly south-east
- s = -q - r is the implicit third cube coordinate

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: Column coordinate (east axis).
        r: Row coordinate (south-east axis).
    """

    q: int
    r: int

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Arithmetic ------------------------------------------------------

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: HexCoord) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates.

        No bounds filtering: callers check existence against the grid.
        """
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in DIRECTIONS]

    def is_adjacent(self, other: HexCoord) -> bool:
        return self.distance_to(other) == 1

    def disk(self, radius: int) -> set[HexCoord]:
        """Return all hexes within `radius` steps (inclusive)."""
        results: set[HexCoord] = set()
        for dq in range(-radius, radius + 1):
            for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
                results.add(HexCoord(self.q + dq, self.r + dr))
        return results

    # -- Serialization ---------------------------------------------------

    @property
    def key(self) -> str:
        """Tile key in ``"q,r"`` form."""
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> HexCoord:
        q, r = key.split(",")
        return cls(int(q), int(r))

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


ORIGIN = HexCoord(0, 0)

# The 6 axial direction vectors (flat-top layout)
DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),   # E
    (1, -1),  # NE
    (0, -1),  # NW
    (-1, 0),  # W
    (-1, 1),  # SW
    (0, 1),   # SE
]
