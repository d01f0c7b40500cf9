"""Stone pool model: the player's action points and stone reserve.

The pool is passed explicitly into movement and placement calls; the
engine never keeps its own copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from godaigo.models.stone import StoneType

if TYPE_CHECKING:
    from godaigo.loaders.game_config_loader import GameConfig


def _zero_counts() -> dict[StoneType, int]:
    return {stone: 0 for stone in StoneType}


@dataclass
class StonePool:
    """Player resources.

    Attributes:
        action_points: Movement points for the current turn.
        stones: Stones in hand per type.
        capacity: Maximum stones per type (used by :meth:`reset`).
    """

    action_points: int = 0
    stones: dict[StoneType, int] = field(default_factory=_zero_counts)
    capacity: dict[StoneType, int] = field(default_factory=_zero_counts)

    @classmethod
    def from_config(cls, config: GameConfig) -> StonePool:
        return cls(
            action_points=config.action_points_per_turn,
            stones={s: config.starting_stones.get(s, 0) for s in StoneType},
            capacity={s: config.stone_capacity.get(s, 0) for s in StoneType},
        )

    # -- Movement budget -------------------------------------------------

    @property
    def effective_budget(self) -> int:
        """Action points plus Void stones, which convert 1:1 into movement."""
        return self.action_points + self.stones.get(StoneType.VOID, 0)

    def pay_movement(self, cost: int) -> None:
        """Spend ``cost`` from action points first, then from the Void reserve.

        Raises:
            ValueError: If the effective budget is too small.
        """
        if cost > self.effective_budget:
            raise ValueError(f"Cannot pay {cost} from budget {self.effective_budget}")
        from_ap = min(self.action_points, cost)
        self.action_points -= from_ap
        remainder = cost - from_ap
        if remainder > 0:
            self.stones[StoneType.VOID] -= remainder

    def restore_action_points(self, amount: int) -> None:
        self.action_points = amount

    # -- Stones ----------------------------------------------------------

    def count(self, stone: StoneType) -> int:
        return self.stones.get(stone, 0)

    def take(self, stone: StoneType) -> bool:
        """Remove one stone from the pool. Returns False if none are left."""
        if self.count(stone) <= 0:
            return False
        self.stones[stone] -= 1
        return True

    def reset(self) -> None:
        """Refill every stone type to capacity."""
        for stone in StoneType:
            self.stones[stone] = self.capacity.get(stone, 0)
