"""Board service: the single entry point for every board mutation.

Responsibilities:
- Stone placement / removal with interaction resolution
- Dirty-region bookkeeping for the renderer
- Fog-of-war reveals
- Movement costs and the player's movable hexes
- Player moves, stone placement from the pool, turn end

Every mutation runs to completion (resolution, dirty marking, movable-hex
recompute, events) before returning. No rendering or UI code lives here;
the renderer is reached only through the dirty-region tracker.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional

from godaigo.engine.connectivity import WaterConnection, indicator_mimic_type, water_connections
from godaigo.engine.dirty_region import DirtyRegionTracker, affected_region
from godaigo.engine.interactions import Resolution, resolve_interactions
from godaigo.engine.movement import Cost, MovableHex, MovementCostModel
from godaigo.models.grid import HexGrid, StoneLayout
from godaigo.models.hex import ORIGIN, HexCoord
from godaigo.models.pool import StonePool
from godaigo.models.stone import StoneType, check_occupant
from godaigo.util import constants
from godaigo.util.events import (
    EventBus,
    HexRevealed,
    PlayerMoved,
    StoneBurned,
    StonePlaced,
    StoneRemoved,
    TurnEnded,
    WaterChainConsumed,
)

if TYPE_CHECKING:
    from godaigo.loaders.game_config_loader import GameConfig

log = logging.getLogger(__name__)


class Rejection(str, Enum):
    """Why a player command was refused. The value is the player-facing message."""

    INVALID_COORDINATE = "That hex is not on the revealed board."
    NOT_ADJACENT = "Cannot place stone on a hex that is not adjacent to you."
    OCCUPIED_TARGET = "Cannot place stone on an occupied hex."
    NO_STONES_LEFT = "No stones of that type left in your pool."
    NOT_MOVABLE = "Cannot move there."
    IMPASSABLE = "Hex is impassable."
    INSUFFICIENT_BUDGET = "Not enough AP."


class BoardService:
    """Service for all board state management.

    Args:
        grid: The board.
        pool: Player resources, consulted for the movement budget and
            placement eligibility.
        event_bus: Receives board, interaction and player events.
        tracker: Dirty-region tracker; one without a renderer is created
            when omitted.
        game_config: Rule constants (falls back to defaults).
        player: Starting player position; must be a revealed hex.
    """

    def __init__(self, grid: HexGrid, pool: StonePool, event_bus: EventBus,
                 tracker: DirtyRegionTracker | None = None,
                 game_config: GameConfig | None = None,
                 player: HexCoord = ORIGIN) -> None:
        if not grid.is_valid(player):
            raise ValueError(f"Player must start on a revealed hex, got {player!r}")
        self._grid = grid
        self._pool = pool
        self._events = event_bus
        self._tracker = tracker or DirtyRegionTracker()
        self._player = player

        # Rule constants (fall back to defaults if no config)
        if game_config is not None:
            self._action_points_per_turn = game_config.action_points_per_turn
            water_cost = game_config.default_water_cost
        else:
            self._action_points_per_turn = constants.ACTION_POINTS_PER_TURN
            water_cost = constants.WATER_COST

        self._costs = MovementCostModel(grid, water_cost=water_cost)
        self._movable: list[MovableHex] = []
        self.calculate_movable_hexes()

    # -- Read access -----------------------------------------------------

    @property
    def grid(self) -> HexGrid:
        return self._grid

    @property
    def pool(self) -> StonePool:
        return self._pool

    @property
    def player(self) -> HexCoord:
        return self._player

    @property
    def movable_hexes(self) -> list[MovableHex]:
        """Movable neighbors as of the last recompute."""
        return list(self._movable)

    @property
    def dirty_hexes(self) -> frozenset[HexCoord]:
        return self._tracker.dirty

    def is_valid_hex(self, coord: HexCoord) -> bool:
        return self._grid.is_valid(coord)

    def layout(self) -> StoneLayout:
        return self._grid.layout()

    # -- Stones ----------------------------------------------------------

    def set_stone(self, coord: HexCoord, stone: Optional[StoneType]) -> bool:
        """Set or clear the stone on a hex and resolve its consequences.

        Args:
            coord: Target hex.
            stone: New occupant, or None to clear the hex.

        Returns:
            False if ``coord`` is not on the board, True otherwise.

        Raises:
            UnknownStoneType: If ``stone`` is neither a StoneType nor None.
        """
        stone = check_occupant(stone)
        if coord not in self._grid:
            return False

        before = self._grid.layout()
        previous = self._grid.put(coord, stone)
        resolution = self._apply_change([coord], before)

        if stone is None:
            self._events.emit(StoneRemoved(coord=coord, previous=previous))
        else:
            self._events.emit(StonePlaced(coord=coord, stone=stone, previous=previous))
        self._emit_resolution(resolution)

        self.calculate_movable_hexes()
        return True

    def place_stone(self, coord: HexCoord, stone: Any) -> Optional[Rejection]:
        """Place a stone from the pool next to the player.

        Args:
            coord: Target hex; must be revealed, adjacent to the player and empty.
            stone: A StoneType or stone name.

        Returns:
            None on success, otherwise the reason for refusal.

        Raises:
            UnknownStoneType: If ``stone`` names no element.
        """
        stone = StoneType.parse(stone)
        if not self._grid.is_valid(coord):
            return Rejection.INVALID_COORDINATE
        if not coord.is_adjacent(self._player):
            return Rejection.NOT_ADJACENT
        if self._grid.occupant(coord) is not None:
            return Rejection.OCCUPIED_TARGET
        if self._pool.count(stone) <= 0:
            return Rejection.NO_STONES_LEFT

        self.set_stone(coord, stone)
        self._pool.take(stone)
        # a placed Void shrinks the budget
        self.calculate_movable_hexes()
        log.info("Placed %s stone at %r", stone, coord)
        return None

    # -- Fog of war ------------------------------------------------------

    def reveal_adjacent_hexes(self, coord: HexCoord) -> list[HexCoord]:
        """Reveal every hidden neighbor of ``coord``.

        Returns:
            The hexes that were newly revealed.
        """
        before = self._grid.layout()
        revealed: list[HexCoord] = []
        for nb in coord.neighbors():
            if self._grid.reveal(nb):
                revealed.append(nb)
                self._mark(self._with_neighbors(nb))

        if not revealed:
            return revealed

        # Stones under the fog join the board once revealed
        uncovered = [nb for nb in revealed if self._grid.occupant(nb) is not None]
        if uncovered:
            self._emit_resolution(self._apply_change(uncovered, before))

        for nb in revealed:
            self._events.emit(HexRevealed(coord=nb))
        self.calculate_movable_hexes()
        return revealed

    # -- Movement --------------------------------------------------------

    def get_movement_cost_from(self, origin: HexCoord, destination: HexCoord) -> Cost:
        """Cost of one step, or ``IMPASSABLE``."""
        return self._costs.cost_from(origin, destination)

    def calculate_movable_hexes(self) -> list[MovableHex]:
        """Recompute which neighbors the player can step onto with the current budget.

        Hexes whose movable state or cost changed are marked dirty.
        """
        updated = self._costs.movable_hexes(self._player, self._pool.effective_budget)
        changed = set(self._movable) ^ set(updated)
        self._mark(m.coord for m in changed)
        self._movable = updated
        return list(updated)

    def move_player(self, destination: HexCoord) -> Optional[Rejection]:
        """Move the player one hex, paying action points then Void stones.

        Returns:
            None on success, otherwise the reason for refusal.
        """
        if all(m.coord != destination for m in self._movable):
            return Rejection.NOT_MOVABLE
        # The cached list is only stale if the grid or pool was changed
        # without going through this service.
        cost = self.get_movement_cost_from(self._player, destination)
        if cost == constants.IMPASSABLE:
            return Rejection.IMPASSABLE
        if cost > self._pool.effective_budget:
            return Rejection.INSUFFICIENT_BUDGET

        self._pool.pay_movement(int(cost))
        origin = self._player
        self._mark(self._with_neighbors(origin))
        self._mark(self._with_neighbors(destination))
        self._player = destination

        self.reveal_adjacent_hexes(destination)
        self.calculate_movable_hexes()
        self._events.emit(PlayerMoved(origin=origin, destination=destination, cost=int(cost)))
        log.info("Player moved %r -> %r (cost %d, budget left %d)",
                 origin, destination, int(cost), self._pool.effective_budget)
        return None

    def end_turn(self) -> None:
        """Restore action points and refresh the movable hexes."""
        self._pool.restore_action_points(self._action_points_per_turn)
        self.calculate_movable_hexes()
        self._events.emit(TurnEnded(action_points=self._pool.action_points))

    # -- Rendering boundary ----------------------------------------------

    def request_render(self) -> bool:
        """Forward a render request to the tracker's throttle."""
        return self._tracker.request_render()

    def render_all(self) -> bool:
        """Mark every revealed hex dirty, then request a render."""
        self._tracker.mark(self._grid.revealed_coords())
        return self._tracker.request_render()

    def water_connections(self) -> list[WaterConnection]:
        return water_connections(self._grid.layout())

    def indicator_mimic_type(self, coord: HexCoord) -> Optional[StoneType]:
        return indicator_mimic_type(self._grid.layout(), coord)

    # -- Internal --------------------------------------------------------

    def _apply_change(self, changed: list[HexCoord], before: StoneLayout) -> Resolution:
        """Resolve interactions after ``changed`` hexes changed and mark the affected region."""
        resolution = resolve_interactions(self._grid.layout(), changed[0])
        cleared = resolution.cleared
        for target in cleared:
            self._grid.put(target, None)
        self._mark(affected_region(before, self._grid.layout(), {*changed, *cleared}))
        return resolution

    def _emit_resolution(self, resolution: Resolution) -> None:
        for chain in resolution.chains:
            self._events.emit(WaterChainConsumed(fire=chain.fire, members=chain.members))
        for burn in resolution.burned:
            self._events.emit(StoneBurned(fire=burn.fire, target=burn.target, stone=burn.stone))

    def _mark(self, coords: Iterable[HexCoord]) -> None:
        self._tracker.mark(c for c in coords if c in self._grid)

    @staticmethod
    def _with_neighbors(coord: HexCoord) -> list[HexCoord]:
        return [coord, *coord.neighbors()]
