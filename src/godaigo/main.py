"""Rules engine entry point.

Wires all components for one game session:
1. Load configuration (config/game.yaml)
2. Build the board and the player's stone pool
3. Create the event bus, dirty-region tracker and board service
4. Attach the interaction log

The renderer and the animation counter belong to the host UI and are
passed in by it.

Usage:
    python -m godaigo.main [--config <path>]
    # or via entry point:
    godaigo
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from godaigo.debug.interaction_log import InteractionLog
from godaigo.engine.board_service import BoardService
from godaigo.engine.dirty_region import DirtyRegionTracker, Renderer, RenderPolicy
from godaigo.loaders.game_config_loader import DEFAULT_GAME_CONFIG_PATH, GameConfig, load_game_config
from godaigo.models.grid import HexGrid
from godaigo.models.pool import StonePool
from godaigo.util.events import EventBus

log = logging.getLogger(__name__)


@dataclass
class Services:
    """Holds references to all session components."""

    game_config: GameConfig
    event_bus: EventBus
    grid: HexGrid
    pool: StonePool
    tracker: DirtyRegionTracker
    board: BoardService
    interaction_log: InteractionLog


def create_services(
    game_config: GameConfig,
    renderer: Optional[Renderer] = None,
    animation_count: Optional[Callable[[], int]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Services:
    """Build a fresh session from configuration.

    Args:
        game_config: Loaded configuration.
        renderer: Host callback receiving the dirty hexes on each render.
        animation_count: Host callback returning the active animation count.
        clock: Monotonic clock in seconds for the render throttle.
    """
    event_bus = EventBus()
    grid = HexGrid.build(game_config.grid_radius, game_config.initial_reveal_extent)
    pool = StonePool.from_config(game_config)
    tracker = DirtyRegionTracker(
        policy=RenderPolicy.from_config(game_config, clock=clock),
        renderer=renderer,
        animation_count=animation_count,
    )
    board = BoardService(grid, pool, event_bus, tracker=tracker, game_config=game_config)
    interaction_log = InteractionLog(event_bus, board.layout)

    log.info("Board built: radius %d, %d hexes (%d revealed)",
             grid.radius, len(grid), len(grid.revealed_coords()))
    return Services(
        game_config=game_config,
        event_bus=event_bus,
        grid=grid,
        pool=pool,
        tracker=tracker,
        board=board,
        interaction_log=interaction_log,
    )


def main() -> None:
    """Load configuration, build a session and report its initial state.

    Supports command-line arguments:
        --config <path>  Game config file (default: config/game.yaml)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config_path = DEFAULT_GAME_CONFIG_PATH
    if "--config" in sys.argv:
        idx = sys.argv.index("--config")
        if idx + 1 >= len(sys.argv):
            print("Error: --config requires an argument", file=sys.stderr)
            sys.exit(1)
        config_path = sys.argv[idx + 1]

    services = create_services(load_game_config(config_path))
    board = services.board
    log.info("Player at %r, budget %d, movable: %s",
             board.player, services.pool.effective_budget,
             ", ".join(f"{m.coord!r}={m.cost}" for m in board.movable_hexes))


if __name__ == "__main__":
    main()
