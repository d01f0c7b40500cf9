"""Game configuration: loads tunable constants from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once at startup
and then passed wherever constants are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from godaigo.models.stone import StoneType
from godaigo.util import constants

log = logging.getLogger(__name__)

DEFAULT_GAME_CONFIG_PATH = "config/game.yaml"


def _default_stones() -> Dict[StoneType, int]:
    return {stone: 5 for stone in StoneType}


@dataclass
class GameConfig:
    """All tunable gameplay constants.

    Loaded from ``config/game.yaml``.  Every field has a sensible default
    so the engine can start even without the file.
    """

    # -- Board -------------------------------------------------------
    grid_radius: int = constants.GRID_RADIUS
    initial_reveal_extent: int = constants.INITIAL_REVEAL_EXTENT
    hex_size: float = constants.HEX_SIZE

    # -- Rendering ---------------------------------------------------
    target_fps: float = constants.TARGET_FPS
    urgent_dirty_threshold: int = constants.URGENT_DIRTY_THRESHOLD

    # -- Turn & economy ----------------------------------------------
    action_points_per_turn: int = constants.ACTION_POINTS_PER_TURN
    starting_stones: Dict[StoneType, int] = field(default_factory=_default_stones)
    stone_capacity: Dict[StoneType, int] = field(default_factory=_default_stones)

    # -- Movement ----------------------------------------------------
    default_water_cost: int = constants.WATER_COST


def _parse_stone_counts(raw: Any, key: str) -> Dict[StoneType, int]:
    """Parse ``{stone_name: count}``; unknown stone names raise UnknownStoneType."""
    if not isinstance(raw, dict):
        raise ValueError(f"{key} must be a mapping of stone name to count")
    counts = {stone: 0 for stone in StoneType}
    for name, count in raw.items():
        counts[StoneType.parse(name)] = int(count)
    return counts


def load_game_config(path: str | Path = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load game configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s, using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    # Stone maps are keyed by name in YAML
    stone_maps = {}
    for key in ("starting_stones", "stone_capacity"):
        if key in raw:
            stone_maps[key] = _parse_stone_counts(raw.pop(key), key)

    return GameConfig(**stone_maps, **{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
