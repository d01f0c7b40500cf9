"""Dirty-region tracking and render throttling.

The tracker accumulates every hex whose appearance may have changed since
the last render. Render requests are gated by a ``RenderPolicy``: a render
runs when the frame interval has elapsed, or immediately when the dirty set
is large or the external animation count changed. Skipped requests are not
queued; the dirty set simply keeps accumulating.

Time is read through the policy's injectable clock so tests can drive it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from godaigo.engine.connectivity import fringe, water_components_touching
from godaigo.models.grid import StoneLayout
from godaigo.models.hex import HexCoord
from godaigo.models.stone import StoneType
from godaigo.util import constants

if TYPE_CHECKING:
    from godaigo.loaders.game_config_loader import GameConfig

log = logging.getLogger(__name__)

Renderer = Callable[[frozenset[HexCoord]], None]


@dataclass
class RenderPolicy:
    """When a render request may proceed.

    Attributes:
        min_interval_ms: Minimum time between two renders.
        urgent_threshold: Dirty-set size that forces a render.
        clock: Monotonic clock returning seconds.
    """

    min_interval_ms: float = 1000.0 / constants.TARGET_FPS
    urgent_threshold: int = constants.URGENT_DIRTY_THRESHOLD
    clock: Callable[[], float] = field(default=time.monotonic)

    @classmethod
    def from_config(cls, config: GameConfig,
                    clock: Callable[[], float] = time.monotonic) -> RenderPolicy:
        return cls(
            min_interval_ms=1000.0 / config.target_fps,
            urgent_threshold=config.urgent_dirty_threshold,
            clock=clock,
        )

    def should_render(self, elapsed_ms: Optional[float], dirty_count: int,
                      animations_changed: bool) -> bool:
        """Decide a render request. ``elapsed_ms`` is None before the first render."""
        if elapsed_ms is None or elapsed_ms >= self.min_interval_ms:
            return True
        return animations_changed or dirty_count >= self.urgent_threshold


class DirtyRegionTracker:
    """Accumulates hexes pending redraw and gates calls to the renderer.

    Args:
        policy: Throttle policy (defaults to 60 FPS, threshold 5).
        renderer: Called with the dirty set on each render pass.
        animation_count: Returns the external animation-activity counter.
    """

    def __init__(
        self,
        policy: Optional[RenderPolicy] = None,
        renderer: Optional[Renderer] = None,
        animation_count: Optional[Callable[[], int]] = None,
    ) -> None:
        self._policy = policy or RenderPolicy()
        self._renderer = renderer
        self._animation_count = animation_count or (lambda: 0)
        self._dirty: set[HexCoord] = set()
        self._last_render: Optional[float] = None
        self._last_animation_count = 0
        self.render_count = 0

    # -- Dirty set -------------------------------------------------------

    @property
    def dirty(self) -> frozenset[HexCoord]:
        return frozenset(self._dirty)

    def __len__(self) -> int:
        return len(self._dirty)

    def mark(self, coords: Iterable[HexCoord]) -> None:
        self._dirty.update(coords)

    def mark_with_neighbors(self, coord: HexCoord) -> None:
        self._dirty.add(coord)
        self._dirty.update(coord.neighbors())

    def clear(self) -> None:
        self._dirty.clear()

    # -- Rendering -------------------------------------------------------

    def request_render(self) -> bool:
        """Render now if the policy allows it.

        Returns:
            True if a render pass ran (and the dirty set was cleared).
        """
        now = self._policy.clock()
        elapsed_ms = None if self._last_render is None else (now - self._last_render) * 1000.0
        animations = self._animation_count()
        if not self._policy.should_render(elapsed_ms, len(self._dirty),
                                          animations != self._last_animation_count):
            log.debug("Render skipped (%d dirty, %.1f ms since last)", len(self._dirty), elapsed_ms)
            return False

        self._last_render = now
        self._last_animation_count = animations
        if self._renderer is not None:
            self._renderer(frozenset(self._dirty))
        self._dirty.clear()
        self.render_count += 1
        return True


def affected_region(
    before: StoneLayout,
    after: StoneLayout,
    changed: Iterable[HexCoord],
) -> set[HexCoord]:
    """Hexes whose appearance may differ after the stones at ``changed`` changed.

    For each changed hex: the hex and its neighbors; the neighbors of any
    Wind next to it (its activity may flip); and every Water chain touching
    the hex or such a Wind, together with the chain's neighbors, in both the
    old and the new layout. Using both layouts covers chains that were split
    by a removal as well as chains that were joined or cleared.
    """
    region: set[HexCoord] = set()
    for coord in changed:
        region.add(coord)
        region.update(coord.neighbors())
        for layout in (before, after):
            winds = [nb for nb in coord.neighbors() if layout.get(nb) is StoneType.WIND]
            for wind in winds:
                region.update(wind.neighbors())
            for component in water_components_touching(layout, [coord, *winds]):
                region |= component
                region |= fringe(component)
    return region
