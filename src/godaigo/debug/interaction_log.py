"""Interaction log: records stone interactions for debugging and replay.

Subscribes to the event bus and keeps a history of entries, each with a
timestamp, the event name, its details and the occupied hexes at that
moment. The history can be exported as JSON.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable

from godaigo.models.grid import StoneLayout
from godaigo.util.events import (
    EventBus,
    StoneBurned,
    StonePlaced,
    StoneRemoved,
    WaterChainConsumed,
)


def capture_grid_state(layout: StoneLayout) -> dict[str, dict[str, Any]]:
    """Occupied hexes as ``{"q,r": {"q", "r", "stone"}}``."""
    return {
        coord.key: {"q": coord.q, "r": coord.r, "stone": stone.value}
        for coord, stone in sorted(layout.items(), key=lambda item: (item[0].q, item[0].r))
    }


class InteractionLog:
    """History of stone interactions.

    Args:
        event_bus: Bus to subscribe to.
        layout: Returns the current stone layout for snapshots.
    """

    def __init__(self, event_bus: EventBus, layout: Callable[[], StoneLayout]) -> None:
        self._layout = layout
        self.entries: list[dict[str, Any]] = []
        event_bus.on(StonePlaced, self._on_placed)
        event_bus.on(StoneRemoved, self._on_removed)
        event_bus.on(WaterChainConsumed, self._on_chain)
        event_bus.on(StoneBurned, self._on_burned)

    def record(self, event: str, details: dict[str, Any]) -> dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "details": details,
            "grid_state": capture_grid_state(self._layout()),
        }
        self.entries.append(entry)
        return entry

    def export_json(self) -> str:
        return json.dumps(self.entries, indent=2, ensure_ascii=False)

    def clear(self) -> None:
        self.entries.clear()

    # -- Handlers --------------------------------------------------------

    def _on_placed(self, e: StonePlaced) -> None:
        self.record("stone_placed", {
            "hex": e.coord.key,
            "stone": e.stone.value,
            "previous": e.previous.value if e.previous else None,
        })

    def _on_removed(self, e: StoneRemoved) -> None:
        self.record("stone_removed", {
            "hex": e.coord.key,
            "previous": e.previous.value if e.previous else None,
        })

    def _on_chain(self, e: WaterChainConsumed) -> None:
        self.record("water_chain", {
            "fire": e.fire.key,
            "water_hexes": sorted(c.key for c in e.members),
        })

    def _on_burned(self, e: StoneBurned) -> None:
        self.record("fire_destruction", {
            "fire": e.fire.key,
            "target": e.target.key,
            "stone": e.stone.value,
        })
