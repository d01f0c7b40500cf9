"""Tests for the event bus."""

from godaigo.models.hex import HexCoord
from godaigo.util.events import EventBus, HexRevealed, TurnEnded


class TestEventBus:
    def test_emit_triggers_handler(self):
        bus = EventBus()
        received = []
        bus.on(HexRevealed, lambda e: received.append(e.coord))
        bus.emit(HexRevealed(coord=HexCoord(1, 2)))
        assert received == [HexCoord(1, 2)]

    def test_no_cross_event(self):
        bus = EventBus()
        received = []
        bus.on(HexRevealed, lambda e: received.append("revealed"))
        bus.emit(TurnEnded(action_points=5))
        assert received == []

    def test_multiple_handlers(self):
        bus = EventBus()
        a, b = [], []
        bus.on(TurnEnded, lambda e: a.append(1))
        bus.on(TurnEnded, lambda e: b.append(2))
        bus.emit(TurnEnded(action_points=5))
        assert a == [1] and b == [2]

    def test_off_removes_handler(self):
        bus = EventBus()
        received = []
        handler = lambda e: received.append(1)
        bus.on(TurnEnded, handler)
        bus.off(TurnEnded, handler)
        bus.emit(TurnEnded(action_points=5))
        assert received == []

    def test_clear(self):
        bus = EventBus()
        bus.on(TurnEnded, lambda e: None)
        bus.clear()
        # Should not raise
        bus.emit(TurnEnded(action_points=5))
