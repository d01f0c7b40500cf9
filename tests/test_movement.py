"""Tests for movement costs, wind zones and movable hexes."""

import math

import pytest

from godaigo.engine.movement import MovableHex, MovementCostModel
from godaigo.models.grid import HexGrid
from godaigo.models.hex import ORIGIN, HexCoord
from godaigo.models.stone import StoneType
from godaigo.util.constants import IMPASSABLE

W, F, E, A, V = StoneType.WATER, StoneType.FIRE, StoneType.EARTH, StoneType.WIND, StoneType.VOID


def _make_model(*stones) -> tuple[HexGrid, MovementCostModel]:
    """Grid with stones put directly (no interaction resolution)."""
    grid = HexGrid.build(8, 3)
    for (q, r), stone in stones:
        grid.put(HexCoord(q, r), stone)
    return grid, MovementCostModel(grid)


class TestBaseCost:
    def test_empty_costs_one(self):
        _, model = _make_model()
        assert model.base_cost(HexCoord(1, 0)) == 1

    def test_stone_costs(self):
        _, model = _make_model(((1, 0), E), ((2, 0), F), ((-1, 0), A), ((-3, 0), V))
        assert model.base_cost(HexCoord(1, 0)) == IMPASSABLE
        assert model.base_cost(HexCoord(2, 0)) == IMPASSABLE
        assert model.base_cost(HexCoord(-1, 0)) == 0
        assert model.base_cost(HexCoord(-3, 0)) == 1

    def test_inactive_wind_still_costs_zero(self):
        _, model = _make_model(((0, 0), A), ((1, 0), V))
        assert model.base_cost(ORIGIN) == 0

    def test_plain_water_costs_two(self):
        _, model = _make_model(((0, 0), W))
        assert model.base_cost(ORIGIN) == 2

    def test_water_next_to_void_costs_one(self):
        _, model = _make_model(((0, 0), W), ((0, -1), V), ((0, 1), A))
        assert model.base_cost(ORIGIN) == 1

    def test_water_next_to_active_wind_costs_zero(self):
        _, model = _make_model(((0, 0), W), ((0, 1), A), ((-1, 0), F))
        assert model.base_cost(ORIGIN) == 0

    def test_water_next_to_inactive_wind_falls_through(self):
        _, model = _make_model(((0, 0), W), ((1, 0), A), ((2, 0), V))
        assert model.base_cost(ORIGIN) == 2

    def test_water_next_to_fire_or_earth_is_impassable(self):
        _, model = _make_model(((0, 0), W), ((1, 0), E))
        assert model.base_cost(ORIGIN) == IMPASSABLE
        _, model = _make_model(((0, 0), W), ((-1, 0), F), ((-2, 0), V))
        assert model.base_cost(ORIGIN) == IMPASSABLE

    def test_water_cost_uses_own_neighbors_only(self):
        _, model = _make_model(((1, 0), W), ((2, 0), W), ((3, 0), E))
        assert model.base_cost(HexCoord(1, 0)) == 2
        assert model.base_cost(HexCoord(2, 0)) == IMPASSABLE
        assert model.cost_from(ORIGIN, HexCoord(1, 0)) == 2

    def test_void_next_to_other_member_does_not_discount(self):
        _, model = _make_model(((0, 0), W), ((1, 0), W), ((2, 0), W), ((3, -1), V))
        assert model.base_cost(ORIGIN) == 2
        assert model.base_cost(HexCoord(2, 0)) == 1

    def test_configured_water_cost(self):
        grid = HexGrid.build(8, 3)
        grid.put(ORIGIN, W)
        assert MovementCostModel(grid, water_cost=3).base_cost(ORIGIN) == 3

    def test_invalid_hex_is_impassable(self):
        _, model = _make_model()
        assert model.base_cost(HexCoord(20, 0)) == IMPASSABLE
        assert model.base_cost(HexCoord(5, 0)) == IMPASSABLE

    def test_impassable_is_unbounded(self):
        assert IMPASSABLE == math.inf


class TestWindZone:
    def test_active_wind_and_neighbors(self):
        _, model = _make_model(((0, 0), A))
        assert model.in_wind_zone(ORIGIN)
        assert all(model.in_wind_zone(nb) for nb in ORIGIN.neighbors())
        assert not model.in_wind_zone(HexCoord(2, 0))

    def test_inactive_wind_has_no_zone(self):
        _, model = _make_model(((0, 0), A), ((-1, 0), V))
        assert not model.in_wind_zone(ORIGIN)
        assert not model.in_wind_zone(HexCoord(1, 0))

    def test_wind_mimicking_chain_extends_zone(self):
        _, model = _make_model(((0, 0), W), ((1, 0), W), ((1, 1), W), ((2, 1), A))
        assert model.in_wind_zone(ORIGIN)
        assert model.in_wind_zone(HexCoord(-1, 0))
        assert not model.in_wind_zone(HexCoord(-2, 0))

    def test_chain_mimicking_void_is_not_wind(self):
        _, model = _make_model(((0, 0), W), ((0, -1), V), ((2, 1), A), ((1, 0), W), ((1, 1), W))
        assert not model.in_wind_zone(HexCoord(-1, 0))


class TestTransitions:
    def test_water_chain_mimicking_wind_costs_zero(self):
        _, model = _make_model(((0, 0), W), ((1, 0), W), ((1, 1), W), ((2, 1), A))
        assert model.cost_from(HexCoord(-1, 0), ORIGIN) == 0

    def test_inside_wind_zone_costs_zero(self):
        _, model = _make_model(((0, 0), A))
        assert model.cost_from(HexCoord(1, 0), HexCoord(1, -1)) == 0

    def test_entering_wind_zone_costs_one(self):
        _, model = _make_model(((0, 0), A))
        assert model.cost_from(HexCoord(-2, 0), HexCoord(-1, 0)) == 1

    def test_leaving_wind_zone_costs_one(self):
        _, model = _make_model(((0, 0), A), ((-2, 0), W))
        assert model.cost_from(HexCoord(-1, 0), HexCoord(-2, 0)) == 1

    def test_zone_edge_overrides_destination_cost(self):
        _, model = _make_model(((0, 0), A), ((-1, 0), E))
        assert model.cost_from(HexCoord(-2, 0), HexCoord(-1, 0)) == 1

    def test_outside_wind_uses_base_cost(self):
        _, model = _make_model(((1, 0), W))
        assert model.cost_from(ORIGIN, HexCoord(1, 0)) == 2

    def test_invalid_destination_is_impassable(self):
        _, model = _make_model(((3, 0), A))
        assert model.cost_from(HexCoord(3, 0), HexCoord(4, 0)) == IMPASSABLE


class TestMovableHexes:
    def test_open_board(self):
        _, model = _make_model()
        movable = model.movable_hexes(ORIGIN, budget=5)
        assert movable == [MovableHex(nb, 1) for nb in ORIGIN.neighbors()]

    def test_impassable_excluded(self):
        _, model = _make_model(((1, 0), E), ((0, 1), W), ((-1, 1), F))
        coords = {m.coord for m in model.movable_hexes(ORIGIN, budget=5)}
        assert HexCoord(1, 0) not in coords
        assert HexCoord(-1, 1) not in coords
        # the lone Water touches Earth and Fire: impassable too
        assert HexCoord(0, 1) not in coords

    def test_budget_limits(self):
        _, model = _make_model(((1, 0), W))
        assert {m.coord for m in model.movable_hexes(ORIGIN, budget=1)} == set(ORIGIN.neighbors()) - {HexCoord(1, 0)}
        assert MovableHex(HexCoord(1, 0), 2) in model.movable_hexes(ORIGIN, budget=2)

    def test_zero_budget_allows_free_moves(self):
        _, model = _make_model(((0, 0), A))
        movable = model.movable_hexes(ORIGIN, budget=0)
        assert len(movable) == 6
        assert all(m.cost == 0 for m in movable)

    def test_unrevealed_neighbors_excluded(self):
        _, model = _make_model()
        coords = {m.coord for m in model.movable_hexes(HexCoord(3, 0), budget=5)}
        assert coords == {HexCoord(3, -1), HexCoord(2, 0), HexCoord(2, 1), HexCoord(3, 1)}

    @pytest.mark.parametrize("stones", [
        (),
        (((0, 1), W), ((1, 1), W), ((2, 0), A)),
        (((1, 0), W), ((-1, 0), V), ((0, -1), E)),
    ])
    def test_recompute_is_idempotent(self, stones):
        _, model = _make_model(*stones)
        assert model.movable_hexes(ORIGIN, 5) == model.movable_hexes(ORIGIN, 5)

    def test_costs_track_board_changes(self):
        grid, model = _make_model(((1, 0), W))
        assert MovableHex(HexCoord(1, 0), 2) in model.movable_hexes(ORIGIN, 5)
        grid.put(HexCoord(2, -1), V)
        assert MovableHex(HexCoord(1, 0), 1) in model.movable_hexes(ORIGIN, 5)
