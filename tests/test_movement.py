"""Tests for ship departures and arrivals."""

import pytest

from spacewar.engine.movement import depart, process_movement, travel_speed
from spacewar.models.game import Game
from spacewar.models.kinds import ShipKind, ShipState
from spacewar.models.ship import Ship
from spacewar.models.star import Star
from spacewar.utils.constants import SHIP_SPEEDS


@pytest.fixture
def stars():
    a = Star(id="A", name="A", position=(0, 0, 0), owner="p2", connections={"B"})
    b = Star(id="B", name="B", position=(120, 0, 0), connections={"A"})
    c = Star(id="C", name="C", position=(0, 60, 0))
    return a, b, c


def make_ship(kind=ShipKind.DESTROYER):
    return Ship(id="s1", kind=kind, owner="p2", parent_star_id="A")


class TestTravelSpeed:
    """Lane hops are fast, off-lane travel depends on the hull."""

    def test_starlane_is_fast(self, stars):
        a, b, _ = stars
        assert travel_speed(make_ship(), a, b) == SHIP_SPEEDS["fast"]

    def test_off_lane_is_slow(self, stars):
        a, _, c = stars
        assert travel_speed(make_ship(), a, c) == SHIP_SPEEDS["slow"]

    def test_off_lane_fighter(self, stars):
        a, _, c = stars
        assert travel_speed(make_ship(ShipKind.FIGHTER), a, c) == SHIP_SPEEDS["fighter_slow"]

    def test_off_lane_frigate(self, stars):
        a, _, c = stars
        ship = make_ship(ShipKind.SLIPSTREAM_FRIGATE)
        assert travel_speed(ship, a, c) == SHIP_SPEEDS["frigate_slow"]

    def test_custom_speed_table(self, stars):
        a, b, _ = stars
        speeds = dict(SHIP_SPEEDS, fast=100)
        assert travel_speed(make_ship(), a, b, speeds) == 100


def test_depart_sets_trip(stars):
    a, b, _ = stars
    ship = make_ship()

    depart(ship, a, b)

    assert ship.state is ShipState.MOVING
    assert ship.parent_star_id is None
    assert ship.departure_star_id == "A"
    assert ship.target_star_id == "B"
    # 120 units at 60 per tick
    assert ship.ticks_to_arrive == 2


def test_depart_without_origin_uses_default_trip(stars):
    _, b, _ = stars
    ship = make_ship()

    depart(ship, None, b)

    assert ship.ticks_to_arrive == 10


def test_ship_arrives_after_trip(stars):
    a, b, c = stars
    ship = make_ship()
    game = Game(seed=42, stars=[a, b, c], ships=[ship])
    depart(ship, a, b)

    game, arrivals = process_movement(game)
    assert arrivals == []
    assert ship.state is ShipState.MOVING

    game, arrivals = process_movement(game)
    assert len(arrivals) == 1
    assert arrivals[0].star_id == "B"
    assert arrivals[0].to_dict()["action"] == "SHIP_ARRIVED"
    assert ship.state is ShipState.ORBITING
    assert ship.parent_star_id == "B"
    assert ship.target_star_id is None


def test_arrival_joins_own_conquest(stars):
    """Ships reaching a star their owner is conquering join the conquest."""
    a, b, c = stars
    b.being_conquered_by = "p2"
    ship = make_ship()
    game = Game(seed=42, stars=[a, b, c], ships=[ship])
    depart(ship, a, b)

    process_movement(game)
    game, arrivals = process_movement(game)

    assert ship.state is ShipState.CONQUERING
    assert arrivals[0].state is ShipState.CONQUERING


def test_orbiting_ships_do_not_move(stars):
    a, b, c = stars
    ship = make_ship()
    game = Game(seed=42, stars=[a, b, c], ships=[ship])

    game, arrivals = process_movement(game)

    assert arrivals == []
    assert ship.parent_star_id == "A"
