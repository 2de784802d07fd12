"""Tests for defensive redeployment."""

from spacewar.ai.defense import defend
from spacewar.ai.view import WorldView
from spacewar.models.game import Game
from spacewar.models.kinds import ActionType, ShipKind, ShipState
from spacewar.models.ship import Ship
from spacewar.models.star import Star


def make_star(star_id, x, owner="p2", **kwargs):
    return Star(id=star_id, name=star_id, position=(x, 0, 0), owner=owner, **kwargs)


def make_ship(ship_id, kind, star_id, owner="p2", state=ShipState.ORBITING):
    return Ship(id=ship_id, kind=kind, owner=owner, state=state, parent_star_id=star_id)


def make_view(stars, ships):
    return WorldView.snapshot(Game(seed=1, stars=list(stars), ships=list(ships)))


def base_stars():
    return [make_star("A", 0), make_star("B", 50), make_star("C", 200)]


def test_no_hostiles_no_orders():
    ships = [make_ship("d1", ShipKind.DESTROYER, "B")]
    assert defend(make_view(base_stars(), ships), "p2") == []


def test_nearest_ships_fill_the_gap():
    """Two enemy Cruisers (threat 6) draw ships nearest first until covered."""
    ships = [
        make_ship("e1", ShipKind.CRUISER, "A", owner="p1"),
        make_ship("e2", ShipKind.CRUISER, "A", owner="p1"),
        make_ship("far", ShipKind.CRUISER, "C"),
        make_ship("near1", ShipKind.DESTROYER, "B"),
        make_ship("near2", ShipKind.DESTROYER, "B"),
        make_ship("spare", ShipKind.FIGHTER, "C"),
    ]
    committed = set()

    actions = defend(make_view(base_stars(), ships), "p2", committed)

    assert [a.ship_id for a in actions] == ["near1", "near2", "far"]
    assert all(a.action is ActionType.MOVE_SHIP and a.to_star_id == "A" for a in actions)
    assert actions[0].from_star_id == "B"
    assert committed == {"near1", "near2", "far"}


def test_local_power_covers_threat():
    ships = [
        make_ship("e1", ShipKind.FIGHTER, "A", owner="p1"),
        make_ship("g1", ShipKind.DESTROYER, "A"),
        make_ship("r1", ShipKind.DESTROYER, "B"),
    ]

    assert defend(make_view(base_stars(), ships), "p2") == []


def test_planetary_defense_reduces_threat():
    """A level-1 defense discounts the three strongest hostiles."""
    stars = [make_star("A", 0, defense_level=1), make_star("B", 50)]
    ships = [
        make_ship("e1", ShipKind.CRUISER, "A", owner="p1"),
        make_ship("e2", ShipKind.CRUISER, "A", owner="p1"),
        make_ship("e3", ShipKind.FIGHTER, "A", owner="p1"),
        make_ship("r1", ShipKind.DESTROYER, "B"),
    ]

    assert defend(make_view(stars, ships), "p2") == []


def test_ship_redeployed_at_most_once():
    """With two threatened stars a reserve ship only receives one order."""
    stars = [make_star("A", 0), make_star("B", 50), make_star("D", 100)]
    ships = [
        make_ship("e1", ShipKind.CRUISER, "A", owner="p1"),
        make_ship("e2", ShipKind.CRUISER, "D", owner="p1"),
        make_ship("r1", ShipKind.FIGHTER, "B"),
    ]

    actions = defend(make_view(stars, ships), "p2")

    assert [a.ship_id for a in actions] == ["r1"]


def test_committed_ships_are_skipped():
    ships = [
        make_ship("e1", ShipKind.FIGHTER, "A", owner="p1"),
        make_ship("r1", ShipKind.FIGHTER, "B"),
        make_ship("r2", ShipKind.FIGHTER, "C"),
    ]

    actions = defend(make_view(base_stars(), ships), "p2", {"r1"})

    assert [a.ship_id for a in actions] == ["r2"]


def test_moving_ships_are_not_candidates():
    ships = [
        make_ship("e1", ShipKind.FIGHTER, "A", owner="p1"),
        Ship(
            id="m1",
            kind=ShipKind.CRUISER,
            owner="p2",
            state=ShipState.MOVING,
            target_star_id="C",
        ),
    ]

    assert defend(make_view(base_stars(), ships), "p2") == []
