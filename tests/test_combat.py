"""Tests for the combat estimators."""

import pytest

from spacewar.engine.combat import (
    first_strike,
    fleet_power,
    ship_power,
    survivor_power,
    threat_score,
)
from spacewar.models.kinds import ShipKind
from spacewar.models.ship import Ship
from spacewar.models.star import Star


def make_ship(ship_id, kind, owner="p2", hp=0):
    return Ship(id=ship_id, kind=kind, owner=owner, parent_star_id="S", hp=hp)


def make_fleet(*kinds):
    return [make_ship(f"s{i}", kind) for i, kind in enumerate(kinds)]


def test_ship_power_values():
    """Fighter, Destroyer and Cruiser are worth 1, 2 and 3."""
    assert ship_power(make_ship("a", ShipKind.FIGHTER)) == 1
    assert ship_power(make_ship("b", ShipKind.DESTROYER)) == 2
    assert ship_power(make_ship("c", ShipKind.CRUISER)) == 3


def test_ship_power_unknown_is_zero():
    """Frigates and objects without a kind carry no combat power."""
    assert ship_power(make_ship("f", ShipKind.SLIPSTREAM_FRIGATE)) == 0
    assert ship_power(object()) == 0


def test_first_strike_level_one_scenario():
    """6 damage kills both Fighters and the Destroyer and leaves the Cruiser at 1 hp."""
    fleet = make_fleet(ShipKind.FIGHTER, ShipKind.FIGHTER, ShipKind.DESTROYER, ShipKind.CRUISER)

    survivors = first_strike(fleet, defense_level=1)

    assert len(survivors) == 1
    assert survivors[0].kind is ShipKind.CRUISER
    assert survivors[0].hp == 1


def test_first_strike_does_not_mutate_input():
    """Simulated damage is applied to copies only."""
    fleet = make_fleet(ShipKind.FIGHTER, ShipKind.CRUISER)

    first_strike(fleet, defense_level=1)

    assert [s.hp for s in fleet] == [1, 3]


def test_first_strike_zero_defense_returns_input():
    """Without defense every ship survives untouched."""
    fleet = make_fleet(ShipKind.FIGHTER, ShipKind.DESTROYER)

    survivors = first_strike(fleet, defense_level=0)

    assert survivors == fleet
    assert all(a is b for a, b in zip(survivors, fleet))


def test_first_strike_priority_order_ignores_list_order():
    """Fighters absorb damage first even when listed last."""
    fleet = make_fleet(ShipKind.CRUISER, ShipKind.DESTROYER, ShipKind.FIGHTER)

    # Level 1: 6 damage -> Fighter (1), Destroyer (2), Cruiser takes 3 and dies
    assert first_strike(fleet, defense_level=1) == []


def test_first_strike_stops_when_pool_exhausted():
    """Damage never spills past the pool."""
    fleet = make_fleet(*([ShipKind.FIGHTER] * 8))

    survivors = first_strike(fleet, defense_level=1)

    assert len(survivors) == 2


def test_first_strike_missing_hp_defaults_to_one():
    """A ship with no hit points recorded is treated as having 1."""
    ship = make_ship("x", ShipKind.CRUISER)
    ship.hp = 0

    assert first_strike([ship], defense_level=1) == []


@pytest.mark.parametrize("level", [0, 1, 2, 3, 5])
def test_first_strike_never_grows_fleet(level):
    """Survivors are a subset with positive hit points."""
    fleet = make_fleet(
        ShipKind.FIGHTER, ShipKind.CRUISER, ShipKind.DESTROYER, ShipKind.CRUISER, ShipKind.FIGHTER
    )

    survivors = first_strike(fleet, level)

    assert len(survivors) <= len(fleet)
    assert all(s.hp > 0 for s in survivors)
    assert {s.id for s in survivors} <= {s.id for s in fleet}


def test_survivor_power():
    """Survivor power sums the power of first-strike survivors."""
    fleet = make_fleet(ShipKind.FIGHTER, ShipKind.FIGHTER, ShipKind.DESTROYER, ShipKind.CRUISER)
    assert survivor_power(fleet, 1) == 3
    assert survivor_power(fleet, 0) == fleet_power(fleet) == 7


def test_threat_score_no_defense_is_total_power():
    """With defense 0 the threat equals the hostile fleet's power."""
    star = Star(id="S", name="S", position=(0, 0, 0), defense_level=0)
    fleet = make_fleet(ShipKind.FIGHTER, ShipKind.CRUISER, ShipKind.DESTROYER)

    assert threat_score(star, fleet) == 6


def test_threat_score_drops_strongest_ships():
    """Each defense level removes the three strongest hostiles."""
    star = Star(id="S", name="S", position=(0, 0, 0), defense_level=1)
    fleet = make_fleet(
        ShipKind.FIGHTER,
        ShipKind.CRUISER,
        ShipKind.DESTROYER,
        ShipKind.CRUISER,
        ShipKind.FIGHTER,
    )

    # Two Cruisers and the Destroyer are discarded
    assert threat_score(star, fleet) == 2


def test_threat_score_never_negative():
    """Heavy defense against a small fleet scores 0, not below."""
    star = Star(id="S", name="S", position=(0, 0, 0), defense_level=4)

    assert threat_score(star, make_fleet(ShipKind.FIGHTER)) == 0
    assert threat_score(star, []) == 0
