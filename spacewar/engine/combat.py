"""Combat estimation for AI planning.

Two estimators with different call sites:

- ``first_strike`` simulates the planetary-defense damage pool against an
  attacking fleet. Expansion and gathering use it to decide whether a
  fleet can take a defended star.
- ``threat_score`` is a cheaper ship-count approximation. Defense
  redeployment uses it to size reinforcements.

All functions are pure: they never modify the ships they are given.
"""

import dataclasses
from typing import Iterable, Sequence, TypeVar

from ..models.kinds import ShipKind
from ..utils.constants import PD_DAMAGE_PER_SHOT, PD_SHOTS_PER_LEVEL

S = TypeVar("S")

# Point defense shoots the weakest hulls first
TARGET_PRIORITY = (ShipKind.FIGHTER, ShipKind.DESTROYER, ShipKind.CRUISER)


def ship_power(ship) -> int:
    """Return the combat power of a ship: Fighter 1, Destroyer 2, Cruiser 3.

    Slipstream Frigates (and objects without a kind) score 0.

    Args:
        ship: Ship or ship view with a ``kind`` attribute

    Returns:
        Power value used by every AI strength estimate
    """
    kind = getattr(ship, "kind", None)
    return kind.power if isinstance(kind, ShipKind) else 0


def fleet_power(ships: Iterable) -> int:
    """Sum of ship_power over a fleet."""
    return sum(ship_power(ship) for ship in ships)


def first_strike(ships: Sequence[S], defense_level: int) -> list[S]:
    """Simulate planetary defense firing on a fleet before it can land.

    The defense fires ``defense_level * 3`` shots of 2 damage each. The
    resulting damage pool is spent strictly in priority order: every
    Fighter is worn down first, then Destroyers, then Cruisers, and firing
    stops the moment the pool runs dry. A ship without hit points is
    treated as having 1.

    Args:
        ships: Attacking fleet (Ship objects or read-only ship views)
        defense_level: Defender's planetary defense level

    Returns:
        Copies of the surviving ships with their simulated hit points. With
        ``defense_level == 0`` the input ships are returned unchanged.

    Examples:
        A level-1 defense (6 damage) against two Fighters, a Destroyer and a
        Cruiser destroys everything but the Cruiser, which is left at 1 hp.
    """
    if defense_level <= 0:
        return list(ships)

    pool = defense_level * PD_SHOTS_PER_LEVEL * PD_DAMAGE_PER_SHOT
    sim_hp = [ship.hp or 1 for ship in ships]

    for kind in TARGET_PRIORITY:
        for i, ship in enumerate(ships):
            if pool <= 0:
                break
            if ship.kind is not kind:
                continue
            if pool >= sim_hp[i]:
                pool -= sim_hp[i]
                sim_hp[i] = 0
            else:
                sim_hp[i] -= pool
                pool = 0
        if pool <= 0:
            break

    return [
        dataclasses.replace(ship, hp=hp) for ship, hp in zip(ships, sim_hp) if hp > 0
    ]


def survivor_power(ships: Sequence, defense_level: int) -> int:
    """Combined power of the ships that would survive a first strike."""
    return fleet_power(first_strike(ships, defense_level))


def threat_score(star, hostile_ships: Iterable) -> int:
    """Estimate the hostile power that outlasts a star's point defense.

    Coarser than first_strike: the strongest ``defense_level * 3`` ships are
    assumed destroyed outright and the power of the rest is summed.

    Args:
        star: Defending star (anything with ``defense_level``)
        hostile_ships: Enemy ships present at the star

    Returns:
        Non-negative threat value
    """
    destroyed = max(0, star.defense_level) * PD_SHOTS_PER_LEVEL
    ranked = sorted(hostile_ships, key=ship_power, reverse=True)
    return fleet_power(ranked[destroyed:])
