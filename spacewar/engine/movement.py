"""Ship movement: departures and arrivals.

Ships travel in a straight line at a fixed speed chosen at departure:
starlane hops are fast, off-lane travel is slow (Fighters and Slipstream
Frigates are a little quicker off-lane). A moving ship arrives once its
movement counter reaches ``ticks_to_arrive``.
"""

import math
from dataclasses import dataclass

from ..models.game import Game
from ..models.kinds import ShipKind, ShipState
from ..models.ship import Ship
from ..models.star import Star
from ..utils.constants import SHIP_SPEEDS
from ..utils.distance import distance_3d


@dataclass
class Arrival:
    """Record of a ship reaching its destination.

    Attributes:
        ship_id: ID of the arriving ship
        star_id: Star it arrived at
        kind: Ship kind
        owner: Owner of the ship
        state: State after arrival ("orbiting" or "conquering")
    """

    ship_id: str
    star_id: str
    kind: ShipKind
    owner: str
    state: ShipState

    def to_dict(self) -> dict:
        return {
            "action": "SHIP_ARRIVED",
            "shipId": self.ship_id,
            "atStarId": self.star_id,
            "shipType": self.kind.label,
            "ownerId": self.owner,
            "state": self.state.value,
        }


def travel_speed(ship: Ship, from_star: Star | None, to_star: Star, speeds: dict | None = None) -> float:
    """Pick the travel speed for a departure.

    Args:
        ship: Departing ship
        from_star: Origin star (None if unknown)
        to_star: Destination star
        speeds: Speed table (defaults to SHIP_SPEEDS)

    Returns:
        Distance units covered per tick
    """
    speeds = speeds or SHIP_SPEEDS
    if from_star is not None and to_star.id in from_star.connections:
        return speeds["fast"]
    if ship.kind is ShipKind.SLIPSTREAM_FRIGATE:
        return speeds["frigate_slow"]
    if ship.kind is ShipKind.FIGHTER:
        return speeds["fighter_slow"]
    return speeds["slow"]


def depart(ship: Ship, from_star: Star | None, to_star: Star, speeds: dict | None = None) -> None:
    """Put an orbiting ship in motion toward ``to_star``."""
    speed = travel_speed(ship, from_star, to_star, speeds)
    ship.state = ShipState.MOVING
    ship.departure_star_id = from_star.id if from_star else None
    ship.target_star_id = to_star.id
    ship.parent_star_id = None
    ship.speed = speed
    ship.movement_ticks = 0
    if from_star is not None:
        dist = distance_3d(from_star.position, to_star.position)
        ship.ticks_to_arrive = max(1, math.ceil(dist / speed))
    else:
        ship.ticks_to_arrive = 10  # Origin unknown: fixed default trip


def process_movement(game: Game) -> tuple[Game, list[Arrival]]:
    """Advance every moving ship by one tick and land the arrivals.

    Ships arriving at a star their owner is already conquering join the
    conquest; all others enter orbit.

    Args:
        game: Current game state

    Returns:
        Tuple of (updated game state, arrivals in ship order)
    """
    star_dict = {star.id: star for star in game.stars}
    arrivals = []

    for ship in game.ships:
        if ship.state is not ShipState.MOVING:
            continue
        ship.movement_ticks += 1
        if ship.movement_ticks < (ship.ticks_to_arrive or 1):
            continue

        target = star_dict.get(ship.target_star_id)
        if target is None:
            continue

        if target.being_conquered_by == ship.owner:
            ship.state = ShipState.CONQUERING
        else:
            ship.state = ShipState.ORBITING
        ship.parent_star_id = target.id
        ship.target_star_id = None
        ship.departure_star_id = None
        ship.movement_ticks = 0
        ship.ticks_to_arrive = None
        arrivals.append(
            Arrival(
                ship_id=ship.id,
                star_id=target.id,
                kind=ship.kind,
                owner=ship.owner,
                state=ship.state,
            )
        )

    return game, arrivals
