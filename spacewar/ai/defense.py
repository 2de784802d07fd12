"""Defensive redeployment of idle ships toward threatened stars."""

import logging

from ..engine.combat import fleet_power, threat_score
from ..models.action import Action
from ..models.kinds import ShipState
from .view import WorldView

logger = logging.getLogger(__name__)


def defend(view: WorldView, owner: str, committed: set[str] | None = None) -> list[Action]:
    """Send reinforcements to every owned star with hostile ships present.

    For each threatened star the power gap is the hostile threat score minus
    the friendly power already there. While the gap is positive, idle ships
    at other stars are sent in order of their distance to the threatened
    star, each reducing the gap by its power.

    A ship is sent at most once per call. Ship ids used here are added to
    ``committed`` so later planners can skip them.

    Args:
        view: World snapshot
        owner: AI player id
        committed: Ship ids already given orders this cycle (updated in place)

    Returns:
        MOVE_SHIP actions
    """
    if committed is None:
        committed = set()
    actions = []
    present = (ShipState.ORBITING, ShipState.CONQUERING)

    for star in view.owned_stars(owner):
        here = view.ships_at(star.id, *present)
        hostiles = [ship for ship in here if ship.owner != owner]
        if not hostiles:
            continue
        friendly = [ship for ship in here if ship.owner == owner]
        gap = threat_score(star, hostiles) - fleet_power(friendly)
        if gap <= 0:
            continue

        candidates = [
            ship
            for ship in view.ships_of(owner)
            if ship.state is ShipState.ORBITING
            and ship.parent_star_id != star.id
            and ship.id not in committed
        ]
        candidates.sort(key=lambda ship: _distance_from(view, ship, star))

        sent = 0
        for ship in candidates:
            gap -= fleet_power([ship])
            committed.add(ship.id)
            actions.append(Action.move_ship(ship.id, ship.parent_star_id, star.id))
            sent += 1
            if gap <= 0:
                break
        logger.debug(f"{owner}: {sent} ships reinforce {star.id}, remaining gap {gap}")

    return actions


def _distance_from(view: WorldView, ship, star) -> float:
    origin = view.star(ship.parent_star_id)
    if origin is None:
        return float("inf")
    return view.distance(origin, star)
