"""Expansion and fleet gathering.

The AI picks one star to take each cycle. Weakly defended or neutral
targets are attacked directly from the nearest star with idle ships. A
target whose planetary defense would shred the nearest group triggers a
multi-cycle rendezvous instead: ships converge on a rally star, and once
the gathered fleet would keep enough power through the defense's first
strike, all of it launches at the target.

The rendezvous is stored as a ``GatheringPlan`` of star ids and re-read
from the world snapshot every cycle.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..engine.combat import first_strike, survivor_power
from ..models.action import Action
from ..models.kinds import ShipState
from ..utils.constants import (
    ENEMY_PROXIMITY_RADIUS,
    LAUNCH_POWER,
    MAX_CASUALTY_RATE,
    MIN_CONQUEST_POWER,
    MIN_SHIPS_TO_EXPAND,
)
from .config import AIConfig
from .view import ShipView, StarView, WorldView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatheringPlan:
    """An ongoing rendezvous: ships converge on ``rally_star_id`` to take ``target_star_id``."""

    rally_star_id: str
    target_star_id: str
    start_tick: int


def needs_fleet_gathering(target: StarView, ships: list[ShipView]) -> bool:
    """Whether ``ships`` are too weak to attack ``target`` on their own.

    Unowned and undefended targets never need a rendezvous. Otherwise it is
    needed when the first strike would destroy every ship, leave less than
    the minimum conquest power, or destroy more than 60% of the ships. An
    empty group always needs one.
    """
    if target.owner is None or target.defense_level == 0:
        return False
    if not ships:
        return True
    survivors = first_strike(ships, target.defense_level)
    casualty_rate = (len(ships) - len(survivors)) / len(ships)
    return (
        not survivors
        or survivor_power(ships, target.defense_level) < MIN_CONQUEST_POWER
        or casualty_rate > MAX_CASUALTY_RATE
    )


def find_gathering_point(view: WorldView, target: StarView, owner: str) -> Optional[StarView]:
    """Choose the owned star where a fleet should assemble before attacking.

    Closer stars score higher (``1000 / (distance + 100)``), a starlane to
    the target triples the score, a shipyard adds 50%, and every non-owned
    star within 150 units makes the rally point less attractive.

    Args:
        view: World snapshot
        target: Star to be attacked
        owner: AI player id

    Returns:
        The best rally star, or None if the AI owns no other star
    """
    best, best_score = None, float("-inf")
    for star in view.owned_stars(owner):
        if star.id == target.id:
            continue
        score = 1000 / (view.distance(star, target) + 100)
        if target.id in star.connections:
            score *= 3
        if star.shipyard_level > 0:
            score *= 1.5
        nearby = sum(
            1
            for other in view.stars
            if other.owner != owner and view.distance(other, star) < ENEMY_PROXIMITY_RADIUS
        )
        score /= 1 + nearby * 0.5
        if score > best_score:
            best, best_score = star, score
    return best


class ExpansionPlanner:
    """Target selection plus the gathering state machine for one AI player.

    Args:
        owner: AI player id
        config: Controller configuration
    """

    def __init__(self, owner: str, config: AIConfig):
        self.owner = owner
        self.config = config
        self.plan: Optional[GatheringPlan] = None

    def check_timeout(self, tick: int) -> None:
        """Abandon a rendezvous that has run longer than the configured timeout."""
        if self.plan is None:
            return
        if tick - self.plan.start_tick > self.config.gathering_timeout:
            logger.info(
                f"{self.owner}: gathering at {self.plan.rally_star_id} for "
                f"{self.plan.target_star_id} timed out after {tick - self.plan.start_tick} ticks"
            )
            self.plan = None

    def expand(self, view: WorldView, committed: Optional[set[str]] = None) -> list[Action]:
        """Run one expansion cycle.

        Args:
            view: World snapshot
            committed: Ship ids already ordered this cycle; they are skipped

        Returns:
            MOVE_SHIP actions
        """
        committed = committed if committed is not None else set()
        if self.plan is not None:
            return self.continue_gathering(view, committed)

        targets = [
            s for s in view.stars if s.owner != self.owner and not s.being_conquered_by
        ]
        groups = self._idle_groups(view, committed)
        available = [ship for ships in groups.values() for ship in ships]
        if len(available) < MIN_SHIPS_TO_EXPAND:
            return []

        best, best_score, best_needs_gathering = None, float("-inf"), False
        for target in targets:
            nearest, min_dist = None, float("inf")
            for star_id in groups:
                dist = view.distance(view.star(star_id), target)
                if dist < min_dist:
                    nearest, min_dist = view.star(star_id), dist
            if nearest is None:
                continue

            score = 1000 / (min_dist + 50)
            if target.owner is None:
                score *= 2
            elif target.owner == self.config.human_player_id:
                score *= 1.5

            needs_gathering = False
            if target.defense_level > 0:
                if survivor_power(available, target.defense_level) < MIN_CONQUEST_POWER:
                    score *= 0.1
                elif needs_fleet_gathering(target, groups[nearest.id]):
                    needs_gathering = True
                    score *= 0.8

            if score > best_score:
                best, best_score, best_needs_gathering = target, score, needs_gathering

        if best is None:
            return []

        if best_needs_gathering and best.defense_level > 0:
            rally = find_gathering_point(view, best, self.owner)
            if rally is not None:
                self.plan = GatheringPlan(
                    rally_star_id=rally.id, target_star_id=best.id, start_tick=view.tick
                )
                logger.info(
                    f"{self.owner}: gathering at {rally.id} to attack {best.id} "
                    f"(defense {best.defense_level})"
                )
                return self.start_gathering(view, committed)

        origin = min(
            (view.star(star_id) for star_id in groups),
            key=lambda star: view.distance(star, best),
        )
        ships = groups[origin.id][: self.config.fleet_target]
        logger.debug(f"{self.owner}: {len(ships)} ships from {origin.id} attack {best.id}")
        return self._send(ships, origin.id, best.id, committed)

    def start_gathering(self, view: WorldView, committed: set[str]) -> list[Action]:
        """Order spare ships at every other owned star to the rally star.

        Each star keeps a reserve: two ships with a shipyard, otherwise one.
        """
        actions = []
        for star in view.owned_stars(self.owner):
            if star.id == self.plan.rally_star_id:
                continue
            ships = self._idle_at(view, star.id, committed)
            keep = 2 if star.shipyard_level > 0 else 1
            spare = ships[: max(0, len(ships) - keep)]
            actions.extend(self._send(spare, star.id, self.plan.rally_star_id, committed))
        return actions

    def continue_gathering(self, view: WorldView, committed: set[str]) -> list[Action]:
        """Launch the gathered fleet when strong enough, otherwise keep gathering.

        The plan is dropped if the rally star is lost or the target already
        belongs to the AI.
        """
        rally = view.star(self.plan.rally_star_id)
        target = view.star(self.plan.target_star_id)
        if rally is None or target is None or rally.owner != self.owner or target.owner == self.owner:
            logger.info(f"{self.owner}: gathering for {self.plan.target_star_id} aborted")
            self.plan = None
            return []

        gathered = self._idle_at(view, rally.id, committed)
        if survivor_power(gathered, target.defense_level) >= LAUNCH_POWER:
            logger.info(
                f"{self.owner}: launching {len(gathered)} ships from {rally.id} at {target.id}"
            )
            self.plan = None
            return self._send(gathered, rally.id, target.id, committed)
        return self.start_gathering(view, committed)

    def _idle_at(self, view: WorldView, star_id: str, committed: set[str]) -> list[ShipView]:
        return [
            ship
            for ship in view.ships_at(star_id, ShipState.ORBITING)
            if ship.owner == self.owner and ship.id not in committed
        ]

    def _idle_groups(self, view: WorldView, committed: set[str]) -> dict[str, list[ShipView]]:
        """Idle ships grouped by the owned star they orbit."""
        groups = {}
        for star in view.owned_stars(self.owner):
            ships = self._idle_at(view, star.id, committed)
            if ships:
                groups[star.id] = ships
        return groups

    def _send(self, ships, from_star_id: str, to_star_id: str, committed: set[str]) -> list[Action]:
        actions = []
        for ship in ships:
            committed.add(ship.id)
            actions.append(Action.move_ship(ship.id, from_star_id, to_star_id))
        return actions
