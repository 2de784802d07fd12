"""Ship production planning.

Each shipyard may queue one ship per decision cycle. The ship class is
chosen rock-paper-scissors style: the AI keeps a balanced local fleet
(30% Fighters, 40% Destroyers, 30% Cruisers) and leans toward the class
that counters whatever its enemies field the most.
"""

import logging

from ..models.action import Action
from ..models.kinds import ShipKind, ShipState
from ..models.resources import Resources
from ..utils.constants import AI_SHIPYARD_CAP, MAX_SHIP_QUEUE, WAIT_THRESHOLD
from .budget import Wallets, afford, pay
from .view import StarView, WorldView

logger = logging.getLogger(__name__)

# (fleet size, mines required to keep building)
MINE_QUOTA = ((0, 0), (10, 10), (15, 15), (20, 20), (25, 25),
              (30, 30), (35, 35), (40, 40), (45, 45), (50, 50))

TARGET_SHARES = {ShipKind.FIGHTER: 0.3, ShipKind.DESTROYER: 0.4, ShipKind.CRUISER: 0.3}

# Each class counters the next one: Destroyers beat Fighter swarms, and so on
COUNTERS = {
    ShipKind.FIGHTER: ShipKind.DESTROYER,
    ShipKind.DESTROYER: ShipKind.CRUISER,
    ShipKind.CRUISER: ShipKind.FIGHTER,
}
DEFAULT_DISTRIBUTION = {ShipKind.FIGHTER: 0.33, ShipKind.DESTROYER: 0.33, ShipKind.CRUISER: 0.34}

EXPENSIVE_SHIPS = (ShipKind.DESTROYER, ShipKind.CRUISER)


def required_mines(total_ships: int) -> int:
    """Mines the AI must own before it may grow its fleet past ``total_ships``."""
    required = 0
    for ships, mines in MINE_QUOTA:
        if total_ships >= ships:
            required = mines
    return required


def enemy_distribution(view: WorldView, owner: str) -> dict[ShipKind, float]:
    """Share of each combat class among every ship not owned by ``owner``.

    Returns an even split when no enemy ships exist.
    """
    enemies = [ship for ship in view.ships if ship.owner != owner]
    if not enemies:
        return dict(DEFAULT_DISTRIBUTION)
    return {
        kind: sum(1 for ship in enemies if ship.kind is kind) / len(enemies)
        for kind in TARGET_SHARES
    }


def ship_priorities(view: WorldView, star: StarView, owner: str) -> list[ShipKind]:
    """Rank the ship classes this shipyard can build, best first.

    Args:
        view: World snapshot
        star: Star with the shipyard
        owner: AI player id

    Returns:
        Buildable ship kinds sorted by descending priority score
    """
    local = view.ships_at(star.id, ShipState.ORBITING, ShipState.CONQUERING)
    local = [ship for ship in local if ship.owner == owner]
    total = max(1, len(local))

    weights = {kind: 1.0 for kind in TARGET_SHARES}
    for enemy_kind, share in enemy_distribution(view, owner).items():
        if share > 0.4:
            weights[COUNTERS[enemy_kind]] *= 1.5 + (share - 0.4) * 2
            weights[enemy_kind] *= 0.7

    defended = sum(1 for s in view.stars if s.owner != owner and s.defense_level > 0)
    if defended > 3:
        weights[ShipKind.CRUISER] *= 1.3

    scores = {}
    for kind, target in TARGET_SHARES.items():
        if star.shipyard_level < kind.required_yard_level:
            continue
        have = sum(1 for ship in local if ship.kind is kind)
        scores[kind] = (0.5 + target - have / total) * weights[kind]

    if ShipKind.CRUISER in scores:
        cruisers = sum(1 for ship in local if ship.kind is ShipKind.CRUISER)
        if cruisers == 0 and len(local) > 5:
            scores[ShipKind.CRUISER] *= 1.5

    return sorted(scores, key=scores.get, reverse=True)


def build_ships(
    view: WorldView,
    owner: str,
    total_mines: int,
    total_ships: int,
    wallets: Wallets,
    treasury: Resources,
) -> list[Action]:
    """Queue at most one ship per owned shipyard, paid from the war wallet.

    Nothing is built while the mine quota for the current fleet size is
    unmet. Shipyards are visited from the highest level down and skipped
    when their queue is full. For each yard the ranked classes are tried in
    order; a Destroyer or Cruiser the war wallet has 60% of (credits or
    minerals) stops the yard for this cycle instead of falling back to a
    cheaper class.

    Args:
        view: World snapshot
        owner: AI player id
        total_mines: Built plus queued mines the AI owns
        total_ships: Ships the AI owns
        wallets: The AI's wallets
        treasury: The AI's treasury

    Returns:
        QUEUE_SHIP actions
    """
    if total_mines < required_mines(total_ships):
        logger.debug(f"{owner}: fleet of {total_ships} waits for {required_mines(total_ships)} mines")
        return []

    yards = sorted(
        (s for s in view.owned_stars(owner) if s.shipyard_level > 0),
        key=lambda s: s.shipyard_level,
        reverse=True,
    )
    actions = []
    war = wallets.war
    for star in yards:
        if len(star.ship_queue) >= MAX_SHIP_QUEUE:
            continue
        for kind in ship_priorities(view, star, owner):
            if kind.required_yard_level > AI_SHIPYARD_CAP:
                continue
            if star.shipyard_level < kind.required_yard_level:
                continue
            if not afford(kind.cost, war):
                if kind in EXPENSIVE_SHIPS and (
                    war.credits >= WAIT_THRESHOLD * kind.cost.credits
                    or war.minerals >= WAIT_THRESHOLD * kind.cost.minerals
                ):
                    break
                continue
            pay(kind.cost, war, treasury)
            actions.append(Action.queue_ship(star.id, kind))
            break
    return actions
