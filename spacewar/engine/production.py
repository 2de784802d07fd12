"""Construction and ship production queue advance.

Each star carries two FIFO queues. Every tick only the head job of each
queue counts down; when it reaches zero its permanent effect is applied
exactly once and the job is dequeued:

- Mine: +1 mine
- Defense Upgrade: +1 defense level
- Shipyard: shipyard level set to the job's target level (+1 if unset)
- Infrastructure: infrastructure level set to the job's target level
- Galactic Hub: the star becomes a hub and opens starlanes to the
  nearest existing hubs
- Ship jobs: a new ship appears in orbit, owned by the star's owner

Planetary jobs are priced and checked against the star's tier caps before
they are queued; ``price_planetary`` and ``check_planetary`` are shared by
the client command path and the tick executor.
"""

import logging
from typing import Optional

from ..models.game import Game
from ..models.kinds import (
    STRUCTURE_COSTS,
    Cost,
    ShipKind,
    ShipState,
    StructureKind,
    tier_limits,
    upgrade_cost,
)
from ..models.ship import Ship
from ..models.star import QueueJob, Star
from ..utils.constants import HUB_INFRA_LEVEL, HUB_LINKS, INFRA_LIMITS
from ..utils.distance import distance_3d

logger = logging.getLogger(__name__)


def price_planetary(star: Star, kind: StructureKind) -> tuple[Cost, Optional[int]]:
    """Price and target level of the next ``kind`` job at a star.

    Shipyards and infrastructure are priced from the level the star will
    have once its queued upgrades complete, so a second upgrade in the
    queue costs (and targets) one level more than the first.

    Returns:
        Tuple of (cost, target level or None for unleveled structures)
    """
    if kind.is_leveled:
        level = star.pending_level(kind)
        return upgrade_cost(level), level + 1
    return STRUCTURE_COSTS[kind], None


def check_planetary(
    star: Star, kind: StructureKind, level: Optional[int] = None, limits: dict | None = None
) -> None:
    """Check a planetary job against the star's tier caps.

    Caps come from the infrastructure tier the star reaches once its queue
    completes.

    Args:
        star: Star the job would be queued at
        kind: Structure category
        level: Target level for shipyard and infrastructure jobs
        limits: Tier table (defaults to INFRA_LIMITS)

    Raises:
        ValueError: If the job would exceed a cap or its level is stale
    """
    table = limits or INFRA_LIMITS
    infra = star.pending_level(StructureKind.INFRASTRUCTURE)
    caps = tier_limits(infra, table)

    if kind.is_leveled:
        expected = star.pending_level(kind) + 1
        if level is not None and level != expected:
            raise ValueError(f"{kind.label} level {level} at {star.id}, next level is {expected}")
        if kind is StructureKind.INFRASTRUCTURE and expected > max(table):
            raise ValueError(f"{star.id} is already at the top infrastructure tier")
        if kind is StructureKind.SHIPYARD and expected > caps["max_shipyard"]:
            raise ValueError(
                f"{star.id} shipyard is capped at level {caps['max_shipyard']} "
                f"by infrastructure level {infra}"
            )
    elif kind is StructureKind.MINE:
        if star.mines + star.queued(kind) >= caps["max_mines"]:
            raise ValueError(f"{star.id} has no room for another mine")
    elif kind is StructureKind.DEFENSE_UPGRADE:
        if star.defense_level + star.queued(kind) >= caps["max_defense"]:
            raise ValueError(f"{star.id} defense is capped at level {caps['max_defense']}")
    elif kind is StructureKind.GALACTIC_HUB:
        if star.has_galactic_hub or star.queued(kind):
            raise ValueError(f"{star.id} already has a Galactic Hub")
        if star.infrastructure_level < HUB_INFRA_LEVEL:
            raise ValueError(f"Galactic Hub needs infrastructure level {HUB_INFRA_LEVEL}")


def process_construction(game: Game) -> tuple[Game, list[dict]]:
    """Advance every star's planetary and ship queues by one tick.

    Args:
        game: Current game state

    Returns:
        Tuple of (updated game state, completion diff entries in order)
    """
    diff = []
    for star in game.stars:
        diff.extend(_advance_planetary_queue(game, star))
    for star in game.stars:
        event = _advance_ship_queue(game, star)
        if event:
            diff.append(event)
    return game, diff


def _tick_head(queue: list[QueueJob]) -> QueueJob | None:
    """Count down the head job; pop and return it once it completes."""
    if not queue:
        return None
    job = queue[0]
    job.time_left -= 1
    if job.time_left > 0:
        return None
    return queue.pop(0)


def _advance_planetary_queue(game: Game, star: Star) -> list[dict]:
    job = _tick_head(star.planetary_queue)
    if job is None:
        return []

    apply_structure(star, job)
    events = [
        {
            "action": "COMPLETE_PLANETARY",
            "starId": star.id,
            "type": job.kind.label,
            "starData": {
                "mines": star.mines,
                "defenseLevel": star.defense_level,
                "shipyardLevel": star.shipyard_level,
                "infrastructureLevel": star.infrastructure_level,
                "hasGalacticHub": star.has_galactic_hub,
                "planetaryQueue": [j.to_dict() for j in star.planetary_queue],
            },
        }
    ]
    if job.kind is StructureKind.GALACTIC_HUB:
        links = link_hub(game, star)
        if links:
            events.append(
                {
                    "action": "HUB_NETWORK_UPDATED",
                    "connections": [{"from": a, "to": b} for a, b in links],
                }
            )
    return events


def apply_structure(star: Star, job: QueueJob) -> None:
    """Apply the permanent effect of a completed planetary job."""
    kind = job.kind
    if kind is StructureKind.MINE:
        star.mines += 1
    elif kind is StructureKind.DEFENSE_UPGRADE:
        star.defense_level += 1
    elif kind is StructureKind.SHIPYARD:
        star.shipyard_level = job.target_level or star.shipyard_level + 1
    elif kind is StructureKind.INFRASTRUCTURE:
        star.infrastructure_level = job.target_level or star.infrastructure_level + 1
    elif kind is StructureKind.GALACTIC_HUB:
        star.has_galactic_hub = True
    else:
        logger.warning(f"Star {star.id}: unknown planetary job {job.kind!r} dropped")


def link_hub(game: Game, hub: Star) -> list[tuple[str, str]]:
    """Open two-way starlanes from a new hub to the nearest existing hubs.

    Hub lanes are not subject to the map generator's per-star lane cap.

    Returns:
        (new hub id, existing hub id) pairs, nearest first
    """
    others = sorted(
        (s for s in game.stars if s.has_galactic_hub and s.id != hub.id),
        key=lambda s: distance_3d(s.position, hub.position),
    )
    links = []
    for other in others[:HUB_LINKS]:
        hub.connections.add(other.id)
        other.connections.add(hub.id)
        links.append((hub.id, other.id))
    if links:
        logger.info(f"Galactic Hub at {hub.id} linked to {[b for _, b in links]}")
    return links


def _advance_ship_queue(game: Game, star: Star) -> dict | None:
    job = _tick_head(star.ship_queue)
    if job is None:
        return None

    if not isinstance(job.kind, ShipKind) or star.owner is None:
        logger.warning(f"Star {star.id}: ship job {job.id} completed without a valid owner")
        return None

    ship = Ship(
        id=game.next_ship_id(star.owner),
        kind=job.kind,
        owner=star.owner,
        state=ShipState.ORBITING,
        parent_star_id=star.id,
    )
    game.ships.append(ship)
    return {
        "action": "SHIP_SPAWNED",
        "starId": star.id,
        "type": job.kind.label,
        "ownerId": star.owner,
        "shipId": ship.id,
        "starData": {"shipQueue": [j.to_dict() for j in star.ship_queue]},
    }
