"""Economy advance: population growth, income and upkeep.

The economy resolves on a slower cadence than the scheduler: every tick
advances a counter, and only every ``TICKS_PER_ECONOMY_CYCLE``-th tick
grows population and settles income and upkeep for every player in one pass.
"""

import logging

from ..models.game import Game
from ..models.kinds import ShipState, tier_limits
from ..models.resources import Resources
from ..utils.constants import (
    DEFENSE_UPKEEP_PER_LEVEL,
    GALACTIC_HUB_UPKEEP,
    SHIPYARD_UPKEEP_PER_LEVEL,
    TICKS_PER_ECONOMY_CYCLE,
)

logger = logging.getLogger(__name__)


def process_economy(game: Game, infra_limits: dict | None = None) -> tuple[Game, list[dict]]:
    """Advance the economy by one tick.

    On the cycle tick:
    1. Every owned star below its tier's population cap gains 1 population
    2. Every player earns credits per population point and minerals per mine
    3. Upkeep is charged in credits: per defense level, per shipyard level,
       per Galactic Hub and per ship by type

    The treasury may go negative; it is never clamped. Stars above the top
    tier use the top tier's population cap.

    Args:
        game: Current game state
        infra_limits: Tier table (defaults to INFRA_LIMITS)

    Returns:
        Tuple of (updated game state, list of diff entries)
    """
    game.eco_tick += 1
    if game.eco_tick < TICKS_PER_ECONOMY_CYCLE:
        return game, []
    game.eco_tick = 0

    updates = []
    for star in game.stars:
        if star.owner is None:
            continue
        cap = tier_limits(star.infrastructure_level, infra_limits)["max_pop"]
        if star.population < cap:
            star.population += 1
            updates.append(
                {
                    "action": "STAR_UPDATED",
                    "starId": star.id,
                    "updatedFields": {"population": star.population},
                }
            )

    for player_id, treasury in game.resources.items():
        income, upkeep = _settle_player(game, player_id)
        before = treasury.copy()
        treasury.credits += income.credits - upkeep
        treasury.minerals += income.minerals
        if treasury != before:
            updates.append(
                {
                    "action": "RESOURCE_UPDATE",
                    "playerId": player_id,
                    "resources": treasury.to_dict(),
                }
            )
        if treasury.credits < 0:
            logger.debug(f"Player {player_id} treasury is negative: {treasury.credits}")

    return game, updates


def _settle_player(game: Game, player_id: str) -> tuple[Resources, int]:
    """Compute one cycle of income and credit upkeep for a player."""
    income = Resources()
    upkeep = 0
    for star in game.stars:
        if star.owner != player_id:
            continue
        income.credits += star.population
        income.minerals += star.mines
        upkeep += star.defense_level * DEFENSE_UPKEEP_PER_LEVEL
        upkeep += star.shipyard_level * SHIPYARD_UPKEEP_PER_LEVEL
        if star.has_galactic_hub:
            upkeep += GALACTIC_HUB_UPKEEP
    for ship in game.ships:
        if ship.owner == player_id and ship.state is not ShipState.DESTROYED:
            upkeep += ship.kind.upkeep
    return income, upkeep
