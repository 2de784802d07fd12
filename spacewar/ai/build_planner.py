"""Planetary construction planning.

Every decision cycle the planner lists the structures it could queue on
each owned star, scores them, and queues at most one. It may also decide to
queue nothing and save toward an expensive option it has mostly paid for.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models.action import Action
from ..models.kinds import STRUCTURE_COSTS, Cost, StructureKind, upgrade_cost
from ..models.resources import Resources
from ..utils.constants import AI_SHIPYARD_CAP, WAIT_THRESHOLD
from .budget import Wallets, afford, pay, wallet_for
from .config import AIConfig
from .scoring import (
    ScoreBreakdown,
    early_weights,
    effective_infrastructure,
    has_mine_room,
    mine_room_scale,
    score_build,
)
from .view import StarView, WorldView

logger = logging.getLogger(__name__)


@dataclass
class BuildOption:
    """One candidate structure on one star."""

    star_id: str
    kind: StructureKind
    cost: Cost
    score: float
    target_level: Optional[int] = None
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    def to_action(self) -> Action:
        return Action.queue_planetary(
            self.star_id, self.kind, self.cost.time, level=self.target_level
        )


def enumerate_build_options(
    view: WorldView, star: StarView, total_mines: int, owner: str, config: AIConfig
) -> list[BuildOption]:
    """List every structure worth considering on ``star``.

    Candidates:
    - Infrastructure upgrade, below the top tier and none queued
    - New shipyard (none built or queued), or a shipyard upgrade below
      min(tier cap, AI cap of 3) with none queued
    - Mine, while the tier has room, scaled by the mine room multiplier
    - Defense upgrade, when it scores above zero

    During the early game each score is multiplied by the weight for its
    category. The function has no side effects.

    Args:
        view: World snapshot
        star: Owned star to plan for
        total_mines: Built plus queued mines the AI owns
        owner: AI player id
        config: Controller configuration

    Returns:
        Candidate options in enumeration order
    """
    limits = config.limits_for(effective_infrastructure(star))
    weights = early_weights(total_mines) or {}
    options = []

    def push(kind, cost, level=None, weight_key=None, mult=1.0):
        breakdown = score_build(view, star, kind, owner, config)
        weight = weights.get(weight_key, 1.0)
        if weight != 1.0:
            breakdown.apply("early game", weight)
        if mult != 1.0:
            breakdown.apply("mine room", mult)
        options.append(
            BuildOption(
                star_id=star.id,
                kind=kind,
                cost=cost,
                score=breakdown.total,
                target_level=level,
                breakdown=breakdown,
            )
        )

    if star.infrastructure_level < config.top_tier and not star.queued(
        StructureKind.INFRASTRUCTURE
    ):
        level = star.infrastructure_level
        push(StructureKind.INFRASTRUCTURE, upgrade_cost(level), level=level + 1)

    yard_queued = star.queued(StructureKind.SHIPYARD) > 0
    if star.shipyard_level == 0 and not yard_queued:
        push(
            StructureKind.SHIPYARD,
            STRUCTURE_COSTS[StructureKind.SHIPYARD],
            level=1,
            weight_key="new_shipyard",
        )
    elif (
        0 < star.shipyard_level < min(limits.max_shipyard, AI_SHIPYARD_CAP)
        and not yard_queued
    ):
        level = star.shipyard_level
        push(StructureKind.SHIPYARD, upgrade_cost(level), level=level + 1)

    if has_mine_room(star, config):
        push(
            StructureKind.MINE,
            STRUCTURE_COSTS[StructureKind.MINE],
            weight_key="mine",
            mult=mine_room_scale(view, star, owner, config),
        )

    if score_build(view, star, StructureKind.DEFENSE_UPGRADE, owner, config).total > 0:
        push(StructureKind.DEFENSE_UPGRADE, STRUCTURE_COSTS[StructureKind.DEFENSE_UPGRADE])

    return options


def select_structure(
    options: list[BuildOption], wallets: Wallets, treasury: Resources
) -> Optional[Action]:
    """Pick and pay for the best affordable option, or save.

    Options are ranked by score. The first one its wallet can afford wins.
    Any expensive option ranked above it with at least 60% of both costs
    already banked is a savings candidate; if it outscores the winner,
    nothing is built so the wallet keeps filling.

    Args:
        options: Candidates from enumerate_build_options
        wallets: The AI's wallets (debited on success)
        treasury: The AI's treasury (debited on success)

    Returns:
        A QUEUE_PLANETARY action, or None when nothing is affordable or the
        AI is saving
    """
    if not options:
        return None
    ranked = sorted(options, key=lambda o: o.score, reverse=True)

    chosen = None
    saving = None
    for option in ranked:
        wallet = wallet_for(wallets, option.kind)
        if afford(option.cost, wallet):
            chosen = option
            break
        if (
            saving is None
            and option.kind.is_expensive
            and wallet.credits >= WAIT_THRESHOLD * option.cost.credits
            and wallet.minerals >= WAIT_THRESHOLD * option.cost.minerals
        ):
            saving = option

    if chosen is None:
        return None
    if saving is not None and saving.score > chosen.score:
        logger.debug(
            f"Saving for {saving.kind.label} at {saving.star_id} "
            f"({saving.score:.2f} > {chosen.score:.2f})"
        )
        return None

    pay(chosen.cost, wallet_for(wallets, chosen.kind), treasury)
    logger.debug(
        f"Queue {chosen.kind.label} at {chosen.star_id}: {chosen.breakdown.explain()}"
    )
    return chosen.to_action()


def build_structure(
    view: WorldView,
    owner: str,
    total_mines: int,
    wallets: Wallets,
    treasury: Resources,
    config: AIConfig,
) -> Optional[Action]:
    """Plan at most one planetary build across every owned star."""
    options = []
    for star in view.owned_stars(owner):
        options.extend(enumerate_build_options(view, star, total_mines, owner, config))
    return select_structure(options, wallets, treasury)


def build_mine_only(
    view: WorldView, owner: str, wallets: Wallets, treasury: Resources, config: AIConfig
) -> Optional[Action]:
    """Early bootstrap: queue a mine on the first owned star with room.

    Args:
        view: World snapshot
        owner: AI player id
        wallets: The AI's wallets (mine is paid from eco)
        treasury: The AI's treasury

    Returns:
        A QUEUE_PLANETARY action, or None if no star has room or eco
        cannot afford a mine
    """
    star = next((s for s in view.owned_stars(owner) if has_mine_room(s, config)), None)
    if star is None:
        return None
    cost = STRUCTURE_COSTS[StructureKind.MINE]
    if not afford(cost, wallets.eco):
        return None
    pay(cost, wallets.eco, treasury)
    return Action.queue_planetary(star.id, StructureKind.MINE, cost.time)
