"""Build scoring for the AI planner.

A score is a base value multiplied by an ordered list of named modifiers,
so a planner decision can be explained factor by factor. A score of 0 means
the option is not worth building at all.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models.kinds import StructureKind
from .config import AIConfig
from .view import StarView, WorldView


# Early game: (mine threshold, mine weight, new-shipyard weight)
EARLY_STEPS = (
    (20, 0.4, 0.0),
    (15, 0.5, 0.0),
    (10, 0.6, 0.0),
    (5, 0.7, 0.0),
    (0, 1.0, 0.0),
)
EARLY_GAME_MINES = 25

# Base weights per build category
MINE_WEIGHT = 1.5
INFRASTRUCTURE_WEIGHT = 1.3
SHIPYARD_WEIGHT = 1.0
SHIPYARD_UPGRADE_WEIGHT = 1.2
DEFENSE_WEIGHT = 2.0


@dataclass
class ScoreBreakdown:
    """Base score plus the modifiers applied to it, in order."""

    base: float = 0.0
    modifiers: list[tuple[str, float]] = field(default_factory=list)

    def apply(self, name: str, factor: float) -> None:
        self.modifiers.append((name, factor))

    @property
    def total(self) -> float:
        score = self.base
        for _, factor in self.modifiers:
            score *= factor
        return score

    def explain(self) -> str:
        parts = [f"{self.base:.2f}"] + [f"{name} x{factor:g}" for name, factor in self.modifiers]
        return " ".join(parts) + f" = {self.total:.3f}"


def early_weights(total_mines: int) -> Optional[dict]:
    """Early-game weights keyed by build category, or None once the economy is running.

    Until the AI owns 25 mines, mines are damped progressively and new
    shipyards are suppressed entirely. Categories missing from the table
    (infrastructure, shipyard upgrades, defense) keep weight 1.
    """
    if total_mines >= EARLY_GAME_MINES:
        return None
    for threshold, mine, new_yard in EARLY_STEPS:
        if total_mines >= threshold:
            return {"mine": mine, "new_shipyard": new_yard}
    return None


def effective_infrastructure(star: StarView) -> int:
    return star.infrastructure_level + star.queued(StructureKind.INFRASTRUCTURE)


def effective_shipyard(star: StarView) -> int:
    return star.shipyard_level + star.queued(StructureKind.SHIPYARD)


def has_mine_room(star: StarView, config: AIConfig) -> bool:
    cap = config.limits_for(star.infrastructure_level).max_mines
    return star.mines + star.queued(StructureKind.MINE) < cap


def mine_room_scale(view: WorldView, star: StarView, owner: str, config: AIConfig) -> float:
    """Multiplier that concentrates mining on a few stars.

    Args:
        view: World snapshot
        star: Candidate star
        owner: AI player id
        config: Controller configuration

    Returns:
        0 when the star is full, 0 for an unmined star while any other owned
        star still has room (0.25 once none has), otherwise
        ``min(1, free / 5 + 0.2)``
    """
    cap = config.limits_for(star.infrastructure_level).max_mines
    built = star.mines + star.queued(StructureKind.MINE)
    free = cap - built
    if free <= 0:
        return 0.0
    if built == 0:
        other_has_room = any(
            s.id != star.id and has_mine_room(s, config) for s in view.owned_stars(owner)
        )
        return 0.0 if other_has_room else 0.25
    return min(1.0, free / 5 + 0.2)


def shipyard_diminish(view: WorldView, owner: str) -> float:
    yards = sum(1 for s in view.owned_stars(owner) if s.shipyard_level > 0)
    if yards <= 1:
        return 1.0
    if yards == 2:
        return 0.5
    if yards == 3:
        return 0.2
    return 0.05


def wanted_defense(star: StarView, future_yard: int) -> int:
    """Defense level a star deserves given its development."""
    level = star.infrastructure_level
    if level < 2:
        return 1 if future_yard > 0 else 0
    if level == 2:
        return 2
    if level == 3:
        return 3 if future_yard > 0 else 2
    return 6 if future_yard > 0 else 4


def score_build(
    view: WorldView, star: StarView, kind: StructureKind, owner: str, config: AIConfig
) -> ScoreBreakdown:
    """Score one planetary build on one star.

    Caps are checked against effective levels (built plus queued) and return
    an empty breakdown. The type-specific base and modifiers come first,
    then the general ones: non-homeworld x1.3, more than two starlanes x1.2,
    anything but a shipyard on a star without one x0.1.

    Args:
        view: World snapshot
        star: Star to build on
        kind: Structure category
        owner: AI player id
        config: Controller configuration

    Returns:
        ScoreBreakdown whose ``total`` is the option's score
    """
    limits = config.limits_for(effective_infrastructure(star))
    yard = effective_shipyard(star)
    mines = star.mines + star.queued(StructureKind.MINE)
    defense = star.defense_level + star.queued(StructureKind.DEFENSE_UPGRADE)

    if kind is StructureKind.MINE and mines >= limits.max_mines:
        return ScoreBreakdown()
    if kind is StructureKind.DEFENSE_UPGRADE and defense >= limits.max_defense:
        return ScoreBreakdown()
    if kind is StructureKind.SHIPYARD and yard >= limits.max_shipyard:
        return ScoreBreakdown()

    if kind is StructureKind.MINE:
        breakdown = ScoreBreakdown(MINE_WEIGHT * (1 - mines / max(1, limits.max_mines)))

    elif kind is StructureKind.INFRASTRUCTURE:
        has_mine = mines > 0
        has_yard = star.shipyard_level > 0 or star.queued(StructureKind.SHIPYARD) > 0
        if not has_mine and not has_yard:
            return ScoreBreakdown()
        breakdown = ScoreBreakdown(INFRASTRUCTURE_WEIGHT * (4 - star.infrastructure_level))
        if star.shipyard_level > 0:
            breakdown.apply("feeds shipyard", 1.8)
        if has_mine:
            breakdown.apply("feeds mines", 1.8)
        if star.infrastructure_level >= 2 and star.shipyard_level < 2:
            breakdown.apply("outpaces shipyard", 0.1)
        elif star.infrastructure_level >= 3 and star.shipyard_level < 3:
            breakdown.apply("outpaces shipyard", 0.1)

    elif kind is StructureKind.SHIPYARD:
        if star.shipyard_level == 0 and star.queued(StructureKind.SHIPYARD) == 0:
            breakdown = ScoreBreakdown(SHIPYARD_WEIGHT)
            breakdown.apply("yard count", shipyard_diminish(view, owner))
        else:
            breakdown = ScoreBreakdown(SHIPYARD_UPGRADE_WEIGHT * (3 - star.shipyard_level))
            if star.shipyard_level == 2:
                breakdown.apply("unlocks cruisers", 3.0)
        if star.infrastructure_level >= 3 and star.shipyard_level < 2:
            breakdown.apply("shipyard lags infrastructure", 2.5)

    elif kind is StructureKind.DEFENSE_UPGRADE:
        if yard <= 0 and star.infrastructure_level < 2:
            return ScoreBreakdown()
        missing = max(0, wanted_defense(star, yard) - defense)
        if missing == 0:
            return ScoreBreakdown()
        breakdown = ScoreBreakdown(DEFENSE_WEIGHT * missing)
        if star.infrastructure_level >= 4:
            breakdown.apply("star value", 4.0)
        elif star.infrastructure_level == 3:
            breakdown.apply("star value", 3.0)
        elif yard > 0:
            breakdown.apply("star value", 2.0)

    else:
        return ScoreBreakdown()

    if not star.is_homeworld:
        breakdown.apply("colony", 1.3)
    if len(star.connections) > 2:
        breakdown.apply("junction", 1.2)
    if star.shipyard_level == 0 and kind is not StructureKind.SHIPYARD:
        breakdown.apply("no shipyard", 0.1)
    return breakdown
