"""AI controller configuration and validation."""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import (
    FLEET_TARGET,
    GATHERING_TIMEOUT,
    INFRA_LIMITS,
    SHIP_SPEEDS,
)


@dataclass(frozen=True)
class InfraLimit:
    """Caps unlocked by one infrastructure tier."""

    max_pop: int
    max_mines: int
    max_defense: int
    max_shipyard: int


def _default_limits() -> dict[int, InfraLimit]:
    return {level: InfraLimit(**caps) for level, caps in INFRA_LIMITS.items()}


@dataclass
class AIConfig:
    """Per-controller tuning parameters.

    Attributes:
        infra_limits: Infrastructure tier table, keyed by level 1..N
        human_player_id: Id of the human player (expansion prefers its stars)
        ship_speeds: Travel speeds applied when the executor dispatches a MOVE_SHIP
        fleet_target: Maximum ships sent on a direct sortie
        gathering_timeout: Ticks before an unfinished rendezvous is abandoned
    """

    infra_limits: dict[int, InfraLimit] = field(default_factory=_default_limits)
    human_player_id: Optional[str] = "p1"
    ship_speeds: dict = field(default_factory=lambda: dict(SHIP_SPEEDS))
    fleet_target: int = FLEET_TARGET
    gathering_timeout: int = GATHERING_TIMEOUT

    def __post_init__(self):
        """Validate the tier table and numeric limits."""
        if not self.infra_limits:
            raise ValueError("infra_limits must not be empty")
        levels = sorted(self.infra_limits)
        if levels != list(range(1, len(levels) + 1)):
            raise ValueError(f"infra_limits must cover levels 1..N without gaps, got {levels}")
        if self.fleet_target <= 0:
            raise ValueError(f"Invalid fleet_target: {self.fleet_target} (must be > 0)")
        if self.gathering_timeout <= 0:
            raise ValueError(
                f"Invalid gathering_timeout: {self.gathering_timeout} (must be > 0)"
            )

    @property
    def top_tier(self) -> int:
        return max(self.infra_limits)

    def limits_for(self, level: int) -> InfraLimit:
        """Caps for an infrastructure level, clamped to the top tier."""
        if level in self.infra_limits:
            return self.infra_limits[level]
        return self.infra_limits[self.top_tier]

    def check_levels(self, levels) -> None:
        """Raise if any star sits at a level the tier table does not define.

        Args:
            levels: Infrastructure levels of every star in the world

        Raises:
            ValueError: For the first level without a tier entry
        """
        for level in levels:
            if level not in self.infra_limits:
                raise ValueError(f"infra_limits has no entry for infrastructure level {level}")
