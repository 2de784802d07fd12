"""Closed kind enumerations for ships, structures, ship states and actions.

Each kind carries its price, build time and requirements as associated data,
so scoring and queue resolution dispatch on enum members instead of
matching type strings.
"""

from dataclasses import dataclass
from enum import Enum

from ..utils.constants import INFRA_LIMITS, UPGRADE_COST_STEP


@dataclass(frozen=True)
class Cost:
    """Price and build time of one construction job."""

    credits: float
    minerals: float
    time: int


class ShipKind(Enum):
    """Buildable ship classes.

    Value tuple: (label, credits, minerals, build time, shipyard level,
    power, hit points, upkeep).
    """

    FIGHTER = ("Fighter", 50, 25, 10, 1, 1, 1, 1)
    DESTROYER = ("Destroyer", 100, 50, 25, 2, 2, 2, 2)
    CRUISER = ("Cruiser", 150, 75, 45, 3, 3, 3, 3)
    SLIPSTREAM_FRIGATE = ("Slipstream Frigate", 120, 180, 55, 4, 0, 1, 4)

    def __init__(self, label, credits, minerals, build_time, yard_level, power, hp, upkeep):
        self.label = label
        self.cost = Cost(credits=credits, minerals=minerals, time=build_time)
        self.required_yard_level = yard_level
        self.power = power
        self.hp = hp
        self.upkeep = upkeep

    @classmethod
    def from_label(cls, label: str) -> "ShipKind":
        """Look up a ship kind by its wire label (e.g. "Destroyer")."""
        for kind in cls:
            if kind.label == label:
                return kind
        raise ValueError(f"Unknown ship type: {label}")


class StructureKind(Enum):
    """Planetary construction categories."""

    MINE = "Mine"
    DEFENSE_UPGRADE = "Defense Upgrade"
    SHIPYARD = "Shipyard"
    INFRASTRUCTURE = "Infrastructure"
    GALACTIC_HUB = "Galactic Hub"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_leveled(self) -> bool:
        """Shipyards and infrastructure are upgraded one level per job."""
        return self in (StructureKind.SHIPYARD, StructureKind.INFRASTRUCTURE)

    @property
    def is_expensive(self) -> bool:
        """Whether the AI is willing to save up for this structure."""
        return self is not StructureKind.MINE

    @classmethod
    def from_label(cls, label: str) -> "StructureKind":
        """Look up a structure kind by its wire label."""
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Unknown structure type: {label}") from None


STRUCTURE_COSTS = {
    StructureKind.MINE: Cost(credits=75, minerals=25, time=10),
    StructureKind.DEFENSE_UPGRADE: Cost(credits=100, minerals=50, time=15),
    StructureKind.SHIPYARD: Cost(credits=150, minerals=100, time=20),
    StructureKind.GALACTIC_HUB: Cost(credits=1000, minerals=1000, time=150),
}


def upgrade_cost(level: int) -> Cost:
    """Price of raising infrastructure or a shipyard from ``level``.

    Level 0 costs a fresh shipyard; each further level scales that price by
    ``1 + 0.3 * level``.

    Examples:
        >>> upgrade_cost(1)
        Cost(credits=195, minerals=130, time=26)
    """
    base = STRUCTURE_COSTS[StructureKind.SHIPYARD]
    if level == 0:
        return base
    factor = 1 + UPGRADE_COST_STEP * level
    return Cost(
        credits=int(round(base.credits * factor)),
        minerals=int(round(base.minerals * factor)),
        time=int(round(base.time * factor)),
    )


def tier_limits(level: int, table: dict | None = None) -> dict:
    """Caps unlocked by an infrastructure level.

    Levels outside the table are clamped to its lowest or top tier, so a
    star never looks up a tier that does not exist.

    Examples:
        >>> tier_limits(9)["max_pop"]
        25
    """
    table = table or INFRA_LIMITS
    return table[min(max(level, min(table)), max(table))]


class ShipState(str, Enum):
    """Location state of a ship; exactly one applies at a time."""

    ORBITING = "orbiting"
    MOVING = "moving"
    CONQUERING = "conquering"
    DESTROYED = "destroyed"


class ActionType(str, Enum):
    """Actions exchanged between controllers, the orchestrator and clients."""

    QUEUE_PLANETARY = "QUEUE_PLANETARY"
    QUEUE_SHIP = "QUEUE_SHIP"
    MOVE_SHIP = "MOVE_SHIP"
    NO_BASE = "NO_BASE"
