"""Star system data model."""

from dataclasses import dataclass, field
from typing import Optional, Union

from .kinds import ShipKind, StructureKind


@dataclass
class QueueJob:
    """A pending construction or production order.

    Infrastructure and shipyard jobs carry the level they complete to, so
    completion sets the level explicitly instead of parsing a label.
    """

    id: str
    kind: Union[StructureKind, ShipKind]
    time_left: int
    total_time: int
    target_level: Optional[int] = None

    def __post_init__(self):
        """Validate job timing."""
        if self.total_time <= 0:
            raise ValueError(f"Invalid total_time: {self.total_time} (must be > 0)")
        if self.time_left < 0:
            raise ValueError(f"Invalid time_left: {self.time_left} (must be >= 0)")

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.kind.label,
            "timeLeft": self.time_left,
            "totalTime": self.total_time,
        }
        if self.target_level is not None:
            data["level"] = self.target_level
        return data


@dataclass
class Star:
    """Represents a star system on the map.

    Stars are the strategic locations of the game: they hold population,
    mines, a shipyard and planetary defense, and two FIFO queues (planetary
    construction and ship production). ``connections`` are bidirectional
    starlanes to other star ids.
    """

    id: str
    name: str
    position: tuple[float, float, float]
    owner: Optional[str] = None  # Player id, or None for neutral
    is_homeworld: bool = False
    infrastructure_level: int = 1
    population: int = 1
    mines: int = 0
    shipyard_level: int = 0
    defense_level: int = 0
    has_galactic_hub: bool = False
    connections: set[str] = field(default_factory=set)
    planetary_queue: list[QueueJob] = field(default_factory=list)
    ship_queue: list[QueueJob] = field(default_factory=list)
    being_conquered_by: Optional[str] = None

    def __post_init__(self):
        """Validate star data after initialization."""
        if len(self.position) != 3:
            raise ValueError(f"Invalid position: {self.position} (must be x, y, z)")
        if self.infrastructure_level < 0:
            raise ValueError(
                f"Invalid infrastructure_level: {self.infrastructure_level} (must be >= 0)"
            )
        for name in ("population", "mines", "shipyard_level", "defense_level"):
            if getattr(self, name) < 0:
                raise ValueError(f"Invalid {name}: {getattr(self, name)} (must be >= 0)")
        if self.id in self.connections:
            raise ValueError(f"Star {self.id} cannot be connected to itself")

    def queued(self, kind: StructureKind) -> int:
        """Number of planetary jobs of ``kind`` waiting in the queue."""
        return sum(1 for job in self.planetary_queue if job.kind is kind)

    def pending_level(self, kind: StructureKind) -> int:
        """Shipyard or infrastructure level once every queued upgrade completes."""
        if kind is StructureKind.SHIPYARD:
            return self.shipyard_level + self.queued(kind)
        if kind is StructureKind.INFRASTRUCTURE:
            return self.infrastructure_level + self.queued(kind)
        raise ValueError(f"{kind.label} has no level")
