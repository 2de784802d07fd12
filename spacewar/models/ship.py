"""Ship data model."""

from dataclasses import dataclass
from typing import Optional

from .kinds import ShipKind, ShipState


@dataclass
class Ship:
    """A single ship owned by one player.

    An orbiting or conquering ship sits at ``parent_star_id``. A moving ship
    has no parent and travels from ``departure_star_id`` to
    ``target_star_id``, arriving after ``ticks_to_arrive`` ticks.
    """

    id: str  # Unique identifier (e.g., "p2-0007")
    kind: ShipKind
    owner: str
    state: ShipState = ShipState.ORBITING
    hp: float = 0  # Defaults to the kind's hit points
    max_hp: float = 0
    parent_star_id: Optional[str] = None
    target_star_id: Optional[str] = None
    departure_star_id: Optional[str] = None
    speed: float = 0
    movement_ticks: int = 0
    ticks_to_arrive: Optional[int] = None

    def __post_init__(self):
        """Fill hit points from the kind and validate location state."""
        if not self.max_hp:
            self.max_hp = self.kind.hp
        if not self.hp:
            self.hp = self.max_hp
        if not self.owner:
            raise ValueError(f"Ship {self.id} must have an owner")
        if self.state in (ShipState.ORBITING, ShipState.CONQUERING) and not self.parent_star_id:
            raise ValueError(f"Ship {self.id} is {self.state.value} but has no parent star")
        if self.state is ShipState.MOVING and not self.target_star_id:
            raise ValueError(f"Ship {self.id} is moving but has no target star")
