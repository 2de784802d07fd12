"""Action data model for state-mutating proposals."""

from dataclasses import dataclass
from typing import Optional, Union

from .kinds import ActionType, Cost, ShipKind, StructureKind


@dataclass(frozen=True)
class BuildOrder:
    """What to enqueue: the kind, its build time and (for upgrades) target level."""

    kind: Union[StructureKind, ShipKind]
    time: int
    level: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"type": self.kind.label, "time": self.time}
        if self.level is not None:
            data["level"] = self.level
        return data


@dataclass
class Action:
    """A proposed change to game state.

    Controllers and clients never mutate stars or ships; they return
    actions, and the tick executor applies them. ``cost`` is only set on
    client commands: the executor charges it at application time. AI
    actions are pre-paid from the controller's wallets.
    """

    action: ActionType
    player_id: Optional[str] = None
    star_id: Optional[str] = None
    build: Optional[BuildOrder] = None
    ship_id: Optional[str] = None
    from_star_id: Optional[str] = None
    to_star_id: Optional[str] = None
    cost: Optional[Cost] = None

    def __post_init__(self):
        """Validate that the fields required by the action type are present."""
        if self.action in (ActionType.QUEUE_PLANETARY, ActionType.QUEUE_SHIP):
            if not self.star_id or self.build is None:
                raise ValueError(f"{self.action.value} requires star_id and build")
            wanted = StructureKind if self.action is ActionType.QUEUE_PLANETARY else ShipKind
            if not isinstance(self.build.kind, wanted):
                raise ValueError(
                    f"{self.action.value} cannot build {self.build.kind.label}"
                )
        elif self.action is ActionType.MOVE_SHIP:
            if not self.ship_id or not self.to_star_id:
                raise ValueError("MOVE_SHIP requires ship_id and to_star_id")

    @classmethod
    def queue_planetary(cls, star_id: str, kind: StructureKind, time: int, level=None):
        return cls(
            action=ActionType.QUEUE_PLANETARY,
            star_id=star_id,
            build=BuildOrder(kind=kind, time=time, level=level),
        )

    @classmethod
    def queue_ship(cls, star_id: str, kind: ShipKind):
        return cls(
            action=ActionType.QUEUE_SHIP,
            star_id=star_id,
            build=BuildOrder(kind=kind, time=kind.cost.time),
        )

    @classmethod
    def move_ship(cls, ship_id: str, from_star_id: Optional[str], to_star_id: str):
        return cls(
            action=ActionType.MOVE_SHIP,
            ship_id=ship_id,
            from_star_id=from_star_id,
            to_star_id=to_star_id,
        )

    def to_dict(self) -> dict:
        """Serialize to the camelCase wire format pushed to clients."""
        data: dict = {"action": self.action.value}
        if self.action in (ActionType.QUEUE_PLANETARY, ActionType.QUEUE_SHIP):
            data["starId"] = self.star_id
            data["build"] = self.build.to_dict()
        elif self.action is ActionType.MOVE_SHIP:
            data["shipId"] = self.ship_id
            data["fromStarId"] = self.from_star_id
            data["toStarId"] = self.to_star_id
        data["playerId"] = self.player_id
        return data
