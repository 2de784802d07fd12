"""Read-only world snapshot handed to AI controllers.

The tick executor builds one ``WorldView`` per tick, after the economy and
queue phases, and shares it between every controller. Views are frozen
copies: controllers can inspect stars, queues and ships but cannot change
them, so every state change has to go through an ``Action``.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from ..models.game import Game
from ..models.kinds import ShipKind, ShipState, StructureKind
from ..models.ship import Ship
from ..models.star import QueueJob, Star
from ..utils.distance import distance_3d


@dataclass(frozen=True)
class JobView:
    kind: Union[StructureKind, ShipKind]
    time_left: int
    target_level: Optional[int] = None

    @classmethod
    def of(cls, job: QueueJob) -> "JobView":
        return cls(kind=job.kind, time_left=job.time_left, target_level=job.target_level)


@dataclass(frozen=True)
class StarView:
    """Frozen copy of a star, including its queues."""

    id: str
    name: str
    position: tuple[float, float, float]
    owner: Optional[str]
    is_homeworld: bool
    infrastructure_level: int
    population: int
    mines: int
    shipyard_level: int
    defense_level: int
    connections: frozenset[str]
    planetary_queue: tuple[JobView, ...] = ()
    ship_queue: tuple[JobView, ...] = ()
    being_conquered_by: Optional[str] = None

    @classmethod
    def of(cls, star: Star) -> "StarView":
        return cls(
            id=star.id,
            name=star.name,
            position=tuple(star.position),
            owner=star.owner,
            is_homeworld=star.is_homeworld,
            infrastructure_level=star.infrastructure_level,
            population=star.population,
            mines=star.mines,
            shipyard_level=star.shipyard_level,
            defense_level=star.defense_level,
            connections=frozenset(star.connections),
            planetary_queue=tuple(JobView.of(j) for j in star.planetary_queue),
            ship_queue=tuple(JobView.of(j) for j in star.ship_queue),
            being_conquered_by=star.being_conquered_by,
        )

    def queued(self, kind: StructureKind) -> int:
        """Number of planetary jobs of ``kind`` waiting in the queue."""
        return sum(1 for job in self.planetary_queue if job.kind is kind)


@dataclass(frozen=True)
class ShipView:
    """Frozen copy of a ship."""

    id: str
    kind: ShipKind
    owner: str
    state: ShipState
    hp: float
    parent_star_id: Optional[str] = None
    target_star_id: Optional[str] = None

    @classmethod
    def of(cls, ship: Ship) -> "ShipView":
        return cls(
            id=ship.id,
            kind=ship.kind,
            owner=ship.owner,
            state=ship.state,
            hp=ship.hp,
            parent_star_id=ship.parent_star_id,
            target_star_id=ship.target_star_id,
        )


@dataclass(frozen=True)
class WorldView:
    """Snapshot of every star and ship at one tick."""

    tick: int
    stars: tuple[StarView, ...]
    ships: tuple[ShipView, ...]
    _index: dict = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        self._index.update({star.id: star for star in self.stars})

    @classmethod
    def snapshot(cls, game: Game) -> "WorldView":
        """Copy the current game state into a read-only view."""
        return cls(
            tick=game.tick,
            stars=tuple(StarView.of(star) for star in game.stars),
            ships=tuple(
                ShipView.of(ship) for ship in game.ships if ship.state is not ShipState.DESTROYED
            ),
        )

    def star(self, star_id: Optional[str]) -> Optional[StarView]:
        return self._index.get(star_id)

    def owned_stars(self, player_id: str) -> list[StarView]:
        return [star for star in self.stars if star.owner == player_id]

    def ships_of(self, player_id: str) -> list[ShipView]:
        return [ship for ship in self.ships if ship.owner == player_id]

    def ships_at(self, star_id: str, *states: ShipState) -> list[ShipView]:
        """Ships whose parent is ``star_id``, optionally filtered by state."""
        return [
            ship
            for ship in self.ships
            if ship.parent_star_id == star_id and (not states or ship.state in states)
        ]

    def distance(self, a: StarView, b: StarView) -> float:
        return distance_3d(a.position, b.position)

    def total_mines(self, player_id: str) -> int:
        """Built plus queued mines across every star ``player_id`` owns."""
        return sum(
            star.mines + star.queued(StructureKind.MINE) for star in self.owned_stars(player_id)
        )
