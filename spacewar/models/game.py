"""Game state container."""

from dataclasses import dataclass, field
from typing import Optional

from ..utils import GameRNG
from .player import Player
from .resources import Resources
from .ship import Ship
from .star import Star


@dataclass
class Game:
    """Main game state container.

    Holds every star, ship, player and treasury plus the tick counters. The
    tick executor is the only writer of this state once a game is running.
    """

    seed: int  # RNG seed
    tick: int = 0  # Scheduler ticks elapsed
    eco_tick: int = 0  # Ticks since the last economy cycle
    stars: list[Star] = field(default_factory=list)
    ships: list[Ship] = field(default_factory=list)
    players: dict[str, Player] = field(default_factory=dict)
    resources: dict[str, Resources] = field(default_factory=dict)  # Treasury per player
    human_player_id: Optional[str] = None
    ship_counter: dict[str, int] = field(default_factory=dict)  # Ship ID generation
    job_counter: int = 0  # Queue job ID generation
    rng: Optional[GameRNG] = None

    def __post_init__(self):
        """Initialize RNG if not provided."""
        if self.rng is None:
            self.rng = GameRNG(self.seed)
        if self.tick < 0:
            raise ValueError(f"Invalid tick: {self.tick} (must be >= 0)")

    def star(self, star_id: str) -> Optional[Star]:
        """Find a star by id."""
        for star in self.stars:
            if star.id == star_id:
                return star
        return None

    def ship(self, ship_id: str) -> Optional[Ship]:
        """Find a ship by id."""
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def next_ship_id(self, owner: str) -> str:
        """Allocate the next ship id for ``owner``."""
        count = self.ship_counter.get(owner, 0)
        self.ship_counter[owner] = count + 1
        return f"{owner}-{count:04d}"

    def next_job_id(self) -> str:
        """Allocate the next queue job id."""
        self.job_counter += 1
        return f"job-{self.job_counter:05d}"

    def ai_player_ids(self) -> list[str]:
        return [pid for pid, player in self.players.items() if player.is_ai]
