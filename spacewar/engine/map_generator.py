"""Galaxy generation with separated homeworlds and sparse starlanes."""

import math

from ..models import Game, Player, Resources, Star
from ..utils import GameRNG, distance_3d
from ..utils.constants import (
    DEFAULT_STAR_COUNT,
    GALAXY_THICKNESS,
    HOMEWORLD_DISTANCE_FACTOR,
    MAX_STARLANES_PER_STAR,
    MIN_STAR_SEPARATION,
    STARLANE_MAX_DIST_BASE,
    STARLANE_PROBABILITY,
    STARTING_CREDITS,
    STARTING_MINERALS,
)

HUMAN_PLAYER_ID = "p1"
MAX_PLACEMENT_ATTEMPTS = 100


def generate_map(
    seed: int,
    star_count: int = DEFAULT_STAR_COUNT,
    num_ai_players: int = 1,
    human_name: str = "Player",
) -> Game:
    """Generate a galaxy for one human and ``num_ai_players`` AI opponents.

    Algorithm:
    1. Create the players: p1 is human, p2.. are AI controllers
    2. Scatter ``star_count`` stars in a flattened disc whose radius grows
       with the star count. The first star of each player is its homeworld
       (1 mine, shipyard level 1, population 5); homeworlds keep a minimum
       separation, other stars keep MIN_STAR_SEPARATION from each other.
       Placement retries up to 100 times before accepting any position.
    3. Link nearby star pairs with bidirectional starlanes at random, at
       most four lanes per star
    4. Give every player the starting treasury

    Args:
        seed: Random seed for deterministic generation
        star_count: Number of stars (must cover every player's homeworld)
        num_ai_players: Number of AI opponents
        human_name: Display name of the human player

    Returns:
        Game object with stars, players and treasuries initialized

    Raises:
        ValueError: If there are fewer stars than players
    """
    players = [Player(id=HUMAN_PLAYER_ID, name=human_name, is_ai=False)]
    for i in range(num_ai_players):
        players.append(Player(id=f"p{i + 2}", name=f"AI #{i + 1}", is_ai=True))
    if star_count < len(players):
        raise ValueError(f"Need at least {len(players)} stars, got {star_count}")

    rng = GameRNG(seed)
    spread = 220 + math.pow(star_count, 0.85) * 8
    stars = _place_stars(rng, players, star_count, spread)
    _link_starlanes(rng, stars, star_count)

    return Game(
        seed=seed,
        tick=0,
        stars=stars,
        players={p.id: p for p in players},
        resources={
            p.id: Resources(credits=STARTING_CREDITS, minerals=STARTING_MINERALS)
            for p in players
        },
        human_player_id=HUMAN_PLAYER_ID,
        rng=rng,
    )


def _random_position(rng: GameRNG, spread: float) -> tuple[float, float, float]:
    """Uniform point in a disc, thicker toward the rim."""
    theta = rng.random() * 2 * math.pi
    r = math.sqrt(rng.random()) * spread
    max_y = spread * GALAXY_THICKNESS * (r / spread)
    return (math.cos(theta) * r, rng.uniform(-max_y, max_y), math.sin(theta) * r)


def _place_stars(rng: GameRNG, players: list[Player], star_count: int, spread: float) -> list[Star]:
    min_home_dist = spread * HOMEWORLD_DISTANCE_FACTOR
    stars: list[Star] = []
    homeworld_positions = []

    for i in range(star_count):
        owner = players[i].id if i < len(players) else None
        is_homeworld = owner is not None

        position = None
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            candidate = _random_position(rng, spread)
            if is_homeworld:
                others = homeworld_positions
                min_dist = min_home_dist
            else:
                others = [s.position for s in stars]
                min_dist = MIN_STAR_SEPARATION
            if all(distance_3d(candidate, p) >= min_dist for p in others):
                position = candidate
                break
        if position is None:
            position = _random_position(rng, spread)
        if is_homeworld:
            homeworld_positions.append(position)

        stars.append(
            Star(
                id=f"star-{i + 1:03d}",
                name=f"Star {i + 1}",
                position=position,
                owner=owner,
                is_homeworld=is_homeworld,
                infrastructure_level=1,
                population=5 if is_homeworld else 1,
                mines=1 if is_homeworld else 0,
                shipyard_level=1 if is_homeworld else 0,
                defense_level=0,
            )
        )
    return stars


def _link_starlanes(rng: GameRNG, stars: list[Star], star_count: int) -> None:
    scale = math.sqrt(star_count / 125)
    max_dist = STARLANE_MAX_DIST_BASE * scale
    probability = STARLANE_PROBABILITY / scale

    for i, a in enumerate(stars):
        for b in stars[i + 1 :]:
            if distance_3d(a.position, b.position) >= max_dist:
                continue
            if rng.random() >= probability:
                continue
            if len(a.connections) >= MAX_STARLANES_PER_STAR:
                continue
            if len(b.connections) >= MAX_STARLANES_PER_STAR:
                continue
            a.connections.add(b.id)
            b.connections.add(a.id)
