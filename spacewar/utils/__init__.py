"""Utility functions and constants for SpaceWar."""

from .constants import (
    BASE_TICK_MS,
    INFRA_LIMITS,
    RNG_SEED_DEFAULT,
    SHIP_SPEEDS,
    TICKS_PER_ECONOMY_CYCLE,
)
from .distance import distance_3d
from .rng import GameRNG

__all__ = [
    "BASE_TICK_MS",
    "INFRA_LIMITS",
    "RNG_SEED_DEFAULT",
    "SHIP_SPEEDS",
    "TICKS_PER_ECONOMY_CYCLE",
    "distance_3d",
    "GameRNG",
]
