"""Seedable RNG wrapper for deterministic world generation."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for reproducible maps.

    World generation draws every random number through this class, so the
    same seed always yields the same galaxy.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self.rng.random()

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N <= b.

        Args:
            a: Lower bound
            b: Upper bound
        """
        return self.rng.uniform(a, b)
