"""SpaceWar: tick-driven strategy game core with a heuristic AI opponent."""

__version__ = "1.0.0"
