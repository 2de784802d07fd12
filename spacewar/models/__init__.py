"""Data models for SpaceWar."""

from .action import Action, BuildOrder
from .game import Game
from .kinds import (
    STRUCTURE_COSTS,
    ActionType,
    Cost,
    ShipKind,
    ShipState,
    StructureKind,
    tier_limits,
    upgrade_cost,
)
from .player import Player
from .resources import Resources
from .ship import Ship
from .star import QueueJob, Star

__all__ = [
    "Action",
    "ActionType",
    "BuildOrder",
    "Cost",
    "Game",
    "Player",
    "QueueJob",
    "Resources",
    "Ship",
    "ShipKind",
    "ShipState",
    "Star",
    "StructureKind",
    "STRUCTURE_COSTS",
    "tier_limits",
    "upgrade_cost",
]
