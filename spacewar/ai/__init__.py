"""Computer opponent: budgeting, build planning, fleet control."""

from .config import AIConfig, InfraLimit
from .controller import AIController
from .expansion import GatheringPlan
from .view import ShipView, StarView, WorldView

__all__ = [
    "AIConfig",
    "AIController",
    "GatheringPlan",
    "InfraLimit",
    "ShipView",
    "StarView",
    "WorldView",
]
