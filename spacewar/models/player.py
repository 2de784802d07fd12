"""Player data model."""

from dataclasses import dataclass


@dataclass
class Player:
    """A participant in a game, either the human or an AI controller."""

    id: str  # e.g. "p1"
    name: str
    is_ai: bool = False

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("Player id cannot be empty")
