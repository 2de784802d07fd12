"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    tick: int
    paused: bool
    speed: float
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    humanPlayer: str  # noqa: N815
    aiPlayers: list[str]  # noqa: N815
    seed: int
    state: dict


class SubmitCommandsResponse(BaseModel):
    """Response after submitting commands."""

    accepted: int
    errors: list[str] = Field(default_factory=list)


class ControlResponse(BaseModel):
    """Scheduler status after pause/resume/speed changes."""

    gameId: str  # noqa: N815
    tick: int
    paused: bool
    running: bool
    speed: float
