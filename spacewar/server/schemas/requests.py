"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    starCount: int = Field(  # noqa: N815
        default=120, ge=2, le=500, description="Number of stars in the galaxy"
    )
    aiPlayers: int = Field(  # noqa: N815
        default=1, ge=1, le=7, description="Number of AI opponents"
    )
    speed: float = Field(default=1.0, gt=0, le=100, description="Tick speed multiplier")
    autoStart: bool = Field(  # noqa: N815
        default=True, description="Start the tick scheduler immediately"
    )


class BuildRequest(BaseModel):
    """What to enqueue on a star."""

    type: str = Field(description="Structure or ship label, e.g. 'Mine' or 'Destroyer'")


class CommandRequest(BaseModel):
    """Single human command."""

    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(description="QUEUE_PLANETARY, QUEUE_SHIP or MOVE_SHIP")
    star_id: str | None = Field(default=None, alias="starId")
    build: BuildRequest | None = None
    ship_id: str | None = Field(default=None, alias="shipId")
    to_star_id: str | None = Field(default=None, alias="toStarId")


class SubmitCommandsRequest(BaseModel):
    """Request to queue human commands for the next tick."""

    commands: list[CommandRequest] = Field(description="Commands applied in order")


class SpeedRequest(BaseModel):
    """Request to change the tick speed."""

    speed: float = Field(gt=0, le=100, description="Tick speed multiplier")
