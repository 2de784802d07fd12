"""FastAPI server for SpaceWar.

Provides an HTTP API to create and control real-time games and a WebSocket
channel that pushes each tick's diff to connected clients.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .schemas.requests import CreateGameRequest, SpeedRequest, SubmitCommandsRequest
from .schemas.responses import (
    ControlResponse,
    CreateGameResponse,
    GameStateResponse,
    SubmitCommandsResponse,
)
from .session import GameSession, GameSessionManager

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("SpaceWar server starting...")
    yield
    logger.info("SpaceWar server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="SpaceWar API",
    description="Real-time Human vs AI strategy game server",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _control_response(session: GameSession) -> ControlResponse:
    return ControlResponse(
        gameId=session.id,
        tick=session.game.tick,
        paused=session.scheduler.paused,
        running=session.scheduler.running,
        speed=session.scheduler.speed,
    )


# ============================================
# GAME CONTROL
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "SpaceWar",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new game and start its tick scheduler.

    Example:
        POST /api/games
        {"seed": 42, "starCount": 80, "aiPlayers": 1, "speed": 2}
    """
    try:
        session = await sessions.create_session(
            seed=request.seed,
            star_count=request.starCount,
            ai_players=request.aiPlayers,
            speed=request.speed,
            auto_start=request.autoStart,
        )
    except ValueError as e:
        logger.error(f"Failed to create game: {e}", exc_info=True)
        raise HTTPException(status_code=400, detail=f"Failed to create game: {str(e)}")

    return CreateGameResponse(
        gameId=session.id,
        humanPlayer=session.human_player_id,
        aiPlayers=session.game.ai_player_ids(),
        seed=session.game.seed,
        state=session.get_state(),
    )


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get the current game state."""
    session = _get_session(game_id)
    return GameStateResponse(
        gameId=game_id,
        tick=session.game.tick,
        paused=session.scheduler.paused,
        speed=session.scheduler.speed,
        state=session.get_state(),
    )


@app.post("/api/games/{game_id}/commands", response_model=SubmitCommandsResponse)
async def submit_commands(game_id: str, request: SubmitCommandsRequest):
    """Queue human commands; they are applied at the start of the next tick's action phase.

    Example:
        POST /api/games/game-abc123/commands
        {
          "commands": [
            {"action": "QUEUE_PLANETARY", "starId": "star-001", "build": {"type": "Mine"}},
            {"action": "MOVE_SHIP", "shipId": "p1-0000", "toStarId": "star-007"}
          ]
        }
    """
    session = _get_session(game_id)
    commands = [command.model_dump(by_alias=True) for command in request.commands]
    actions, errors = session.build_commands(commands)
    if errors:
        logger.warning(f"Game {game_id}: rejected commands: {errors}")
    accepted = session.executor.submit_commands(session.human_player_id, actions)
    return SubmitCommandsResponse(accepted=accepted, errors=errors)


@app.post("/api/games/{game_id}/pause", response_model=ControlResponse)
async def pause_game(game_id: str):
    session = _get_session(game_id)
    session.scheduler.pause()
    logger.info(f"Game {game_id} paused at tick {session.game.tick}")
    return _control_response(session)


@app.post("/api/games/{game_id}/resume", response_model=ControlResponse)
async def resume_game(game_id: str):
    session = _get_session(game_id)
    session.scheduler.resume()
    if not session.scheduler.running:
        session.scheduler.start()
    logger.info(f"Game {game_id} resumed at tick {session.game.tick}")
    return _control_response(session)


@app.post("/api/games/{game_id}/speed", response_model=ControlResponse)
async def set_speed(game_id: str, request: SpeedRequest):
    session = _get_session(game_id)
    session.scheduler.set_speed(request.speed)
    logger.info(f"Game {game_id} speed set to {request.speed}x")
    return _control_response(session)


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Stop and delete a game session."""
    if await sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")


# ============================================
# TICK STREAM
# ============================================


@app.websocket("/ws/games/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    """WebSocket connection for real-time game updates.

    Clients receive:
    - CONNECTED: Initial connection confirmation with the full state
    - GAME_DIFF: One message per tick with the tick's diff
    - PONG: Reply to a PING keepalive
    """
    session = sessions.get(game_id)
    if not session:
        await websocket.close(code=1008, reason="Game not found")
        return

    await websocket.accept()
    session.add_connection(websocket)

    try:
        await websocket.send_json(
            {
                "type": "CONNECTED",
                "gameId": game_id,
                "tick": session.game.tick,
                "state": session.get_state(),
            }
        )

        while True:
            data = await websocket.receive_json()
            if data.get("type") == "PING":
                await websocket.send_json({"type": "PONG"})

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from game {game_id}")
    except Exception as e:
        logger.error(f"WebSocket error in game {game_id}: {e}", exc_info=True)
    finally:
        session.remove_connection(websocket)

