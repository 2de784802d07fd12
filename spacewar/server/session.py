"""Game session management for real-time Human vs AI gameplay."""

import logging
import uuid
from dataclasses import dataclass, field

from fastapi import WebSocket

from ..engine.map_generator import generate_map
from ..engine.production import check_planetary, price_planetary
from ..engine.scheduler import TickScheduler
from ..engine.tick_executor import TickExecutor
from ..models.action import Action
from ..models.game import Game
from ..models.kinds import ActionType, ShipKind, StructureKind
from ..utils.serialization import serialize_game

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One running game: state, tick executor, scheduler and WebSocket clients."""

    id: str
    game: Game
    executor: TickExecutor
    scheduler: TickScheduler
    connections: list[WebSocket] = field(default_factory=list)

    @property
    def human_player_id(self) -> str:
        return self.game.human_player_id

    def get_state(self) -> dict:
        """Full game state, as sent on connect and by the state endpoint."""
        state = serialize_game(self.game)
        state["aiWallets"] = {
            pid: controller.wallets.to_dict()
            for pid, controller in self.executor.controllers.items()
        }
        return state

    def build_commands(self, commands: list[dict]) -> tuple[list[Action], list[str]]:
        """Convert command dicts from the API into priced actions.

        Shipyards and infrastructure are priced from the level the star
        reaches once its queued upgrades complete. A structure that would
        overrun the star's tier caps is rejected here; the executor checks
        again when the command is applied. Validation is lenient: a bad
        command is reported and the rest are still accepted.

        Args:
            commands: Command dicts with keys action, starId, build, shipId, toStarId

        Returns:
            Tuple of (actions to queue, error messages)
        """
        actions = []
        errors = []
        for i, command in enumerate(commands):
            try:
                actions.append(self._build_command(command))
            except (KeyError, ValueError, TypeError) as e:
                errors.append(f"Command {i}: {e}")
        return actions, errors

    def _build_command(self, command: dict) -> Action:
        action_type = ActionType(command["action"])

        if action_type is ActionType.MOVE_SHIP:
            ship = self.game.ship(command.get("shipId"))
            if ship is None:
                raise ValueError(f"Unknown ship {command.get('shipId')}")
            return Action.move_ship(ship.id, ship.parent_star_id, command["toStarId"])

        star = self.game.star(command.get("starId"))
        if star is None:
            raise ValueError(f"Unknown star {command.get('starId')}")
        label = (command.get("build") or {})["type"]

        if action_type is ActionType.QUEUE_SHIP:
            kind = ShipKind.from_label(label)
            if star.shipyard_level < kind.required_yard_level:
                raise ValueError(f"{kind.label} needs shipyard level {kind.required_yard_level}")
            action = Action.queue_ship(star.id, kind)
            action.cost = kind.cost
            return action

        if action_type is ActionType.QUEUE_PLANETARY:
            kind = StructureKind.from_label(label)
            cost, level = price_planetary(star, kind)
            check_planetary(star, kind, level)
            action = Action.queue_planetary(star.id, kind, cost.time, level=level)
            action.cost = cost
            return action

        raise ValueError(f"{action_type.value} cannot be submitted by clients")

    async def broadcast(self, message: dict):
        """Send message to all connected WebSocket clients.

        Args:
            message: Dictionary to send as JSON
        """
        disconnected = []
        for ws in self.connections:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                disconnected.append(ws)

        for ws in disconnected:
            self.connections.remove(ws)

    async def push_diff(self, diff: list[dict]):
        """Scheduler sink: forward one tick's diff to every client."""
        await self.broadcast({"type": "GAME_DIFF", "tick": self.game.tick, "diff": diff})

    def add_connection(self, websocket: WebSocket):
        """Add a WebSocket connection to this session."""
        self.connections.append(websocket)
        logger.info(f"WebSocket connected to game {self.id}, total: {len(self.connections)}")

    def remove_connection(self, websocket: WebSocket):
        """Remove a WebSocket connection from this session."""
        if websocket in self.connections:
            self.connections.remove(websocket)
            logger.info(
                f"WebSocket disconnected from game {self.id}, remaining: {len(self.connections)}"
            )


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; sessions live as long as the server process.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    async def create_session(
        self,
        seed: int | None = None,
        star_count: int = 120,
        ai_players: int = 1,
        speed: float = 1.0,
        auto_start: bool = True,
    ) -> GameSession:
        """Create a new game session and optionally start its scheduler.

        Args:
            seed: Optional RNG seed for determinism
            star_count: Number of stars
            ai_players: Number of AI opponents
            speed: Initial tick speed multiplier
            auto_start: Start ticking immediately

        Returns:
            Newly created GameSession
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        game = generate_map(seed=seed, star_count=star_count, num_ai_players=ai_players)
        executor = TickExecutor(game, speed=speed)
        scheduler = TickScheduler(executor, speed=speed)
        session = GameSession(id=game_id, game=game, executor=executor, scheduler=scheduler)
        scheduler.sink = session.push_diff

        self.sessions[game_id] = session
        if auto_start:
            scheduler.start()

        logger.info(
            f"Created game {game_id}: seed={seed}, stars={star_count}, "
            f"ai={game.ai_player_ids()}, speed={speed}"
        )
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID."""
        return self.sessions.get(game_id)

    async def delete(self, game_id: str) -> bool:
        """Stop and delete a game session.

        Returns:
            True if deleted, False if not found
        """
        session = self.sessions.pop(game_id, None)
        if session is None:
            return False
        await session.scheduler.stop()
        logger.info(f"Deleted game {game_id}")
        return True

    async def cleanup_all(self):
        """Stop every scheduler (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        for session in self.sessions.values():
            await session.scheduler.stop()
        self.sessions.clear()
