"""Tick orchestrator.

This module runs one scheduler tick in a fixed order:
1. Advance the tick counter
2. Economy (income and upkeep every TICKS_PER_ECONOMY_CYCLE ticks)
3. Construction and ship production queues
4. AI decision cycles against one shared read-only snapshot
5. Application of queued human commands, then AI actions
6. Ship movement
7. Diff assembly (TICK_INFO first)

Architecture:
Each phase is an independent method returning the updated game and its diff
entries. ``execute_tick`` composes them; tests can call any phase alone.
The executor is the only writer of stars, ships and queues once a game is
running. Controllers propose ``Action`` objects and this module validates
and applies them; invalid actions are skipped with a warning.
"""

import logging
import time
from typing import Iterable, Optional

from ..ai.config import AIConfig
from ..ai.controller import AIController
from ..ai.view import WorldView
from ..models.action import Action, BuildOrder
from ..models.game import Game
from ..models.kinds import ActionType, ShipState
from ..models.star import QueueJob
from ..utils.constants import MAX_SHIP_QUEUE
from .economy import process_economy
from .movement import depart, process_movement
from .production import check_planetary, price_planetary, process_construction

logger = logging.getLogger(__name__)


class TickExecutor:
    """Runs ticks for one game and owns its AI controllers.

    Args:
        game: Game state to drive
        config: Configuration shared by every AI controller
        speed: Initial speed multiplier, reported in TICK_INFO
    """

    def __init__(self, game: Game, config: Optional[AIConfig] = None, speed: float = 1.0):
        self.game = game
        self.config = config or AIConfig(human_player_id=game.human_player_id)
        self.speed = speed
        self.pending_commands: list[Action] = []
        view = WorldView.snapshot(game)
        self.controllers: dict[str, AIController] = {
            player_id: AIController(player_id, game.resources[player_id], view, self.config)
            for player_id in game.ai_player_ids()
        }

    # =========================================================================
    # PHASE METHODS
    # =========================================================================

    def execute_phase_economy(self, game: Game) -> tuple[Game, list[dict]]:
        """Economy advance: population growth, income and upkeep on the cycle tick."""
        return process_economy(game)

    def execute_phase_construction(self, game: Game) -> tuple[Game, list[dict]]:
        """Advance the head job of every planetary and ship queue."""
        return process_construction(game)

    def execute_phase_ai(self, game: Game) -> tuple[Game, list[Action]]:
        """Run every AI controller against one shared snapshot.

        Each controller receives the signed treasury change since its
        previous cycle as income, so its wallets keep summing to the
        treasury.

        Args:
            game: Current game state

        Returns:
            Tuple of (game state, unapplied actions in controller order)
        """
        view = WorldView.snapshot(game)
        actions = []
        for player_id, controller in self.controllers.items():
            if player_id not in game.resources:
                continue
            actions.extend(controller.run_cycle(view, controller.income_delta()))
        return game, actions

    def execute_phase_actions(self, game: Game, actions: Iterable[Action]) -> tuple[Game, list[dict]]:
        """Apply actions in order, skipping invalid ones.

        Args:
            game: Current game state
            actions: Actions to apply

        Returns:
            Tuple of (updated game state, diff entries of the applied actions)
        """
        diff = []
        for action in actions:
            if self.apply_action(game, action):
                diff.append(action.to_dict())
        return game, diff

    def execute_phase_movement(self, game: Game) -> tuple[Game, list[dict]]:
        """Move ships one tick and report arrivals."""
        game, arrivals = process_movement(game)
        return game, [arrival.to_dict() for arrival in arrivals]

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_tick(self) -> list[dict]:
        """Run one full tick.

        Returns:
            The tick's diff, led by a TICK_INFO entry
        """
        game = self.game
        game.tick += 1

        game, diff = self.execute_phase_economy(game)
        game, construction = self.execute_phase_construction(game)
        diff.extend(construction)

        game, ai_actions = self.execute_phase_ai(game)
        commands, self.pending_commands = self.pending_commands, []
        game, applied = self.execute_phase_actions(game, commands + ai_actions)
        diff.extend(applied)

        game, arrivals = self.execute_phase_movement(game)
        diff.extend(arrivals)

        for star in game.stars:
            if star.planetary_queue or star.ship_queue:
                diff.append(
                    {
                        "action": "CONSTRUCTION_PROGRESS",
                        "starId": star.id,
                        "planetaryQueue": [job.to_dict() for job in star.planetary_queue],
                        "shipQueue": [job.to_dict() for job in star.ship_queue],
                    }
                )

        diff.insert(
            0,
            {
                "action": "TICK_INFO",
                "tick": game.tick,
                "speed": self.speed,
                "timestamp": int(time.time() * 1000),
            },
        )
        return diff

    def submit_commands(self, player_id: str, commands: Iterable[Action]) -> int:
        """Queue human commands for the next tick.

        Returns:
            Number of commands queued
        """
        count = 0
        for command in commands:
            command.player_id = player_id
            self.pending_commands.append(command)
            count += 1
        return count

    # =========================================================================
    # ACTION APPLICATION
    # =========================================================================

    def apply_action(self, game: Game, action: Action) -> bool:
        """Validate and apply a single action.

        Returns:
            True if the action changed the game (or is NO_BASE), False if skipped
        """
        if action.action is ActionType.NO_BASE:
            return True
        if action.action in (ActionType.QUEUE_PLANETARY, ActionType.QUEUE_SHIP):
            return self._apply_queue(game, action)
        if action.action is ActionType.MOVE_SHIP:
            return self._apply_move(game, action)
        logger.warning(f"Skipping unknown action {action.action!r}")
        return False

    def _apply_queue(self, game: Game, action: Action) -> bool:
        star = game.star(action.star_id)
        if star is None:
            logger.warning(f"Skipping {action.action.value}: unknown star {action.star_id}")
            return False
        if star.owner != action.player_id:
            logger.warning(
                f"Skipping {action.action.value}: {action.player_id} does not own {star.id}"
            )
            return False

        is_ship = action.action is ActionType.QUEUE_SHIP
        queue = star.ship_queue if is_ship else star.planetary_queue
        if is_ship and len(queue) >= MAX_SHIP_QUEUE:
            logger.warning(f"Skipping QUEUE_SHIP: ship queue at {star.id} is full")
            return False

        if not is_ship:
            kind = action.build.kind
            if action.cost is not None and kind.is_leveled:
                # Client upgrades are priced against the queue as it is now
                action.cost, level = price_planetary(star, kind)
                action.build = BuildOrder(kind=kind, time=action.cost.time, level=level)
            try:
                check_planetary(star, kind, action.build.level)
            except ValueError as e:
                logger.warning(f"Skipping QUEUE_PLANETARY: {e}")
                return False

        if action.cost is not None:
            treasury = game.resources.get(action.player_id)
            if (
                treasury is None
                or treasury.credits < action.cost.credits
                or treasury.minerals < action.cost.minerals
            ):
                logger.warning(
                    f"Skipping {action.action.value}: {action.player_id} cannot afford "
                    f"{action.build.kind.label}"
                )
                return False
            treasury.credits -= action.cost.credits
            treasury.minerals -= action.cost.minerals

        queue.append(
            QueueJob(
                id=game.next_job_id(),
                kind=action.build.kind,
                time_left=action.build.time,
                total_time=action.build.time,
                target_level=action.build.level,
            )
        )
        return True

    def _apply_move(self, game: Game, action: Action) -> bool:
        ship = game.ship(action.ship_id)
        if ship is None:
            logger.warning(f"Skipping MOVE_SHIP: unknown ship {action.ship_id}")
            return False
        if ship.owner != action.player_id:
            logger.warning(f"Skipping MOVE_SHIP: {action.player_id} does not own {ship.id}")
            return False
        if ship.state is not ShipState.ORBITING:
            logger.warning(f"Skipping MOVE_SHIP: {ship.id} is {ship.state.value}")
            return False
        to_star = game.star(action.to_star_id)
        if to_star is None:
            logger.warning(f"Skipping MOVE_SHIP: unknown star {action.to_star_id}")
            return False
        from_star = game.star(ship.parent_star_id)
        if from_star is not None and from_star.id == to_star.id:
            logger.warning(f"Skipping MOVE_SHIP: {ship.id} is already at {to_star.id}")
            return False

        depart(ship, from_star, to_star, self.config.ship_speeds)
        return True
