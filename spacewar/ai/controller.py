"""AI controller: one decision cycle per tick for one computer player.

The controller owns three private wallets carved out of the player's
treasury, plus the expansion planner's gathering state. Each cycle it reads
a ``WorldView`` snapshot and returns the actions it wants applied; it never
touches stars or ships itself.

Decision cycle:
1. Deposit this cycle's income into the wallets (split by mine count)
2. Report NO_BASE if the player owns no stars
3. Drop a rendezvous that has exceeded the gathering timeout
4. Guard bands by economy size:
   - under 5 mines: bootstrap a mine, then expand
   - under 10 mines and under 10 ships: one structure, ships, expand
   - otherwise: one structure, ships, reinforce threatened stars, expand
"""

import logging
from typing import Optional

from ..models.action import Action
from ..models.kinds import ActionType
from ..models.resources import Resources
from .budget import Wallets, allocate
from .build_planner import build_mine_only, build_structure
from .config import AIConfig
from .defense import defend
from .expansion import ExpansionPlanner, GatheringPlan
from .ship_planner import build_ships
from .view import WorldView

logger = logging.getLogger(__name__)

BOOTSTRAP_MINES = 5
EARLY_MINES = 10
EARLY_SHIPS = 10


class AIController:
    """Decision engine for one AI player.

    Args:
        player_id: Id of the AI player
        treasury: The player's live treasury; spending debits it directly
        view: World snapshot used to validate the configuration and seed the
            wallets from the starting treasury
        config: Tuning parameters (defaults to AIConfig())

    Raises:
        ValueError: If the infrastructure table lacks a tier for any star's
            current level
    """

    def __init__(
        self,
        player_id: str,
        treasury: Resources,
        view: WorldView,
        config: Optional[AIConfig] = None,
    ):
        self.player_id = player_id
        self.config = config or AIConfig()
        self.config.check_levels(star.infrastructure_level for star in view.stars)
        self.treasury = treasury
        self.wallets = Wallets()
        self.wallets.deposit(allocate(treasury.copy(), view.total_mines(player_id)))
        self.previous_resources = treasury.copy()
        self.turn = 0
        self.expansion = ExpansionPlanner(player_id, self.config)

    @property
    def gathering(self) -> Optional[GatheringPlan]:
        return self.expansion.plan

    def income_delta(self) -> Resources:
        """Signed treasury change since the end of the previous cycle."""
        return Resources(
            credits=self.treasury.credits - self.previous_resources.credits,
            minerals=self.treasury.minerals - self.previous_resources.minerals,
        )

    def run_cycle(self, view: WorldView, income: Optional[Resources] = None) -> list[Action]:
        """Run one decision cycle.

        Args:
            view: World snapshot for this tick
            income: Resources earned since the last cycle. When omitted, the
                non-negative treasury change since the previous snapshot is
                used.

        Returns:
            Actions stamped with this player's id
        """
        self.turn += 1
        if income is None:
            delta = self.income_delta()
            income = Resources(credits=max(0, delta.credits), minerals=max(0, delta.minerals))

        total_mines = view.total_mines(self.player_id)
        self.wallets.deposit(allocate(income, total_mines))

        my_stars = view.owned_stars(self.player_id)
        if not my_stars:
            actions = [Action(action=ActionType.NO_BASE)]
            return self._finish(actions)

        self.expansion.check_timeout(view.tick)

        total_ships = len(view.ships_of(self.player_id))
        committed: set[str] = set()
        actions = []

        if total_mines < BOOTSTRAP_MINES:
            build = build_mine_only(view, self.player_id, self.wallets, self.treasury, self.config)
            if build:
                actions.append(build)
            actions.extend(self.expansion.expand(view, committed))
        else:
            build = build_structure(
                view, self.player_id, total_mines, self.wallets, self.treasury, self.config
            )
            if build:
                actions.append(build)
            actions.extend(
                build_ships(
                    view, self.player_id, total_mines, total_ships, self.wallets, self.treasury
                )
            )
            if not (total_mines < EARLY_MINES and total_ships < EARLY_SHIPS):
                actions.extend(defend(view, self.player_id, committed))
            actions.extend(self.expansion.expand(view, committed))

        logger.debug(
            f"{self.player_id} turn {self.turn}: {len(actions)} actions, "
            f"{total_mines} mines, {total_ships} ships"
        )
        return self._finish(actions)

    def _finish(self, actions: list[Action]) -> list[Action]:
        for action in actions:
            action.player_id = self.player_id
        self.previous_resources = self.treasury.copy()
        return actions
