#!/usr/bin/env python3
"""SpaceWar - headless simulation entry point.

Generates a galaxy and runs the tick executor without a scheduler or
clients, so AI behaviour can be watched (or profiled) at full speed. The
human player stays idle.
"""

import argparse
import json
import logging
import sys

from spacewar.engine.map_generator import generate_map
from spacewar.engine.tick_executor import TickExecutor
from spacewar.models.game import Game
from spacewar.utils.constants import RNG_SEED_DEFAULT
from spacewar.utils.serialization import serialize_game

logger = logging.getLogger("spacewar.game")


def summarize(game: Game) -> str:
    """One status line per player: stars, mines, ships, treasury."""
    parts = []
    for player_id in game.players:
        stars = [s for s in game.stars if s.owner == player_id]
        ships = [s for s in game.ships if s.owner == player_id]
        res = game.resources[player_id]
        parts.append(
            f"{player_id}: {len(stars)} stars, {sum(s.mines for s in stars)} mines, "
            f"{len(ships)} ships, {res.credits:.0f}c/{res.minerals:.0f}m"
        )
    return f"tick {game.tick:5d} | " + " | ".join(parts)


def run_simulation(game: Game, ticks: int, report_every: int = 100) -> Game:
    """Run ``ticks`` ticks and log a summary every ``report_every`` ticks."""
    executor = TickExecutor(game)
    for _ in range(ticks):
        executor.execute_tick()
        if report_every and game.tick % report_every == 0:
            logger.info(summarize(game))
    return game


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="SpaceWar - headless AI simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                               # 1 AI, 120 stars, 1000 ticks, seed 42
  %(prog)s --ai 3 --stars 200 --ticks 5000
  %(prog)s --seed 7 --save final.json    # Dump the final state as JSON
        """,
    )
    parser.add_argument("--seed", type=int, default=RNG_SEED_DEFAULT, help="Map seed (default: 42)")
    parser.add_argument("--stars", type=int, default=120, help="Number of stars (default: 120)")
    parser.add_argument("--ai", type=int, default=1, help="Number of AI players (default: 1)")
    parser.add_argument("--ticks", type=int, default=1000, help="Ticks to simulate (default: 1000)")
    parser.add_argument(
        "--report-every", type=int, default=100, help="Ticks between summaries (0 disables)"
    )
    parser.add_argument("--save", type=str, metavar="FILE", help="Write final state to JSON file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        game = generate_map(args.seed, star_count=args.stars, num_ai_players=args.ai)
    except ValueError as e:
        print(f"Error generating map: {e}")
        sys.exit(1)
    logger.info(f"Generated {len(game.stars)} stars with seed {args.seed}")

    try:
        run_simulation(game, args.ticks, args.report_every)
    except KeyboardInterrupt:
        print("\n\nSimulation interrupted by user.")
    logger.info(summarize(game))

    if args.save:
        with open(args.save, "w") as f:
            json.dump(serialize_game(game), f, indent=2)
        logger.info(f"Saved final state to {args.save}")


if __name__ == "__main__":
    main()
