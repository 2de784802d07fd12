"""Game state serialization for the client transport.

Converts the live game state into JSON-compatible dictionaries using the
camelCase keys clients expect.
"""

from typing import Any

from ..models.game import Game
from ..models.ship import Ship
from ..models.star import Star


def serialize_game(game: Game) -> dict[str, Any]:
    """Convert Game object to a JSON-compatible snapshot.

    Args:
        game: Game to serialize

    Returns:
        Dictionary representation of the full game state
    """
    return {
        "seed": game.seed,
        "currentTick": game.tick,
        "ecoTick": game.eco_tick,
        "humanPlayerId": game.human_player_id,
        "players": [
            {"id": p.id, "name": p.name, "isAI": p.is_ai} for p in game.players.values()
        ],
        "resources": {pid: res.to_dict() for pid, res in game.resources.items()},
        "stars": [serialize_star(s) for s in game.stars],
        "ships": [serialize_ship(s) for s in game.ships],
    }


def serialize_star(star: Star) -> dict[str, Any]:
    """Convert Star to dictionary."""
    x, y, z = star.position
    return {
        "id": star.id,
        "name": star.name,
        "position": {"x": x, "y": y, "z": z},
        "ownerId": star.owner,
        "isHomeworld": star.is_homeworld,
        "infrastructureLevel": star.infrastructure_level,
        "population": star.population,
        "mines": star.mines,
        "shipyardLevel": star.shipyard_level,
        "defenseLevel": star.defense_level,
        "hasGalacticHub": star.has_galactic_hub,
        "connections": sorted(star.connections),
        "planetaryQueue": [job.to_dict() for job in star.planetary_queue],
        "shipQueue": [job.to_dict() for job in star.ship_queue],
        "isBeingConqueredBy": star.being_conquered_by,
    }


def serialize_ship(ship: Ship) -> dict[str, Any]:
    """Convert Ship to dictionary."""
    return {
        "id": ship.id,
        "type": ship.kind.label,
        "ownerId": ship.owner,
        "state": ship.state.value,
        "hp": ship.hp,
        "maxHp": ship.max_hp,
        "parentStarId": ship.parent_star_id,
        "targetStarId": ship.target_star_id,
        "departureStarId": ship.departure_star_id,
        "speed": ship.speed,
        "movementTicks": ship.movement_ticks,
        "ticksToArrive": ship.ticks_to_arrive,
    }
