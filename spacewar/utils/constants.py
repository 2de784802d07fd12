"""Game configuration constants.

Balancing values live here so the engine and the AI read one source of truth.
Ship and structure prices are attached to the kind enums in
``spacewar.models.kinds``.
"""

# Infrastructure tiers: level -> limits
INFRA_LIMITS = {
    1: {"max_pop": 5, "max_mines": 5, "max_defense": 1, "max_shipyard": 1},
    2: {"max_pop": 10, "max_mines": 10, "max_defense": 2, "max_shipyard": 2},
    3: {"max_pop": 15, "max_mines": 15, "max_defense": 4, "max_shipyard": 3},
    4: {"max_pop": 20, "max_mines": 20, "max_defense": 6, "max_shipyard": 4},
    5: {"max_pop": 25, "max_mines": 25, "max_defense": 8, "max_shipyard": 4},
}

# Ship speeds (distance units per tick)
SHIP_SPEEDS = {"fast": 60, "slow": 6, "fighter_slow": 12, "frigate_slow": 12}

# Scheduling
BASE_TICK_MS = 1000  # One tick per second at 1x speed
TICKS_PER_ECONOMY_CYCLE = 10  # Economy resolves on every 10th tick

# Queues
MAX_SHIP_QUEUE = 2

# Upkeep (credits per economy cycle)
DEFENSE_UPKEEP_PER_LEVEL = 2
SHIPYARD_UPKEEP_PER_LEVEL = 3
GALACTIC_HUB_UPKEEP = 15

# Upgrade pricing: new-shipyard price scaled by (1 + 0.3 * level)
UPGRADE_COST_STEP = 0.30

# Starting treasury for every player
STARTING_CREDITS = 1000
STARTING_MINERALS = 500

# Galactic hubs
HUB_INFRA_LEVEL = 5  # Infrastructure level a star needs before it can host a hub
HUB_LINKS = 2  # A new hub opens starlanes to this many of the nearest hubs

# Planetary defense first strike
PD_SHOTS_PER_LEVEL = 3
PD_DAMAGE_PER_SHOT = 2

# AI tuning
AI_SHIPYARD_CAP = 3  # AI never targets the Lvl 4 ship class
WAIT_THRESHOLD = 0.60  # Share of a price banked before the AI saves for it
FLEET_TARGET = 8  # Ships per direct sortie
GATHERING_TIMEOUT = 120  # Ticks before an unfinished rendezvous is abandoned
MIN_CONQUEST_POWER = 5  # Survivor power needed to take a defended star
LAUNCH_POWER = 8  # Rallied survivor power that triggers the attack
MAX_CASUALTY_RATE = 0.6
MIN_SHIPS_TO_EXPAND = 3
ENEMY_PROXIMITY_RADIUS = 150

# World generation
DEFAULT_STAR_COUNT = 120
MIN_STAR_SEPARATION = 25
HOMEWORLD_DISTANCE_FACTOR = 0.4
GALAXY_THICKNESS = 0.55
STARLANE_MAX_DIST_BASE = 175
STARLANE_PROBABILITY = 0.25
MAX_STARLANES_PER_STAR = 4

# Testing
RNG_SEED_DEFAULT = 42
