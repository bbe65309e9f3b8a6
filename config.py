"""Server-wide configuration constants for Skirmish Server."""

import os

BOARD_SIZE = 16                 # Board is BOARD_SIZE x BOARD_SIZE cells

# Per-class base stats, fixed at character creation
CLASS_STATS = {
    "warrior": {"health": 15, "movement": 4, "attacks": 2, "initiative": 10, "armor": 1, "regeneration": 0},
    "mage": {"health": 10, "movement": 4, "attacks": 1, "initiative": 11, "armor": 0, "regeneration": 1},
    "thief": {"health": 12, "movement": 5, "attacks": 1, "initiative": 8, "armor": 0, "regeneration": 0},
    "royal": {"health": 13, "movement": 4, "attacks": 1, "initiative": 9, "armor": 0, "regeneration": 0},
}

BASE_DAMAGE = {"warrior": 5, "mage": 5, "thief": 6, "royal": 7}

# Manhattan reach per class. The mage value is the radius of its area attack
# around itself; the thief may strike anywhere from 1 up to its value.
ATTACK_RANGES = {"warrior": 1, "mage": 3, "thief": 4, "royal": 1}

ADVANTAGE_MULTIPLIER = 1.5
NEUTRAL_MULTIPLIER = 1.0
DISADVANTAGE_MULTIPLIER = 0.7

# attacker -> defender it beats
TYPE_ADVANTAGES = {"warrior": "thief", "thief": "mage", "mage": "warrior"}

THIEF_CRIT_CHANCE = 0.5
CRIT_MULTIPLIER = 2

# Special tile effects (all permanent except heal/shield amounts)
TILE_EFFECTS = {
    "heal_max_hp": 3,
    "heal_amount": 2,
    "damage_boost": 1,
    "movement_boost": 1,
    "initiative_boost": 1,
    "armor": 1,
    "shield": 4,
    "regeneration": 1,
}
MIN_INITIATIVE = 1
STAR_EFFECT_COUNT = 3           # Distinct base effects granted by a star tile

INITIAL_TILES_PER_TYPE = 7
STAR_TILE_INTERVAL = 3          # A star tile spawns every Nth round
STAR_ZONE = (6, 9)              # Inclusive x/y range of the central star zone

# Starting roster: (character_id, type, team, position)
STARTING_LOADOUT = [
    ("player-warrior", "warrior", "player", (2, 2)),
    ("player-mage", "mage", "player", (3, 2)),
    ("player-thief", "thief", "player", (2, 3)),
    ("enemy-warrior", "warrior", "enemy", (13, 13)),
    ("enemy-mage", "mage", "enemy", (12, 13)),
    ("enemy-thief", "thief", "enemy", (13, 12)),
]

RECENT_GAMES_LIMIT = 10

DATA_DIR = os.environ.get("DATA_DIR", ".")  # Persistent data directory
STATS_FILE = os.path.join(DATA_DIR, "stats.json")
TOKENS_FILE = os.path.join(DATA_DIR, "tokens.json")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
