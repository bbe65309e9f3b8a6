"""Character data models for Skirmish Server."""

from enum import Enum

from pydantic import BaseModel


class CharacterType(str, Enum):
    """Playable character classes."""
    WARRIOR = "warrior"
    MAGE = "mage"
    THIEF = "thief"
    ROYAL = "royal"


class Team(str, Enum):
    """The two sides of a game."""
    PLAYER = "player"
    ENEMY = "enemy"


class Character(BaseModel):
    """A unit on the board."""
    id: str                         # Stable for the game's lifetime
    type: CharacterType
    team: Team
    position: tuple[int, int]       # Grid position (x, y)
    health: int
    max_health: int
    movement: int                   # Movement points left this activation
    max_movement: int
    is_alive: bool = True           # Always equal to health > 0
    damage_boost: int = 0           # Permanent, from tiles
    movement_boost: int = 0         # Permanent growth of max_movement, from tiles
    attacks_remaining: int = 1
    initiative: int = 10            # Lower acts earlier
    armor: int = 0                  # Flat damage reduction
    shield: int = 0                 # Absorbs damage before health
    regeneration: int = 0           # Health restored when the activation starts
