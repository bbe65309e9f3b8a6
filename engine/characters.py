"""Character creation from class stats for Skirmish Server."""

from __future__ import annotations

from uuid import uuid4

from config import CLASS_STATS
from models.characters import Character, CharacterType, Team


def default_attacks(character_type: CharacterType) -> int:
    """Attacks a class gets at the start of every round (warrior 2, others 1)."""
    return CLASS_STATS[character_type.value]["attacks"]


def create_character(
    character_type: CharacterType,
    team: Team,
    position: tuple[int, int],
    character_id: str | None = None,
) -> Character:
    """Create a fresh character from its class's base stats.

    Args:
        character_type: The class of the character.
        team: The side it fights for.
        position: Starting (x, y) cell.
        character_id: Stable id; generated when omitted.

    Returns:
        A Character at full health and movement with no boosts.
    """
    character_type = CharacterType(character_type)
    team = Team(team)
    stats = CLASS_STATS[character_type.value]
    return Character(
        id=character_id or f"{team.value}-{character_type.value}-{uuid4().hex[:8]}",
        type=character_type,
        team=team,
        position=position,
        health=stats["health"],
        max_health=stats["health"],
        movement=stats["movement"],
        max_movement=stats["movement"],
        attacks_remaining=stats["attacks"],
        initiative=stats["initiative"],
        armor=stats["armor"],
        regeneration=stats["regeneration"],
    )


def reset_character_turn(character: Character) -> Character:
    """Refresh movement and attacks for a new round (mutates in place)."""
    character.movement = character.max_movement
    character.attacks_remaining = default_attacks(character.type)
    return character
