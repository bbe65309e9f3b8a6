"""Combat rules: targeting by class, the type triangle, damage, shields."""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING

from config import (
    ADVANTAGE_MULTIPLIER,
    ATTACK_RANGES,
    BASE_DAMAGE,
    CRIT_MULTIPLIER,
    DISADVANTAGE_MULTIPLIER,
    NEUTRAL_MULTIPLIER,
    THIEF_CRIT_CHANCE,
    TYPE_ADVANTAGES,
)
from engine.dice import roll_chance
from engine.grid import distance, occupant
from models.characters import CharacterType

if TYPE_CHECKING:
    from models.characters import Character
    from models.game_state import GameState


def get_multiplier(attacker_type: CharacterType, defender_type: CharacterType) -> float:
    """Look up the type-triangle multiplier for an attack.

    Warrior beats thief, thief beats mage, mage beats warrior (x1.5); the
    reverse pairs take x0.7. A royal only has the advantage over another
    royal, and everyone else is neutral against a royal.

    Args:
        attacker_type: Class of the attacker.
        defender_type: Class of the defender.

    Returns:
        The damage multiplier.
    """
    attacker = CharacterType(attacker_type).value
    defender = CharacterType(defender_type).value

    if attacker == "royal":
        return ADVANTAGE_MULTIPLIER if defender == "royal" else NEUTRAL_MULTIPLIER
    if defender == "royal" or attacker == defender:
        return NEUTRAL_MULTIPLIER
    if TYPE_ADVANTAGES.get(attacker) == defender:
        return ADVANTAGE_MULTIPLIER
    if TYPE_ADVANTAGES.get(defender) == attacker:
        return DISADVANTAGE_MULTIPLIER
    return NEUTRAL_MULTIPLIER


def base_damage(attacker_type: CharacterType, defender_type: CharacterType) -> int:
    """Class damage scaled by the type triangle, rounded up."""
    attacker_type = CharacterType(attacker_type)
    return math.ceil(
        BASE_DAMAGE[attacker_type.value] * get_multiplier(attacker_type, defender_type)
    )


def calculate_damage(
    attacker: Character,
    target: Character,
    is_melee: bool,
    rng: random.Random | None = None,
) -> tuple[int, bool]:
    """Compute the damage one target takes from an attack.

    A thief striking in melee has a chance to crit for double damage. The
    attacker's damage boost is added after the crit, then the target's armor
    is subtracted.

    Args:
        attacker: The attacking character.
        target: The character being hit.
        is_melee: Whether the attack is at melee range.
        rng: Optional Random instance for seeded crit rolls.

    Returns:
        (damage, is_critical). Damage is never negative.
    """
    damage = base_damage(attacker.type, target.type)

    is_critical = False
    if attacker.type == CharacterType.THIEF and is_melee:
        is_critical = roll_chance(THIEF_CRIT_CHANCE, rng)
        if is_critical:
            damage *= CRIT_MULTIPLIER

    damage += attacker.damage_boost
    return max(0, damage - target.armor), is_critical


def apply_damage(character: Character, damage: int) -> Character:
    """Apply damage to a character, draining the shield before health.

    Args:
        character: The character taking damage (mutated in place).
        damage: Amount of damage after armor.

    Returns:
        The updated character.
    """
    absorbed = min(character.shield, damage)
    character.shield -= absorbed
    character.health = max(0, character.health - (damage - absorbed))
    character.is_alive = not check_death(character)
    return character


def check_death(character: Character) -> bool:
    """Check if a character is dead (at 0 health)."""
    return character.health <= 0


def get_attack_targets(
    game_state: GameState,
    attacker: Character,
    target_position: tuple[int, int],
) -> list[Character]:
    """Find everyone an attack would hit.

    Warriors and royals hit the occupant of an adjacent cell. Thieves hit the
    occupant of a cell 1 to 4 steps away. Mages ignore the clicked cell and
    hit every other living character within 3 steps of themselves, allies
    included.

    Args:
        game_state: Current game state.
        attacker: The attacking character.
        target_position: The cell the attacker aimed at.

    Returns:
        The characters that would be hit; empty when the attack is illegal.
    """
    reach = ATTACK_RANGES[attacker.type.value]

    if attacker.type == CharacterType.MAGE:
        return [
            c for c in game_state.alive_characters()
            if c.id != attacker.id and distance(attacker.position, c.position) <= reach
        ]

    dist = distance(attacker.position, target_position)
    if attacker.type == CharacterType.THIEF:
        if not 1 <= dist <= reach:
            return []
    elif dist != reach:
        return []

    target_id = occupant(game_state.board, target_position)
    if target_id is None or target_id == attacker.id:
        return []
    target = game_state.characters.get(target_id)
    if target is None:
        raise ValueError(f"Board references unknown character '{target_id}'")
    if not target.is_alive:
        return []
    return [target]


def can_attack(
    game_state: GameState,
    attacker: Character,
    target_position: tuple[int, int],
) -> bool:
    """Check whether an attacker can hit the character on a cell.

    For a mage the aimed-at character must lie inside its area of effect.

    Args:
        game_state: Current game state.
        attacker: The attacking character.
        target_position: Cell holding the intended target.

    Returns:
        True if the attacker is alive, has attacks left, and the occupant of
        ``target_position`` would be hit.
    """
    if not attacker.is_alive or attacker.attacks_remaining <= 0:
        return False
    target_id = occupant(game_state.board, target_position)
    if target_id is None:
        return False
    return any(
        t.id == target_id
        for t in get_attack_targets(game_state, attacker, target_position)
    )
