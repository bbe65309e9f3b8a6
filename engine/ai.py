"""Heuristic move advisor for the enemy team.

Read-only: it inspects a GameState and suggests one action for the enemy
character whose activation it is. The caller feeds the suggestion to the
engine and asks again until an end-turn comes back.
"""

from __future__ import annotations

from engine.combat import get_current_turn_character
from engine.grid import distance, get_valid_moves
from engine.rules import can_attack
from models.actions import AttackAction, EndTurnAction, MoveAction
from models.characters import Character, CharacterType, Team
from models.game_state import GameState


def get_enemy_move(game_state: GameState) -> MoveAction | AttackAction | EndTurnAction:
    """Decide what the current enemy character does next.

    Strategy: attack the closest living player character if it is in
    reach, otherwise walk as close to it as movement allows, otherwise end
    the turn.
    """
    actor = get_current_turn_character(game_state)
    if actor is None or actor.team != Team.ENEMY or not actor.is_alive:
        return EndTurnAction()

    target = _closest_player(game_state, actor)
    if target is None:
        return EndTurnAction()

    if can_attack(game_state, actor, target.position):
        is_melee = actor.type != CharacterType.MAGE and distance(actor.position, target.position) <= 1
        return AttackAction(
            character_id=actor.id,
            target_position=target.position,
            is_melee=is_melee,
        )

    if actor.movement > 0:
        position = _best_approach(game_state, actor, target)
        if position is not None:
            return MoveAction(character_id=actor.id, position=position)

    return EndTurnAction()


def _closest_player(game_state: GameState, actor: Character) -> Character | None:
    """Find the living player character nearest to the actor."""
    candidates = [c for c in game_state.team_members(Team.PLAYER) if c.is_alive]
    if not candidates:
        return None
    return min(candidates, key=lambda c: distance(actor.position, c.position))


def _best_approach(
    game_state: GameState,
    actor: Character,
    target: Character,
) -> tuple[int, int] | None:
    """Pick the reachable cell that gets the actor closest to the target.

    Returns None when no reachable cell is closer than where the actor
    already stands.
    """
    current = distance(actor.position, target.position)
    best = None
    best_distance = current
    for position in get_valid_moves(actor, game_state.board):
        remaining = distance(position, target.position)
        if remaining < best_distance:
            best, best_distance = position, remaining
    return best
