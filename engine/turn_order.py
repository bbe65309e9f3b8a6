"""Initiative-based turn ordering for Skirmish Server."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Iterable

from models.characters import Team

if TYPE_CHECKING:
    from models.characters import Character
    from models.game_state import GameState


def generate_turn_order(
    characters: Iterable[Character],
    rng: random.Random | None = None,
) -> list[str]:
    """Order living characters for a round.

    Lower initiative acts first. On equal initiative the player team goes
    before the enemy team; within one team the tie is broken at random.

    Args:
        characters: Candidates, dead ones included (they are dropped).
        rng: Optional Random instance for seeded tiebreaks.

    Returns:
        Character ids in play order.
    """
    rng = rng or random.Random()
    alive = [c for c in characters if c.is_alive]
    keyed = [
        (c.initiative, 0 if c.team == Team.PLAYER else 1, rng.random(), c.id)
        for c in alive
    ]
    keyed.sort()
    return [key[-1] for key in keyed]


def current_actor_id(game_state: GameState) -> str | None:
    """Get the id of the character whose activation it is, if any."""
    index = game_state.current_turn_order_index
    if 0 <= index < len(game_state.turn_order):
        return game_state.turn_order[index]
    return None


def remove_from_turn_order(game_state: GameState, character_id: str) -> None:
    """Drop a character from the current round's order (mutates state).

    The index is shifted so that the next ``end_turn`` still lands on the
    character that would have acted next.
    """
    if character_id not in game_state.turn_order:
        return
    removed_at = game_state.turn_order.index(character_id)
    game_state.turn_order.pop(removed_at)
    if removed_at <= game_state.current_turn_order_index:
        game_state.current_turn_order_index -= 1
