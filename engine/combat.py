"""Game orchestration: setup, movement, attacks, turn lifecycle, win conditions.

Every operation takes a GameState and returns a new one. The argument is
never mutated, so callers can keep the previous snapshot.
"""

from __future__ import annotations

import json
import logging
import os
import random
from pathlib import Path

from config import STARTING_LOADOUT
from engine.characters import create_character, reset_character_turn
from engine.grid import can_move_to, create_board, distance, in_bounds, relocate
from engine.rules import apply_damage, calculate_damage, get_attack_targets
from engine.tiles import (
    apply_tile_effect,
    find_unused_tile,
    generate_special_tiles,
    spawn_round_tiles,
)
from engine.turn_order import (
    current_actor_id,
    generate_turn_order,
    remove_from_turn_order,
)
from models.actions import AttackResult, TargetHit
from models.characters import Character, CharacterType, Team
from models.game_state import GameEvent, GameState, Winner

logger = logging.getLogger(__name__)


def initialize_game(rng: random.Random | None = None) -> GameState:
    """Set up a new game with the starting roster, tiles, and turn order.

    Args:
        rng: Optional Random instance for seeded tile placement and tiebreaks.

    Returns:
        A fresh GameState in round 1.
    """
    rng = rng or random.Random()
    game_state = GameState(board=create_board())

    for character_id, character_type, team, position in STARTING_LOADOUT:
        character = create_character(
            CharacterType(character_type), Team(team), position, character_id
        )
        add_character(game_state, character)

    starting_cells = [c.position for c in game_state.characters.values()]
    game_state.special_tiles = generate_special_tiles(starting_cells, rng=rng)
    game_state.turn_order = generate_turn_order(game_state.alive_characters(), rng)
    game_state.current_turn_order_index = 0

    logger.info("New game started, turn order: %s", ", ".join(game_state.turn_order))
    return game_state


def add_character(game_state: GameState, character: Character) -> GameState:
    """Place a character on the board and enrol it in its team.

    Args:
        game_state: Current game state (mutated in place).
        character: The character to add, already carrying its position.

    Returns:
        Updated game state.

    Raises:
        ValueError: If the id is taken or the position is invalid or occupied.
    """
    if character.id in game_state.characters:
        raise ValueError(f"Character '{character.id}' already exists")
    if not in_bounds(character.position, len(game_state.board)):
        raise ValueError(f"Position {character.position} is out of bounds")

    x, y = character.position
    if game_state.board[y][x] is not None:
        raise ValueError(f"Position {character.position} is already occupied")

    game_state.board[y][x] = character.id
    game_state.characters[character.id] = character
    if character.team == Team.PLAYER:
        game_state.player_team.append(character.id)
    else:
        game_state.enemy_team.append(character.id)
    return game_state


def get_character(game_state: GameState, character_id: str) -> Character:
    """Look up a character by id.

    Raises:
        ValueError: If no such character exists. Ids come from the state
            itself, so an unknown one means the caller is misusing the engine.
    """
    character = game_state.characters.get(character_id)
    if character is None:
        raise ValueError(f"Unknown character '{character_id}'")
    return character


def get_current_turn_character(game_state: GameState) -> Character | None:
    """Get the character whose activation it is, or None if the game is over."""
    if game_state.game_over:
        return None
    character_id = current_actor_id(game_state)
    if character_id is None:
        return None
    return game_state.characters.get(character_id)


def move_character(
    game_state: GameState,
    character_id: str,
    target: tuple[int, int],
) -> GameState:
    """Move a character, spending movement points.

    Tiles are not triggered here; they resolve in ``end_turn``.

    Args:
        game_state: Current game state.
        character_id: ID of the character to move.
        target: Destination (x, y).

    Returns:
        A new state with the character moved, or the same state unchanged
        when the move is illegal.

    Raises:
        ValueError: If the character does not exist.
    """
    character = get_character(game_state, character_id)
    if game_state.game_over or not can_move_to(character, target, game_state.board):
        logger.debug("Rejected move of %s to %s", character_id, target)
        return game_state

    new_state = game_state.model_copy(deep=True)
    mover = new_state.characters[character_id]
    start = mover.position
    dist = distance(start, target)

    relocate(new_state.board, mover, target)
    mover.movement -= dist
    new_state.move_count += 1

    _log_event(
        new_state,
        character_id,
        "move",
        f"{character_id} moves from {start} to {target}.",
        {"from": start, "to": target, "distance": dist},
    )
    return new_state


def perform_attack(
    game_state: GameState,
    attacker_id: str,
    target_position: tuple[int, int],
    is_melee: bool = True,
    rng: random.Random | None = None,
) -> tuple[GameState, AttackResult | None]:
    """Resolve an attack aimed at a cell.

    A thief's melee flag is recomputed from its distance to the target; the
    other classes use their fixed range and ignore it. Killed characters
    leave the board and the turn order, and the win condition is checked.

    Args:
        game_state: Current game state.
        attacker_id: ID of the attacking character.
        target_position: The cell the attacker aimed at.
        is_melee: Whether the attack is made at melee range.
        rng: Optional Random instance for seeded crit rolls.

    Returns:
        (new_state, attack_result). When the attack is illegal the original
        state is returned with a None result.

    Raises:
        ValueError: If the attacker does not exist.
    """
    attacker = get_character(game_state, attacker_id)
    if game_state.game_over or not attacker.is_alive or attacker.attacks_remaining <= 0:
        logger.debug("Rejected attack by %s: cannot act", attacker_id)
        return game_state, None

    targets = get_attack_targets(game_state, attacker, target_position)
    if not targets:
        logger.debug("Rejected attack by %s at %s: no target", attacker_id, target_position)
        return game_state, None

    if attacker.type == CharacterType.THIEF:
        is_melee = distance(attacker.position, target_position) <= 1

    new_state = game_state.model_copy(deep=True)
    attacker = new_state.characters[attacker_id]

    hits = []
    for target_id in [t.id for t in targets]:
        target = new_state.characters[target_id]
        damage, is_critical = calculate_damage(attacker, target, is_melee, rng)
        apply_damage(target, damage)

        if not target.is_alive:
            x, y = target.position
            new_state.board[y][x] = None
            remove_from_turn_order(new_state, target.id)
            logger.info("%s was slain by %s", target.id, attacker_id)

        hits.append(TargetHit(
            character_id=target.id,
            damage=damage,
            is_critical=is_critical,
            health_remaining=target.health,
            shield_remaining=target.shield,
            killed=not target.is_alive,
        ))

    attacker.attacks_remaining -= 1
    result = AttackResult(attacker_id=attacker_id, targets=hits)

    summary = ", ".join(
        f"{h.character_id} -{h.damage}{' (critical)' if h.is_critical else ''}"
        for h in hits
    )
    _log_event(
        new_state,
        attacker_id,
        "attack",
        f"{attacker_id} attacks: {summary}.",
        {"target_position": target_position, "hits": [h.model_dump() for h in hits]},
    )

    game_over, winner = check_game_over(new_state)
    if game_over:
        new_state.game_over = True
        new_state.winner = winner
        logger.info("Game over after round %d, winner: %s", new_state.turn_count, winner.value)

    return new_state, result


def end_turn(
    game_state: GameState,
    used_character_id: str | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """Finish an activation and hand play to the next character.

    The character that just acted picks up the unused tile it is standing
    on, if any. When the last character of the round has acted, a new round
    begins: the order is regenerated, movement and attacks refresh, and new
    tiles spawn. The next actor then regenerates health.

    Args:
        game_state: Current game state.
        used_character_id: The character whose activation is ending.
        rng: Optional Random instance for seeded orders, tiles and effects.

    Returns:
        A new state, or the same state unchanged if the game is over.

    Raises:
        ValueError: If ``used_character_id`` does not exist.
    """
    if game_state.game_over:
        return game_state

    rng = rng or random.Random()
    new_state = game_state.model_copy(deep=True)

    if used_character_id is not None:
        _resolve_tile(new_state, get_character(new_state, used_character_id), rng)

    for character_id in list(new_state.turn_order):
        if not new_state.characters[character_id].is_alive:
            remove_from_turn_order(new_state, character_id)

    new_state.current_turn_order_index += 1
    if new_state.current_turn_order_index >= len(new_state.turn_order):
        _start_new_round(new_state, rng)

    next_character = get_current_turn_character(new_state)
    if next_character is not None and next_character.is_alive and next_character.regeneration > 0:
        healed = min(next_character.max_health, next_character.health + next_character.regeneration)
        if healed != next_character.health:
            logger.debug("%s regenerates %d health", next_character.id, healed - next_character.health)
        next_character.health = healed

    return new_state


def _resolve_tile(game_state: GameState, character: Character, rng: random.Random) -> None:
    """Apply the unused tile under a character, if any (mutates state)."""
    if not character.is_alive:
        return
    tile = find_unused_tile(game_state.special_tiles, character.position)
    if tile is None:
        return

    effects = apply_tile_effect(character, tile.type, rng)
    tile.used = True
    _log_event(
        game_state,
        character.id,
        "tile",
        f"{character.id} picks up a {tile.type.value} tile.",
        {"position": tile.position, "effects": [e.value for e in effects]},
    )


def _start_new_round(game_state: GameState, rng: random.Random) -> None:
    """Roll the game over into its next round (mutates state).

    Used tiles are dropped and the event log restarts, so a state only
    carries the current round's history.
    """
    game_state.turn_count += 1
    game_state.special_tiles = [t for t in game_state.special_tiles if not t.used]
    game_state.event_log = []
    game_state.turn_order = generate_turn_order(game_state.alive_characters(), rng)
    game_state.current_turn_order_index = 0

    for character in game_state.alive_characters():
        reset_character_turn(character)

    spawned = spawn_round_tiles(game_state, rng)
    logger.info(
        "Round %d begins with %d characters, %d new tiles",
        game_state.turn_count, len(game_state.turn_order), len(spawned),
    )
    _log_event(
        game_state,
        None,
        "round",
        f"Round {game_state.turn_count} begins.",
        {
            "turn_order": list(game_state.turn_order),
            "new_tiles": [t.model_dump(mode="json") for t in spawned],
        },
    )


def check_game_over(game_state: GameState) -> tuple[bool, Winner | None]:
    """Check whether a team has been wiped out.

    If both teams are eliminated at once (a mage's area attack can do this)
    the game ends in a draw.

    Args:
        game_state: Current game state.

    Returns:
        (game_over, winner); winner is None while the game goes on.
    """
    player_alive = any(c.health > 0 for c in game_state.team_members(Team.PLAYER))
    enemy_alive = any(c.health > 0 for c in game_state.team_members(Team.ENEMY))

    if not player_alive and not enemy_alive:
        return True, Winner.DRAW
    if not player_alive:
        return True, Winner.ENEMY
    if not enemy_alive:
        return True, Winner.PLAYER
    return False, None


def _log_event(
    game_state: GameState,
    character_id: str | None,
    action_type: str,
    description: str,
    details: dict,
) -> None:
    """Append an event to the state's log (mutates state)."""
    game_state.event_log.append(GameEvent(
        round=game_state.turn_count,
        character_id=character_id,
        action_type=action_type,
        description=description,
        details=details,
    ))


def save_game(game_state: GameState, path: str) -> None:
    """Persist game state to a JSON file.

    Writes to a temporary file first, then renames for atomicity.

    Args:
        game_state: The game state to save.
        path: File path to write to.
    """
    tmp_path = path + ".tmp"
    data = game_state.model_dump(mode="json")
    with open(tmp_path, "w") as f:
        json.dump(data, f)
    os.replace(tmp_path, path)


def load_game(path: str) -> GameState | None:
    """Load game state from a JSON file.

    Args:
        path: File path to read from.

    Returns:
        The loaded GameState, or None if the file doesn't exist.
    """
    if not Path(path).exists():
        return None
    with open(path) as f:
        data = json.load(f)
    return GameState.model_validate(data)
