"""Special tile placement and effects for Skirmish Server."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Iterable

from config import (
    BOARD_SIZE,
    INITIAL_TILES_PER_TYPE,
    MIN_INITIATIVE,
    STAR_EFFECT_COUNT,
    STAR_TILE_INTERVAL,
    STAR_ZONE,
    TILE_EFFECTS,
)
from engine.dice import pick_cell, pick_distinct
from models.game_state import BASE_TILE_TYPES, SpecialTile, SpecialTileType

if TYPE_CHECKING:
    from models.characters import Character
    from models.game_state import GameState

logger = logging.getLogger(__name__)


def generate_special_tiles(
    excluded: Iterable[tuple[int, int]],
    per_type: int = INITIAL_TILES_PER_TYPE,
    rng: random.Random | None = None,
) -> list[SpecialTile]:
    """Scatter ``per_type`` tiles of every base type over distinct cells.

    Args:
        excluded: Cells that must stay clear (starting positions).
        per_type: How many tiles of each base type to place.
        rng: Optional Random instance for seeded placement.

    Returns:
        The new unused tiles, grouped by type.

    Raises:
        ValueError: If the board has too few free cells.
    """
    rng = rng or random.Random()
    blocked = set(excluded)
    candidates = [
        (x, y)
        for y in range(BOARD_SIZE)
        for x in range(BOARD_SIZE)
        if (x, y) not in blocked
    ]
    needed = per_type * len(BASE_TILE_TYPES)
    if needed > len(candidates):
        raise ValueError(f"Not enough free cells for {needed} special tiles")

    cells = rng.sample(candidates, needed)
    tiles = []
    for index, tile_type in enumerate(BASE_TILE_TYPES):
        for pos in cells[index * per_type:(index + 1) * per_type]:
            tiles.append(SpecialTile(position=pos, type=tile_type))
    return tiles


def find_unused_tile(
    tiles: list[SpecialTile],
    pos: tuple[int, int],
) -> SpecialTile | None:
    """Return the unused tile lying on a cell, if any."""
    for tile in tiles:
        if tile.position == pos and not tile.used:
            return tile
    return None


def apply_tile_effect(
    character: Character,
    tile_type: SpecialTileType,
    rng: random.Random | None = None,
) -> list[SpecialTileType]:
    """Apply a tile's bonus to a character (mutates in place).

    A star tile applies several distinct base effects chosen at random.

    Returns:
        The base effects that were applied, in order.
    """
    if tile_type == SpecialTileType.STAR:
        effects = pick_distinct(BASE_TILE_TYPES, STAR_EFFECT_COUNT, rng)
    elif tile_type == SpecialTileType.NORMAL:
        effects = []
    else:
        effects = [tile_type]

    for effect in effects:
        if effect == SpecialTileType.HEAL:
            character.max_health += TILE_EFFECTS["heal_max_hp"]
            character.health = min(
                character.max_health, character.health + TILE_EFFECTS["heal_amount"]
            )
        elif effect == SpecialTileType.DAMAGE_BOOST:
            character.damage_boost += TILE_EFFECTS["damage_boost"]
        elif effect == SpecialTileType.MOVEMENT_BOOST:
            # Permanent, and usable for the rest of this round too
            character.max_movement += TILE_EFFECTS["movement_boost"]
            character.movement += TILE_EFFECTS["movement_boost"]
            character.movement_boost += TILE_EFFECTS["movement_boost"]
        elif effect == SpecialTileType.INITIATIVE_BOOST:
            character.initiative = max(
                MIN_INITIATIVE, character.initiative - TILE_EFFECTS["initiative_boost"]
            )
        elif effect == SpecialTileType.ARMOR:
            character.armor += TILE_EFFECTS["armor"]
        elif effect == SpecialTileType.SHIELD:
            character.shield += TILE_EFFECTS["shield"]
        elif effect == SpecialTileType.REGENERATION:
            character.regeneration += TILE_EFFECTS["regeneration"]

    return effects


def free_cells(
    game_state: GameState,
    zone: tuple[int, int] | None = None,
) -> list[tuple[int, int]]:
    """List cells with no living character and no unused tile.

    Args:
        game_state: Current game state.
        zone: Optional inclusive (low, high) range applied to both x and y.
    """
    taken = {c.position for c in game_state.alive_characters()}
    taken.update(t.position for t in game_state.special_tiles if not t.used)
    low, high = zone if zone is not None else (0, len(game_state.board) - 1)
    return [
        (x, y)
        for y in range(low, high + 1)
        for x in range(low, high + 1)
        if (x, y) not in taken
    ]


def spawn_round_tiles(
    game_state: GameState,
    rng: random.Random | None = None,
) -> list[SpecialTile]:
    """Spawn the tiles that appear when a new round begins (mutates state).

    One tile of each base type lands on a random free cell. Every
    ``STAR_TILE_INTERVAL`` rounds a star tile also lands in the central zone.
    A spawn with no free cell available is skipped.

    Returns:
        The tiles that were added.
    """
    rng = rng or random.Random()
    spawned = []

    wanted = list(BASE_TILE_TYPES)
    if game_state.turn_count % STAR_TILE_INTERVAL == 0:
        wanted.append(SpecialTileType.STAR)

    for tile_type in wanted:
        zone = STAR_ZONE if tile_type == SpecialTileType.STAR else None
        pos = pick_cell(free_cells(game_state, zone), rng)
        if pos is None:
            logger.debug("No free cell for a %s tile in round %d", tile_type.value, game_state.turn_count)
            continue
        tile = SpecialTile(position=pos, type=tile_type)
        game_state.special_tiles.append(tile)
        spawned.append(tile)

    return spawned
