"""Board creation, Manhattan distance, and movement validation for Skirmish Server."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config import BOARD_SIZE

if TYPE_CHECKING:
    from models.characters import Character


def create_board(size: int = BOARD_SIZE) -> list[list[str | None]]:
    """Initialize an empty square board.

    Args:
        size: Number of rows and columns.

    Returns:
        A 2D list indexed as board[y][x], every cell None.
    """
    return [[None for _ in range(size)] for _ in range(size)]


def distance(pos1: tuple[int, int], pos2: tuple[int, int]) -> int:
    """Calculate the Manhattan distance between two cells.

    Args:
        pos1: (x, y) of first position.
        pos2: (x, y) of second position.

    Returns:
        Number of orthogonal steps between the cells.
    """
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def is_adjacent(pos1: tuple[int, int], pos2: tuple[int, int]) -> bool:
    """Check if two cells share an edge (no diagonals)."""
    return distance(pos1, pos2) == 1


def in_bounds(pos: tuple[int, int], size: int = BOARD_SIZE) -> bool:
    """Check if a position lies on the board."""
    x, y = pos
    return 0 <= x < size and 0 <= y < size


def occupant(board: list[list[str | None]], pos: tuple[int, int]) -> str | None:
    """Return the id of the character on a cell, or None if empty or off-board."""
    if not in_bounds(pos, len(board)):
        return None
    x, y = pos
    return board[y][x]


def can_move_to(
    character: Character,
    target: tuple[int, int],
    board: list[list[str | None]],
) -> bool:
    """Check whether a character may move to a cell this activation.

    The target must be on the board, unoccupied, and at a Manhattan distance
    of at least 1 and at most the character's remaining movement.

    Args:
        character: The character moving.
        target: Destination (x, y).
        board: The game board.

    Returns:
        True if the move is legal.
    """
    if not character.is_alive:
        return False
    if not in_bounds(target, len(board)):
        return False
    dist = distance(character.position, target)
    if dist == 0 or dist > character.movement:
        return False
    x, y = target
    return board[y][x] is None


def get_valid_moves(
    character: Character,
    board: list[list[str | None]],
) -> list[tuple[int, int]]:
    """Get all cells a character can move to with its remaining movement.

    Movement is a straight Manhattan budget: other characters do not block
    the path, only the destination.

    Args:
        character: The character moving.
        board: The game board.

    Returns:
        List of (x, y) positions, nearest first.
    """
    cx, cy = character.position
    reach = character.movement
    moves = []
    for dy in range(-reach, reach + 1):
        for dx in range(-reach, reach + 1):
            target = (cx + dx, cy + dy)
            if can_move_to(character, target, board):
                moves.append(target)
    moves.sort(key=lambda pos: distance(character.position, pos))
    return moves


def relocate(
    board: list[list[str | None]],
    character: Character,
    target: tuple[int, int],
) -> None:
    """Move a character's id from its current cell to the target cell.

    Updates both the board and ``character.position``. Validation is the
    caller's job.

    Raises:
        ValueError: If the board does not hold the character where it claims
            to stand.
    """
    sx, sy = character.position
    if board[sy][sx] != character.id:
        raise ValueError(
            f"Board out of sync: {character.id} is not at {character.position}"
        )
    tx, ty = target
    board[sy][sx] = None
    board[ty][tx] = character.id
    character.position = target
