"""Randomness helpers for Skirmish Server.

Every helper takes an optional ``random.Random`` so callers can seed rolls in
tests; without one a fresh unseeded generator is used.
"""

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def roll_chance(probability: float, rng: random.Random | None = None) -> bool:
    """Return True with the given probability.

    Args:
        probability: Chance of success between 0 and 1.
        rng: Optional Random instance for seeded/testing rolls.
    """
    rng = rng or random.Random()
    return rng.random() < probability


def pick_distinct(
    options: Sequence[T],
    count: int,
    rng: random.Random | None = None,
) -> list[T]:
    """Pick ``count`` distinct items from ``options`` in random order.

    Raises:
        ValueError: If more items are requested than there are options.
    """
    rng = rng or random.Random()
    if count > len(options):
        raise ValueError(f"Cannot pick {count} distinct items from {len(options)}")
    return rng.sample(list(options), count)


def pick_cell(
    cells: Sequence[tuple[int, int]],
    rng: random.Random | None = None,
) -> tuple[int, int] | None:
    """Pick one cell at random, or None when there is nothing to pick."""
    if not cells:
        return None
    rng = rng or random.Random()
    return rng.choice(list(cells))
