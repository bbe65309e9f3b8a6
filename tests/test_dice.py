"""Tests for randomness helpers."""

import random

import pytest

from engine.dice import pick_cell, pick_distinct, roll_chance


class TestRollChance:
    """Tests for the roll_chance() function."""

    def test_certain(self):
        rng = random.Random(42)
        assert all(roll_chance(1.0, rng) for _ in range(100))

    def test_impossible(self):
        rng = random.Random(42)
        assert not any(roll_chance(0.0, rng) for _ in range(100))

    def test_seeded_is_reproducible(self):
        """Same seed produces the same sequence of rolls."""
        a = [roll_chance(0.5, random.Random(7)) for _ in range(20)]
        b = [roll_chance(0.5, random.Random(7)) for _ in range(20)]
        assert a == b

    def test_coin_flip_lands_both_ways(self):
        rng = random.Random(1)
        results = {roll_chance(0.5, rng) for _ in range(100)}
        assert results == {True, False}

    def test_no_rng_provided(self):
        """Rolling without an RNG still works (uses unseeded random)."""
        assert roll_chance(0.5) in (True, False)


class TestPickDistinct:
    """Tests for the pick_distinct() function."""

    def test_distinct(self):
        rng = random.Random(3)
        picked = pick_distinct(list(range(7)), 3, rng)
        assert len(picked) == 3
        assert len(set(picked)) == 3
        assert all(0 <= p < 7 for p in picked)

    def test_all_of_them(self):
        picked = pick_distinct("abc", 3, random.Random(0))
        assert sorted(picked) == ["a", "b", "c"]

    def test_too_many(self):
        with pytest.raises(ValueError, match="Cannot pick"):
            pick_distinct([1, 2], 3)


class TestPickCell:
    """Tests for the pick_cell() function."""

    def test_picks_from_cells(self):
        cells = [(1, 1), (2, 2), (3, 3)]
        for seed in range(10):
            assert pick_cell(cells, random.Random(seed)) in cells

    def test_empty_returns_none(self):
        assert pick_cell([]) is None
