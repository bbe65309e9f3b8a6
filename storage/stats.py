"""Game result storage and per-user statistics for Skirmish Server."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from config import RECENT_GAMES_LIMIT
from models.stats import GameRecord, UserStats

logger = logging.getLogger(__name__)


class StatsRepository:
    """In-memory store of finished games.

    The app creates one instance at startup and hands it to request
    handlers; nothing about it is global.
    """

    def __init__(self) -> None:
        self._games: list[GameRecord] = []
        self._next_id = 1

    def record_game(self, user_id: str, won: bool, turns: int, moves: int) -> GameRecord:
        """Store the result of a finished game.

        Args:
            user_id: The user who played.
            won: Whether the player team won.
            turns: Rounds played (the game's turn_count).
            moves: Moves made (the game's move_count).

        Returns:
            The stored record.
        """
        record = GameRecord(
            id=self._next_id,
            user_id=user_id,
            won=won,
            turns=turns,
            moves=moves,
            created_at=datetime.now(timezone.utc),
        )
        self._next_id += 1
        self._games.append(record)
        logger.info("Recorded %s for %s after %d turns", "win" if won else "loss", user_id, turns)
        return record

    def games_for(self, user_id: str) -> list[GameRecord]:
        """Return a user's games, newest first."""
        games = [g for g in self._games if g.user_id == user_id]
        games.sort(key=lambda g: (g.created_at, g.id), reverse=True)
        return games

    def get_user_stats(self, user_id: str) -> UserStats:
        """Aggregate a user's results. Users with no games get zeroed stats."""
        games = self.games_for(user_id)
        won = [g for g in games if g.won]
        lost = [g for g in games if not g.won]
        return UserStats(
            user_id=user_id,
            total_games=len(games),
            wins=len(won),
            losses=len(lost),
            total_turns=sum(g.turns for g in games),
            total_moves=sum(g.moves for g in games),
            average_turns_per_win=_average(g.turns for g in won),
            average_turns_per_loss=_average(g.turns for g in lost),
            average_moves_per_win=_average(g.moves for g in won),
            average_moves_per_loss=_average(g.moves for g in lost),
            recent_games=games[:RECENT_GAMES_LIMIT],
        )

    def clear(self) -> None:
        """Forget every stored game."""
        self._games = []
        self._next_id = 1


class JsonStatsRepository(StatsRepository):
    """A StatsRepository that persists to a JSON file after every write."""

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def load(self) -> None:
        """Load stored games from disk, if the file exists."""
        self._games = []
        self._next_id = 1
        if not Path(self.path).exists():
            return
        with open(self.path) as f:
            data = json.load(f)
        self._games = [GameRecord.model_validate(item) for item in data]
        self._next_id = max((g.id for g in self._games), default=0) + 1

    def save(self) -> None:
        """Persist stored games to disk (atomic write)."""
        tmp_path = self.path + ".tmp"
        data = [g.model_dump(mode="json") for g in self._games]
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def record_game(self, user_id: str, won: bool, turns: int, moves: int) -> GameRecord:
        record = super().record_game(user_id, won, turns, moves)
        self.save()
        return record

    def clear(self) -> None:
        super().clear()
        self.save()


def _average(values) -> float:
    """Mean rounded to one decimal, 0.0 for no values."""
    values = list(values)
    if not values:
        return 0.0
    return round(sum(values) / len(values), 1)
