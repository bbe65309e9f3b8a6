"""Game result and per-user statistics models for Skirmish Server."""

from datetime import datetime

from pydantic import BaseModel


class GameRecord(BaseModel):
    """One finished game, as reported by the client."""
    id: int
    user_id: str
    won: bool
    turns: int
    moves: int
    created_at: datetime


class UserStats(BaseModel):
    """Aggregated results for a single user."""
    user_id: str
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    total_turns: int = 0
    total_moves: int = 0
    average_turns_per_win: float = 0.0
    average_turns_per_loss: float = 0.0
    average_moves_per_win: float = 0.0
    average_moves_per_loss: float = 0.0
    recent_games: list[GameRecord] = []
