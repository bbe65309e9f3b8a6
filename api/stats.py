"""Game result reporting and statistics endpoints."""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from auth import User, get_current_user
from models.stats import GameRecord, UserStats
from storage.stats import StatsRepository

router = APIRouter()


class GameResultRequest(BaseModel):
    """Request body for reporting a finished game."""
    won: bool
    turn_count: int = Field(ge=0)
    move_count: int = Field(ge=0)


def get_stats_repository(request: Request) -> StatsRepository:
    """FastAPI dependency: the app's stats repository."""
    return request.app.state.stats


@router.post("", response_model=GameRecord)
def report_game(
    body: GameResultRequest,
    user: User = Depends(get_current_user),
    repository: StatsRepository = Depends(get_stats_repository),
) -> GameRecord:
    """Record the result of a finished game for the authenticated user."""
    return repository.record_game(user.user_id, body.won, body.turn_count, body.move_count)


@router.get("", response_model=UserStats)
def get_stats(
    user: User = Depends(get_current_user),
    repository: StatsRepository = Depends(get_stats_repository),
) -> UserStats:
    """Get the authenticated user's aggregated results."""
    return repository.get_user_stats(user.user_id)
