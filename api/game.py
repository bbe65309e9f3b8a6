"""Game endpoints: the client sends its whole state and gets the next one back."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from auth import User, get_current_user
from engine.ai import get_enemy_move
from engine.combat import (
    check_game_over,
    end_turn,
    get_current_turn_character,
    initialize_game,
    move_character,
    perform_attack,
)
from models.actions import AttackResult, EnemyAction
from models.game_state import GameState, Winner

router = APIRouter()


class StateRequest(BaseModel):
    """Request body carrying only a game state."""
    state: GameState


class MoveRequest(BaseModel):
    """Request body for moving a character."""
    state: GameState
    character_id: str
    target_position: tuple[int, int]


class AttackRequest(BaseModel):
    """Request body for an attack."""
    state: GameState
    attacker_id: str
    target_position: tuple[int, int]
    is_melee: bool = True


class EndTurnRequest(BaseModel):
    """Request body for ending an activation."""
    state: GameState
    character_id: str | None = None


class AttackResponse(BaseModel):
    """Response after an attack."""
    state: GameState
    attack_result: AttackResult | None


class StatusResponse(BaseModel):
    """Whether the game has ended, and who won."""
    game_over: bool
    winner: Winner | None


def _require_turn(state: GameState, character_id: str) -> None:
    """Reject actions by anyone but the character whose activation it is."""
    if character_id not in state.characters:
        raise HTTPException(status_code=400, detail=f"Unknown character '{character_id}'")
    current = get_current_turn_character(state)
    if current is None or current.id != character_id:
        raise HTTPException(status_code=409, detail="It's not this character's turn")


@router.post("/start", response_model=GameState)
def start_game(user: User = Depends(get_current_user)) -> GameState:
    """Create a new game."""
    return initialize_game()


@router.post("/move", response_model=GameState)
def move(body: MoveRequest, user: User = Depends(get_current_user)) -> GameState:
    """Move the current character."""
    _require_turn(body.state, body.character_id)

    try:
        new_state = move_character(body.state, body.character_id, body.target_position)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if new_state.move_count == body.state.move_count:
        raise HTTPException(status_code=400, detail="Invalid move")
    return new_state


@router.post("/attack", response_model=AttackResponse)
def attack(body: AttackRequest, user: User = Depends(get_current_user)) -> AttackResponse:
    """Attack with the current character."""
    _require_turn(body.state, body.attacker_id)

    try:
        new_state, result = perform_attack(
            body.state, body.attacker_id, body.target_position, body.is_melee
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=400, detail="Cannot attack this position")
    return AttackResponse(state=new_state, attack_result=result)


@router.post("/end-turn", response_model=GameState)
def finish_turn(body: EndTurnRequest, user: User = Depends(get_current_user)) -> GameState:
    """End the current activation."""
    if body.character_id is not None:
        _require_turn(body.state, body.character_id)
    try:
        return end_turn(body.state, body.character_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/enemy-move", response_model=EnemyAction)
def enemy_move(body: StateRequest, user: User = Depends(get_current_user)) -> EnemyAction:
    """Suggest the enemy's next action. The state is not changed."""
    return get_enemy_move(body.state)


@router.post("/status", response_model=StatusResponse)
def status(body: StateRequest, user: User = Depends(get_current_user)) -> StatusResponse:
    """Report whether the game is over."""
    game_over, winner = check_game_over(body.state)
    return StatusResponse(game_over=game_over, winner=winner)
