"""Attack result and enemy action models for Skirmish Server."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TargetHit(BaseModel):
    """Damage dealt to one character by an attack."""
    character_id: str
    damage: int                     # After armor, before shield absorption
    is_critical: bool = False
    health_remaining: int
    shield_remaining: int
    killed: bool = False


class AttackResult(BaseModel):
    """The outcome of a resolved attack."""
    attacker_id: str
    targets: list[TargetHit]


class MoveAction(BaseModel):
    """Move a character to a cell."""
    action: Literal["move"] = "move"
    character_id: str
    position: tuple[int, int]


class AttackAction(BaseModel):
    """Attack the character standing on a cell."""
    action: Literal["attack"] = "attack"
    character_id: str
    target_position: tuple[int, int]
    is_melee: bool = True


class EndTurnAction(BaseModel):
    """Finish the current activation."""
    action: Literal["end_turn"] = "end_turn"


EnemyAction = Annotated[
    Union[MoveAction, AttackAction, EndTurnAction],
    Field(discriminator="action"),
]
