"""Game state, special tile, and event models for Skirmish Server."""

from enum import Enum

from pydantic import BaseModel, model_validator

from models.characters import Character, Team


class SpecialTileType(str, Enum):
    """Kinds of one-shot terrain bonus."""
    HEAL = "heal"
    DAMAGE_BOOST = "damage_boost"
    MOVEMENT_BOOST = "movement_boost"
    INITIATIVE_BOOST = "initiative_boost"
    ARMOR = "armor"
    SHIELD = "shield"
    REGENERATION = "regeneration"
    STAR = "star"                   # Grants several random base effects
    NORMAL = "normal"


BASE_TILE_TYPES = [
    SpecialTileType.HEAL,
    SpecialTileType.DAMAGE_BOOST,
    SpecialTileType.MOVEMENT_BOOST,
    SpecialTileType.INITIATIVE_BOOST,
    SpecialTileType.ARMOR,
    SpecialTileType.SHIELD,
    SpecialTileType.REGENERATION,
]


class SpecialTile(BaseModel):
    """A terrain bonus waiting to be picked up."""
    position: tuple[int, int]
    type: SpecialTileType
    used: bool = False


class Winner(str, Enum):
    """Outcome of a finished game."""
    PLAYER = "player"
    ENEMY = "enemy"
    DRAW = "draw"


class GameEvent(BaseModel):
    """A logged event from the game."""
    round: int
    character_id: str | None = None
    action_type: str                # "move", "attack", "tile", "round"
    description: str
    details: dict = {}


class GameState(BaseModel):
    """The full state of a game.

    ``characters`` is the only place character data lives. The board and the
    team rosters refer to characters by id.
    """
    board: list[list[str | None]]   # 2D board [y][x] of character ids
    characters: dict[str, Character] = {}
    player_team: list[str] = []
    enemy_team: list[str] = []
    special_tiles: list[SpecialTile] = []
    turn_order: list[str] = []      # Alive character ids, initiative order
    current_turn_order_index: int = 0
    turn_count: int = 1             # Full rounds, starting at 1
    move_count: int = 0
    game_over: bool = False
    winner: Winner | None = None
    event_log: list[GameEvent] = []

    @model_validator(mode="after")
    def _check_references(self) -> "GameState":
        """Reject states whose ids or board disagree with ``characters``."""
        for cid, character in self.characters.items():
            if character.id != cid:
                raise ValueError(f"Character stored under '{cid}' has id '{character.id}'")

        for field in ("player_team", "enemy_team", "turn_order"):
            missing = [cid for cid in getattr(self, field) if cid not in self.characters]
            if missing:
                raise ValueError(f"{field} references unknown characters: {', '.join(missing)}")

        for row in self.board:
            for cid in row:
                if cid is not None and cid not in self.characters:
                    raise ValueError(f"Board references unknown character '{cid}'")

        for character in self.characters.values():
            if not character.is_alive:
                continue
            x, y = character.position
            on_board = 0 <= y < len(self.board) and 0 <= x < len(self.board[y])
            if not on_board or self.board[y][x] != character.id:
                raise ValueError(f"Board out of sync: {character.id} is not at {character.position}")
        return self

    def team_members(self, team: Team) -> list[Character]:
        """Return the roster of a team, dead members included."""
        ids = self.player_team if team == Team.PLAYER else self.enemy_team
        return [self.characters[cid] for cid in ids]

    def alive_characters(self) -> list[Character]:
        """Return every living character, player team first."""
        return [
            self.characters[cid]
            for cid in self.player_team + self.enemy_team
            if self.characters[cid].is_alive
        ]
