"""Tests for the enemy move advisor and its integration with the combat loop."""

import random

from engine.ai import get_enemy_move
from engine.characters import create_character
from engine.combat import (
    add_character,
    end_turn,
    get_current_turn_character,
    initialize_game,
    move_character,
    perform_attack,
)
from engine.grid import create_board, distance
from engine.turn_order import generate_turn_order
from models.actions import AttackAction, EndTurnAction, MoveAction
from models.characters import CharacterType, Team
from models.game_state import GameState


def _make_character(char_id, character_type, team, position, initiative):
    """Helper to create a test character with a fixed initiative."""
    char = create_character(character_type, team, position, char_id)
    char.initiative = initiative
    return char


def _enemy_to_act(enemy, *others) -> GameState:
    """Helper to build a game where ``enemy`` is the current actor."""
    gs = GameState(board=create_board())
    add_character(gs, enemy)
    for char in others:
        add_character(gs, char)
    gs.turn_order = generate_turn_order(gs.alive_characters(), random.Random(0))
    gs.current_turn_order_index = gs.turn_order.index(enemy.id)
    return gs


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------

class TestGetEnemyMove:
    """Tests for get_enemy_move()."""

    def test_attacks_adjacent_player(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 5), 1),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (5, 6), 2),
        )
        action = get_enemy_move(gs)
        assert isinstance(action, AttackAction)
        assert action.character_id == "e"
        assert action.target_position == (5, 6)
        assert action.is_melee is True

    def test_thief_attacks_at_range(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.THIEF, Team.ENEMY, (5, 5), 1),
            _make_character("p", CharacterType.MAGE, Team.PLAYER, (5, 8), 2),
        )
        action = get_enemy_move(gs)
        assert isinstance(action, AttackAction)
        assert action.is_melee is False

    def test_mage_attack_is_never_melee(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.MAGE, Team.ENEMY, (5, 5), 1),
            _make_character("p", CharacterType.WARRIOR, Team.PLAYER, (5, 6), 2),
        )
        action = get_enemy_move(gs)
        assert isinstance(action, AttackAction)
        assert action.is_melee is False

    def test_moves_toward_closest_player(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (10, 10), 1),
            _make_character("near", CharacterType.THIEF, Team.PLAYER, (10, 4), 2),
            _make_character("far", CharacterType.MAGE, Team.PLAYER, (0, 0), 3),
        )
        action = get_enemy_move(gs)
        assert isinstance(action, MoveAction)
        # 4 movement toward (10, 4) from 6 away leaves it 2 away
        assert distance(action.position, (10, 4)) == 2
        assert distance(action.position, (10, 10)) <= 4

    def test_move_is_legal_for_the_engine(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (10, 10), 1),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (2, 2), 2),
        )
        action = get_enemy_move(gs)
        new = move_character(gs, action.character_id, action.position)
        assert new.move_count == 1

    def test_out_of_attacks_and_movement_ends_turn(self):
        enemy = _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 5), 1)
        enemy.attacks_remaining = 0
        enemy.movement = 0
        gs = _enemy_to_act(
            enemy,
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (5, 6), 2),
        )
        assert isinstance(get_enemy_move(gs), EndTurnAction)

    def test_no_closer_cell_ends_turn(self):
        # Hemmed in next to the player: every reachable cell is farther away
        enemy = _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 5), 1)
        enemy.attacks_remaining = 0
        gs = _enemy_to_act(
            enemy,
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (5, 6), 2),
        )
        assert isinstance(get_enemy_move(gs), EndTurnAction)

    def test_player_turn_ends_turn(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 5), 2),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (5, 6), 1),
        )
        gs.current_turn_order_index = gs.turn_order.index("p")
        assert isinstance(get_enemy_move(gs), EndTurnAction)

    def test_game_over_ends_turn(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 5), 1),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (5, 6), 2),
        )
        gs.game_over = True
        assert isinstance(get_enemy_move(gs), EndTurnAction)

    def test_does_not_mutate_state(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (10, 10), 1),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (2, 2), 2),
        )
        before = gs.model_dump()
        get_enemy_move(gs)
        assert gs.model_dump() == before


# ---------------------------------------------------------------------------
# Integration with the combat loop
# ---------------------------------------------------------------------------

class TestEnemyLoop:
    """Drive full enemy activations through the engine."""

    def _run_enemy_activation(self, gs: GameState, rng: random.Random) -> GameState:
        actor = get_current_turn_character(gs)
        for _ in range(20):
            action = get_enemy_move(gs)
            if isinstance(action, MoveAction):
                gs = move_character(gs, action.character_id, action.position)
            elif isinstance(action, AttackAction):
                gs, result = perform_attack(
                    gs, action.character_id, action.target_position, action.is_melee, rng
                )
                assert result is not None
            else:
                return end_turn(gs, actor.id, rng)
        raise AssertionError("Enemy activation did not terminate")

    def test_activation_terminates_and_closes_distance(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (12, 12), 1),
            _make_character("p", CharacterType.THIEF, Team.PLAYER, (2, 2), 2),
        )
        gs = self._run_enemy_activation(gs, random.Random(0))
        assert distance(gs.characters["e"].position, (2, 2)) == 16
        assert get_current_turn_character(gs).id == "p"

    def test_enemy_closes_in_and_strikes(self):
        gs = _enemy_to_act(
            _make_character("e", CharacterType.WARRIOR, Team.ENEMY, (5, 9), 1),
            _make_character("p", CharacterType.MAGE, Team.PLAYER, (5, 5), 2),
        )
        gs = self._run_enemy_activation(gs, random.Random(0))
        # Two warrior hits on a mage: ceil(5 * 0.7) = 4 each
        assert gs.characters["p"].health == 2
        assert gs.characters["e"].position == (5, 6)

    def test_full_game_advances(self):
        gs = initialize_game(random.Random(11))
        rng = random.Random(11)
        for _ in range(30):
            actor = get_current_turn_character(gs)
            if actor is None:
                break
            if actor.team == Team.ENEMY:
                gs = self._run_enemy_activation(gs, rng)
            else:
                gs = end_turn(gs, actor.id, rng)
        assert gs.turn_count > 1
