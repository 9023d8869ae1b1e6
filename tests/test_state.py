"""Tests for the turn state machine."""

import sys
sys.path.insert(0, '.')

import pytest

from supertictactoe.errors import (
    InvalidConfig, InvalidMove, InvalidState, NothingToUndo, OutOfBounds
)
from supertictactoe.game.board import Position, EMPTY, X, O
from supertictactoe.game.config import GameConfig
from supertictactoe.game.state import GameState, GameStatus

# X O X / X O O / O X X, played alternately starting with X
DRAW_SEQUENCE = [(0, 0), (0, 1), (0, 2), (1, 1), (1, 0), (1, 2), (2, 1), (2, 0), (2, 2)]


def play(game: GameState, moves):
    for row, col in moves:
        game.select(row, col)


class TestSelect:
    """Making moves."""

    def test_initial_state(self):
        game = GameState.create(3, 3, X)
        assert game.get_game_status() == GameStatus.IN_PROGRESS
        assert game.current_player == X
        assert game.move_history == []
        assert game.last_move is None
        assert game.get_connections() == 3

    def test_select_places_and_alternates(self):
        game = GameState.create(3, 3, O)
        game.select(1, 1)
        assert game.get_board()[1][1] == O
        assert game.current_player == X
        assert game.move_history == [Position(1, 1)]

        game.select(0, 0)
        assert game.get_board()[0][0] == X
        assert game.current_player == O
        assert game.get_move_count() == 2

    def test_occupied_cell(self):
        """Occupied cell fails and leaves everything unchanged."""
        game = GameState.create(3, 3, X)
        game.select(1, 1)
        before = game.get_board()

        with pytest.raises(InvalidMove):
            game.select(1, 1)
        assert game.get_board() == before
        assert game.current_player == O
        assert game.get_move_count() == 1

    @pytest.mark.parametrize("pos", [(-1, 0), (3, 0), (0, 3), (5, 5)])
    def test_out_of_bounds(self, pos):
        game = GameState.create(3, 3, X)
        with pytest.raises(OutOfBounds):
            game.select(*pos)
        assert game.get_move_count() == 0

    def test_row_win(self):
        game = GameState.create(3, 3, X)
        play(game, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])

        assert game.get_game_status() == GameStatus.X_WON
        assert game.winner == X
        assert game.is_game_over
        assert game.winning_line == [(0, 0), (0, 1), (0, 2)]
        # Turn still passes after the winning move
        assert game.current_player == O

    def test_anti_diagonal_win_near_corner(self):
        game = GameState.create(4, 3, X)
        play(game, [(0, 3), (0, 0), (1, 2), (3, 3), (2, 1)])
        assert game.get_game_status() == GameStatus.X_WON

    def test_k_minus_one_is_not_win(self):
        game = GameState.create(5, 4, X)
        play(game, [(2, 0), (0, 0), (2, 1), (0, 4), (2, 2)])
        assert game.get_game_status() == GameStatus.IN_PROGRESS

    def test_draw(self):
        game = GameState.create(3, 3, X)
        play(game, DRAW_SEQUENCE[:-1])
        assert game.get_game_status() == GameStatus.IN_PROGRESS

        game.select(*DRAW_SEQUENCE[-1])
        assert game.get_game_status() == GameStatus.DRAW
        assert game.winner is None

    def test_select_after_game_over(self):
        game = GameState.create(3, 3, X)
        play(game, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])
        with pytest.raises(InvalidState):
            game.select(2, 2)

    def test_snapshot_is_detached(self):
        game = GameState.create(3, 3, X)
        snap = game.get_board()
        game.select(0, 0)
        assert snap[0][0] == EMPTY


class TestUndo:
    """Taking moves back."""

    def test_round_trip(self):
        """select then undo restores board and current player."""
        game = GameState.create(4, 3, X)
        play(game, [(0, 0), (1, 1), (2, 2)])
        board_before = game.get_board()
        player_before = game.current_player

        game.select(3, 0)
        undone = game.undo()

        assert undone == (3, 0)
        assert game.get_board() == board_before
        assert game.current_player == player_before
        assert game.get_move_count() == 3

    def test_nothing_to_undo(self):
        game = GameState.create(3, 3, X)
        with pytest.raises(NothingToUndo):
            game.undo()

    def test_undo_win(self):
        game = GameState.create(3, 3, X)
        play(game, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])

        game.undo()
        assert game.get_game_status() == GameStatus.IN_PROGRESS
        assert game.winning_line == []
        assert game.current_player == X
        game.select(2, 2)

    def test_undo_draw(self):
        game = GameState.create(3, 3, X)
        play(game, DRAW_SEQUENCE)
        game.undo()
        assert game.get_game_status() == GameStatus.IN_PROGRESS
        assert game.get_board()[2][2] == EMPTY

    def test_undo_everything(self):
        game = GameState.create(3, 3, O)
        play(game, [(0, 0), (1, 1)])
        game.undo()
        game.undo()
        assert game.current_player == O
        assert all(cell == EMPTY for row in game.get_board() for cell in row)


class TestReset:
    """Starting a rematch."""

    def test_reset_clears_and_keeps_starter(self):
        game = GameState(GameConfig(size=4, connections=3, starter=O))
        play(game, [(0, 0), (1, 1), (2, 2)])

        game.reset()
        assert all(cell == EMPTY for row in game.get_board() for cell in row)
        assert game.get_game_status() == GameStatus.IN_PROGRESS
        assert game.move_history == []
        assert game.current_player == O

    def test_reset_after_win(self):
        game = GameState.create(3, 3, X)
        play(game, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)])

        game.reset()
        assert game.current_player == X
        assert not game.is_game_over
        assert game.winning_line == []

    def test_reset_without_history(self):
        game = GameState.create(3, 3, X)
        with pytest.raises(InvalidState):
            game.reset()

        game.select(0, 0)
        game.undo()
        with pytest.raises(InvalidState):
            game.reset()


class TestCreate:
    """Construction and info."""

    @pytest.mark.parametrize("size,connections", [(2, 2), (15, 3), (4, 5), (5, 2)])
    def test_invalid_settings(self, size, connections):
        with pytest.raises(InvalidConfig):
            GameState.create(size, connections)

    def test_game_info(self):
        game = GameState.create(5, 4, X)
        game.select(2, 2)
        info = game.get_game_info()
        assert info['size'] == 5
        assert info['connections'] == 4
        assert info['turn'] == 'O'
        assert info['move_count'] == 1
        assert info['winner'] is None
        assert info['last_move'] == (2, 2)
        assert '5x5' in str(game)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
