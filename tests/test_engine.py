"""Tests for the heuristic AI engine."""

import sys
sys.path.insert(0, '.')

import random

import pytest

from supertictactoe.ai.engine import DecisionEngine
from supertictactoe.ai.strategies import (
    AIStatus, AnalysisContext, CompleteLineStrategy, ForkBlockStrategy,
    ForkCreateStrategy, RandomStrategy, Strategy, default_strategies
)
from supertictactoe.errors import NoMovesAvailable
from supertictactoe.game.board import Board, Position, EMPTY, X, O
from supertictactoe.game.state import GameState

SYMBOLS = {'X': X, 'O': O, '.': EMPTY}


def board_from(*rows: str) -> Board:
    """Build a board from strings like 'XO.'."""
    return Board.from_rows([[SYMBOLS[ch] for ch in row] for row in rows])


class TestStrategyPriority:
    """Strategy order and outcomes."""

    def test_win_now(self):
        """O completes its own row."""
        engine = DecisionEngine(3, O)
        board = board_from("XX.", "OO.", "...")

        assert engine.think(board.snapshot()) == Position(1, 2)
        assert engine.last_strategy == AIStatus.WIN

    def test_block(self):
        """No O win available, so O blocks the X row."""
        engine = DecisionEngine(3, O)
        board = board_from("XX.", "O..", "...")

        assert engine.think(board.snapshot()) == Position(0, 2)
        assert engine.last_strategy == AIStatus.BLOCK

    def test_win_beats_block(self):
        """X can both win and block; winning wins."""
        engine = DecisionEngine(3, X)
        board = board_from("XX.", "OO.", "...")

        assert engine.think(board) == Position(0, 2)
        assert engine.last_strategy == AIStatus.WIN

    def test_win_scans_whole_line_of_first_seed(self):
        """Windows away from the seed are checked before later seeds."""
        engine = DecisionEngine(3, O)
        board = board_from(
            "O....",
            "....O",
            "....O",
            "...O.",
            "....O",
        )

        assert engine.think(board) == Position(2, 2)
        assert engine.last_strategy == AIStatus.WIN

    def test_win_row_window_before_column(self):
        engine = DecisionEngine(3, O)
        board = board_from(
            "O..OO",
            "O....",
            ".....",
            ".....",
            ".....",
        )

        assert engine.think(board) == Position(0, 2)
        assert engine.last_strategy == AIStatus.WIN

    def test_proximity(self):
        """Without threats, play next to our own mark (top first)."""
        engine = DecisionEngine(3, O)
        board = board_from("X..", ".O.", "...")

        assert engine.think(board) == Position(0, 1)
        assert engine.last_strategy == AIStatus.PROXIMITY

    def test_proximity_neighbor_order(self):
        """Top-left is tried after bottom and before left."""
        engine = DecisionEngine(5, O)
        board = board_from(
            ".....",
            "..XX.",
            "..OX.",
            "..XX.",
            ".....",
        )

        assert engine.think(board) == Position(1, 1)
        assert engine.last_strategy == AIStatus.PROXIMITY

    def test_random_fallback(self):
        """With no own marks and no threats the move is random but legal."""
        board = board_from("X..", "...", "...")
        for seed in range(20):
            engine = DecisionEngine(3, O, rng=random.Random(seed))
            move = engine.think(board)
            assert board.get(*move) == EMPTY
            assert engine.last_strategy == AIStatus.RANDOM

    def test_random_strategy_finds_last_cell(self):
        board = board_from("XOX", "OX.", "OXO")
        ctx = AnalysisContext.observe(board, 3, O, random.Random(1))
        assert RandomStrategy().try_move(ctx) == (1, 2)

    def test_fork_slots_decline(self):
        board = board_from("X..", ".O.", "...")
        ctx = AnalysisContext.observe(board, 3, O, random.Random())
        assert ForkCreateStrategy().try_move(ctx) is None
        assert ForkBlockStrategy().try_move(ctx) is None

    def test_default_order(self):
        names = [s.name for s in default_strategies()]
        assert names == ["win", "block", "fork_create", "fork_block", "proximity", "random"]

    def test_line_strategy_needs_both_hooks(self):
        """A line strategy without a mark to look for cannot be built."""

        class SeedsOnly(CompleteLineStrategy):
            def _seeds(self, ctx):
                return ctx.own_positions

        with pytest.raises(TypeError):
            SeedsOnly()

        with pytest.raises(TypeError):
            Strategy()

    def test_strategy_is_documented(self):
        assert Strategy.__doc__

    def test_custom_fork_strategy(self):
        """A fork detector can be swapped into the fork slot."""

        class CornerFork(ForkCreateStrategy):
            def try_move(self, ctx):
                return Position(2, 2)

        strategies = default_strategies()
        strategies[2] = CornerFork()
        engine = DecisionEngine(3, O, strategies=strategies)

        assert engine.think(board_from("X..", ".O.", "...")) == Position(2, 2)
        assert engine.last_strategy == AIStatus.FORK_CREATE

        # Win and block still come first
        assert engine.think(board_from("XX.", "O..", "...")) == Position(0, 2)
        assert engine.last_strategy == AIStatus.BLOCK


class TestEngineContract:
    """Preconditions, side effects and status tracking."""

    def test_does_not_modify_board(self):
        engine = DecisionEngine(3, O)
        board = board_from("XX.", "O..", "...")
        before = board.copy()

        engine.think(board)
        assert board == before

    def test_full_board(self):
        engine = DecisionEngine(3, O)
        board = board_from("XOX", "XOO", "OXX")

        with pytest.raises(NoMovesAvailable):
            engine.think(board)
        assert engine.status == AIStatus.IDLE

    def test_status_lifecycle(self):
        seen = []
        engine = DecisionEngine(3, O, listener=seen.append)
        assert engine.status == AIStatus.IDLE

        engine.think(board_from("XX.", "O..", "..."))
        assert seen == [AIStatus.THINKING, AIStatus.BLOCK, AIStatus.IDLE]
        assert engine.status == AIStatus.IDLE
        assert engine.last_strategy == AIStatus.BLOCK

    def test_debug_info(self):
        engine = DecisionEngine(3, O)
        engine.think(board_from("XX.", "O..", "..."))
        info = engine.get_debug_info()
        assert info['best_move'] == (0, 2)
        assert info['strategy'] == 'block'
        assert info['own_count'] == 1
        assert info['opponent_count'] == 2

    def test_reset(self):
        engine = DecisionEngine(3, O)
        engine.think(board_from("XX.", "O..", "..."))
        engine.erase_memory()
        assert engine.last_strategy == AIStatus.IDLE
        assert engine.get_debug_info()['best_move'] is None

    def test_for_game(self):
        game = GameState.create(6, 4, X)
        engine = DecisionEngine.for_game(game, O)
        assert engine.connections == 4
        assert engine.ai_value == O
        assert engine.player_value == X

    def test_ai_value_must_be_player(self):
        with pytest.raises(ValueError):
            DecisionEngine(3, EMPTY)

    def test_always_returns_empty_cell(self):
        """Random boards with space left always get a legal move."""
        rng = random.Random(42)
        for _ in range(200):
            size = rng.randint(3, 8)
            k = rng.randint(3, size)
            board = Board(size)
            cells = [(r, c) for r in range(size) for c in range(size)]
            rng.shuffle(cells)
            filled = rng.randint(0, len(cells) - 1)
            for i, (r, c) in enumerate(cells[:filled]):
                board.place(r, c, X if i % 2 == 0 else O)

            engine = DecisionEngine(k, O, rng=random.Random(rng.random()))
            move = engine.think(board.snapshot())
            assert board.get(*move) == EMPTY

    def test_plays_full_game(self):
        """Engine and state alternate until the game ends."""
        game = GameState.create(5, 4, X)
        engine = DecisionEngine.for_game(game, O, rng=random.Random(7))
        human = random.Random(3)

        while not game.is_game_over:
            if game.current_player == O:
                move = engine.think(game.get_board())
            else:
                move = human.choice(game.board.empty_positions())
            game.select(*move)

        assert game.get_move_count() <= 25


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
