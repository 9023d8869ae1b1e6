"""
AI Engine for SuperTicTacToe.
Runs a fixed priority list of heuristic strategies and plays the first
move one of them proposes.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import NoMovesAvailable
from ..game.board import Board, Cell, Position
from .strategies import AIStatus, AnalysisContext, Strategy, default_strategies

logger = logging.getLogger(__name__)


@dataclass
class AIDebugInfo:
    """Debug information from the last decision."""
    thinking_time: float = 0.0
    best_move: Optional[Position] = None
    strategy: AIStatus = AIStatus.IDLE
    own_count: int = 0
    opponent_count: int = 0


class DecisionEngine:
    """
    Heuristic SuperTicTacToe AI.

    Strategy order:
    - Win: complete one of our own almost-complete lines
    - Block: fill the cell the opponent needs to win
    - Fork create / fork block: reserved, always decline
    - Proximity: extend next to one of our marks
    - Random: any empty cell
    """

    def __init__(self, connections: int, ai_value: Cell,
                 strategies: Optional[list] = None,
                 rng: Optional[random.Random] = None,
                 listener: Optional[Callable[[AIStatus], None]] = None):
        if ai_value not in (Cell.X, Cell.O):
            raise ValueError(f"AI must play X or O, got {ai_value!r}")
        self.connections = connections
        self.ai_value = ai_value
        self.player_value = ai_value.opponent
        self.strategies: list[Strategy] = (
            strategies if strategies is not None else default_strategies()
        )
        self.rng = rng or random.Random()
        self.listener = listener

        self.status = AIStatus.IDLE
        self.last_strategy = AIStatus.IDLE
        self.debug_info = AIDebugInfo()

    @classmethod
    def for_game(cls, game, ai_value: Cell, **kwargs) -> "DecisionEngine":
        """Create an engine using the game's win length."""
        return cls(game.get_connections(), ai_value, **kwargs)

    def think(self, board) -> Position:
        """
        Choose a move for the current position.

        Args:
            board: Board or board snapshot (rows of cells). Not modified.

        Returns:
            (row, col) Position of an empty cell
        """
        start_time = time.time()
        self._status_change(AIStatus.THINKING)

        analysis = board.copy() if isinstance(board, Board) else Board.from_rows(board)
        if analysis.is_full():
            self._status_change(AIStatus.IDLE)
            raise NoMovesAvailable("The board has no empty cell left.")

        ctx = AnalysisContext.observe(analysis, self.connections, self.ai_value, self.rng)
        move, used = self._perform_strategy_sequence(ctx)

        self.last_strategy = used.status
        self.debug_info = AIDebugInfo(
            thinking_time=time.time() - start_time,
            best_move=move,
            strategy=used.status,
            own_count=len(ctx.own_positions),
            opponent_count=len(ctx.opponent_positions),
        )
        logger.debug("AI chose %s via %s", move, used.name)

        self._status_change(AIStatus.IDLE)
        return move

    def _perform_strategy_sequence(self, ctx: AnalysisContext) -> tuple:
        """Return (move, strategy) from the first strategy that proposes one."""
        for strategy in self.strategies:
            move = strategy.try_move(ctx)
            if move is not None:
                self._status_change(strategy.status)
                return Position(*move), strategy
        # Only reachable with a custom list lacking a fallback
        raise NoMovesAvailable("No strategy produced a move.")

    def _status_change(self, status: AIStatus):
        logger.debug("AI status changed: %s", status.value)
        self.status = status
        if self.listener is not None:
            self.listener(status)

    def reset(self):
        """Forget the last decision before a new game."""
        self.status = AIStatus.IDLE
        self.last_strategy = AIStatus.IDLE
        self.debug_info = AIDebugInfo()

    erase_memory = reset

    def get_debug_info(self) -> dict:
        """Get debug information as dictionary."""
        info = self.debug_info
        return {
            'thinking_time': info.thinking_time,
            'best_move': info.best_move,
            'strategy': info.strategy.value,
            'own_count': info.own_count,
            'opponent_count': info.opponent_count,
        }
