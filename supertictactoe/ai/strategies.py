"""
Move selection strategies for the SuperTicTacToe AI.
Each strategy either proposes a move or declines so the next one can try.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..game.board import Board, Cell, Position, EMPTY
from ..game.detector import WinDetector


class AIStatus(Enum):
    """What the AI is doing, or why it picked its last move."""
    IDLE = "idle"
    THINKING = "thinking"
    WIN = "win"
    BLOCK = "block"
    FORK_CREATE = "fork_create"
    FORK_BLOCK = "fork_block"
    PROXIMITY = "proximity"
    RANDOM = "random"


@dataclass
class AnalysisContext:
    """Private view of the board built for a single think() call."""
    board: Board
    connections: int
    own_value: Cell
    rng: random.Random
    own_positions: list = field(default_factory=list)
    opponent_positions: list = field(default_factory=list)

    @property
    def opponent_value(self) -> Cell:
        return self.own_value.opponent

    @classmethod
    def observe(cls, board: Board, connections: int, own_value: Cell,
                rng: random.Random) -> "AnalysisContext":
        """Record own and opponent positions in row-major order."""
        return cls(
            board=board,
            connections=connections,
            own_value=own_value,
            rng=rng,
            own_positions=board.positions_of(own_value),
            opponent_positions=board.positions_of(own_value.opponent),
        )


class Strategy(ABC):
    """One step of the AI's move selection, tried in priority order."""

    name = "base"
    status = AIStatus.IDLE

    @abstractmethod
    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        """Return a move, or None to let the next strategy try."""


class CompleteLineStrategy(Strategy):
    """Finds the empty cell that finishes an almost-complete line."""

    @abstractmethod
    def _seeds(self, ctx: AnalysisContext) -> list:
        """Positions whose lines are searched, in order."""

    @abstractmethod
    def _value(self, ctx: AnalysisContext) -> Cell:
        """Mark the line must be made of."""

    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        value = self._value(ctx)
        for row, col in self._seeds(ctx):
            move = WinDetector.find_completing_move(
                ctx.board, row, col, value, ctx.connections
            )
            if move is not None:
                return move
        return None


class WinStrategy(CompleteLineStrategy):
    """Take a winning cell if one exists."""

    name = "win"
    status = AIStatus.WIN

    def _seeds(self, ctx):
        return ctx.own_positions

    def _value(self, ctx):
        return ctx.own_value


class BlockStrategy(CompleteLineStrategy):
    """Occupy the cell the opponent needs to win next turn."""

    name = "block"
    status = AIStatus.BLOCK

    def _seeds(self, ctx):
        return ctx.opponent_positions

    def _value(self, ctx):
        return ctx.opponent_value


class ForkCreateStrategy(Strategy):
    """
    Slot for creating a fork (two simultaneous winning threats).
    Currently always declines; a real detector can replace this class.
    """

    name = "fork_create"
    status = AIStatus.FORK_CREATE

    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        return None


class ForkBlockStrategy(Strategy):
    """
    Slot for blocking an opponent fork.
    Currently always declines; a real detector can replace this class.
    """

    name = "fork_block"
    status = AIStatus.FORK_BLOCK

    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        return None


class ProximityStrategy(Strategy):
    """Play next to one of our own marks to build a chain."""

    name = "proximity"
    status = AIStatus.PROXIMITY

    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        for row, col in ctx.own_positions:
            move = ctx.board.first_empty_neighbor(row, col)
            if move is not None:
                return move
        return None


class RandomStrategy(Strategy):
    """Pick a random empty cell. Always succeeds on a board with space left."""

    name = "random"
    status = AIStatus.RANDOM

    def try_move(self, ctx: AnalysisContext) -> Optional[Position]:
        size = ctx.board.size
        while True:
            row = ctx.rng.randrange(size)
            col = ctx.rng.randrange(size)
            if ctx.board.grid[row][col] is EMPTY:
                return Position(row, col)


def default_strategies() -> list:
    """The standard priority order."""
    return [
        WinStrategy(),
        BlockStrategy(),
        ForkCreateStrategy(),
        ForkBlockStrategy(),
        ProximityStrategy(),
        RandomStrategy(),
    ]
