"""
Game state management for SuperTicTacToe.
Tracks the current turn, move history and game status.
"""

import logging
from enum import Enum
from typing import Optional

from ..errors import InvalidMove, InvalidState, NothingToUndo, OutOfBounds
from .board import Board, Cell, Position, EMPTY, X, O
from .config import GameConfig
from .detector import WinDetector

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Game status."""
    IN_PROGRESS = "in_progress"
    DRAW = "draw"            # Board filled without a winner
    X_WON = "x_won"
    O_WON = "o_won"

    @classmethod
    def won_by(cls, cell: Cell) -> "GameStatus":
        """Get the won status for a player."""
        if cell is X:
            return cls.X_WON
        if cell is O:
            return cls.O_WON
        raise ValueError("EMPTY cannot win")

    @property
    def winner(self) -> Optional[Cell]:
        """The winning player, or None if nobody has won."""
        return {GameStatus.X_WON: X, GameStatus.O_WON: O}.get(self)

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


class GameState:
    """
    Manages the complete state of a SuperTicTacToe game.
    Owns the board; callers only ever see snapshots of it.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.board = Board(config.size)
        self.current_player = config.starter
        self.status = GameStatus.IN_PROGRESS
        self.move_history: list[Position] = []
        self.winning_line: list[Position] = []

    @classmethod
    def create(cls, size: int, connections: int, starter: Cell = X) -> "GameState":
        """Validate the settings and start a new game."""
        return cls(GameConfig(size=size, connections=connections, starter=starter))

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def connections(self) -> int:
        return self.config.connections

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Optional[Cell]:
        return self.status.winner

    @property
    def last_move(self) -> Optional[Position]:
        return self.move_history[-1] if self.move_history else None

    def select(self, row: int, col: int) -> GameStatus:
        """
        Place the current player's mark at (row, col).

        Raises:
            OutOfBounds: position is off the board
            InvalidMove: cell already occupied
            InvalidState: game is already over

        Returns:
            The game status after the move
        """
        if not self.board.is_valid_pos(row, col):
            raise OutOfBounds("The selected cell does not exist.")
        occupant = self.board.get(row, col)
        if occupant is not EMPTY:
            raise InvalidMove(f'Cell occupied by "{occupant}".')
        if self.is_game_over:
            raise InvalidState("The game is already over.")

        player = self.current_player
        self.board.place(row, col, player)
        self.move_history.append(Position(row, col))

        self._check_game_status(row, col, player)

        # Turn always passes, so undo can flip it back
        self.current_player = player.opponent

        logger.debug("%s played (%d, %d) -> %s", player, row, col, self.status.value)
        return self.status

    def _check_game_status(self, row: int, col: int, player: Cell):
        """Update status after `player` moved at (row, col)."""
        line = WinDetector.find_winning_line(
            self.board, row, col, player, self.connections
        )
        if line:
            self.status = GameStatus.won_by(player)
            self.winning_line = line
        elif self.board.is_full():
            self.status = GameStatus.DRAW

    def undo(self) -> Position:
        """
        Take back the most recent move.

        The status is forced back to IN_PROGRESS rather than recomputed.

        Returns:
            Position that was cleared
        """
        if not self.move_history:
            raise NothingToUndo("There is nothing left to undo.")

        last = self.move_history.pop()
        self.board.clear(last.row, last.col)
        self.current_player = self.current_player.opponent
        self.status = GameStatus.IN_PROGRESS
        self.winning_line = []

        logger.debug("Undid move at (%d, %d)", last.row, last.col)
        return last

    def reset(self):
        """
        Clear the board for a rematch.
        Whoever made the first move of the finished game starts again.
        """
        if not self.move_history:
            raise InvalidState("Cannot reset a game in which no move was made.")

        first = self.move_history[0]
        self.current_player = self.board.get(first.row, first.col)
        self.board.clear_all()
        self.move_history.clear()
        self.status = GameStatus.IN_PROGRESS
        self.winning_line = []

        logger.debug("Game reset, %s starts", self.current_player)

    def get_board(self) -> tuple:
        """Read-only snapshot of the grid."""
        return self.board.snapshot()

    def get_game_status(self) -> GameStatus:
        return self.status

    def get_connections(self) -> int:
        return self.connections

    def get_move_count(self) -> int:
        """Get total number of moves made."""
        return len(self.move_history)

    def get_game_info(self) -> dict:
        """Get current game information."""
        winner = self.winner
        return {
            'size': self.size,
            'connections': self.connections,
            'status': self.status.value,
            'turn': str(self.current_player),
            'move_count': self.get_move_count(),
            'is_game_over': self.is_game_over,
            'winner': str(winner) if winner else None,
            'last_move': self.last_move,
        }

    def __str__(self) -> str:
        info = self.get_game_info()
        lines = [
            f"Board: {info['size']}x{info['size']}, {info['connections']} to win",
            f"Turn: {info['turn']} (Move #{info['move_count'] + 1})",
        ]
        if info['is_game_over']:
            lines.append(f"Game Over! Winner: {info['winner'] or 'Draw'}")
        lines.append(str(self.board))
        return '\n'.join(lines)
