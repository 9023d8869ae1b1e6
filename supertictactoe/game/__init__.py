from .board import Board, Cell, Position, EMPTY, X, O
from .config import GameConfig
from .detector import WinDetector
from .state import GameState, GameStatus

__all__ = [
    'Board', 'Cell', 'Position', 'GameConfig', 'WinDetector',
    'GameState', 'GameStatus', 'EMPTY', 'X', 'O',
]
