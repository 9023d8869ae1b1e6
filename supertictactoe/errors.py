"""
Error types raised by the game core.
All of them are recoverable; the UI reports them and keeps running.
"""


class GameError(Exception):
    """Base class for every failure the game core reports."""


class InvalidMove(GameError):
    """Raised when selecting a cell that is already occupied."""


class OutOfBounds(GameError, IndexError):
    """Raised when a position lies outside the board."""


class NothingToUndo(GameError):
    """Raised when undo is requested with an empty move history."""


class InvalidState(GameError):
    """Raised when an operation is not allowed in the current game state."""


class NoMovesAvailable(GameError):
    """Raised when the AI is asked to move on a full board."""


class InvalidConfig(GameError, ValueError):
    """Raised when board size, connections or starter are out of range."""
