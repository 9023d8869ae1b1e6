"""
Game configuration: board size, connections to win and starting player.
Validation is kept pure so any front-end can reuse it.
"""

from dataclasses import dataclass

from ..errors import InvalidConfig
from .board import Cell, X

MIN_SIZE = 3       # inclusive
MAX_SIZE = 14      # inclusive (board must be smaller than 15)
DEFAULT_SIZE = 3
DEFAULT_STARTER = X


def min_connections(size: int) -> int:
    """Smallest allowed win length for a board of `size`."""
    return min(3, size)


def validate_size(size: int) -> int:
    """Check board size is in [MIN_SIZE, MAX_SIZE]."""
    if not isinstance(size, int) or isinstance(size, bool):
        raise InvalidConfig(f"Board size must be an integer, got {size!r}")
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise InvalidConfig(
            f"Board size must be greater than {MIN_SIZE - 1} and less than {MAX_SIZE + 1}, got {size}"
        )
    return size


def validate_connections(size: int, connections: int) -> int:
    """Check win length is in [min(3, size), size]."""
    if not isinstance(connections, int) or isinstance(connections, bool):
        raise InvalidConfig(f"Connections must be an integer, got {connections!r}")
    low = min_connections(size)
    if not low <= connections <= size:
        raise InvalidConfig(
            f"Connections must be between {low} and {size}, got {connections}"
        )
    return connections


def parse_starter(text: str) -> Cell:
    """
    Read a starting player from user text.
    Only the first letter counts; anything other than x/o falls back to X.
    """
    choice = (text or "").strip().lower()[:1]
    if choice == "o":
        return Cell.O
    return DEFAULT_STARTER


@dataclass(frozen=True)
class GameConfig:
    """Immutable settings for one game."""
    size: int = DEFAULT_SIZE
    connections: int = 3
    starter: Cell = DEFAULT_STARTER

    def __post_init__(self):
        validate_size(self.size)
        validate_connections(self.size, self.connections)
        if self.starter not in (Cell.X, Cell.O):
            raise InvalidConfig(f"Starter must be X or O, got {self.starter!r}")

    @property
    def ai_value(self) -> Cell:
        """The AI always plays the side that does not start."""
        return self.starter.opponent
