"""
Board representation for SuperTicTacToe.
Square N x N grid of cells stored as a list of rows.
"""

from enum import Enum
from typing import NamedTuple, Optional, Sequence

from ..errors import InvalidMove, OutOfBounds


class Cell(Enum):
    """State of a single board cell."""
    EMPTY = " "
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Cell":
        """Get the other player's value."""
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        raise ValueError("EMPTY has no opponent")

    def __str__(self) -> str:
        return self.value


EMPTY = Cell.EMPTY
X = Cell.X
O = Cell.O


class Position(NamedTuple):
    """Board coordinate (row, col)."""
    row: int
    col: int


# Neighbour offsets tried by the proximity heuristic, in tie-break order.
# Not a clean rotation: the last three entries sweep the left column.
NEIGHBOR_OFFSETS = [
    (-1, 0),   # top
    (-1, 1),   # top-right
    (0, 1),    # right
    (1, 1),    # bottom-right
    (1, 0),    # bottom
    (-1, -1),  # top-left
    (0, -1),   # left
    (1, -1),   # bottom-left
]


class Board:
    """
    Grid of cells with a fixed side length.
    Every cell always holds one of EMPTY, X or O.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self.grid = [[EMPTY] * size for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        """Build a board from a square snapshot (list or tuple of rows)."""
        size = len(rows)
        board = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError("Board snapshot must be square")
            for c, cell in enumerate(row):
                board.grid[r][c] = Cell(cell)
        return board

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board(self.size)
        new_board.grid = [row[:] for row in self.grid]
        return new_board

    def snapshot(self) -> tuple:
        """Read-only view of the grid as a tuple of tuples."""
        return tuple(tuple(row) for row in self.grid)

    def is_valid_pos(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        if not self.is_valid_pos(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")
        return self.grid[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        """Check if position is empty."""
        return self.get(row, col) is EMPTY

    def place(self, row: int, col: int, cell: Cell):
        """
        Put a player's mark on the board.
        Raises OutOfBounds or InvalidMove if the cell cannot take it.
        """
        if cell is EMPTY:
            raise ValueError("Use clear() to empty a cell")
        current = self.get(row, col)
        if current is not EMPTY:
            raise InvalidMove(f'Cell ({row}, {col}) occupied by "{current}".')
        self.grid[row][col] = cell

    def clear(self, row: int, col: int) -> Cell:
        """
        Empty a cell.
        Returns the value that was removed.
        """
        removed = self.get(row, col)
        self.grid[row][col] = EMPTY
        return removed

    def clear_all(self):
        """Empty every cell."""
        for row in self.grid:
            for c in range(self.size):
                row[c] = EMPTY

    def positions_of(self, cell: Cell) -> list:
        """Positions holding `cell`, in row-major order."""
        return [
            Position(r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.grid[r][c] is cell
        ]

    def empty_positions(self) -> list:
        return self.positions_of(EMPTY)

    def count(self, cell: Cell) -> int:
        """Count cells holding `cell`."""
        return sum(row.count(cell) for row in self.grid)

    def is_full(self) -> bool:
        return all(cell is not EMPTY for row in self.grid for cell in row)

    def first_empty_neighbor(self, row: int, col: int) -> Optional[Position]:
        """First in-bounds empty neighbour of (row, col) in NEIGHBOR_OFFSETS order."""
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.is_valid_pos(nr, nc) and self.grid[nr][nc] is EMPTY:
                return Position(nr, nc)
        return None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __str__(self) -> str:
        """String representation of the board."""
        symbols = {EMPTY: '.', X: 'X', O: 'O'}
        lines = []

        # Column headers
        header = '   ' + ''.join(f'{i:3d}' for i in range(self.size))
        lines.append(header)

        for r in range(self.size):
            line = f'{r:2d} '
            for c in range(self.size):
                line += f'  {symbols[self.grid[r][c]]}'
            lines.append(line)

        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f'Board(size={self.size}, x={self.count(X)}, o={self.count(O)})'
