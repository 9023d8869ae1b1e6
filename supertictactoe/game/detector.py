"""
Win detection for SuperTicTacToe.
Checks only the four lines through the last move, one K-window at a time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from .board import Board, Cell, Position, EMPTY


class LineFamily(Enum):
    """The four line directions through a cell, in scan order."""
    ROW = (0, 1)             # horizontal →
    COLUMN = (1, 0)          # vertical ↓
    DIAGONAL = (1, 1)        # diagonal ↘
    ANTI_DIAGONAL = (-1, 1)  # anti-diagonal ↗

    @property
    def step(self) -> tuple:
        return self.value


@dataclass(frozen=True)
class Line:
    """
    A full board line through an anchor cell.
    Cell i of the line is start + i * step; the anchor sits at `index`.
    """
    family: LineFamily
    start: Position
    length: int
    index: int

    def cell_at(self, i: int) -> Position:
        dr, dc = self.family.step
        return Position(self.start.row + i * dr, self.start.col + i * dc)

    def window_offsets(self, k: int) -> range:
        """
        Start offsets of every K-window on this line that covers the anchor.
        Empty when the line is shorter than K.
        """
        if k < 1 or self.length < k:
            return range(0)
        first = max(0, self.index - k + 1)
        last = min(self.index, self.length - k)
        return range(first, last + 1)

    def all_window_offsets(self, k: int) -> range:
        """Start offsets of every K-window on this line, anchor or not."""
        if k < 1 or self.length < k:
            return range(0)
        return range(0, self.length - k + 1)


class WindowScan(NamedTuple):
    """Result of scanning one window."""
    qualified: bool                 # only `value` and at most one EMPTY
    empty: Optional[Position]       # the single EMPTY cell, if any


class WinDetector:
    """Stateless K-in-a-row detection around a single cell."""

    FAMILIES = (
        LineFamily.ROW,
        LineFamily.COLUMN,
        LineFamily.DIAGONAL,
        LineFamily.ANTI_DIAGONAL,
    )

    @staticmethod
    def line_through(size: int, row: int, col: int, family: LineFamily) -> Line:
        """
        Get the line of `family` passing through (row, col).

        Diagonals are translated back to their own start cell, and their
        length shrinks by the distance from the primary (longest) diagonal.
        """
        if family is LineFamily.ROW:
            return Line(family, Position(row, 0), size, col)

        if family is LineFamily.COLUMN:
            return Line(family, Position(0, col), size, row)

        if family is LineFamily.DIAGONAL:
            sub = min(row, col)
            start = Position(row - sub, col - sub)
            dist_from_primary = start.row + start.col  # one of them is 0
            return Line(family, start, size - dist_from_primary, sub)

        # Anti-diagonal: walk toward the bottom-left edge to find the start
        dist_from_bottom = (size - 1) - row
        sub = min(col, dist_from_bottom)
        start = Position(row + sub, col - sub)
        dist_from_primary = abs((start.row + start.col) - (size - 1))
        return Line(family, start, size - dist_from_primary, sub)

    @staticmethod
    def scan_window(board: Board, line: Line, offset: int, k: int,
                    value: Cell) -> WindowScan:
        """
        Scan K cells of `line` starting at `offset`.
        Stops at the first foreign mark or second empty cell.
        """
        empty = None
        for i in range(offset, offset + k):
            pos = line.cell_at(i)
            cell = board.grid[pos.row][pos.col]
            if cell is value:
                continue
            if cell is not EMPTY or empty is not None:
                return WindowScan(False, None)
            empty = pos
        return WindowScan(True, empty)

    @staticmethod
    def iter_windows(board: Board, row: int, col: int, k: int,
                     full_line: bool = False):
        """
        Yield (line, offset) for K-windows on the lines through (row, col).

        By default only windows covering (row, col) are yielded; with
        `full_line` every window of each line is, left to right.
        """
        for family in WinDetector.FAMILIES:
            line = WinDetector.line_through(board.size, row, col, family)
            if full_line:
                offsets = line.all_window_offsets(k)
            else:
                offsets = line.window_offsets(k)
            for offset in offsets:
                yield line, offset

    @staticmethod
    def find_winning_line(board: Board, row: int, col: int, value: Cell,
                          k: int) -> list:
        """
        Get positions of a completed K-window of `value` through (row, col).
        Returns empty list if there is none.
        """
        if value is EMPTY:
            return []
        for line, offset in WinDetector.iter_windows(board, row, col, k):
            scan = WinDetector.scan_window(board, line, offset, k, value)
            if scan.qualified and scan.empty is None:
                return [line.cell_at(i) for i in range(offset, offset + k)]
        return []

    @staticmethod
    def is_win(board: Board, row: int, col: int, value: Cell, k: int) -> bool:
        """Check if (row, col) lies on K consecutive cells of `value`."""
        return bool(WinDetector.find_winning_line(board, row, col, value, k))

    @staticmethod
    def find_completing_move(board: Board, row: int, col: int, value: Cell,
                             k: int) -> Optional[Position]:
        """
        Find an almost-complete window on a line through (row, col).

        Looks for a K-window holding K-1 cells of `value` and exactly one
        empty cell. Every window of each line is scanned, including ones
        that do not contain (row, col). Families are tried row, column,
        diagonal, anti-diagonal; windows left to right along each line.

        Returns:
            Position of the empty cell that would complete the line, or None
        """
        if value is EMPTY:
            return None
        for line, offset in WinDetector.iter_windows(board, row, col, k,
                                                     full_line=True):
            scan = WinDetector.scan_window(board, line, offset, k, value)
            if scan.qualified and scan.empty is not None:
                return scan.empty
        return None
