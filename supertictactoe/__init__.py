"""
SuperTicTacToe - N-in-a-row on a configurable board with a heuristic AI.
"""

__version__ = "1.0.0"
