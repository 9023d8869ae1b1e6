#!/usr/bin/env python3
"""
Super TicTacToe - N-in-a-row against a heuristic AI
Main entry point for the game.
"""

import argparse
import logging
import random
import sys

from supertictactoe.errors import GameError, InvalidConfig
from supertictactoe.game.board import Cell
from supertictactoe.game.config import (
    GameConfig, MAX_SIZE, MIN_SIZE, parse_starter, validate_connections, validate_size
)
from supertictactoe.game.state import GameState
from supertictactoe.ai.engine import DecisionEngine
from supertictactoe.ui.input import Bindings, InputHandler
from supertictactoe.ui.renderer import Renderer

logger = logging.getLogger("supertictactoe")


class TicTacToeGame:
    """Main game controller."""

    def __init__(self, config: GameConfig, use_ai: bool = True, seed=None):
        self.renderer = Renderer(config.size)
        self.state = GameState(config)
        self.input_handler = InputHandler(self.renderer, Bindings(
            select=self._human_select,
            undo=self._undo,
            reset=self._new_game,
            quit=self._quit,
            toggle_debug=self._toggle_debug,
            toggle_help=self.renderer.toggle_help_overlay,
        ))
        self.ai_engine = None
        if use_ai:
            self.ai_engine = DecisionEngine.for_game(
                self.state, config.ai_value, rng=random.Random(seed)
            )

        self.show_debug = False
        self.running = True

    def run(self):
        """Main game loop."""
        while self.running:
            self.input_handler.pump()

            if self.is_ai_turn():
                self._run_ai_turn()

            ai_status = ""
            debug_info = None
            if self.ai_engine is not None:
                ai_status = self.ai_engine.last_strategy.value
                debug_info = self.ai_engine.get_debug_info()
            self.renderer.render(
                self.state,
                ai_status=ai_status,
                debug_info=debug_info,
                show_debug=self.show_debug,
                human_turn=not self.is_ai_turn(),
            )

            self.renderer.tick(60)

        self.renderer.quit()

    def is_ai_turn(self) -> bool:
        return (self.ai_engine is not None and
                not self.state.is_game_over and
                self.state.current_player is self.ai_engine.ai_value)

    def _human_select(self, row: int, col: int):
        if not self.is_ai_turn():
            self._select(row, col)

    def _quit(self):
        if self.renderer.show_help_overlay:
            self.renderer.close_overlays()
        else:
            self.running = False

    def _toggle_debug(self):
        self.show_debug = not self.show_debug

    def _select(self, row: int, col: int):
        """Make a move, reporting illegal ones on screen."""
        try:
            self.state.select(row, col)
        except GameError as e:
            self.renderer.show_error(f"Unable to select cell. {e}")
            return
        if self.state.is_game_over:
            logger.info("Game over: %s", self.state.get_game_status().value)

    def _run_ai_turn(self):
        """Execute AI move."""
        move = self.ai_engine.think(self.state.get_board())
        self._select(move.row, move.col)

    def _new_game(self):
        """Start a new game."""
        try:
            self.state.reset()
        except GameError as e:
            self.renderer.show_error(str(e))
            return
        if self.ai_engine is not None:
            self.ai_engine.reset()

    def _undo(self):
        """Undo the last move(s)."""
        try:
            self.state.undo()
            # Against the AI, also take back the human move before it
            if self.ai_engine is not None and self.is_ai_turn():
                self.state.undo()
        except GameError as e:
            self.renderer.show_error(f"Unable to undo. {e}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="N-in-a-row tic-tac-toe against a heuristic AI.")
    ap.add_argument("--size", type=int, default=3,
                    help=f"board size (greater than {MIN_SIZE - 1} and less than {MAX_SIZE + 1})")
    ap.add_argument("--connections", type=int, default=None,
                    help="marks in a row needed to win (default: 3)")
    ap.add_argument("--starter", type=str, default="x",
                    help="player that moves first, X or O (default: X)")
    ap.add_argument("--pvp", action="store_true", help="two humans, no AI")
    ap.add_argument("--seed", type=int, default=None, help="random seed for the AI")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    help="logging level (DEBUG, INFO, WARNING, ...)")
    return ap


def parse_config(args) -> GameConfig:
    """Turn parsed CLI arguments into a validated GameConfig."""
    size = validate_size(args.size)
    connections = args.connections
    if connections is None:
        connections = min(3, size)
    connections = validate_connections(size, connections)
    starter = parse_starter(args.starter)
    if starter is Cell.X and args.starter.strip().lower()[:1] != "x":
        logger.warning('Unknown starter "%s", the default value "X" will go first.', args.starter)
    return GameConfig(size=size, connections=connections, starter=starter)


def main(argv=None):
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = parse_config(args)
    except InvalidConfig as e:
        parser.error(str(e))

    try:
        game = TicTacToeGame(config, use_ai=not args.pvp, seed=args.seed)
        game.run()
    except KeyboardInterrupt:
        logger.info("Game interrupted.")
        sys.exit(0)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)


if __name__ == "__main__":
    main()
