"""
Keyboard and mouse bindings for SuperTicTacToe.
Each pygame event is routed straight to one of the controller's callbacks.
"""

from dataclasses import dataclass
from typing import Callable

import pygame


@dataclass
class Bindings:
    """Controller callbacks that input can trigger."""
    select: Callable[[int, int], None]
    undo: Callable[[], None]
    reset: Callable[[], None]
    quit: Callable[[], None]
    toggle_debug: Callable[[], None]
    toggle_help: Callable[[], None]


# Key -> Bindings field
KEY_BINDINGS = {
    pygame.K_ESCAPE: "quit",
    pygame.K_n: "reset",
    pygame.K_u: "undo",
    pygame.K_z: "undo",
    pygame.K_d: "toggle_debug",
    pygame.K_QUESTION: "toggle_help",
    pygame.K_SLASH: "toggle_help",  # ? is shift+/
    pygame.K_h: "toggle_help",
}


class InputHandler:
    """
    Dispatches pygame events to Bindings.

    Panel buttons are named after the binding they trigger. A click
    anywhere in the board area selects the cell under it without a bounds
    check, so clicks past the last row or column reach the game as
    out-of-bounds moves.
    """

    def __init__(self, renderer, bindings: Bindings):
        self.renderer = renderer
        self.bindings = bindings

    def pump(self) -> int:
        """Dispatch all pending events. Returns how many hit a binding."""
        handled = 0
        for event in pygame.event.get():
            if self.dispatch(event):
                handled += 1
        return handled

    def dispatch(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            self.bindings.quit()
            return True

        if event.type == pygame.MOUSEMOTION:
            self.renderer.update_hover(event.pos)
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self._click(event.pos)

        if event.type == pygame.KEYDOWN:
            name = KEY_BINDINGS.get(event.key)
            if name is None:
                return False
            getattr(self.bindings, name)()
            return True

        return False

    def _click(self, pos: tuple) -> bool:
        button = self.renderer.get_button_at(pos)
        if button is not None:
            getattr(self.bindings, button)()
            return True

        cell = self.renderer.screen_to_cell(pos[0], pos[1])
        if cell is None:
            return False
        self.bindings.select(*cell)
        return True
