"""
Pygame renderer for SuperTicTacToe.
Handles all visual rendering of the game.
"""

import pygame
import time
from typing import Optional

from ..game.board import EMPTY, X, O
from ..game.state import GameState, GameStatus

# Window settings
WINDOW_WIDTH = 960
WINDOW_HEIGHT = 680

# Board settings
BOARD_MARGIN = 40
BOARD_AREA_SIZE = 600

# Panel settings
PANEL_X = BOARD_MARGIN + BOARD_AREA_SIZE + 20
PANEL_WIDTH = WINDOW_WIDTH - PANEL_X - 20

# Colors
COLOR_BG = (40, 44, 52)
COLOR_BOARD = (235, 235, 225)
COLOR_LINE = (50, 50, 60)
COLOR_X = (200, 60, 60)
COLOR_O = (50, 100, 200)
COLOR_LAST_MOVE = (255, 200, 100)
COLOR_TEXT = (220, 220, 220)
COLOR_PANEL_BG = (50, 54, 62)
COLOR_HIGHLIGHT = (255, 200, 100)
COLOR_WIN_HIGHLIGHT = (255, 215, 0)
COLOR_WIN_LINE = (50, 200, 50)

STATUS_TEXT = {
    GameStatus.X_WON: "X WINS!",
    GameStatus.O_WON: "O WINS!",
    GameStatus.DRAW: "TIE GAME!",
}


class Renderer:
    """Handles rendering of the SuperTicTacToe game."""

    def __init__(self, board_size: int):
        pygame.init()
        pygame.display.set_caption("Super TicTacToe")

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 24)

        self.board_size = board_size
        self.cell_size = BOARD_AREA_SIZE // board_size
        self.mark_pad = max(4, self.cell_size // 5)

        # Hover state
        self.hover_pos: Optional[tuple] = None

        # Buttons
        self.button_width = 120
        self.button_height = 38
        self.buttons = {}

        # Overlay state
        self.show_help_overlay = False

        # Error message state
        self.error_message = ""
        self.error_message_time = 0

    def board_to_screen(self, row: int, col: int) -> tuple:
        """Convert board coordinates to the screen center of that cell."""
        x = BOARD_MARGIN + col * self.cell_size + self.cell_size // 2
        y = BOARD_MARGIN + row * self.cell_size + self.cell_size // 2
        return (x, y)

    def screen_to_board(self, x: int, y: int) -> Optional[tuple]:
        """Convert screen coordinates to board coordinates."""
        col = (x - BOARD_MARGIN) // self.cell_size
        row = (y - BOARD_MARGIN) // self.cell_size
        if x >= BOARD_MARGIN and y >= BOARD_MARGIN and \
                0 <= row < self.board_size and 0 <= col < self.board_size:
            return (row, col)
        return None

    def screen_to_cell(self, x: int, y: int) -> Optional[tuple]:
        """
        Map any point inside the board area to (row, col), unchecked.
        The strip left over when the area does not divide evenly maps past
        the last row or column.
        """
        if not (BOARD_MARGIN <= x < BOARD_MARGIN + BOARD_AREA_SIZE and
                BOARD_MARGIN <= y < BOARD_MARGIN + BOARD_AREA_SIZE):
            return None
        return ((y - BOARD_MARGIN) // self.cell_size, (x - BOARD_MARGIN) // self.cell_size)

    def show_error(self, message: str):
        """Show an error message temporarily."""
        self.error_message = message
        self.error_message_time = time.time()

    def render(self, state: GameState, ai_status: str = "",
               debug_info: Optional[dict] = None, show_debug: bool = False,
               human_turn: bool = True):
        """Render the complete game state."""
        self.screen.fill(COLOR_BG)

        self._render_board(state, human_turn)
        self._render_panel(state, ai_status)

        if show_debug and debug_info:
            self._render_debug_panel(debug_info)

        if self.show_help_overlay:
            self._render_help_overlay()

        # Error message (temporary, fades after 2 seconds)
        if self.error_message and time.time() - self.error_message_time < 2.0:
            elapsed = time.time() - self.error_message_time
            alpha = int(255 * (1 - elapsed / 2.0))

            error_box = pygame.Surface((440, 40), pygame.SRCALPHA)
            error_box.fill((180, 50, 50, min(200, alpha)))
            box_x = BOARD_MARGIN + (BOARD_AREA_SIZE - 440) // 2
            box_y = BOARD_MARGIN + BOARD_AREA_SIZE - 50
            self.screen.blit(error_box, (box_x, box_y))

            error_text = self.font_small.render(self.error_message, True, (255, 255, 255))
            text_x = box_x + (440 - error_text.get_width()) // 2
            self.screen.blit(error_text, (text_x, box_y + 12))

        pygame.display.flip()

    def _render_board(self, state: GameState, human_turn: bool):
        """Render the game board."""
        side = self.cell_size * self.board_size
        board_rect = pygame.Rect(BOARD_MARGIN, BOARD_MARGIN, side, side)
        pygame.draw.rect(self.screen, COLOR_BOARD, board_rect)

        # Grid lines
        for i in range(self.board_size + 1):
            offset = i * self.cell_size
            pygame.draw.line(self.screen, COLOR_LINE,
                             (BOARD_MARGIN + offset, BOARD_MARGIN),
                             (BOARD_MARGIN + offset, BOARD_MARGIN + side), 2)
            pygame.draw.line(self.screen, COLOR_LINE,
                             (BOARD_MARGIN, BOARD_MARGIN + offset),
                             (BOARD_MARGIN + side, BOARD_MARGIN + offset), 2)

        # Last move marker
        if state.last_move and not state.is_game_over:
            row, col = state.last_move
            rect = pygame.Rect(BOARD_MARGIN + col * self.cell_size + 2,
                               BOARD_MARGIN + row * self.cell_size + 2,
                               self.cell_size - 3, self.cell_size - 3)
            pygame.draw.rect(self.screen, COLOR_LAST_MOVE, rect, 3)

        # Marks
        for row, cells in enumerate(state.get_board()):
            for col, cell in enumerate(cells):
                if cell is not EMPTY:
                    self._render_mark(row, col, cell)

        # Winning line highlight
        if state.winning_line:
            points = [self.board_to_screen(r, c) for r, c in state.winning_line]
            pygame.draw.line(self.screen, COLOR_WIN_LINE, points[0], points[-1], 6)

        # Hover indicator
        if self.hover_pos and human_turn and not state.is_game_over:
            row, col = self.hover_pos
            if state.board.is_empty(row, col):
                self._render_mark(row, col, state.current_player, ghost=True)

    def _render_mark(self, row: int, col: int, cell, ghost: bool = False):
        """Render a single X or O."""
        x, y = self.board_to_screen(row, col)
        half = self.cell_size // 2 - self.mark_pad
        width = max(2, self.cell_size // 12)
        color = COLOR_X if cell is X else COLOR_O
        if ghost:
            color = tuple(c // 2 + 110 for c in color)

        if cell is X:
            pygame.draw.line(self.screen, color, (x - half, y - half), (x + half, y + half), width)
            pygame.draw.line(self.screen, color, (x + half, y - half), (x - half, y + half), width)
        elif cell is O:
            pygame.draw.circle(self.screen, color, (x, y), half, width)

    def _render_panel(self, state: GameState, ai_status: str):
        """Render the side panel with game info."""
        panel_rect = pygame.Rect(PANEL_X, BOARD_MARGIN, PANEL_WIDTH, BOARD_AREA_SIZE)
        pygame.draw.rect(self.screen, COLOR_PANEL_BG, panel_rect, border_radius=10)

        y_offset = BOARD_MARGIN + 20

        title = self.font_large.render("TICTACTOE", True, COLOR_TEXT)
        self.screen.blit(title, (PANEL_X + 20, y_offset))
        y_offset += 50

        info_text = f"{state.size}x{state.size}  •  {state.connections} to win"
        info_label = self.font_small.render(info_text, True, (150, 150, 150))
        self.screen.blit(info_label, (PANEL_X + 20, y_offset))
        y_offset += 35

        pygame.draw.line(self.screen, (70, 75, 85),
                         (PANEL_X + 20, y_offset), (PANEL_X + PANEL_WIDTH - 20, y_offset))
        y_offset += 20

        # Turn / result
        if state.is_game_over:
            result = self.font_large.render(STATUS_TEXT[state.status], True, COLOR_WIN_HIGHLIGHT)
            self.screen.blit(result, (PANEL_X + 20, y_offset))
        else:
            turn_color = COLOR_X if state.current_player is X else COLOR_O
            turn = self.font_medium.render(f"Turn: {state.current_player}", True, turn_color)
            self.screen.blit(turn, (PANEL_X + 20, y_offset))
        y_offset += 50

        moves = self.font_small.render(f"Moves: {state.get_move_count()}", True, COLOR_TEXT)
        self.screen.blit(moves, (PANEL_X + 20, y_offset))
        y_offset += 28

        if ai_status:
            ai_label = self.font_small.render(f"AI: {ai_status}", True, (150, 180, 255))
            self.screen.blit(ai_label, (PANEL_X + 20, y_offset))
        y_offset += 40

        self._render_buttons(y_offset)

        hint_y = BOARD_MARGIN + BOARD_AREA_SIZE - 25
        hint = self.font_small.render("Press ? for help", True, (100, 105, 115))
        hint_x = PANEL_X + (PANEL_WIDTH - hint.get_width()) // 2
        self.screen.blit(hint, (hint_x, hint_y))

    def _render_buttons(self, start_y: int):
        """Render the panel buttons."""
        mouse_pos = pygame.mouse.get_pos()
        button_x = PANEL_X + 18

        self.buttons = {
            'reset': pygame.Rect(button_x, start_y, self.button_width, self.button_height),
            'undo': pygame.Rect(button_x + 128, start_y, self.button_width, self.button_height),
            'quit': pygame.Rect(button_x, start_y + 46, self.button_width, self.button_height),
        }
        button_labels = {
            'reset': 'Play Again',
            'undo': 'Undo',
            'quit': 'Quit',
        }

        for name, rect in self.buttons.items():
            is_hover = rect.collidepoint(mouse_pos)
            color = (75, 85, 100) if is_hover else (55, 62, 75)
            border_color = COLOR_HIGHLIGHT if is_hover else (80, 85, 95)

            pygame.draw.rect(self.screen, color, rect, border_radius=8)
            pygame.draw.rect(self.screen, border_color, rect, 1, border_radius=8)

            label = self.font_small.render(button_labels[name], True, COLOR_TEXT)
            self.screen.blit(label, (rect.centerx - label.get_width() // 2,
                                     rect.centery - label.get_height() // 2))

    def _render_debug_panel(self, debug_info: dict):
        """Render the last AI decision."""
        panel_width, panel_height = 260, 130
        panel_x = BOARD_MARGIN + 10
        panel_y = BOARD_MARGIN + 10

        s = pygame.Surface((panel_width, panel_height), pygame.SRCALPHA)
        s.fill((30, 30, 40, 230))
        self.screen.blit(s, (panel_x, panel_y))
        pygame.draw.rect(self.screen, COLOR_TEXT, (panel_x, panel_y, panel_width, panel_height), 1)

        y = panel_y + 12
        title = self.font_medium.render("AI Decision", True, COLOR_HIGHLIGHT)
        self.screen.blit(title, (panel_x + 15, y))
        y += 30

        move = debug_info.get('best_move')
        lines = [
            f"Strategy: {debug_info.get('strategy', '-')}",
            f"Move: {tuple(move) if move else '-'}",
            f"Time: {debug_info.get('thinking_time', 0) * 1000:.2f}ms",
        ]
        for line in lines:
            text = self.font_small.render(line, True, COLOR_TEXT)
            self.screen.blit(text, (panel_x + 15, y))
            y += 22

    def _render_help_overlay(self):
        """Render keyboard shortcuts help overlay."""
        overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 200))
        self.screen.blit(overlay, (0, 0))

        box_width, box_height = 380, 260
        box_x = (WINDOW_WIDTH - box_width) // 2
        box_y = (WINDOW_HEIGHT - box_height) // 2
        pygame.draw.rect(self.screen, (45, 50, 60),
                         (box_x, box_y, box_width, box_height), border_radius=12)
        pygame.draw.rect(self.screen, COLOR_HIGHLIGHT,
                         (box_x, box_y, box_width, box_height), 2, border_radius=12)

        y = box_y + 20
        title = self.font_large.render("SHORTCUTS", True, COLOR_HIGHLIGHT)
        self.screen.blit(title, (box_x + (box_width - title.get_width()) // 2, y))
        y += 55

        shortcuts = [
            ("N", "Play Again"),
            ("U / Z", "Undo Move"),
            ("D", "AI Debug Info"),
            ("ESC", "Quit"),
        ]
        for key, desc in shortcuts:
            self.screen.blit(self.font_small.render(key, True, COLOR_HIGHLIGHT), (box_x + 50, y))
            self.screen.blit(self.font_small.render(desc, True, COLOR_TEXT), (box_x + 140, y))
            y += 28

        close_hint = self.font_small.render("Press ? or ESC to close", True, (120, 120, 120))
        self.screen.blit(close_hint, (box_x + (box_width - close_hint.get_width()) // 2,
                                      box_y + box_height - 35))

    def toggle_help_overlay(self):
        """Toggle help overlay visibility."""
        self.show_help_overlay = not self.show_help_overlay

    def close_overlays(self):
        self.show_help_overlay = False

    def get_button_at(self, pos: tuple) -> Optional[str]:
        """Get the button name at a screen position."""
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def update_hover(self, pos: tuple):
        """Update hover position for move preview."""
        self.hover_pos = self.screen_to_board(pos[0], pos[1])

    def tick(self, fps: int = 60):
        """Control frame rate."""
        self.clock.tick(fps)

    def quit(self):
        """Clean up pygame."""
        pygame.quit()
