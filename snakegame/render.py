from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Tuple

import pygame

from snakegame import board as cells
from snakegame.controller import Notification, Phase, visible_buttons
from snakegame.game import GRID_SIZE, GameState

TICK_EVENT = pygame.USEREVENT + 1

PANEL_WIDTH = 220
TOAST_MS = 2500
MAX_TOASTS = 3

BG_COLOR = (20, 20, 20)
GRID_COLOR = (30, 30, 30)
PANEL_COLOR = (28, 28, 36)
TEXT_COLOR = (230, 234, 238)
MUTED_COLOR = (150, 150, 160)
ACCENT_COLOR = (240, 190, 60)
DANGER_COLOR = (200, 50, 50)
BUTTON_COLOR = (60, 60, 80)

CELL_COLORS = {
    cells.HEAD: (0, 200, 0),
    cells.BODY: (0, 150, 0),
    cells.FOOD: (200, 50, 50),
}


class PygameTicker:
    """Repeating tick timer backed by a pygame user event."""

    def __init__(self, event_type: int = TICK_EVENT) -> None:
        self.event_type = event_type
        self.active = False

    def start(self, period_ms: int) -> None:
        pygame.time.set_timer(self.event_type, period_ms)
        self.active = True

    def stop(self) -> None:
        pygame.time.set_timer(self.event_type, 0)
        # Drop ticks already queued so none reaches a restarted game.
        pygame.event.clear(self.event_type)
        self.active = False


@dataclass
class Toast:
    notification: Notification
    expires_at: int


class ToastQueue:
    """Notification sink that keeps the latest few messages on screen."""

    def __init__(self, duration_ms: int = TOAST_MS, limit: int = MAX_TOASTS) -> None:
        self.duration_ms = duration_ms
        self.toasts: Deque[Toast] = deque(maxlen=limit)

    def __call__(self, notification: Notification) -> None:
        self.toasts.append(Toast(notification, pygame.time.get_ticks() + self.duration_ms))

    def visible(self) -> List[Notification]:
        now = pygame.time.get_ticks()
        while self.toasts and self.toasts[0].expires_at <= now:
            self.toasts.popleft()
        return [toast.notification for toast in self.toasts]


BUTTON_LABELS = {
    "start": "Start Game",
    "pause": "Pause (Space)",
    "play_again": "Play Again",
    "reset": "Reset",
}


class Renderer:
    def __init__(self, cell_size: int = 24) -> None:
        self.cell_size = cell_size
        self.board_px = GRID_SIZE * cell_size

        pygame.init()
        self._window = pygame.display.set_mode((self.board_px + PANEL_WIDTH, self.board_px))
        pygame.display.set_caption("Snake Game")
        self._font = pygame.font.SysFont(None, 26)
        self._big_font = pygame.font.SysFont(None, 40)
        self._buttons: Dict[str, pygame.Rect] = {}

    def button_at(self, pos: Tuple[int, int]) -> Optional[str]:
        for name, rect in self._buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def draw(self, state: GameState, phase: Phase, board, toasts: List[Notification]) -> None:
        self._window.fill(BG_COLOR)
        self._draw_board(board)
        self._draw_panel(state, phase)
        if state.over:
            self._draw_game_over(state)
        self._draw_toasts(toasts)
        pygame.display.flip()

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)

    def _draw_board(self, board) -> None:
        for y in range(GRID_SIZE):
            for x in range(GRID_SIZE):
                rect = self._cell_rect(x, y)
                kind = int(board[y, x])
                if kind != cells.EMPTY:
                    pygame.draw.rect(self._window, CELL_COLORS[kind], rect)
                pygame.draw.rect(self._window, GRID_COLOR, rect, 1)

    def _text(self, text: str, pos: Tuple[int, int], color=TEXT_COLOR, font=None) -> None:
        surface = (font or self._font).render(text, True, color)
        self._window.blit(surface, pos)

    def _draw_panel(self, state: GameState, phase: Phase) -> None:
        left = self.board_px
        pygame.draw.rect(self._window, PANEL_COLOR, pygame.Rect(left, 0, PANEL_WIDTH, self.board_px))
        x = left + 16
        self._text("Snake Game", (x, 16), ACCENT_COLOR, self._big_font)
        self._text(f"Score: {state.score}", (x, 64))
        self._text(f"High Score: {state.high_score}", (x, 92), ACCENT_COLOR)
        self._text(phase.value.title(), (x, 120), MUTED_COLOR)

        self._buttons = {}
        y = 160
        for name in visible_buttons(state):
            rect = pygame.Rect(x, y, PANEL_WIDTH - 32, 34)
            pygame.draw.rect(self._window, BUTTON_COLOR, rect, border_radius=6)
            label = self._font.render(BUTTON_LABELS[name], True, TEXT_COLOR)
            self._window.blit(label, label.get_rect(center=rect.center))
            self._buttons[name] = rect
            y += 44

        self._text("Arrows = Move", (x, y + 10), MUTED_COLOR)
        self._text("Space = Pause", (x, y + 34), MUTED_COLOR)
        self._text("Enter = Start, R = Reset", (x, y + 58), MUTED_COLOR)

    def _draw_game_over(self, state: GameState) -> None:
        center = (self.board_px // 2, self.board_px // 2)
        title = self._big_font.render("Game Over!", True, DANGER_COLOR)
        self._window.blit(title, title.get_rect(center=(center[0], center[1] - 24)))
        final = self._font.render(f"Final Score: {state.score}", True, TEXT_COLOR)
        self._window.blit(final, final.get_rect(center=(center[0], center[1] + 10)))
        if state.score == state.high_score and state.score > 0:
            record = self._font.render("New High Score!", True, ACCENT_COLOR)
            self._window.blit(record, record.get_rect(center=(center[0], center[1] + 36)))

    def _draw_toasts(self, toasts: List[Notification]) -> None:
        y = self.board_px - 8
        for notification in reversed(toasts):
            color = DANGER_COLOR if notification.severity == "destructive" else TEXT_COLOR
            line = self._font.render(f"{notification.title} {notification.message}", True, color)
            y -= line.get_height() + 6
            self._window.blit(line, (8, y))

    def close(self) -> None:
        pygame.quit()
