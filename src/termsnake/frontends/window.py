# frontends/window.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

import pygame  # type: ignore

from ..config import BG, CELL_SIZE, DIM, GREEN, HUD_HEIGHT, LIGHT_GREEN, RED, TEXT
from ..errors import FrontendError
from ..game import GameSnapshot, Outcome
from ..loop import Key

logger = logging.getLogger(__name__)

KEYMAP = {
    pygame.K_w: Key.UP, pygame.K_UP: Key.UP,
    pygame.K_s: Key.DOWN, pygame.K_DOWN: Key.DOWN,
    pygame.K_a: Key.LEFT, pygame.K_LEFT: Key.LEFT,
    pygame.K_d: Key.RIGHT, pygame.K_RIGHT: Key.RIGHT,
    pygame.K_r: Key.RESTART,
    pygame.K_RETURN: Key.CONFIRM, pygame.K_KP_ENTER: Key.CONFIRM, pygame.K_SPACE: Key.CONFIRM,
    pygame.K_ESCAPE: Key.QUIT,
}

OUTCOME_TEXT = {
    Outcome.WALL: "You hit the wall",
    Outcome.SELF: "You bit yourself",
    Outcome.BOARD_FULL: "Board cleared, you win!",
}


def translate_event(event: pygame.event.Event) -> Optional[Key]:
    """Map a pygame event to a Key; window close counts as quit."""
    if event.type == pygame.QUIT:
        return Key.QUIT
    if event.type == pygame.KEYDOWN:
        return KEYMAP.get(event.key)
    return None


def window_size(width: int, height: int) -> Tuple[int, int]:
    return width * CELL_SIZE, height * CELL_SIZE + HUD_HEIGHT


# ---------- Input ----------
class PygameKeySource:
    def poll_key(self, timeout_ms: int) -> Optional[Key]:
        try:
            # wait(0) would block forever
            event = pygame.event.wait(timeout_ms) if timeout_ms > 0 else pygame.event.poll()
            while event.type != pygame.NOEVENT:
                key = translate_event(event)
                if key is not None:
                    return key
                event = pygame.event.poll()
        except pygame.error as exc:
            raise FrontendError(f"reading window events failed: {exc}") from exc
        return None


# ---------- Draw ----------
def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(gx * CELL_SIZE, gy * CELL_SIZE + HUD_HEIGHT, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)


class PygameRenderer:
    def __init__(self, width: int, height: int):
        self.size = window_size(width, height)
        try:
            self.screen = pygame.display.set_mode(self.size)
            pygame.display.set_caption("Snake")
            self.font = pygame.font.SysFont(None, 24)
        except pygame.error as exc:
            raise FrontendError(f"opening the game window failed: {exc}") from exc

    def render(self, snapshot: GameSnapshot) -> None:
        try:
            self.draw_game(snapshot)
            if snapshot.is_over:
                self.draw_game_over(snapshot)
            pygame.display.flip()
        except pygame.error as exc:
            raise FrontendError(f"drawing the game window failed: {exc}") from exc

    def draw_game(self, snapshot: GameSnapshot) -> None:
        self.screen.fill(BG)
        # food
        if snapshot.food is not None:
            draw_cell(self.screen, snapshot.food.x, snapshot.food.y, RED)
        # snake
        for i, (x, y) in enumerate(snapshot.snake):
            draw_cell(self.screen, x, y, GREEN if i == 0 else LIGHT_GREEN)
        # score
        txt = self.font.render(f"Score: {snapshot.score}", True, TEXT)
        self.screen.blit(txt, (8, 6))
        hint = self.font.render("WASD: move  ESC: quit", True, DIM)
        self.screen.blit(hint, hint.get_rect(topright=(self.size[0] - 8, 6)))

    def draw_game_over(self, snapshot: GameSnapshot) -> None:
        width, height = self.size
        # Dim with translucent overlay
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))  # RGBA
        self.screen.blit(overlay, (0, 0))

        lines = [
            ("GAME OVER", (240, 240, 250)),
            (OUTCOME_TEXT.get(snapshot.outcome, ""), TEXT),
            (f"Score: {snapshot.score}", TEXT),
            (f"Best this session: {snapshot.best_score}", DIM),
            ("R: restart  Enter: done  ESC: quit", DIM),
        ]
        top = height // 2 - 16 * len(lines)
        for i, (text, color) in enumerate(lines):
            surf = self.font.render(text, True, color)
            self.screen.blit(surf, surf.get_rect(center=(width // 2, top + i * 32)))
