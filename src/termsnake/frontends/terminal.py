# frontends/terminal.py
"""curses key source and renderer."""
from __future__ import annotations

import curses
import logging
from typing import List, Optional

from ..config import BODY_GLYPH, EMPTY_GLYPH, FOOD_GLYPH, HEAD_GLYPH
from ..errors import FrontendError
from ..game import GameSnapshot, Outcome, Position
from ..loop import Key

logger = logging.getLogger(__name__)

ESCAPE = 27

KEYMAP = {
    ord("w"): Key.UP, ord("W"): Key.UP, curses.KEY_UP: Key.UP,
    ord("s"): Key.DOWN, ord("S"): Key.DOWN, curses.KEY_DOWN: Key.DOWN,
    ord("a"): Key.LEFT, ord("A"): Key.LEFT, curses.KEY_LEFT: Key.LEFT,
    ord("d"): Key.RIGHT, ord("D"): Key.RIGHT, curses.KEY_RIGHT: Key.RIGHT,
    ord("r"): Key.RESTART, ord("R"): Key.RESTART,
    ord("\n"): Key.CONFIRM, ord("\r"): Key.CONFIRM, curses.KEY_ENTER: Key.CONFIRM,
    ord(" "): Key.CONFIRM,
    ESCAPE: Key.QUIT,
}

OUTCOME_TEXT = {
    Outcome.WALL: "You hit the wall",
    Outcome.SELF: "You bit yourself",
    Outcome.BOARD_FULL: "Board cleared, you win!",
}

# color pair ids
HEAD_PAIR, BODY_PAIR, FOOD_PAIR, DIM_PAIR = 1, 2, 3, 4


def translate_key(code: int) -> Optional[Key]:
    return KEYMAP.get(code)


# ---------- Frame composition (pure, no curses calls) ----------
def board_lines(snapshot: GameSnapshot) -> List[str]:
    """Grid rows with a box border; every cell is two columns wide."""
    body = set(snapshot.snake[1:])
    head = snapshot.snake[0] if snapshot.snake else None
    title = f" Snake - Score: {snapshot.score} "
    inner = snapshot.width * 2
    top = "+" + title.center(inner, "-")[:inner] + "+"

    lines = [top]
    for y in range(snapshot.height):
        row = []
        for x in range(snapshot.width):
            pos = Position(x, y)
            if pos == head:
                row.append(HEAD_GLYPH)
            elif pos in body:
                row.append(BODY_GLYPH)
            elif pos == snapshot.food:
                row.append(FOOD_GLYPH)
            else:
                row.append(EMPTY_GLYPH)
        lines.append("|" + "".join(row) + "|")
    lines.append("+" + "-" * inner + "+")
    lines.append("WASD/arrows: move | ESC: quit".center(inner + 2))
    return lines


def game_over_lines(snapshot: GameSnapshot) -> List[str]:
    reason = OUTCOME_TEXT.get(snapshot.outcome, "") if snapshot.outcome else ""
    body = [
        "GAME OVER",
        reason,
        "",
        f"Your score: {snapshot.score}",
        f"Best this session: {snapshot.best_score}",
        "",
        "R: restart | Enter: done | ESC: quit",
    ]
    width = max(len(s) for s in body) + 4
    lines = ["+" + " Game Over ".center(width, "-") + "+"]
    lines += ["|" + s.center(width) + "|" for s in body]
    lines.append("+" + "-" * width + "+")
    return lines


def compose_frame(snapshot: GameSnapshot) -> List[str]:
    return game_over_lines(snapshot) if snapshot.is_over else board_lines(snapshot)


# ---------- curses adapters ----------
class CursesKeySource:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.stdscr.keypad(True)

    def poll_key(self, timeout_ms: int) -> Optional[Key]:
        try:
            self.stdscr.timeout(max(0, timeout_ms))
            code = self.stdscr.getch()
        except curses.error as exc:
            raise FrontendError(f"reading from the terminal failed: {exc}") from exc
        if code == -1:
            return None
        key = translate_key(code)
        if key is None:
            logger.debug("ignored key code %d", code)
        return key


class CursesRenderer:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            # Some terminals cannot hide the cursor; drawing still works
            logger.debug("terminal does not support hiding the cursor")
        self.colors = curses.has_colors()
        if self.colors:
            try:
                curses.start_color()
                curses.use_default_colors()
                curses.init_pair(HEAD_PAIR, curses.COLOR_GREEN, -1)
                curses.init_pair(BODY_PAIR, curses.COLOR_GREEN, -1)
                curses.init_pair(FOOD_PAIR, curses.COLOR_RED, -1)
                curses.init_pair(DIM_PAIR, curses.COLOR_WHITE, -1)
            except curses.error:
                logger.debug("terminal color setup failed, drawing without colors")
                self.colors = False

    def _attr(self, ch: str) -> int:
        if not self.colors:
            return curses.A_NORMAL
        if ch == HEAD_GLYPH[0]:
            return curses.color_pair(HEAD_PAIR) | curses.A_BOLD
        if ch == BODY_GLYPH[0]:
            return curses.color_pair(BODY_PAIR)
        if ch == FOOD_GLYPH[0]:
            return curses.color_pair(FOOD_PAIR) | curses.A_BOLD
        return curses.color_pair(DIM_PAIR)

    def render(self, snapshot: GameSnapshot) -> None:
        lines = compose_frame(snapshot)
        try:
            self.stdscr.erase()
            rows, cols = self.stdscr.getmaxyx()
            # Last column of the last row cannot be written without an error
            usable_cols = cols - 1
            top = max(0, (rows - len(lines)) // 2)
            for i, line in enumerate(lines[: max(0, rows - top)]):
                left = max(0, (usable_cols - len(line)) // 2)
                text = line[: max(0, usable_cols - left)]
                grid_row = not snapshot.is_over and 1 <= i <= snapshot.height
                self._draw_line(top + i, left, text, grid_row)
            self.stdscr.refresh()
        except curses.error as exc:
            raise FrontendError(f"drawing to the terminal failed: {exc}") from exc

    def _draw_line(self, y: int, x: int, text: str, grid_row: bool) -> None:
        if not grid_row or not self.colors:
            self.stdscr.addstr(y, x, text)
            return
        for offset, ch in enumerate(text):
            self.stdscr.addstr(y, x + offset, ch, self._attr(ch) if ch.strip() else curses.A_NORMAL)


def setup_terminal(stdscr) -> None:
    """Terminal tweaks that must happen inside curses.wrapper."""
    try:
        curses.set_escdelay(25)  # Escape must feel instant
    except (AttributeError, curses.error):
        logger.debug("escape delay left at terminal default")
    stdscr.nodelay(False)
