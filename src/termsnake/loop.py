# loop.py
from __future__ import annotations

from enum import Enum
import logging
import time
from typing import Callable, Optional, Protocol

from .config import POLL_MS
from .game import Direction, GameSnapshot, GameState

logger = logging.getLogger(__name__)


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    RESTART = "restart"
    CONFIRM = "confirm"


KEY_TO_DIRECTION = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}


# ---------- Collaborator contracts ----------
class KeySource(Protocol):
    def poll_key(self, timeout_ms: int) -> Optional[Key]:
        """Wait at most `timeout_ms` for one recognized key; None if there was none."""
        ...


class Renderer(Protocol):
    def render(self, snapshot: GameSnapshot) -> None:
        """Redraw the whole frame from `snapshot`."""
        ...


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


# ---------- Driver ----------
class GameLoop:
    """
    Drives one game session on a single thread.

    Input is polled and the frame redrawn every iteration, while the state
    only changes on tick boundaries. Errors raised by the key source or
    renderer are not caught here.
    """

    def __init__(
        self,
        state: GameState,
        keys: KeySource,
        renderer: Renderer,
        clock: Callable[[], float] = _monotonic_ms,
        poll_ms: int = POLL_MS,
    ):
        self.state = state
        self.keys = keys
        self.renderer = renderer
        self.clock = clock
        self.poll_ms = poll_ms
        self.last_tick = clock()
        self.running = False

    def poll_timeout(self, now: float) -> int:
        """Time to wait for input: short, and never past the next tick."""
        remaining = self.state.tick_interval_ms - (now - self.last_tick)
        return int(max(0, min(self.poll_ms, remaining)))

    def handle_key(self, key: Optional[Key]) -> None:
        if key is None:
            return
        if key is Key.QUIT:
            logger.info("quit requested (score %d)", self.state.score)
            self.running = False
            return

        if self.state.is_over:
            if key is Key.RESTART:
                self.state.restart()
                self.last_tick = self.clock()
            elif key is Key.CONFIRM:
                logger.info("game over acknowledged")
                self.running = False
            return

        direction = KEY_TO_DIRECTION.get(key)
        if direction is not None:
            self.state.queue_direction(direction)

    def iterate(self) -> None:
        """One pass: poll input, tick if due, draw."""
        key = self.keys.poll_key(self.poll_timeout(self.clock()))
        self.handle_key(key)
        if not self.running:
            return

        now = self.clock()
        if now - self.last_tick >= self.state.tick_interval_ms:
            self.state.advance_tick()
            self.last_tick = now

        self.renderer.render(self.state.snapshot())

    def run(self) -> int:
        logger.info("session started: %s", self.state.config)
        self.running = True
        self.last_tick = self.clock()
        self.renderer.render(self.state.snapshot())
        while self.running:
            self.iterate()
        return 0
