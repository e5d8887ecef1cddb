# game.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Deque, List, NamedTuple, Optional, Tuple

import numpy as np  # type: ignore

from .config import GameConfig

logger = logging.getLogger(__name__)


# ---------- Value types ----------
class Position(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    # (dx, dy); y grows downward
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction":
        return cls((dx, dy))


class Phase(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Outcome(Enum):
    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"  # every cell is snake: the player won


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game, handed to renderers once per frame."""
    width: int
    height: int
    snake: Tuple[Position, ...]  # head first
    food: Optional[Position]
    score: int
    best_score: int
    phase: Phase
    outcome: Optional[Outcome]
    tick_interval_ms: int

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


# ---------- Helpers ----------
def tick_interval_ms(config: GameConfig, foods_eaten: int) -> int:
    """Milliseconds between ticks after `foods_eaten` foods; never below min_tick_ms."""
    return max(config.min_tick_ms, config.base_tick_ms - config.speed_increase_per_food * foods_eaten)


def in_bounds(pos: Position, width: int, height: int) -> bool:
    return 0 <= pos.x < width and 0 <= pos.y < height


def step(pos: Position, direction: Direction) -> Position:
    return Position(pos.x + direction.dx, pos.y + direction.dy)


def initial_layout(width: int, height: int, length: int) -> Tuple[List[Position], Direction]:
    """
    Lay out a starting snake (head first) and the direction it travels in.

    The head sits on the grid center with the body extending left. A snake
    that does not fit left of center is shifted right. One that would start
    with its head against the right wall is folded row by row from the top,
    heading toward the next cell of the fold so the first move is free.
    """
    cy = height // 2
    head_x = max(width // 2, length - 1)
    if head_x < width - 1:
        return [Position(head_x - i, cy) for i in range(length)], Direction.RIGHT

    # Serpentine: tail at the top-left corner, rows alternate direction
    path: List[Position] = []
    for y in range(height):
        xs = range(width) if y % 2 == 0 else range(width - 1, -1, -1)
        path.extend(Position(x, y) for x in xs)
    # path[length] exists while the grid has room for food
    head, ahead = path[length - 1], path[length]
    direction = Direction.from_delta(ahead.x - head.x, ahead.y - head.y)
    return path[:length][::-1], direction


# ---------- State ----------
@dataclass
class GameState:
    config: GameConfig
    snake: Deque[Position]             # head at index 0
    direction: Direction
    food: Optional[Position]
    rng: np.random.Generator
    pending: Optional[Direction] = None  # single slot, overwritten by newer input
    score: int = 0
    foods_eaten: int = 0
    best_score: int = 0                # this session only, never persisted
    phase: Phase = Phase.PLAYING
    outcome: Optional[Outcome] = None
    ticks: int = field(default=0, compare=False)

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.config, self.foods_eaten)

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    # ---------- Input ----------
    def queue_direction(self, direction: Direction) -> None:
        """Remember `direction` for the next tick unless it reverses the committed one."""
        if self.is_over:
            return
        if direction is self.direction.opposite:
            return
        self.pending = direction

    # ---------- Update ----------
    def advance_tick(self) -> None:
        """Advance the game by one tick. Does nothing once the game is over."""
        if self.is_over:
            return
        self.ticks += 1

        # Commit direction once per tick
        if self.pending is not None:
            self.direction = self.pending
            self.pending = None

        new_head = step(self.head, self.direction)

        # Wall collision
        if not in_bounds(new_head, self.config.grid_width, self.config.grid_height):
            self._end(Outcome.WALL)
            return

        # Grow
        if new_head == self.food:
            self.snake.appendleft(new_head)
            self.score += self.config.score_per_food
            self.foods_eaten += 1
            logger.debug(
                "food eaten at %s: score=%d length=%d interval=%dms",
                new_head, self.score, len(self.snake), self.tick_interval_ms,
            )
            if self.spawn_food() is None:
                self._end(Outcome.BOARD_FULL)
            return

        # Self collision; the tail leaves its cell this same tick
        body_after_move = list(self.snake)[:-1]
        if new_head in body_after_move:
            self._end(Outcome.SELF)
            return

        self.snake.appendleft(new_head)
        self.snake.pop()

    def spawn_food(self) -> Optional[Position]:
        """Place food on a uniformly random free cell; None when the board is full."""
        width, height = self.config.grid_width, self.config.grid_height
        occupied = np.zeros((height, width), dtype=bool)
        xs = [p.x for p in self.snake]
        ys = [p.y for p in self.snake]
        occupied[ys, xs] = True

        free = np.flatnonzero(~occupied)
        if free.size == 0:
            self.food = None
            return None
        idx = int(self.rng.choice(free))
        self.food = Position(idx % width, idx // width)
        return self.food

    def restart(self) -> None:
        """Start a new game in place, keeping the session's best score."""
        body, direction = initial_layout(
            self.config.grid_width, self.config.grid_height, self.config.initial_snake_length
        )
        self.snake = deque(body)
        self.direction = direction
        self.pending = None
        self.score = 0
        self.foods_eaten = 0
        self.phase = Phase.PLAYING
        self.outcome = None
        self.ticks = 0
        self.spawn_food()
        logger.info("game restarted (best score %d)", self.best_score)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            width=self.config.grid_width,
            height=self.config.grid_height,
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            best_score=self.best_score,
            phase=self.phase,
            outcome=self.outcome,
            tick_interval_ms=self.tick_interval_ms,
        )

    def _end(self, outcome: Outcome) -> None:
        self.phase = Phase.GAME_OVER
        self.outcome = outcome
        self.best_score = max(self.best_score, self.score)
        logger.info(
            "game over (%s) after %d ticks: score=%d length=%d",
            outcome.value, self.ticks, self.score, len(self.snake),
        )


def new_game_state(config: GameConfig, seed: Optional[int] = None) -> GameState:
    """Build a fresh game; raises ConfigError if the snake cannot fit."""
    config.validate()
    rng = np.random.default_rng(config.seed if seed is None else seed)
    body, direction = initial_layout(config.grid_width, config.grid_height, config.initial_snake_length)
    state = GameState(
        config=config,
        snake=deque(body),
        direction=direction,
        food=None,
        rng=rng,
    )
    state.spawn_food()
    return state
