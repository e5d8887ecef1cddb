from collections import deque

import numpy as np
import pytest

from termsnake.config import GameConfig
from termsnake.game import Direction, GameState, Position


def make_state(body, direction=Direction.RIGHT, food=(4, 4), width=5, height=5, seed=0, **overrides):
    """Build a GameState with an exact layout instead of the centered default."""
    config = GameConfig(grid_width=width, grid_height=height, seed=seed, **overrides)
    return GameState(
        config=config,
        snake=deque(Position(*p) for p in body),
        direction=direction,
        food=Position(*food) if food is not None else None,
        rng=np.random.default_rng(seed),
    )


@pytest.fixture
def state_factory():
    return make_state
