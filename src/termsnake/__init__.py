"""A real-time snake game for the terminal."""

from .config import GameConfig
from .errors import ConfigError, FrontendError, TermsnakeError
from .game import Direction, GameSnapshot, GameState, Outcome, Phase, Position, new_game_state
from .loop import GameLoop, Key

__version__ = "0.2.0"

__all__ = [
    "GameConfig",
    "ConfigError", "FrontendError", "TermsnakeError",
    "Direction", "GameSnapshot", "GameState", "Outcome", "Phase", "Position", "new_game_state",
    "GameLoop", "Key",
]
