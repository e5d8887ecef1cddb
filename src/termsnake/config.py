from dataclasses import dataclass, fields
from typing import Optional

from .errors import ConfigError

# ----- Window (pygame frontend) -----
CELL_SIZE = 20
HUD_HEIGHT = 28
FPS_CAP = 60

# ----- Colors -----
BG    = (20, 20, 24)
GREEN = (80, 200, 80)
LIGHT_GREEN = (140, 230, 140)
RED   = (200, 70, 70)
TEXT  = (220, 220, 230)
DIM   = (150, 150, 160)

# ----- Terminal glyphs (2 columns per cell keeps the aspect ratio square) -----
HEAD_GLYPH = "@ "
BODY_GLYPH = "o "
FOOD_GLYPH = "* "
EMPTY_GLYPH = "  "

# ----- Loop -----
POLL_MS = 16  # upper bound on a single key poll, keeps redraws responsive


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass(frozen=True)
class GameConfig:
    grid_width: int = 20
    grid_height: int = 20
    initial_snake_length: int = 3
    base_tick_ms: int = 200
    min_tick_ms: int = 50
    speed_increase_per_food: int = 5
    score_per_food: int = 1
    seed: Optional[int] = None  # None -> fresh entropy every session

    @property
    def capacity(self) -> int:
        return self.grid_width * self.grid_height

    def validate(self) -> "GameConfig":
        """Raise ConfigError unless the settings describe a playable board."""
        for f in fields(self):
            if f.name == "seed":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{f.name} must be a positive integer, got {value!r}")
        if self.min_tick_ms > self.base_tick_ms:
            raise ConfigError(
                f"min_tick_ms ({self.min_tick_ms}) cannot exceed base_tick_ms ({self.base_tick_ms})"
            )
        if self.initial_snake_length >= self.capacity:
            raise ConfigError(
                f"a {self.grid_width}x{self.grid_height} grid cannot hold a snake of "
                f"length {self.initial_snake_length} plus food"
            )
        return self


DEFAULT_CONFIG = GameConfig()
