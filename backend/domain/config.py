"""
Static game configuration.

Defaults reproduce the arcade cabinet: a 480px board of 20px tiles (24x24),
160ms initial step, 10ms faster per level.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple

# Option names a UI shell may pass in its configuration object
CAMEL_CASE_OPTIONS = {
    "gridSize": "grid_size",
    "canvasSize": "canvas_size",
    "initialSpeed": "initial_speed",
    "speedIncrease": "speed_increase",
    "pointsPerFood": "points_per_food",
    "pointsPerLevel": "points_per_level",
    "powerupSpawnFreq": "powerup_spawn_freq",
    "powerupDuration": "powerup_duration",
}

ENV_PREFIX = "SNAKE_"


@dataclass(frozen=True)
class GameConfig:
    """All timings are milliseconds."""

    grid_size: int = 20
    canvas_size: int = 480
    initial_speed: int = 160
    speed_increase: int = 10
    min_speed: int = 50
    points_per_food: int = 10
    points_per_level: int = 100
    powerup_spawn_freq: int = 12000
    powerup_spawn_jitter: int = 4000
    powerup_duration: int = 8000
    powerup_lifetime: int = 35000
    powerup_sweep_interval: int = 5000
    active_power_poll_interval: int = 500
    bonus_points: int = 50
    speed_boost: int = 60
    speed_floor: int = 45
    slow_penalty: int = 80
    food_attempts: int = 1000
    powerup_attempts: int = 200
    player_start: Tuple[int, int] = (10, 10)
    ai_start: Tuple[int, int] = (15, 15)

    def __post_init__(self):
        if self.grid_size <= 0 or self.canvas_size < self.grid_size:
            raise ValueError(
                f"canvas_size ({self.canvas_size}) must be at least one tile of grid_size ({self.grid_size})"
            )
        if self.points_per_level <= 0:
            raise ValueError("points_per_level must be positive")
        if self.min_speed <= 0 or self.speed_floor <= 0:
            raise ValueError("min_speed and speed_floor must be positive")
        for name in ("player_start", "ai_start"):
            x, y = getattr(self, name)
            if not (0 <= x < self.tile_count and 0 <= y < self.tile_count):
                raise ValueError(f"{name} {(x, y)} lies outside a {self.tile_count}x{self.tile_count} grid")

    @property
    def tile_count(self) -> int:
        return self.canvas_size // self.grid_size

    def baseline_interval(self, level: int) -> int:
        """Tick interval derived purely from the level."""
        return max(self.min_speed, self.initial_speed - level * self.speed_increase)

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """
        Build a config from a UI-style options mapping.

        Accepts both the camelCase option names (gridSize, canvasSize, ...)
        and the snake_case field names. Unknown keys are rejected.
        """
        if not options:
            return cls()

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in options.items():
            name = CAMEL_CASE_OPTIONS.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown configuration option: {key}")
            values[name] = tuple(value) if name in ("player_start", "ai_start") else value
        return cls(**values)

    @classmethod
    def from_env(cls, base: Optional["GameConfig"] = None) -> "GameConfig":
        """Override integer fields from SNAKE_<FIELD> environment variables."""
        base = base or cls()
        overrides: Dict[str, int] = {}
        for f in fields(cls):
            if f.name in ("player_start", "ai_start"):
                continue
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[f.name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}") from None
        return replace(base, **overrides) if overrides else base

    def to_dict(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["tile_count"] = self.tile_count
        return out
