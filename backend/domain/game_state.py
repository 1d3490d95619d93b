"""
GameSnapshot entity - a read-only view of a session at a point in time.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Optional, Any

from .constants import Outcome
from .powerup import ActivePower, PowerUp

POWERUP_MARKERS = {"speed": "S", "slow": "W", "bonus": "B"}


@dataclass(frozen=True)
class GameSnapshot:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick_number: how many ticks have advanced the session
        mode: 'human', 'ai' or 'vs'
        snake: player-slot segments, head first
        ai_snake: AI opponent segments (empty outside vs-mode)
        food: (x, y) of the single food item
        powerups: power-ups currently on the board
        score, level, high_score: player-slot scoring
        tick_interval: current ms between ticks
        active_power: the timed effect in force, if any
        tile_count: board edge length in tiles
    """

    tick_number: int
    mode: str
    snake: List[Tuple[int, int]]
    ai_snake: List[Tuple[int, int]]
    food: Tuple[int, int]
    powerups: List[PowerUp]
    score: int
    level: int
    high_score: int
    tick_interval: int
    tile_count: int
    points_per_level: int
    running: bool = False
    paused: bool = False
    game_over: bool = False
    outcome: Optional[Outcome] = None
    active_power: Optional[ActivePower] = None

    @property
    def level_progress(self) -> Tuple[int, int]:
        """Points earned toward the next level, out of points_per_level."""
        return self.score % self.points_per_level, self.points_per_level

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        S/W/B = speed/slow/bonus power-up
        P, p = player head, player body
        A, a = AI head, AI body
        Row 0 is printed first, matching screen coordinates.
        """
        board = [['.' for _ in range(self.tile_count)] for _ in range(self.tile_count)]

        def put(pos, marker):
            x, y = pos
            if 0 <= x < self.tile_count and 0 <= y < self.tile_count:
                board[y][x] = marker

        for p in self.powerups:
            put(p.position, POWERUP_MARKERS.get(p.kind, '?'))
        put(self.food, 'F')

        for segments, head_marker in ((self.ai_snake, 'A'), (self.snake, 'P')):
            for idx, pos in enumerate(segments):
                put(pos, head_marker if idx == 0 else head_marker.lower())

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.tile_count)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.tile_count)))
        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; tuples become [x, y] lists."""
        progress, per_level = self.level_progress
        return {
            "tick_number": self.tick_number,
            "mode": self.mode,
            "snake": [list(p) for p in self.snake],
            "ai_snake": [list(p) for p in self.ai_snake],
            "food": list(self.food),
            "powerups": [p.to_dict() for p in self.powerups],
            "score": self.score,
            "level": self.level,
            "high_score": self.high_score,
            "tick_interval": self.tick_interval,
            "tile_count": self.tile_count,
            "level_progress": {"points": progress, "per_level": per_level},
            "running": self.running,
            "paused": self.paused,
            "game_over": self.game_over,
            "outcome": self.outcome.value if self.outcome else None,
            "active_power": self.active_power.to_dict() if self.active_power else None,
        }

    def __repr__(self):
        return (
            f"<GameSnapshot tick={self.tick_number}, food={self.food}, "
            f"score={self.score}, level={self.level}>"
        )


@dataclass(frozen=True)
class TickResult:
    """
    What one tick produced.

    `outcome` names the winner; the ai-mode demo ends with game_over=True
    and no outcome.
    """

    snapshot: GameSnapshot
    outcome: Optional[Outcome] = None
    game_over: bool = False
    new_high_score: bool = False
    interval_changed: bool = False
    events: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.snapshot.to_dict(),
            "outcome": self.outcome.value if self.outcome else None,
            "game_over": self.game_over,
            "new_high_score": self.new_high_score,
            "interval_changed": self.interval_changed,
            "events": list(self.events),
        }
