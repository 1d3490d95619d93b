"""
GameSession - the single aggregate that owns all state of one game.

Every operation takes the session explicitly. The session never schedules
anything itself: the caller (the real-time runner, the HTTP API or a test)
decides when `tick` runs and reads `tick_interval` to pace it.
"""

import logging
import random
import time
from typing import Callable, Dict, List, Optional

from domain.config import GameConfig
from domain.constants import (
    MODE_AI, MODE_VS, NO_DIRECTION, RIGHT, VALID_MODES, VALID_MOVES, Outcome,
)
from domain.game_state import GameSnapshot, TickResult
from domain.grid import Direction, is_opposite
from domain.powerup import ActivePower, PowerUp
from domain.snake import Snake
from players import AI_SLOT, PLAYER_SLOT, BfsPlayer, HumanPlayer, Player

from .collisions import resolve_collisions
from .effects import add_score, apply_powerup, check_level_up, expire_active_power
from .spawner import maybe_spawn_powerup, respawn_food

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameSession:
    """
    Mutable state of one game.

    Attributes:
        config: static GameConfig
        mode: 'human', 'ai' or 'vs'
        snake / ai_snake: player-slot and AI-slot snakes (ai_snake is empty outside vs-mode)
        direction / ai_direction: last accepted direction per slot
        food, powerups: board items
        score, level, high_score: player-slot scoring
        tick_interval: ms between ticks, after level and power-up effects
        active_power: at most one timed effect
        running, paused, game_over, outcome: lifecycle flags
        players: slot -> Player deciding moves each tick
    """

    def __init__(
        self,
        mode: str,
        config: GameConfig,
        clock: Callable[[], float],
        rng: random.Random,
        players: Dict[str, Player],
        high_score: int = 0,
    ):
        self.mode = mode
        self.config = config
        self.clock = clock
        self.rng = rng
        self.players = players
        self.high_score = high_score

        self.snake = Snake()
        self.ai_snake = Snake()
        self.direction: Direction = NO_DIRECTION
        self.ai_direction: Direction = RIGHT
        self.food = (0, 0)
        self.powerups: List[PowerUp] = []
        self.active_power: Optional[ActivePower] = None
        self.score = 0
        self.level = 1
        self.tick_interval = config.initial_speed
        self.tick_number = 0
        self.last_powerup_spawn = 0.0
        self.running = False
        self.paused = False
        self.game_over = False
        self.outcome: Optional[Outcome] = None

    def __repr__(self):
        return (
            f"<GameSession mode={self.mode}, tick={self.tick_number}, score={self.score}, "
            f"level={self.level}, running={self.running}, paused={self.paused}>"
        )


def default_players(mode: str) -> Dict[str, Player]:
    """ai-mode hands the player slot to the pathfinder; the AI slot always uses it."""
    primary = BfsPlayer(PLAYER_SLOT) if mode == MODE_AI else HumanPlayer(PLAYER_SLOT)
    return {PLAYER_SLOT: primary, AI_SLOT: BfsPlayer(AI_SLOT)}


def _validate_mode(mode: str) -> None:
    if mode not in VALID_MODES:
        raise ValueError(f"Unknown game mode '{mode}'. Expected one of {sorted(VALID_MODES)}")


def _init_round(session: GameSession) -> None:
    """Canonical start state: length-1 snakes, level 1, no power-ups, fresh food."""
    config = session.config
    session.snake = Snake([config.player_start])
    session.ai_snake = Snake([config.ai_start]) if session.mode == MODE_VS else Snake()
    session.direction = RIGHT if session.mode == MODE_AI else NO_DIRECTION
    session.ai_direction = RIGHT
    session.score = 0
    session.level = 1
    session.tick_interval = config.initial_speed
    session.tick_number = 0
    session.powerups = []
    session.active_power = None
    session.game_over = False
    session.outcome = None
    respawn_food(session)


def new_session(
    mode: str,
    config: Optional[GameConfig] = None,
    *,
    high_score: int = 0,
    clock: Optional[Callable[[], float]] = None,
    rng: Optional[random.Random] = None,
    players: Optional[Dict[str, Player]] = None,
) -> GameSession:
    """Create a session in the canonical start state; it is not running yet."""
    _validate_mode(mode)
    session = GameSession(
        mode=mode,
        config=config or GameConfig(),
        clock=clock or monotonic_ms,
        rng=rng or random.Random(),
        players=players or default_players(mode),
        high_score=high_score,
    )
    _init_round(session)
    return session


def start_session(session: GameSession, now: Optional[float] = None) -> bool:
    """
    Begin a fresh round, or resume a paused one.

    Returns False if the session was already running unpaused.
    """
    if session.running:
        if session.paused:
            session.paused = False
            return True
        return False

    now = session.clock() if now is None else now
    _init_round(session)
    session.running = True
    session.paused = False
    session.last_powerup_spawn = now
    logger.info("Game started (mode=%s)", session.mode)
    return True


def toggle_pause(session: GameSession) -> bool:
    """Flip the paused flag of a running session; returns the new value."""
    if not session.running:
        return session.paused
    session.paused = not session.paused
    return session.paused


def reset_session(session: GameSession) -> None:
    """Stop and reinitialise; drops the active power so no reversion survives."""
    session.running = False
    session.paused = False
    _init_round(session)
    logger.info("Game reset (mode=%s)", session.mode)


def set_mode(session: GameSession, mode: str) -> bool:
    """Switch modes between games; ignored while a game is running."""
    _validate_mode(mode)
    if session.running:
        return False
    session.mode = mode
    session.players = default_players(mode)
    reset_session(session)
    return True


def set_direction(session: GameSession, x: int, y: int) -> bool:
    """
    Record the human player's intended direction.

    Ignored when the game is not running, paused, computer-driven, when
    (x, y) is not a unit vector, or when it reverses a snake longer than one.
    """
    direction = (x, y)
    if not session.running or session.paused or session.mode == MODE_AI:
        return False
    if direction not in VALID_MOVES:
        logger.debug("Ignoring invalid direction %s", direction)
        return False
    if len(session.snake) > 1 and is_opposite(direction, session.direction):
        logger.debug("Ignoring reversal %s -> %s", session.direction, direction)
        return False
    session.direction = direction
    return True


def snapshot(session: GameSession) -> GameSnapshot:
    return GameSnapshot(
        tick_number=session.tick_number,
        mode=session.mode,
        snake=list(session.snake.positions),
        ai_snake=list(session.ai_snake.positions),
        food=session.food,
        powerups=list(session.powerups),
        score=session.score,
        level=session.level,
        high_score=session.high_score,
        tick_interval=session.tick_interval,
        tile_count=session.config.tile_count,
        points_per_level=session.config.points_per_level,
        running=session.running,
        paused=session.paused,
        game_over=session.game_over,
        outcome=session.outcome,
        active_power=session.active_power,
    )


def _steer(session: GameSession, slot: str, current: Direction) -> Direction:
    move = session.players[slot].get_move(snapshot(session))
    return move if move is not None else current


def _pickup_powerup(session: GameSession, snake: Snake, is_player: bool, now: float) -> Optional[str]:
    for i, powerup in enumerate(session.powerups):
        if powerup.position == snake.head:
            del session.powerups[i]
            event = apply_powerup(session, powerup.kind, is_player, now)
            return event or f"consumed:{powerup.kind}"
    return None


def _finish(session: GameSession, outcome: Optional[Outcome]) -> None:
    session.running = False
    session.paused = False
    session.game_over = True
    session.outcome = outcome
    session.active_power = None


def tick(session: GameSession, now: Optional[float] = None) -> TickResult:
    """
    Advance the session by one step.

    Order: power-up expiry and spawn, steering and movement (player slot
    first), collisions, food, power-up pickups. A fatal collision ends the
    tick immediately.
    """
    if not session.running or session.paused:
        return TickResult(snapshot=snapshot(session))

    now = session.clock() if now is None else now
    start_interval = session.tick_interval
    high_score_before = session.high_score
    events: List[str] = []

    if expire_active_power(session, now):
        events.append("power_expired")
    spawned = maybe_spawn_powerup(session, now)
    if spawned is not None:
        events.append(f"powerup_spawned:{spawned.kind}")

    session.direction = _steer(session, PLAYER_SLOT, session.direction)
    session.snake.advance(session.direction)

    vs_mode = session.mode == MODE_VS and bool(session.ai_snake)
    if vs_mode:
        session.ai_direction = _steer(session, AI_SLOT, session.ai_direction)
        session.ai_snake.advance(session.ai_direction)

    session.tick_number += 1

    collision = resolve_collisions(session)
    if collision is not None:
        _finish(session, collision.outcome)
        events.append(f"collision:{collision.victim}:{collision.reason}")
        logger.info(
            "Game over on tick %s: %s hit %s (outcome=%s, score=%s)",
            session.tick_number, collision.victim, collision.reason,
            collision.outcome.value if collision.outcome else None, session.score,
        )
        return TickResult(
            snapshot=snapshot(session),
            outcome=collision.outcome,
            game_over=True,
            interval_changed=session.tick_interval != start_interval,
            events=events,
        )

    if session.snake.head == session.food:
        session.snake.mark_ate()
        add_score(session, session.config.points_per_food)
        if check_level_up(session):
            events.append(f"level_up:{session.level}")
        respawn_food(session)
        events.append("food:player")

    if vs_mode and session.ai_snake.head == session.food:
        session.ai_snake.mark_ate()
        respawn_food(session)
        events.append("food:ai")

    event = _pickup_powerup(session, session.snake, True, now)
    if event:
        events.append(event)
    if vs_mode:
        event = _pickup_powerup(session, session.ai_snake, False, now)
        if event:
            events.append(f"ai:{event}")

    return TickResult(
        snapshot=snapshot(session),
        new_high_score=session.high_score > high_score_before,
        interval_changed=session.tick_interval != start_interval,
        events=events,
    )
