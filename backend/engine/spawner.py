"""
Food and power-up placement.

Both use bounded rejection sampling over the full grid so placement always
terminates; exhausting the attempts degrades instead of raising.
"""

import logging
import random
from typing import Iterable, Optional, Set

from domain.constants import POWERUP_WEIGHTS
from domain.grid import Position
from domain.powerup import PowerUp

logger = logging.getLogger(__name__)


def occupied_cells(session, include_powerups: bool = True) -> Set[Position]:
    """Union of both snakes' segments and, optionally, every power-up cell."""
    cells: Set[Position] = set(session.snake.positions)
    cells.update(session.ai_snake.positions)
    if include_powerups:
        cells.update(p.position for p in session.powerups)
    return cells


def _first_free_cell(occupied: Set[Position], tile_count: int) -> Optional[Position]:
    for y in range(tile_count):
        for x in range(tile_count):
            if (x, y) not in occupied:
                return (x, y)
    return None


def place_food(
    occupied: Iterable[Position],
    tile_count: int,
    rng: random.Random,
    max_attempts: int = 1000,
) -> Position:
    """
    Return a uniformly random cell outside `occupied`.

    After `max_attempts` misses, falls back to the first free cell in
    row-major order, or (0, 0) when the board is completely full.
    """
    occupied = set(occupied)
    for _ in range(max_attempts):
        pos = (rng.randrange(tile_count), rng.randrange(tile_count))
        if pos not in occupied:
            return pos

    fallback = _first_free_cell(occupied, tile_count)
    logger.warning(
        "Food placement exhausted %s attempts (%s cells occupied); using %s",
        max_attempts, len(occupied), fallback,
    )
    return fallback if fallback is not None else (0, 0)


def respawn_food(session) -> Position:
    session.food = place_food(
        occupied_cells(session),
        session.config.tile_count,
        session.rng,
        session.config.food_attempts,
    )
    return session.food


def choose_powerup_kind(rng: random.Random) -> str:
    roll = rng.random()
    for threshold, kind in POWERUP_WEIGHTS:
        if roll < threshold:
            return kind
    return POWERUP_WEIGHTS[-1][1]


def maybe_spawn_powerup(session, now: float) -> Optional[PowerUp]:
    """
    Drop a power-up on the board if the spawn interval has elapsed.

    The next eligible time is pushed out by a random jitter whether or not
    a free cell is found.
    """
    config = session.config
    if now - session.last_powerup_spawn < config.powerup_spawn_freq:
        return None

    jitter = session.rng.randrange(config.powerup_spawn_jitter) if config.powerup_spawn_jitter > 0 else 0
    session.last_powerup_spawn = now + jitter

    blocked = occupied_cells(session)
    blocked.add(session.food)
    tile_count = config.tile_count
    for _ in range(config.powerup_attempts):
        pos = (session.rng.randrange(tile_count), session.rng.randrange(tile_count))
        if pos in blocked:
            continue
        powerup = PowerUp(position=pos, kind=choose_powerup_kind(session.rng), created_at=now)
        session.powerups.append(powerup)
        logger.debug("Spawned %s power-up at %s", powerup.kind, pos)
        return powerup

    logger.debug("Skipped power-up spawn after %s attempts", config.powerup_attempts)
    return None


def purge_expired_powerups(session, now: float) -> int:
    """Remove uncollected power-ups older than the lifetime; returns how many went."""
    lifetime = session.config.powerup_lifetime
    kept = [p for p in session.powerups if p.age(now) < lifetime]
    removed = len(session.powerups) - len(kept)
    if removed:
        session.powerups = kept
        logger.debug("Purged %s expired power-up(s)", removed)
    return removed
