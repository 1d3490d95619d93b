"""
Game simulation engine: session lifecycle and the per-tick step function.
"""

from .session import (
    GameSession,
    new_session,
    start_session,
    toggle_pause,
    reset_session,
    set_mode,
    set_direction,
    snapshot,
    tick,
)
from .spawner import place_food, maybe_spawn_powerup, purge_expired_powerups
from .effects import apply_powerup, expire_active_power, check_level_up
from .collisions import resolve_collisions, hits_wall_or_self

__all__ = [
    'GameSession',
    'new_session',
    'start_session',
    'toggle_pause',
    'reset_session',
    'set_mode',
    'set_direction',
    'snapshot',
    'tick',
    'place_food',
    'maybe_spawn_powerup',
    'purge_expired_powerups',
    'apply_powerup',
    'expire_active_power',
    'check_level_up',
    'resolve_collisions',
    'hits_wall_or_self',
]
