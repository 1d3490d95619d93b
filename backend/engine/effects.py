"""
Power-up effects, scoring and levels.

Speed effects are a two-state machine per session: idle, or one ActivePower
with an expiry time. Collecting another speed/slow power-up replaces the
active one and stacks on the current interval; expiry always restores the
level baseline.
"""

import logging
from typing import Optional

from domain.constants import BONUS, SLOW, SPEED
from domain.powerup import ActivePower

logger = logging.getLogger(__name__)


def add_score(session, points: int) -> bool:
    """Add points to the player slot; returns True if the high score moved."""
    session.score += points
    if session.score > session.high_score:
        session.high_score = session.score
        return True
    return False


def check_level_up(session) -> bool:
    new_level = session.score // session.config.points_per_level + 1
    if new_level <= session.level:
        return False
    session.level = new_level
    session.tick_interval = session.config.baseline_interval(new_level)
    logger.info("Level up: %s (interval %sms)", new_level, session.tick_interval)
    return True


def activate_power(session, kind: str, now: float) -> ActivePower:
    """Apply a speed or slow effect, replacing any effect still in force."""
    config = session.config
    if session.active_power is not None:
        logger.debug("Replacing active %s power", session.active_power.kind)

    if kind == SPEED:
        session.tick_interval = max(config.speed_floor, session.tick_interval - config.speed_boost)
    elif kind == SLOW:
        session.tick_interval = session.tick_interval + config.slow_penalty
    else:
        raise ValueError(f"{kind!r} has no timed effect")

    session.active_power = ActivePower(kind=kind, expires_at=now + config.powerup_duration)
    return session.active_power


def apply_powerup(session, kind: str, is_player: bool, now: float) -> Optional[str]:
    """
    Apply a collected power-up.

    Only the player slot gets effects; the AI snake just clears the tile.
    Returns an event name for the tick result, or None.
    """
    if not is_player:
        return None

    if kind == BONUS:
        add_score(session, session.config.bonus_points)
        return "bonus"

    activate_power(session, kind, now)
    return f"power:{kind}"


def expire_active_power(session, now: float) -> bool:
    """Revert to the level baseline once the active effect has run out."""
    active = session.active_power
    if active is None or not active.is_expired(now):
        return False

    session.tick_interval = session.config.baseline_interval(session.level)
    session.active_power = None
    logger.debug("%s power expired; interval back to %sms", active.kind, session.tick_interval)
    return True
