"""
Collision detection on post-move positions.
"""

from dataclasses import dataclass
from typing import Optional

from domain.constants import MODE_AI, MODE_VS, Outcome
from domain.grid import Position, in_bounds
from domain.snake import Snake

WALL = "wall"
SELF = "self"
BODY = "body_collision"
HEAD = "head_collision"


@dataclass(frozen=True)
class Collision:
    """A fatal collision; `outcome` is None only for the ai-mode demo."""

    outcome: Optional[Outcome]
    reason: str
    victim: str


def wall_or_self_reason(snake: Snake, tile_count: int) -> Optional[str]:
    if not snake:
        return None
    head = snake.head
    if not in_bounds(head, tile_count):
        return WALL
    if head in snake.body:
        return SELF
    return None


def hits_wall_or_self(snake: Snake, tile_count: int) -> bool:
    return wall_or_self_reason(snake, tile_count) is not None


def hits_body(head: Position, other: Snake) -> bool:
    """True if `head` lands on one of the other snake's non-head segments."""
    return other.occupies(head) and head != other.head


def resolve_collisions(session) -> Optional[Collision]:
    """
    Check fatal collisions in a fixed order and return the first one found:
    own wall/self (player, then AI), opponent body, then head-to-head.
    """
    tile_count = session.config.tile_count
    player, ai = session.snake, session.ai_snake
    vs_mode = session.mode == MODE_VS and bool(ai)

    reason = wall_or_self_reason(player, tile_count)
    if reason:
        return Collision(None if session.mode == MODE_AI else Outcome.AI_WON, reason, "player")

    if not vs_mode:
        return None

    reason = wall_or_self_reason(ai, tile_count)
    if reason:
        return Collision(Outcome.PLAYER_WON, reason, "ai")

    if hits_body(player.head, ai):
        return Collision(Outcome.AI_WON, BODY, "player")
    if hits_body(ai.head, player):
        return Collision(Outcome.PLAYER_WON, BODY, "ai")

    if player.head == ai.head:
        if len(player) > len(ai):
            return Collision(Outcome.PLAYER_WON, HEAD, "ai")
        if len(player) < len(ai):
            return Collision(Outcome.AI_WON, HEAD, "player")
        return Collision(Outcome.TIE, HEAD, "both")

    return None
