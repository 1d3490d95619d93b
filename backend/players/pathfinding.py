"""
Food-seeking pathfinder for computer-controlled snakes.

Breadth-first search from the agent's head to the food over the 4-connected
grid, with a greedy one-step fallback when the food is walled off.
"""

import logging
from collections import deque
from typing import Dict, Optional, Sequence, Set

from domain.constants import DIRECTION_ORDER
from domain.grid import Direction, Position, in_bounds, manhattan, neighbors, step

logger = logging.getLogger(__name__)

CENTER_WEIGHT = 0.1


def blocked_cells(agent: Sequence[Position], other: Sequence[Position]) -> Set[Position]:
    """Every segment of both snakes, plus the agent's own non-head segments."""
    blocked = set(other)
    blocked.update(agent)
    blocked.update(agent[1:])
    return blocked


def bfs_first_step(
    start: Position,
    goal: Position,
    blocked: Set[Position],
    tile_count: int,
) -> Optional[Direction]:
    """
    Shortest-path first step from `start` toward `goal`, or None if unreachable.

    The goal cell is accepted even when it is in `blocked`.
    """
    parent: Dict[Position, Position] = {}
    visited = {start}
    queue = deque([start])
    found = False

    while queue and not found:
        current = queue.popleft()
        for _, cell in neighbors(current, tile_count):
            if cell in visited:
                continue
            if cell == goal:
                parent[cell] = current
                found = True
                break
            if cell in blocked:
                continue
            visited.add(cell)
            parent[cell] = current
            queue.append(cell)

    if not found:
        return None

    # Walk back from the goal to the cell adjacent to start
    cell = goal
    while parent[cell] != start:
        cell = parent[cell]
    return (cell[0] - start[0], cell[1] - start[1])


def greedy_fallback(
    agent: Sequence[Position],
    other: Sequence[Position],
    food: Position,
    tile_count: int,
) -> Optional[Direction]:
    """
    Pick the safe one-step move closest to the food, preferring the centre.

    Returns None when every move hits a wall or a snake.
    """
    head = agent[0]
    occupied = set(agent) | set(other)
    center = tile_count / 2

    best: Optional[Direction] = None
    best_score = float("-inf")
    for direction in DIRECTION_ORDER:
        cell = step(head, direction)
        if not in_bounds(cell, tile_count) or cell in occupied:
            continue
        score = -manhattan(cell, food)
        score -= (abs(cell[0] - center) + abs(cell[1] - center)) * CENTER_WEIGHT
        if score > best_score:
            best_score = score
            best = direction
    return best


def ai_next_move(
    agent: Sequence[Position],
    other: Sequence[Position],
    food: Position,
    tile_count: int,
) -> Optional[Direction]:
    """
    Direction the agent should take this tick, or None if it has no safe move.

    Args:
        agent: the steering snake's segments, head first
        other: the opponent's segments (empty when there is none)
        food: target cell
        tile_count: board edge length
    """
    agent = list(agent)
    other = list(other)
    if not agent:
        return None

    direction = bfs_first_step(agent[0], food, blocked_cells(agent, other), tile_count)
    if direction is not None:
        return direction

    logger.debug("No path from %s to food %s; using greedy fallback", agent[0], food)
    return greedy_fallback(agent, other, food, tile_count)
