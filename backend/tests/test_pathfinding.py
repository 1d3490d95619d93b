"""
Tests for the BFS food-seeking pathfinder and the BfsPlayer wrapper.
"""

import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES
from domain.game_state import GameSnapshot
from domain.grid import in_bounds, step
from players import BfsPlayer, HumanPlayer, get_player_class, AI_SLOT, PLAYER_SLOT
from players.pathfinding import ai_next_move, bfs_first_step, blocked_cells, greedy_fallback

import pytest


def _ring(center, radius=1):
    """Cells of the square ring at Chebyshev distance `radius` around center."""
    cx, cy = center
    return [
        (x, y)
        for x in range(cx - radius, cx + radius + 1)
        for y in range(cy - radius, cy + radius + 1)
        if max(abs(x - cx), abs(y - cy)) == radius
    ]


class TestBfs:
    """Shortest-path behaviour."""

    def test_straight_line_down(self):
        """Head (5,5), food (5,8), no obstacles -> move down."""
        assert ai_next_move([(5, 5)], [], (5, 8), 24) == (0, 1)

    def test_each_axis(self):
        assert ai_next_move([(5, 5)], [], (5, 1), 24) == UP
        assert ai_next_move([(5, 5)], [], (1, 5), 24) == LEFT
        assert ai_next_move([(5, 5)], [], (9, 5), 24) == RIGHT

    def test_path_length_equals_manhattan_distance(self):
        """Following the returned moves reaches the food in exactly |dx|+|dy| steps."""
        head, food = (2, 3), (7, 9)
        steps = 0
        while head != food:
            head = step(head, ai_next_move([head], [], food, 24))
            steps += 1
            assert steps <= 11
        assert steps == 11

    def test_tie_break_prefers_up_then_down_then_left(self):
        """Diagonal food: the first expanded neighbour (vertical) wins."""
        assert ai_next_move([(5, 5)], [], (3, 3), 24) == UP
        assert ai_next_move([(5, 5)], [], (7, 7), 24) == DOWN

    def test_routes_around_opponent_body(self):
        opponent = [(5, 6), (4, 6), (6, 6)]
        move = ai_next_move([(5, 5)], opponent, (5, 8), 24)
        assert move in (LEFT, RIGHT)

    def test_food_is_reachable_even_if_blocked(self):
        """The goal cell is accepted as a terminal step even when marked blocked."""
        assert bfs_first_step((5, 5), (5, 6), {(5, 6)}, 24) == DOWN

    def test_never_steps_onto_own_body(self):
        agent = [(5, 5), (5, 6), (5, 7)]
        move = ai_next_move(agent, [], (5, 9), 24)
        assert step((5, 5), move) not in agent

    def test_blocked_cells_cover_both_snakes(self):
        blocked = blocked_cells([(1, 1), (1, 2)], [(4, 4), (4, 5)])
        assert blocked == {(1, 1), (1, 2), (4, 4), (4, 5)}


class TestFallback:
    """Greedy fallback when the food is walled off."""

    def test_walled_off_food_returns_safe_move(self):
        """Food enclosed by an unbroken ring of body segments."""
        food = (12, 12)
        wall = _ring(food)
        move = ai_next_move([(3, 3)], wall, food, 24)
        assert move in VALID_MOVES
        nxt = step((3, 3), move)
        assert in_bounds(nxt, 24)
        assert nxt not in wall

    def test_fallback_minimises_distance(self):
        assert greedy_fallback([(3, 3)], [], (10, 3), 24) == RIGHT

    def test_center_breaks_distance_ties(self):
        """Both up and right cut the distance equally; right is closer to the centre."""
        assert greedy_fallback([(2, 10)], [], (5, 7), 24) == RIGHT

    def test_no_safe_move_returns_none(self):
        """Trapped in a corner by the opponent with the food unreachable."""
        agent = [(0, 0)]
        opponent = [(1, 0), (0, 1), (1, 1)]
        assert ai_next_move(agent, opponent, (20, 20), 24) is None

    def test_empty_agent_returns_none(self):
        assert ai_next_move([], [], (1, 1), 24) is None


def _snapshot(snake, ai_snake, food):
    return GameSnapshot(
        tick_number=0, mode="vs", snake=snake, ai_snake=ai_snake, food=food,
        powerups=[], score=0, level=1, high_score=0, tick_interval=160,
        tile_count=24, points_per_level=100,
    )


class TestPlayers:
    """Tests for the Player implementations."""

    def test_bfs_player_steers_its_own_slot(self):
        snap = _snapshot([(5, 5)], [(10, 10)], (10, 12))
        assert BfsPlayer(AI_SLOT).get_move(snap) == DOWN
        assert BfsPlayer(PLAYER_SLOT).get_move(snap) in (DOWN, RIGHT)

    def test_bfs_player_avoids_the_other_snake(self):
        snap = _snapshot([(5, 6), (6, 6), (4, 6)], [(5, 5)], (5, 8))
        assert BfsPlayer(AI_SLOT).get_move(snap) in (LEFT, RIGHT)

    def test_human_player_defers_to_input(self):
        assert HumanPlayer().get_move(_snapshot([(1, 1)], [], (3, 3))) is None

    def test_unknown_slot_rejected(self):
        with pytest.raises(ValueError):
            BfsPlayer("spectator")

    def test_registry(self):
        assert get_player_class("bfs") is BfsPlayer
        assert get_player_class("human") is HumanPlayer
        with pytest.raises(ValueError, match="Unknown player variant"):
            get_player_class("llm")
