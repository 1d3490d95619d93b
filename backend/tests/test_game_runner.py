"""
Tests for the schedule-based real-time runner.

Jobs are invoked directly; the tests inspect the registered jobs rather than
waiting on wall-clock time.
"""

import random
import sys
import os
from unittest.mock import MagicMock

import schedule

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameConfig, Snake, PowerUp, ActivePower, SPEED, RIGHT
from engine import session as engine
from services.game_runner import GameRunner, TICK_TAG, SWEEP_TAG, POLL_TAG


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_runner(mode="human", **kwargs):
    clock = FakeClock()
    session = engine.new_session(mode, GameConfig(), clock=clock, rng=random.Random(2))
    runner = GameRunner(session, scheduler=schedule.Scheduler(), **kwargs)
    return runner, clock


def tick_job_seconds(runner):
    jobs = runner.scheduler.get_jobs(TICK_TAG)
    assert len(jobs) == 1
    return jobs[0].interval


class TestGameRunner:
    """Tests for GameRunner job management."""

    def test_start_registers_all_jobs(self):
        runner, _ = make_runner()
        runner.start()
        assert runner.session.running is True
        assert tick_job_seconds(runner) == 0.16
        assert len(runner.scheduler.get_jobs(SWEEP_TAG)) == 1
        assert len(runner.scheduler.get_jobs(POLL_TAG)) == 1

    def test_pause_cancels_only_tick_job(self):
        runner, _ = make_runner()
        runner.start()
        assert runner.toggle_pause() is True
        assert runner.is_ticking is False
        assert len(runner.scheduler.get_jobs(SWEEP_TAG)) == 1
        assert runner.toggle_pause() is False
        assert runner.is_ticking is True

    def test_interval_change_reschedules_tick(self):
        runner, _ = make_runner()
        runner.start()
        session = runner.session
        session.last_powerup_spawn = 10 ** 9
        session.snake = Snake([(5, 5)])
        session.food = (20, 20)
        session.powerups = [PowerUp((6, 5), SPEED, 0)]
        engine.set_direction(session, *RIGHT)

        runner._tick_job()
        assert session.tick_interval == 100
        assert tick_job_seconds(runner) == 0.1
        assert runner.tick_interval_ms == 100

    def test_poll_job_reverts_expired_power(self):
        runner, clock = make_runner()
        runner.start()
        runner.session.tick_interval = 100
        runner.session.active_power = ActivePower(SPEED, 8000)
        clock.now = 8000
        runner._poll_job()
        assert runner.session.active_power is None
        assert runner.session.tick_interval == 150
        assert tick_job_seconds(runner) == 0.15

    def test_sweep_job_purges_old_powerups(self):
        runner, clock = make_runner()
        runner.session.powerups = [PowerUp((1, 1), SPEED, 0)]
        clock.now = 36000
        runner._sweep_job()
        assert runner.session.powerups == []

    def test_game_over_cancels_tick_and_persists_high_score(self):
        writer = MagicMock()
        on_tick = MagicMock()
        runner, _ = make_runner(high_score_writer=writer, on_tick=on_tick)
        runner.start()
        session = runner.session
        session.snake = Snake([(22, 3)])
        session.food = (23, 3)
        engine.set_direction(session, *RIGHT)

        runner._tick_job()
        writer.assert_called_once_with(10)
        runner._tick_job()
        assert runner.last_result.game_over is True
        assert runner.is_ticking is False
        assert on_tick.call_count == 2

    def test_high_score_write_failure_is_logged_not_raised(self):
        writer = MagicMock(side_effect=RuntimeError("disk full"))
        runner, _ = make_runner(high_score_writer=writer)
        runner.start()
        runner.session.food = (11, 10)
        engine.set_direction(runner.session, *RIGHT)
        runner._tick_job()
        assert runner.session.score == 10

    def test_reset_stops_ticking_and_clears_power(self):
        runner, _ = make_runner()
        runner.start()
        runner.session.active_power = ActivePower(SPEED, 8000)
        runner.reset()
        assert runner.is_ticking is False
        assert runner.session.active_power is None
        assert runner.session.running is False

    def test_run_returns_once_max_ticks_reached(self):
        runner, _ = make_runner("ai")
        assert runner.run(max_ticks=0) is None
        assert runner.session.running is True
        assert runner.is_ticking is False

    def test_run_returns_after_game_over(self):
        """A snake parked against the wall crashes on the first real tick."""
        runner, _ = make_runner("human")
        runner.start()
        runner.session.snake = Snake([(23, 0)])
        runner.session.food = (0, 23)
        engine.set_direction(runner.session, *RIGHT)
        result = runner.run(max_ticks=50)
        assert result.game_over is True
        assert runner.ticks_run == 1
