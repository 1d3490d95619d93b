"""
Real-time driver for a GameSession.

Runs three jobs on one `schedule.Scheduler`:
 - the game tick, at the session's current tick interval
 - the power-up lifetime sweep (default: every 5s)
 - the active-power expiry poll (default: every 0.5s)

`run_pending` executes jobs one after another on the calling thread, so a
tick never overlaps another tick or a maintenance job. A cadence change
cancels the tick job and registers a new one at the new interval.
"""

import logging
import time
from typing import Callable, Optional

import schedule

from domain.game_state import TickResult
from engine import session as engine
from engine.effects import expire_active_power
from engine.spawner import purge_expired_powerups

logger = logging.getLogger(__name__)

TICK_TAG = "tick"
SWEEP_TAG = "powerup-sweep"
POLL_TAG = "power-expiry"
MAX_IDLE_SLEEP_SECONDS = 0.05


class GameRunner:
    """
    Owns the scheduling of one session.

    Args:
        session: the GameSession to drive
        on_tick: called with every TickResult (rendering, logging)
        high_score_writer: persists a new high score; failures are logged, not raised
        scheduler: injectable for tests; a private Scheduler by default
    """

    def __init__(
        self,
        session: engine.GameSession,
        on_tick: Optional[Callable[[TickResult], None]] = None,
        high_score_writer: Optional[Callable[[int], object]] = None,
        scheduler: Optional[schedule.Scheduler] = None,
    ):
        self.session = session
        self.on_tick = on_tick
        self.high_score_writer = high_score_writer
        self.scheduler = scheduler or schedule.Scheduler()
        self.last_result: Optional[TickResult] = None
        self.ticks_run = 0
        self._tick_interval_ms: Optional[int] = None
        self._stopped = False

    # ----- job registration -----

    def _schedule_tick(self) -> None:
        self.scheduler.clear(TICK_TAG)
        interval = self.session.tick_interval
        self.scheduler.every(interval / 1000.0).seconds.do(self._tick_job).tag(TICK_TAG)
        self._tick_interval_ms = interval
        logger.debug("Tick job scheduled every %sms", interval)

    def _cancel_tick(self) -> None:
        self.scheduler.clear(TICK_TAG)
        self._tick_interval_ms = None

    def _schedule_maintenance(self) -> None:
        config = self.session.config
        self.scheduler.clear(SWEEP_TAG)
        self.scheduler.clear(POLL_TAG)
        self.scheduler.every(config.powerup_sweep_interval / 1000.0).seconds.do(self._sweep_job).tag(SWEEP_TAG)
        self.scheduler.every(config.active_power_poll_interval / 1000.0).seconds.do(self._poll_job).tag(POLL_TAG)

    def _sync_cadence(self) -> None:
        if self._tick_interval_ms is not None and self._tick_interval_ms != self.session.tick_interval:
            logger.info(
                "Tick interval changed %sms -> %sms; rescheduling",
                self._tick_interval_ms, self.session.tick_interval,
            )
            self._schedule_tick()

    @property
    def tick_interval_ms(self) -> Optional[int]:
        """Interval of the registered tick job, None when ticking is stopped."""
        return self._tick_interval_ms

    # ----- jobs -----

    def _tick_job(self) -> None:
        result = engine.tick(self.session)
        self.last_result = result
        self.ticks_run += 1

        if result.new_high_score:
            self._persist_high_score(result.snapshot.high_score)

        if self.on_tick is not None:
            try:
                self.on_tick(result)
            except Exception:
                logger.exception("on_tick callback failed")

        if result.game_over:
            self._cancel_tick()
            logger.info(
                "Game over after %s ticks: outcome=%s score=%s high_score=%s",
                result.snapshot.tick_number,
                result.outcome.value if result.outcome else None,
                result.snapshot.score,
                result.snapshot.high_score,
            )
            return

        self._sync_cadence()

    def _sweep_job(self) -> None:
        purge_expired_powerups(self.session, self.session.clock())

    def _poll_job(self) -> None:
        if expire_active_power(self.session, self.session.clock()):
            self._sync_cadence()

    def _persist_high_score(self, value: int) -> None:
        if self.high_score_writer is None:
            return
        try:
            self.high_score_writer(value)
        except Exception:
            logger.exception("Failed to persist high score %s", value)

    # ----- lifecycle -----

    def start(self) -> None:
        engine.start_session(self.session)
        self._stopped = False
        self._schedule_maintenance()
        self._schedule_tick()

    def toggle_pause(self) -> bool:
        """Pausing stops the tick job without touching state; resuming re-registers it."""
        paused = engine.toggle_pause(self.session)
        if paused:
            self._cancel_tick()
        elif self.session.running:
            self._schedule_tick()
        return paused

    def reset(self) -> None:
        self._cancel_tick()
        engine.reset_session(self.session)

    def stop(self) -> None:
        self._stopped = True
        self._cancel_tick()

    @property
    def is_ticking(self) -> bool:
        return bool(self.scheduler.get_jobs(TICK_TAG))

    def run(self, max_ticks: Optional[int] = None) -> Optional[TickResult]:
        """
        Block until the game ends, `max_ticks` ticks have run, or stop() is called.

        Maintenance jobs keep running while paused; a paused game therefore
        only returns through stop().
        """
        if not self.session.running:
            self.start()

        while not self._stopped:
            if not self.session.running and not self.is_ticking:
                break
            if max_ticks is not None and self.ticks_run >= max_ticks:
                break
            self.scheduler.run_pending()
            idle = self.scheduler.idle_seconds
            time.sleep(min(max(idle or 0.0, 0.0), MAX_IDLE_SLEEP_SECONDS))

        self._cancel_tick()
        return self.last_result
