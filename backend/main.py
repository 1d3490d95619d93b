import argparse
import json
import logging
import os
import random
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from data_access import get_high_score, set_high_score
from domain.config import GameConfig
from domain.constants import MODE_AI, MODE_VS
from domain.game_state import TickResult
from engine import session as engine
from engine.spawner import purge_expired_powerups
from players import AI_SLOT, PLAYER_SLOT, AVAILABLE_VARIANTS, BfsPlayer, get_player_class, list_variants
from services.game_runner import GameRunner

load_dotenv()

logger = logging.getLogger(__name__)


class SimulatedClock:
    """Millisecond clock that only moves when advanced; lets games run faster than real time."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def _load_high_score() -> int:
    try:
        return get_high_score()
    except Exception:
        logger.exception("Could not read high score; starting from 0")
        return 0


def _save_high_score(value: int) -> None:
    try:
        set_high_score(value)
    except Exception:
        logger.exception("Could not persist high score %s", value)


def build_session(
    mode: str,
    config: GameConfig,
    seed: Optional[int],
    clock=None,
    player: str = "bfs",
) -> engine.GameSession:
    """
    The player slot is filled from the variant registry; the CLI defaults to
    the BFS autopilot since nobody is at the keyboard. A "human" player slot
    just keeps its current heading.
    """
    players = {PLAYER_SLOT: get_player_class(player)(PLAYER_SLOT), AI_SLOT: BfsPlayer(AI_SLOT)}
    return engine.new_session(
        mode,
        config,
        high_score=_load_high_score(),
        clock=clock,
        rng=random.Random(seed),
        players=players,
    )


def _log_tick(show_board: bool):
    def on_tick(result: TickResult) -> None:
        for event in result.events:
            logger.debug("tick %s: %s", result.snapshot.tick_number, event)
        if show_board:
            logger.info(
                "Tick %s | score %s | level %s | %sms\n%s",
                result.snapshot.tick_number, result.snapshot.score, result.snapshot.level,
                result.snapshot.tick_interval, result.snapshot.print_board(),
            )
    return on_tick


def run_fast(session: engine.GameSession, clock: SimulatedClock, max_ticks: int, on_tick) -> Optional[TickResult]:
    """
    Step the session back to back, advancing simulated time by each tick's interval.

    The power-up sweep fires on the same simulated schedule the real-time runner uses.
    """
    engine.start_session(session)
    sweep_every = session.config.powerup_sweep_interval
    next_sweep = clock() + sweep_every
    result = None

    for _ in range(max_ticks):
        clock.advance(session.tick_interval)
        if clock() >= next_sweep:
            purge_expired_powerups(session, clock())
            next_sweep = clock() + sweep_every

        result = engine.tick(session)
        if result.new_high_score:
            _save_high_score(result.snapshot.high_score)
        on_tick(result)
        if result.game_over:
            break
    return result


def run_simulation(game_params: argparse.Namespace) -> Dict[str, Any]:
    """
    Runs a single headless game.

    Args:
        game_params: An object (like argparse.Namespace) containing mode, player, seed,
                     max_ticks, realtime and show_board.

    Returns:
        A dictionary summarizing the game (outcome, score, level, ticks).
    """
    config = GameConfig.from_env()
    on_tick = _log_tick(game_params.show_board)

    if game_params.realtime:
        session = build_session(game_params.mode, config, game_params.seed, player=game_params.player)
        runner = GameRunner(session, on_tick=on_tick, high_score_writer=_save_high_score)
        result = runner.run(max_ticks=game_params.max_ticks)
    else:
        clock = SimulatedClock()
        session = build_session(game_params.mode, config, game_params.seed, clock=clock, player=game_params.player)
        result = run_fast(session, clock, game_params.max_ticks, on_tick)

    final = engine.snapshot(session)
    if final.running:
        logger.info("Stopped after reaching %s ticks", game_params.max_ticks)
    else:
        logger.info("Final board:\n%s", final.print_board())

    return {
        "mode": final.mode,
        "ticks": final.tick_number,
        "score": final.score,
        "level": final.level,
        "high_score": final.high_score,
        "game_over": final.game_over,
        "outcome": result.outcome.value if result and result.outcome else None,
        "player_length": len(final.snake),
        "ai_length": len(final.ai_snake),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Run a headless Snake Arcade game with computer-controlled snakes."
    )
    parser.add_argument("--mode", choices=[MODE_AI, MODE_VS], default=MODE_AI,
                        help="'ai' for the single-snake demo, 'vs' for autopilot vs AI")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default="bfs",
                        help="Who steers the player slot: "
                        + "; ".join(f"{key}: {doc}" for key, doc in list_variants().items()))
    parser.add_argument("--max-ticks", type=int, default=2000,
                        help="Stop after this many ticks if nobody has crashed")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for food and power-up placement")
    parser.add_argument("--realtime", action="store_true",
                        help="Tick at the game's real cadence instead of as fast as possible")
    parser.add_argument("--show-board", action="store_true",
                        help="Log the board after every tick")

    args = parser.parse_args()
    if args.max_ticks <= 0:
        parser.error("--max-ticks must be positive")

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
