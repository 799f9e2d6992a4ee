"""Command-line entrypoint that plays a game between CPU players."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random

from conquest.domain.enums import CPUDifficulty, GameMode
from conquest.factory import create_runtime
from conquest.notify import LoggingNotifier
from conquest.utils.rng import RandomSource, seeded_random

logger = logging.getLogger(__name__)


def make_rng(seed: str | None) -> RandomSource:
    """Seeded source for a reproducible game, or a fresh one when no seed is given."""

    return seeded_random(seed) if seed is not None else random.Random()


async def play_cpu_game(args: argparse.Namespace) -> None:
    runtime = create_runtime(
        repository_kind=args.store,
        notifier=LoggingNotifier(logging.DEBUG),
        rng=make_rng(args.seed),
        think_delay_seconds=args.delay,
    )
    service = runtime.service
    game = service.create_game(
        "CPU showdown",
        args.map,
        game_mode=GameMode(args.mode),
        turn_limit=args.turn_limit,
    )
    for difficulty in args.cpu:
        service.add_cpu(game.id, CPUDifficulty(difficulty))

    started = await runtime.actions.start(game.id)
    if started is None:
        return
    try:
        await runtime.cpu_runner.wait_idle()
    finally:
        await runtime.cpu_runner.shutdown()

    final = service.get_game(game.id)
    state = service.game_state(final)
    logger.info(
        "game %s %s after %d turns, winner: %s",
        int(final.id),
        state["status"],
        final.turn_number,
        state["winner_name"],
    )
    for player in state["players"]:
        logger.info(
            "  %-14s %-6s territories=%-3d armies=%d",
            player["name"],
            player["cpu_difficulty"],
            player["territory_count"],
            player["total_armies"],
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a conquest game between CPU players")
    parser.add_argument("--map", default=None, help="Map id (defaults to settings)")
    parser.add_argument(
        "--cpu",
        nargs="+",
        default=["easy", "medium", "hard"],
        choices=[str(d) for d in CPUDifficulty],
        help="Difficulty of each CPU player",
    )
    parser.add_argument(
        "--mode", default=str(GameMode.TURN_LIMIT), choices=[str(m) for m in GameMode]
    )
    parser.add_argument("--turn-limit", type=int, default=30)
    parser.add_argument(
        "--seed", default=None, help="Any string; the same seed replays the same game"
    )
    parser.add_argument("--delay", type=float, default=0.0, help="CPU think delay in seconds")
    parser.add_argument("--store", default="memory", choices=["memory", "json", "sql"])
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every event")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(play_cpu_game(args))


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    main()
