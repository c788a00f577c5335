"""
Terminal blackjack entry point.

Run ``termjack`` (or ``python -m termjack.cli``) to play. The player's chips
and statistics are kept in a JSON file between runs.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from termjack.adapters import CLIAdapter
from termjack.blackjack.game_logger import GameLogger
from termjack.common.errors import InvariantViolation, ProfileStoreError
from termjack.engine import BlackjackEngine
from termjack.events import EventBus
from termjack.storage.profile import DEFAULT_PROFILE_PATH
from termjack.ui.render import render_goodbye

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play blackjack in the terminal.")
    parser.add_argument(
        "--profile",
        default=str(DEFAULT_PROFILE_PATH),
        help="Player profile JSON file (default: %(default)s)",
    )
    parser.add_argument(
        "--log-file",
        default="blackjack.log",
        help="Session log file, truncated at startup (default: %(default)s)",
    )
    parser.add_argument(
        "--no-log", action="store_true", help="Do not write a session log"
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Multiplier for dealer pauses; 0 plays instantly (default: %(default)s)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed the shuffle for a repeatable game"
    )
    return parser


async def play(config: dict, adapter: Optional[CLIAdapter] = None) -> None:
    """Run one game session until the player quits."""
    engine = BlackjackEngine(adapter or CLIAdapter(), config)
    await engine.initialize()
    try:
        await engine.run()
    finally:
        await engine.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.speed < 0:
        print("--speed must not be negative", file=sys.stderr)
        return 2

    game_logger = None
    if not args.no_log:
        game_logger = GameLogger(args.log_file)
        game_logger.attach(EventBus.get_instance())

    config = {"profile_path": args.profile, "speed": args.speed, "seed": args.seed}
    try:
        asyncio.run(play(config))
    except ProfileStoreError as exc:
        logger.error("%s", exc)
        print(exc, file=sys.stderr)
        return 1
    except InvariantViolation:
        logger.exception("Game aborted on an internal error")
        print("Game aborted on an internal error, see the log.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Game terminated by user (Ctrl+C)")
    finally:
        if game_logger is not None:
            game_logger.close()

    print(render_goodbye(args.profile))
    return 0


if __name__ == "__main__":
    sys.exit(main())
