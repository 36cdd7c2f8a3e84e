"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``         → Launch the FastAPI server
  - ``python -m geocoin walk``    → Headless walk from the start position
"""

from __future__ import annotations

import argparse
import logging

from geocoin.core.enums import Direction

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocoin game core")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--store", type=str, default=None, help="JSON file for persistent state")
    srv.add_argument("--seed", type=int, default=0)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless walk ---
    walk = sub.add_parser("walk", help="Walk N tiles and report the caches passed")
    walk.add_argument("--steps", type=int, default=10)
    walk.add_argument("--direction", type=str, default=Direction.NORTH.value,
                      choices=[d.value for d in Direction])
    walk.add_argument("--collect", action="store_true", help="Take one coin from every visible cache")
    walk.add_argument("--store", type=str, default=None, help="JSON file for persistent state")
    walk.add_argument("--seed", type=int, default=0)
    walk.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig

    config = GameConfig(storage_path=args.store, rng_seed=args.seed, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_walk(args: argparse.Namespace) -> None:
    from geocoin.config import GameConfig
    from geocoin.core.models import Token
    from geocoin.engine.session import GameSession
    from geocoin.utils.logging import setup_logging

    config = GameConfig(storage_path=args.store, rng_seed=args.seed, log_level=args.log_level)
    setup_logging(config.log_level)

    session = GameSession(config)
    direction = Direction(args.direction)
    seen: set[str] = set()
    collected = 0

    try:
        for _ in range(args.steps):
            update = session.step(direction)
            for state in update.active:
                seen.add(state.cell.key)
                if args.collect and isinstance(session.withdraw(state.cell.i, state.cell.j), Token):
                    collected += 1
    finally:
        session.close()

    logger.info(
        "Walked %d tiles %s: %d distinct caches seen, %d coins collected this run, %d coins held",
        args.steps, direction.value, len(seen), collected, len(session.player.coins),
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "walk":
        _run_walk(args)


if __name__ == "__main__":
    main()
