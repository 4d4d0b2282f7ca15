"""Entry point: ``python -m geocache``.

Supports two modes:
  - ``python -m geocache``        → Launch the FastAPI server for the map client
  - ``python -m geocache cli``    → Headless walk that prints surfaced caches
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic Geocache World")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=0)
    srv.add_argument("--save", type=str, default="geocache_save.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    srv.add_argument("--log-file", type=str, default=None)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Walk the player headlessly and list caches")
    cli.add_argument("--seed", type=int, default=0)
    cli.add_argument("--steps", type=int, default=5)
    cli.add_argument("--direction", type=str, default="north", choices=["north", "east", "south", "west"])
    cli.add_argument("--lat", type=float, default=None)
    cli.add_argument("--lng", type=float, default=None)
    cli.add_argument("--save", type=str, default=None, help="Save file; in-memory when omitted")
    cli.add_argument("--reset", action="store_true", help="Clear the save file before walking")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    cli.add_argument("--log-file", type=str, default=None)

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocache.api.app import create_app
    from geocache.config import GameConfig

    config = GameConfig(world_seed=args.seed, save_file=args.save, log_level=args.log_level, log_file=args.log_file)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from geocache.config import GameConfig
    from geocache.core.enums import Direction
    from geocache.engine.session import GameSession
    from geocache.persistence.storage import JsonFileStorage, MemoryStorage
    from geocache.utils.logging import setup_logging

    config = GameConfig(world_seed=args.seed, log_level=args.log_level, log_file=args.log_file)
    setup_logging(config.log_level, config.log_file)

    storage = JsonFileStorage(args.save) if args.save else MemoryStorage()
    session = GameSession(config, storage)
    if args.reset:
        session.reset()
    else:
        session.load()
    if args.lat is not None and args.lng is not None:
        session.set_position(args.lat, args.lng)

    direction = Direction[args.direction.upper()]
    for step in range(args.steps + 1):
        if step:
            session.move(direction)
        caches = session.visible_caches()
        logger.info(
            "Step %d at %s (cell %s): %d caches, %d coins nearby",
            step, session.position, session.current_cell().key,
            len(caches), sum(len(c) for c in caches),
        )
        for cache in caches:
            logger.debug("  %s: %s", cache.cell.key, ", ".join(c.label for c in cache.coins))

    session.save()
    logger.info(
        "Done. %d caches discovered, %d coins minted, %d held.",
        len(session.caches), session.total_minted(), session.total_held(),
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
