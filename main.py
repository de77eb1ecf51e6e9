"""
main.py — Command-line entry point.

Reset the demo data once and exit (non-zero on failure):

    python main.py

Serve the HTTP API instead:

    python main.py --serve
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from demo_reset.domain.errors import DemoResetError, ResetPhaseError
from demo_reset.repository.data_repository import DataRepository
from demo_reset.services.reset_service import DemoResetService
from demo_reset.utils.config import Settings, get_settings
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)

HOST = "127.0.0.1"
PORT = 8000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Wipe and repopulate cabins, guests and bookings for the demo environment.",
    )
    parser.add_argument("--database", type=Path, help="SQLite database path (overrides DATABASE_PATH)")
    parser.add_argument("--seed-dir", type=Path, help="directory holding the seed JSON files")
    parser.add_argument("--serve", action="store_true", help="start the HTTP API instead of resetting once")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = get_settings()
    if args.database is not None:
        settings = replace(settings, database_path=args.database)
    if args.seed_dir is not None:
        settings = replace(settings, seed_directory=args.seed_dir)
    return settings


def run_reset(settings: Settings) -> int:
    """Run one reset; return the process exit code."""
    print("Resetting demo data...")
    try:
        repository = DataRepository(settings)
        repository.initialize_database()
        report = DemoResetService(repository=repository, settings=settings).reset_demo()
    except ResetPhaseError as exc:
        print(f"Demo reset failed during '{exc.phase}': {exc}", file=sys.stderr)
        return 1
    except DemoResetError as exc:
        print(f"Demo reset failed: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Demo reset failed: cannot open database: {exc}", file=sys.stderr)
        return 1

    print(
        f"Demo reset complete: {report.cabins_inserted} cabins, "
        f"{report.guests_inserted} guests, {report.bookings_inserted} bookings."
    )
    return 0


def serve(host: str, port: int) -> None:
    import uvicorn

    logger.info("Serving demo reset API on http://%s:%s", host, port)
    uvicorn.run("app:app", host=host, port=port, log_level="info")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.serve:
        if args.database is not None:
            os.environ["DATABASE_PATH"] = str(args.database)
        if args.seed_dir is not None:
            os.environ["SEED_DIRECTORY"] = str(args.seed_dir)
        get_settings.cache_clear()
        serve(args.host, args.port)
        return 0
    return run_reset(resolve_settings(args))


if __name__ == "__main__":
    sys.exit(main())
