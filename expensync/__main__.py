"""Command line entry point: run the API server or apply migrations."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from expensync.utils.settings import get_server_settings

logger = logging.getLogger("expensync")

MIGRATIONS_DIR = Path(__file__).resolve().parent / "db" / "migrations"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = get_server_settings()
    parser = argparse.ArgumentParser(prog="expensync", description="Expensync personal finance API")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development)")

    migrate = sub.add_parser("migrate", help="Upgrade the database schema")
    migrate.add_argument("revision", nargs="?", default="head")
    return parser.parse_args(argv)


def alembic_config(database_url: Optional[str] = None):
    from alembic.config import Config

    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    if database_url:
        cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def run_migrations(revision: str = "head", database_url: Optional[str] = None) -> None:
    from alembic import command

    if database_url is None:
        from expensync.db.database import DATABASE_URL
        database_url = DATABASE_URL
    command.upgrade(alembic_config(database_url), revision)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=get_server_settings().log_level)
    if args.command == "serve":
        import uvicorn

        logger.info("serve: host=%s port=%s reload=%s", args.host, args.port, args.reload)
        uvicorn.run("expensync.api.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0
    if args.command == "migrate":
        logger.info("migrate: revision=%s", args.revision)
        run_migrations(args.revision)
        return 0
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
