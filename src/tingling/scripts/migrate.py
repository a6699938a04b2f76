# src/tingling/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from tingling.core.logging import configure_logging
from tingling.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(url: str | None = None) -> Config:
    """Return an Alembic config for the bundled migrations directory."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", url: str | None = None) -> None:
    logger.info("Upgrading database to %s", revision)
    command.upgrade(build_config(url), revision)


def run_downgrade(revision: str, url: str | None = None) -> None:
    logger.info("Downgrading database to %s", revision)
    command.downgrade(build_config(url), revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate the Tingling database")
    parser.add_argument("direction", choices=["upgrade", "downgrade"], nargs="?", default="upgrade")
    parser.add_argument("--revision", default=None, help="Target revision (default: head / -1)")
    parser.add_argument("--url", default=None, help="Override the database URL")
    args = parser.parse_args()

    configure_logging()
    if args.direction == "upgrade":
        run_upgrade(args.revision or "head", args.url)
    else:
        run_downgrade(args.revision or "-1", args.url)


if __name__ == "__main__":
    main()
