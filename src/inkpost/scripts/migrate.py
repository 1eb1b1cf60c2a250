# src/inkpost/scripts/migrate.py
"""Apply Alembic migrations up to the latest revision."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from inkpost.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.effective_database_url)
    return cfg


def run_upgrade_head(database_url: str | None = None) -> None:
    logger.info("Upgrading database schema to head")
    command.upgrade(build_config(database_url), "head")


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    run_upgrade_head()
