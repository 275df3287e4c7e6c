"""Database schema management via Alembic."""

from pathlib import Path

import structlog
from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.engine import make_url

logger = structlog.get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def build_alembic_config(database_url: str) -> AlembicConfig:
    """Build an Alembic config pointing at the packaged migrations.

    Args:
        database_url: SQLAlchemy URL of the cache database

    Returns:
        Alembic Config with script location and URL set
    """
    config = AlembicConfig()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    config.attributes["url_override"] = True
    config.attributes["configure_logger"] = False
    return config


def upgrade_database(database_url: str, revision: str = "head") -> None:
    """Apply migrations up to a revision.

    Creates the parent directory of a file-based SQLite database first.

    Args:
        database_url: SQLAlchemy URL of the cache database
        revision: Target revision (default: head)
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    logger.info("database_upgrade_started", backend=url.get_backend_name(), revision=revision)
    command.upgrade(build_alembic_config(database_url), revision)
    logger.info("database_upgrade_completed", revision=revision)
