"""CLI command for applying database migrations."""

import click
import structlog
from dotenv import load_dotenv

from folio.utils.config import Config
from folio.utils.database import upgrade_database

load_dotenv()
logger = structlog.get_logger(__name__)


@click.command("db-upgrade")
@click.option(
    "--revision",
    type=str,
    default="head",
    help="Target Alembic revision (default: head)",
)
def db_upgrade(revision: str) -> None:
    """Create or upgrade the translation cache table in DATABASE_URL."""
    try:
        config = Config()
        click.echo(f"Upgrading database to revision '{revision}'...")
        upgrade_database(config.database_url, revision=revision)
        click.echo("Database is up to date.")
        logger.info("database_upgraded", revision=revision)

    except KeyboardInterrupt:
        click.echo("\nUpgrade cancelled by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("db_upgrade_failed", error=str(e), exc_info=True)
        raise click.Abort() from e


if __name__ == "__main__":
    db_upgrade()
