"""CLI command for deleting every cached translation."""

import click
import structlog
from dotenv import load_dotenv

from folio.cli.utils import build_cache
from folio.utils.config import Config

load_dotenv()
logger = structlog.get_logger(__name__)


def _confirm_clear(force: bool) -> bool:
    """Prompt for confirmation unless forced."""
    click.echo("-" * 80)
    click.echo("WARNING: This will delete ALL cached translations!")
    click.echo("Every translated article will be regenerated on its next request.")
    click.echo("-" * 80)
    click.echo()

    if force:
        return True

    confirmation: str = click.prompt(
        'Type "CLEAR" to confirm (or Ctrl+C to cancel)', default="", show_default=False
    )
    return confirmation == "CLEAR"


@click.command("clear-cache")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Skip confirmation prompt (requires typing CLEAR otherwise)",
)
def clear_cache(force: bool) -> None:
    """Delete all cached translations from the configured backend."""
    click.echo("=" * 80)
    click.echo("Folio - Clear Translation Cache")
    click.echo("=" * 80)
    click.echo()

    try:
        config = Config()
        click.echo(f"Cache backend: {config.cache_backend}")
        click.echo()

        if not _confirm_clear(force):
            click.echo("\nClear cancelled - confirmation text did not match")
            return

        removed = build_cache(config).clear()

        click.echo("\n" + "=" * 80)
        click.echo("Cache Cleared!")
        click.echo("=" * 80)
        click.echo(f"  Entries removed: {removed:,}")

    except click.Abort:
        raise
    except KeyboardInterrupt:
        click.echo("\nClear cancelled by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("clear_cache_failed", error=str(e), exc_info=True)
        raise click.Abort() from e


if __name__ == "__main__":
    clear_cache()
