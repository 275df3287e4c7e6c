"""Main entry point for the folio command-line interface."""

import sys

import click

from folio import __version__
from folio.cli.clear_cache import clear_cache
from folio.cli.db_upgrade import db_upgrade
from folio.cli.list_posts import list_posts
from folio.cli.render import render
from folio.cli.warm_cache import warm_cache
from folio.utils.config import Config, ConfigurationError
from folio.utils.logger import configure_logging, get_logger


@click.group()
@click.version_option(__version__, prog_name="folio")
def cli() -> None:
    """Bilingual blog backend: list, render and pre-translate posts."""
    try:
        config = Config()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        click.echo(
            "Please check your .env file and ensure all variables have valid values.",
            err=True,
        )
        raise click.Abort() from e

    configure_logging(config.log_level)
    get_logger(__name__).debug("cli_started", version=__version__)


cli.add_command(list_posts)
cli.add_command(render)
cli.add_command(warm_cache)
cli.add_command(clear_cache)
cli.add_command(db_upgrade)


def main() -> int:
    """Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        cli(standalone_mode=False)
        return 0
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as e:
        e.show()
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
