"""CLI command for pre-translating every post into the site languages."""

import asyncio

import click
import structlog
from dotenv import load_dotenv

from folio.cli.utils import build_orchestrator
from folio.utils.config import Config

load_dotenv()
logger = structlog.get_logger(__name__)


@click.command("warm-cache")
@click.option(
    "--lang",
    "-l",
    "langs",
    type=str,
    multiple=True,
    help="Target language (repeatable; default: all SUPPORTED_LANGUAGES)",
)
def warm_cache(langs: tuple[str, ...]) -> None:
    """Translate and cache every post that is not already fresh in the cache."""
    click.echo("=" * 80)
    click.echo("Folio - Warm Translation Cache")
    click.echo("=" * 80)
    click.echo()

    try:
        config = Config()
        target_langs = [lang.lower() for lang in langs] or list(config.supported_languages)
        unsupported = [lang for lang in target_langs if lang not in config.supported_languages]
        if unsupported:
            click.echo(f"Error: unsupported language(s): {', '.join(unsupported)}", err=True)
            raise click.Abort()

        click.echo(f"Target languages: {', '.join(target_langs)}")
        click.echo(f"Cache backend: {config.cache_backend}")
        click.echo()

        orchestrator = build_orchestrator(config)
        results = asyncio.run(orchestrator.warm_cache(target_langs))

        for result in results:
            if result.error:
                status = f"FAILED ({result.error})"
            elif result.translated:
                status = f"ok ({result.strategy})"
            else:
                status = "original served (translation unavailable)"
            click.echo(f"  {result.slug} -> {result.target_lang}: {status}")

        translated = sum(1 for r in results if r.translated)
        failed = sum(1 for r in results if r.error)

        click.echo("\n" + "=" * 80)
        click.echo("Warm-up Complete!")
        click.echo("=" * 80)
        click.echo(f"  Pairs processed: {len(results):,}")
        click.echo(f"  Translated: {translated:,}")
        click.echo(f"  Untranslated: {len(results) - translated - failed:,}")
        click.echo(f"  Failed: {failed:,}")

    except click.Abort:
        raise
    except KeyboardInterrupt:
        click.echo("\nWarm-up cancelled by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("warm_cache_failed", error=str(e), exc_info=True)
        raise click.Abort() from e


if __name__ == "__main__":
    warm_cache()
