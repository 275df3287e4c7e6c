"""CLI command for listing posts, optionally translated for a reader language."""

import asyncio

import click
import structlog
from dotenv import load_dotenv

from folio.cli.utils import build_orchestrator
from folio.posts.models import PostSummary
from folio.posts.pagination import paginate
from folio.utils.config import Config

load_dotenv()
logger = structlog.get_logger(__name__)


async def _load_listing(config: Config, lang: str, translate: bool) -> list[PostSummary]:
    orchestrator = build_orchestrator(config, translate=translate)
    assert orchestrator.post_store is not None
    summaries = await asyncio.to_thread(orchestrator.post_store.list_posts)
    if translate:
        summaries = await orchestrator.translate_listing(summaries, lang)
    return summaries


def _display_summary(summary: PostSummary) -> None:
    lang_label = summary.lang or "-"
    click.echo(f"{summary.date}  [{lang_label}]  {summary.slug}")
    click.echo(f"    {summary.title}")
    if summary.description:
        click.echo(f"    {summary.description}")
    if summary.tags:
        click.echo(f"    tags: {', '.join(summary.tags)}")


@click.command("list-posts")
@click.option(
    "--lang", "-l", type=str, default=None, help="Reader language (default: DEFAULT_LANGUAGE)"
)
@click.option("--page", "-p", type=int, default=1, help="Page number (default: 1)")
@click.option(
    "--translate/--no-translate",
    default=False,
    help="Translate titles and descriptions into the reader language",
)
def list_posts(lang: str | None, page: int, translate: bool) -> None:
    """List posts newest first, one page at a time."""
    click.echo("=" * 80)
    click.echo("Folio - Posts")
    click.echo("=" * 80)
    click.echo()

    try:
        config = Config()
        target_lang = (lang or config.default_language).lower()
        if target_lang not in config.supported_languages:
            click.echo(f"Error: unsupported language '{target_lang}'", err=True)
            raise click.Abort()

        summaries = asyncio.run(_load_listing(config, target_lang, translate))
        result = paginate(summaries, page=page, per_page=config.posts_per_page)

        if not result.items:
            click.echo("No posts found.")
            return

        for summary in result.items:
            _display_summary(summary)
            click.echo()

        click.echo("-" * 80)
        click.echo(
            f"Page {result.page} of {result.total_pages} ({result.total_items:,} posts)"
        )

    except click.Abort:
        raise
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("list_posts_failed", error=str(e), exc_info=True)
        raise click.Abort() from e


if __name__ == "__main__":
    list_posts()
