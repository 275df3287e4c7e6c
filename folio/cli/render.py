"""CLI command for rendering one post for a reader language."""

import asyncio
import html
import json
from dataclasses import asdict
from pathlib import Path

import click
import structlog
from dotenv import load_dotenv

from folio.cli.utils import build_orchestrator
from folio.common.constants import BACK_TO_HOME
from folio.orchestration.article_orchestrator import RenderedArticle
from folio.orchestration.view_resolution import BannerKind, ViewMode
from folio.utils.config import Config
from folio.utils.exceptions import PostNotFoundError

load_dotenv()
logger = structlog.get_logger(__name__)


def _to_html(article: RenderedArticle, lang: str) -> str:
    """Wrap the rendered body with title, banner and toggle link.

    Metadata is escaped; ``article.html`` is already compiled markup.
    """
    view = article.view
    parts = [
        f'<article lang="{html.escape(lang)}">',
        f"<h1>{html.escape(article.title)}</h1>",
        f"<time>{html.escape(article.date)}</time>",
    ]
    if view.banner is not BannerKind.NONE:
        parts.append(
            f'<aside class="translation-banner">{html.escape(view.banner_text)} '
            f'<a href="{html.escape(view.toggle_href or "")}">'
            f"{html.escape(view.toggle_label)}</a></aside>"
        )
    parts.append(article.html)
    parts.append(f'<a href="/">{BACK_TO_HOME.get(lang, BACK_TO_HOME["en"])}</a>')
    parts.append("</article>")
    return "\n".join(parts)


def _to_json(article: RenderedArticle) -> str:
    return json.dumps(asdict(article), ensure_ascii=False, indent=2)


@click.command("render")
@click.argument("slug", type=str)
@click.option(
    "--lang", "-l", type=str, default=None, help="Reader language (default: DEFAULT_LANGUAGE)"
)
@click.option(
    "--original", is_flag=True, default=False, help="Show the original instead of a translation"
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json"]),
    default="html",
    help="Output format (default: html)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write output to a file instead of stdout",
)
def render(
    slug: str,
    lang: str | None,
    original: bool,
    output_format: str,
    output: Path | None,
) -> None:
    """Render a post, translating it when the reader language differs.

    Examples:
        folio render hello-world --lang zh

        folio render hello-world --lang zh --original --format json
    """
    try:
        config = Config()
        target_lang = (lang or config.default_language).lower()
        if target_lang not in config.supported_languages:
            click.echo(f"Error: unsupported language '{target_lang}'", err=True)
            raise click.Abort()

        view_mode = ViewMode.ORIGINAL if original else ViewMode.TRANSLATED
        orchestrator = build_orchestrator(config, translate=not original)
        article = asyncio.run(orchestrator.render_slug(slug, target_lang, view_mode))

        rendered = _to_json(article) if output_format == "json" else _to_html(article, target_lang)

        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(rendered, encoding="utf-8")
            click.echo(f"Wrote {output} ({article.strategy}, translated={article.translated})")
        else:
            click.echo(rendered)

    except click.Abort:
        raise
    except PostNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        raise click.Abort() from None
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("render_failed", slug=slug, error=str(e), exc_info=True)
        raise click.Abort() from e


if __name__ == "__main__":
    render()
