"""Integration tests for rendering posts from disk through the file cache."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from folio.orchestration.article_orchestrator import ArticleOrchestrator
from folio.orchestration.view_resolution import BannerKind, ViewMode, parse_view_mode
from folio.posts.pagination import paginate
from folio.posts.post_store import PostStore
from folio.rendering.compiler import MarkdownCompiler
from folio.translation.cache import FileTranslationCache
from folio.translation.translator import Translator

pytestmark = pytest.mark.integration

BODY = """# Notes

Some *prose* before the code.

```python
# a comment, not a heading
print("hi")
```

- first
- second
"""


@pytest.fixture
def orchestrator_factory(
    tmp_path: Path,
    posts_dir: Path,
) -> Callable[[Translator], ArticleOrchestrator]:
    """Build orchestrators sharing one on-disk cache, as separate processes would."""

    def _build(translator: Translator) -> ArticleOrchestrator:
        return ArticleOrchestrator(
            compiler=MarkdownCompiler(),
            cache=FileTranslationCache(tmp_path / "cache"),
            translator=translator,
            post_store=PostStore(posts_dir),
        )

    return _build


async def test_translation_survives_restart(
    write_post: Callable[..., Path],
    make_translator: Callable[..., Translator],
    orchestrator_factory: Callable[[Translator], ArticleOrchestrator],
) -> None:
    """Test that a cached translation is reused by a new orchestrator."""
    write_post("notes", title="Notes", body=BODY, lang="zh")
    first_translator = make_translator()
    first = await orchestrator_factory(first_translator).render_slug("notes", "en")

    second_translator = make_translator()
    second = await orchestrator_factory(second_translator).render_slug("notes", "en")

    assert first.strategy == "translate_fresh"
    assert second.strategy == "serve_cache"
    assert second_translator.calls == []
    assert second.html == first.html
    assert second.view.banner is BannerKind.TRANSLATED


async def test_code_survives_translation(
    write_post: Callable[..., Path],
    make_translator: Callable[..., Translator],
    orchestrator_factory: Callable[[Translator], ArticleOrchestrator],
) -> None:
    """Test that fenced code renders exactly as authored."""
    write_post("notes", body=BODY, lang="zh")

    article = await orchestrator_factory(make_translator()).render_slug("notes", "en")

    assert "# a comment, not a heading" in article.html
    assert "[en]" not in article.html.split("<pre>")[1].split("</pre>")[0]


async def test_edit_invalidates_cache(
    write_post: Callable[..., Path],
    make_translator: Callable[..., Translator],
    orchestrator_factory: Callable[[Translator], ArticleOrchestrator],
) -> None:
    """Test that modifying the source triggers a fresh translation."""
    path = write_post("notes", body=BODY, lang="zh")
    await orchestrator_factory(make_translator()).render_slug("notes", "en")

    mtime = path.stat().st_mtime
    os.utime(path, (mtime + 5, mtime + 5))
    translator = make_translator()
    article = await orchestrator_factory(translator).render_slug("notes", "en")

    assert article.strategy == "translate_fresh"
    assert translator.calls


async def test_outage_serves_original(
    write_post: Callable[..., Path],
    make_translator: Callable[..., Translator],
    orchestrator_factory: Callable[[Translator], ArticleOrchestrator],
    tmp_path: Path,
) -> None:
    """Test that readers still get the post when translation is down."""
    write_post("notes", title="笔记", body=BODY, lang="zh")

    article = await orchestrator_factory(make_translator(fail_all=True)).render_slug(
        "notes", "en"
    )

    assert article.translated is False
    assert article.title == "笔记"
    assert "<em>prose</em>" in article.html
    assert not list((tmp_path / "cache").glob("*.json"))


async def test_toggle_round_trip(
    write_post: Callable[..., Path],
    make_translator: Callable[..., Translator],
    orchestrator_factory: Callable[[Translator], ArticleOrchestrator],
) -> None:
    """Test following the toggle link from translated to original and back."""
    write_post("notes", body=BODY, lang="zh")
    orchestrator = orchestrator_factory(make_translator())

    translated = await orchestrator.render_slug("notes", "en")
    mode = parse_view_mode(translated.view.toggle_href.split("=", 1)[1])
    original = await orchestrator.render_slug("notes", "en", mode)
    back = await orchestrator.render_slug(
        "notes", "en", parse_view_mode(original.view.toggle_href.split("=", 1)[1])
    )

    assert mode is ViewMode.ORIGINAL
    assert original.translated is False
    assert original.view.banner is BannerKind.AVAILABLE
    assert back.translated is True


def test_listing_pages(write_post: Callable[..., Path], posts_dir: Path) -> None:
    """Test paging through the post listing."""
    for day in range(1, 13):
        write_post(f"post-{day:02d}", date=f"2024-01-{day:02d}")

    summaries = PostStore(posts_dir).list_posts()
    second = paginate(summaries, page=2, per_page=10)

    assert [s.slug for s in second.items] == ["post-02", "post-01"]
    assert second.total_pages == 2
