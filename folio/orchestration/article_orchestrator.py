"""Article orchestrator coordinating cache, translation and rendering."""

import asyncio
import dataclasses
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog

from folio.orchestration.strategies import (
    RenderContext,
    RenderedContent,
    RenderStrategy,
    ServeCacheStrategy,
    ServeOriginalStrategy,
    StrategyStatus,
    TranslateFreshStrategy,
)
from folio.orchestration.view_resolution import ViewMode, ViewState, resolve_view
from folio.posts.models import Post, PostSummary
from folio.posts.post_store import PostStore
from folio.rendering.compiler import MarkdownCompiler
from folio.translation.cache import TranslationCache
from folio.translation.translator import Translator
from folio.utils.exceptions import (
    CompileError,
    ConfigurationError,
    FolioError,
    PostFormatError,
    PostNotFoundError,
    TranslationError,
)

logger = structlog.get_logger(__name__)

DEFAULT_TRANSLATION_CONCURRENCY = 8


@dataclass
class RenderedArticle:
    """Response object for an article request.

    Attributes:
        slug: Post slug
        title: Title to display (translated when the body is)
        date: Publication date
        html: Compiled article body
        translated: Whether a translation is being shown
        view: Banner and toggle state
        strategy: Name of the strategy that produced the content
        latency_ms: Time spent rendering
    """

    slug: str
    title: str
    date: str
    html: str
    translated: bool
    view: ViewState
    strategy: str
    latency_ms: int = 0


@dataclass
class WarmResult:
    """Outcome of pre-rendering one post in one language."""

    slug: str
    target_lang: str
    strategy: str | None
    translated: bool
    error: str | None = None


class ArticleOrchestrator:
    """Central orchestrator for article rendering.

    Evaluates the strategy chain (serve cache, translate fresh, serve
    original) until one succeeds. The reader always gets compiled content;
    translation is best-effort.

    Attributes:
        compiler: Markdown compiler
        cache: Translation cache
        translator: Text translator (None disables translation)
        post_store: Source of posts for slug-based rendering and listings
        strategies: Ordered fallback chain
    """

    def __init__(
        self,
        compiler: MarkdownCompiler,
        cache: TranslationCache,
        translator: Translator | None = None,
        post_store: PostStore | None = None,
        concurrency: int = DEFAULT_TRANSLATION_CONCURRENCY,
        strategies: Sequence[RenderStrategy] | None = None,
    ) -> None:
        """Initialize ArticleOrchestrator.

        Args:
            compiler: MarkdownCompiler instance (required)
            cache: TranslationCache instance (required)
            translator: Translator instance (optional; without it posts are served as-is)
            post_store: PostStore instance (required for render_slug, warm_cache)
            concurrency: Maximum concurrent translation calls per render
            strategies: Custom strategy chain (defaults to the standard three)
        """
        self.compiler = compiler
        self.cache = cache
        self.translator = translator
        self.post_store = post_store
        self.concurrency = max(1, concurrency)
        self.strategies: list[RenderStrategy] = list(
            strategies
            if strategies is not None
            else [
                ServeCacheStrategy(cache, compiler),
                TranslateFreshStrategy(translator, cache, compiler, concurrency=self.concurrency),
                ServeOriginalStrategy(compiler),
            ]
        )

        # One in-flight build per (slug, language) within this process; entries
        # hold the lock and the number of renders using it
        self._build_locks: dict[tuple[str, str], tuple[asyncio.Lock, int]] = {}

        logger.info(
            "article_orchestrator_initialized",
            strategies=[strategy.name for strategy in self.strategies],
            translation_enabled=translator is not None,
            concurrency=self.concurrency,
        )

    async def render(
        self,
        post: Post,
        target_lang: str,
        view_mode: ViewMode = ViewMode.TRANSLATED,
    ) -> RenderedArticle:
        """Render a post for a reader language.

        Args:
            post: Post loaded from the store
            target_lang: Reader's language
            view_mode: Requested variant (translated or original)

        Returns:
            RenderedArticle with compiled HTML and banner state

        Raises:
            CompileError: If the original content itself fails to compile
        """
        start_time = time.perf_counter()
        context = RenderContext(post=post, target_lang=target_lang, view_mode=view_mode)

        if context.wants_translation:
            async with self._single_flight(post.slug, target_lang):
                strategy_name, content = await self._run_chain(context)
        else:
            strategy_name, content = await self._run_chain(context)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        view = resolve_view(target_lang, post.lang, view_mode, translated=content.translated)

        logger.info(
            "article_rendered",
            slug=post.slug,
            target_lang=target_lang,
            view_mode=view_mode.value,
            strategy=strategy_name,
            translated=content.translated,
            latency_ms=latency_ms,
        )

        return RenderedArticle(
            slug=post.slug,
            title=content.title,
            date=post.date,
            html=content.html,
            translated=content.translated,
            view=view,
            strategy=strategy_name,
            latency_ms=latency_ms,
        )

    async def render_slug(
        self,
        slug: str,
        target_lang: str,
        view_mode: ViewMode = ViewMode.TRANSLATED,
    ) -> RenderedArticle:
        """Load a post by slug and render it.

        Raises:
            ConfigurationError: If no post store is configured
            PostNotFoundError: If the slug has no source file
            PostFormatError: If the source file has invalid front matter
            CompileError: If the original content fails to compile
        """
        store = self._require_store()
        post = await asyncio.to_thread(store.load_post, slug)
        return await self.render(post, target_lang, view_mode)

    async def translate_listing(
        self,
        summaries: Sequence[PostSummary],
        target_lang: str,
    ) -> list[PostSummary]:
        """Translate titles and descriptions for the article list.

        Summaries whose language differs from the reader's get their title
        and description translated concurrently; any field that fails keeps
        its original value. Input objects are not modified.

        Args:
            summaries: Listing in display order
            target_lang: Reader's language

        Returns:
            New summaries in the same order
        """
        if self.translator is None:
            return [dataclasses.replace(summary) for summary in summaries]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def translate_field(text: str, slug: str, field: str) -> str:
            assert self.translator is not None
            async with semaphore:
                try:
                    return await self.translator.translate(text, target_lang)
                except TranslationError as e:
                    logger.warning(
                        "listing_translation_failed",
                        slug=slug,
                        field=field,
                        target_lang=target_lang,
                        error=e.message,
                    )
                    return text

        async def translate_summary(summary: PostSummary) -> PostSummary:
            if summary.lang is None or summary.lang == target_lang:
                return dataclasses.replace(summary)
            title, description = await asyncio.gather(
                translate_field(summary.title, summary.slug, "title"),
                translate_field(summary.description, summary.slug, "description"),
            )
            return dataclasses.replace(summary, title=title, description=description)

        return list(await asyncio.gather(*(translate_summary(s) for s in summaries)))

    async def warm_cache(self, target_langs: Sequence[str]) -> list[WarmResult]:
        """Render every post in every language to pre-populate the cache.

        Posts are processed one at a time; a failure on one post is recorded
        and does not stop the run.

        Args:
            target_langs: Languages to translate into

        Returns:
            One WarmResult per (post, language) pair that needs translation

        Raises:
            ConfigurationError: If no post store is configured
        """
        store = self._require_store()
        results: list[WarmResult] = []

        for summary in await asyncio.to_thread(store.list_posts):
            for target_lang in target_langs:
                if summary.lang is None or summary.lang == target_lang:
                    continue
                try:
                    article = await self.render_slug(summary.slug, target_lang)
                    results.append(
                        WarmResult(
                            slug=summary.slug,
                            target_lang=target_lang,
                            strategy=article.strategy,
                            translated=article.translated,
                        )
                    )
                except (PostNotFoundError, PostFormatError, CompileError) as e:
                    logger.error(
                        "warm_cache_post_failed",
                        slug=summary.slug,
                        target_lang=target_lang,
                        error=e.message,
                        error_type=type(e).__name__,
                    )
                    results.append(
                        WarmResult(
                            slug=summary.slug,
                            target_lang=target_lang,
                            strategy=None,
                            translated=False,
                            error=e.message,
                        )
                    )

        logger.info(
            "warm_cache_completed",
            pairs=len(results),
            translated=sum(1 for r in results if r.translated),
            failed=sum(1 for r in results if r.error),
        )
        return results

    async def _run_chain(self, context: RenderContext) -> tuple[str, RenderedContent]:
        for strategy in self.strategies:
            result = await strategy.attempt(context)
            logger.debug(
                "strategy_evaluated",
                slug=context.post.slug,
                strategy=strategy.name,
                status=result.status.value,
                reason=result.reason,
            )
            if result.status is StrategyStatus.SUCCESS and result.content is not None:
                return strategy.name, result.content

        raise FolioError(f"No render strategy produced content for '{context.post.slug}'")

    @asynccontextmanager
    async def _single_flight(self, slug: str, target_lang: str) -> AsyncIterator[None]:
        """Serialize renders of one key; the lock is dropped when its last user leaves."""
        key = (slug, target_lang)
        lock, users = self._build_locks.get(key, (asyncio.Lock(), 0))
        self._build_locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._build_locks[key]
            if users == 1:
                del self._build_locks[key]
            else:
                self._build_locks[key] = (lock, users - 1)

    def _require_store(self) -> PostStore:
        if self.post_store is None:
            raise ConfigurationError("Post store not configured for this orchestrator")
        return self.post_store
