"""Named render strategies evaluated in order by the article orchestrator.

Each strategy returns a tagged ``StrategyResult``:

- ``SUCCESS``: content is ready, stop here
- ``SKIP``: the strategy does not apply to this request (or had nothing to offer)
- ``FAILURE``: the strategy applied and failed; the next one is tried

Chain: serve_cache -> translate_fresh -> serve_original.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import structlog

from folio.orchestration.view_resolution import ViewMode, translation_applies
from folio.posts.models import Post
from folio.rendering.compiler import MarkdownCompiler
from folio.translation.cache import CacheEntry, TranslationCache
from folio.translation.repair import repair_markdown
from folio.translation.splitter import (
    Segment,
    SegmentKind,
    has_unterminated_fence,
    reassemble,
    split_segments,
)
from folio.translation.translator import Translator
from folio.utils.exceptions import CompileError, TranslationError

logger = structlog.get_logger(__name__)


class StrategyStatus(str, Enum):
    """Outcome tag of a strategy attempt."""

    SUCCESS = "success"
    SKIP = "skip"
    FAILURE = "failure"


@dataclass(frozen=True)
class RenderContext:
    """Inputs shared by all strategies for one render."""

    post: Post
    target_lang: str
    view_mode: ViewMode

    @property
    def wants_translation(self) -> bool:
        return translation_applies(self.post.lang, self.target_lang, self.view_mode)


@dataclass(frozen=True)
class RenderedContent:
    """Compiled content produced by a strategy.

    Attributes:
        title: Title to display
        markdown: Markdown that was compiled
        html: Compiled HTML fragment
        translated: Whether title/markdown are a translation
    """

    title: str
    markdown: str
    html: str
    translated: bool


@dataclass(frozen=True)
class StrategyResult:
    """Tagged result of one strategy attempt."""

    status: StrategyStatus
    content: RenderedContent | None = None
    reason: str | None = None

    @classmethod
    def success(cls, content: RenderedContent) -> "StrategyResult":
        return cls(StrategyStatus.SUCCESS, content=content)

    @classmethod
    def skip(cls, reason: str) -> "StrategyResult":
        return cls(StrategyStatus.SKIP, reason=reason)

    @classmethod
    def failure(cls, reason: str) -> "StrategyResult":
        return cls(StrategyStatus.FAILURE, reason=reason)


class RenderStrategy(ABC):
    """One step of the fallback chain."""

    name: str = "strategy"

    @abstractmethod
    async def attempt(self, context: RenderContext) -> StrategyResult:
        """Try to produce content for the request.

        Args:
            context: Request inputs

        Returns:
            Tagged StrategyResult
        """
        pass


class ServeCacheStrategy(RenderStrategy):
    """Serve a fresh cached translation."""

    name = "serve_cache"

    def __init__(self, cache: TranslationCache, compiler: MarkdownCompiler) -> None:
        self.cache = cache
        self.compiler = compiler

    async def attempt(self, context: RenderContext) -> StrategyResult:
        if not context.wants_translation:
            return StrategyResult.skip("translation_not_requested")

        post = context.post
        entry = await asyncio.to_thread(self.cache.get, post.slug, context.target_lang, post.mtime)
        if entry is None:
            return StrategyResult.skip("cache_miss")

        try:
            html = self.compiler.compile(entry.content)
        except CompileError as e:
            logger.warning(
                "cached_translation_compile_failed",
                slug=post.slug,
                target_lang=context.target_lang,
                error=str(e),
            )
            return StrategyResult.failure("cached_compile_failed")

        logger.info("translation_cache_hit", slug=post.slug, target_lang=context.target_lang)
        return StrategyResult.success(
            RenderedContent(title=entry.title, markdown=entry.content, html=html, translated=True)
        )


class TranslateFreshStrategy(RenderStrategy):
    """Translate title and prose segments, validate by compiling, write through.

    Every unit (the title and each non-blank prose segment) is translated
    independently and concurrently; a unit that fails keeps its original
    text. Only a complete, successfully compiled translation is cached, so a
    partial result is served once and retried on the next request.
    """

    name = "translate_fresh"

    def __init__(
        self,
        translator: Translator | None,
        cache: TranslationCache,
        compiler: MarkdownCompiler,
        concurrency: int = 8,
    ) -> None:
        self.translator = translator
        self.cache = cache
        self.compiler = compiler
        self.concurrency = max(1, concurrency)

    async def attempt(self, context: RenderContext) -> StrategyResult:
        if not context.wants_translation:
            return StrategyResult.skip("translation_not_requested")
        if self.translator is None:
            return StrategyResult.skip("translator_not_configured")

        post = context.post
        target_lang = context.target_lang
        log = logger.bind(slug=post.slug, target_lang=target_lang)

        segments = split_segments(post.content)
        if has_unterminated_fence(segments):
            log.warning("translating_with_unterminated_fence")

        semaphore = asyncio.Semaphore(self.concurrency)
        title_result, *segment_results = await asyncio.gather(
            self._translate_unit(post.title, target_lang, semaphore, unit="title"),
            *(
                self._translate_segment(segment, index, target_lang, semaphore)
                for index, segment in enumerate(segments)
            ),
        )

        attempted = 1 + sum(1 for segment in segments if self._is_translatable(segment))
        failed = (title_result is None) + sum(1 for _, ok in segment_results if ok is False)

        if failed == attempted:
            log.warning("translation_unavailable", units=attempted)
            return StrategyResult.failure("translation_unavailable")

        title = title_result if title_result is not None else post.title
        content = reassemble([segment for segment, _ in segment_results])

        try:
            html = self.compiler.compile(content)
        except CompileError as e:
            log.error("translated_compile_failed", error=str(e))
            return StrategyResult.failure("translated_compile_failed")

        if failed == 0:
            entry = CacheEntry(title=title, content=content, source_mtime=post.mtime)
            await asyncio.to_thread(self.cache.put, post.slug, target_lang, entry)
        else:
            log.warning("partial_translation_not_cached", failed_units=failed, units=attempted)

        log.info("article_translated", units=attempted, failed_units=failed)
        return StrategyResult.success(
            RenderedContent(title=title, markdown=content, html=html, translated=True)
        )

    @staticmethod
    def _is_translatable(segment: Segment) -> bool:
        return segment.kind is SegmentKind.PROSE and not segment.is_blank

    async def _translate_segment(
        self,
        segment: Segment,
        index: int,
        target_lang: str,
        semaphore: asyncio.Semaphore,
    ) -> tuple[Segment, bool | None]:
        """Translate one prose segment, keeping its surrounding whitespace.

        Returns:
            (segment to use, True/False for translated/failed, None if not translatable)
        """
        if not self._is_translatable(segment):
            return segment, None

        text = segment.text
        core = text.strip()
        leading = text[: len(text) - len(text.lstrip())]
        trailing = text[len(text.rstrip()) :]

        translated = await self._translate_unit(
            core, target_lang, semaphore, unit=f"segment_{index}"
        )
        if translated is None:
            return segment, False

        repaired = repair_markdown(translated)
        return Segment(SegmentKind.PROSE, f"{leading}{repaired}{trailing}"), True

    async def _translate_unit(
        self,
        text: str,
        target_lang: str,
        semaphore: asyncio.Semaphore,
        unit: str,
    ) -> str | None:
        """Translate one unit; None on failure."""
        assert self.translator is not None

        async with semaphore:
            try:
                return await self.translator.translate(text, target_lang)
            except TranslationError as e:
                logger.warning(
                    "unit_translation_failed",
                    unit=unit,
                    target_lang=target_lang,
                    error=e.message,
                    is_retryable=e.is_retryable,
                )
                return None


class ServeOriginalStrategy(RenderStrategy):
    """Compile the original content. Always applies; a compile error is fatal."""

    name = "serve_original"

    def __init__(self, compiler: MarkdownCompiler) -> None:
        self.compiler = compiler

    async def attempt(self, context: RenderContext) -> StrategyResult:
        post = context.post
        # CompileError propagates: broken source markdown is an authoring error
        html = self.compiler.compile(post.content)
        return StrategyResult.success(
            RenderedContent(title=post.title, markdown=post.content, html=html, translated=False)
        )
