"""Shared utilities for CLI commands."""

from folio.llm.base_provider import RetryPolicy
from folio.llm.llm_router import MultiLLMRouter
from folio.orchestration.article_orchestrator import ArticleOrchestrator
from folio.posts.post_store import PostStore
from folio.rendering.compiler import MarkdownCompiler
from folio.translation.cache import (
    FileTranslationCache,
    MemoryTranslationCache,
    TranslationCache,
)
from folio.translation.database_cache import DatabaseTranslationCache
from folio.translation.translator import LLMTranslator, Translator
from folio.utils.config import Config


def build_cache(config: Config) -> TranslationCache:
    """Create the translation cache selected by CACHE_BACKEND.

    Args:
        config: Loaded configuration

    Returns:
        TranslationCache for the configured backend
    """
    if config.cache_backend == "database":
        return DatabaseTranslationCache(database_url=config.database_url)
    if config.cache_backend == "memory":
        return MemoryTranslationCache()
    return FileTranslationCache(cache_dir=config.cache_dir)


def build_translator(config: Config) -> Translator:
    """Create the LLM translator with the configured model, timeout and retries."""
    router = MultiLLMRouter(
        default_model=config.llm_default_model,
        retry_policy=RetryPolicy(
            max_retries=config.translation_max_retries,
            backoff_seconds=config.translation_backoff_seconds,
        ),
    )
    return LLMTranslator(router, timeout_seconds=config.translation_timeout_seconds)


def build_orchestrator(config: Config, translate: bool = True) -> ArticleOrchestrator:
    """Wire store, cache, compiler and translator into an orchestrator.

    Args:
        config: Loaded configuration
        translate: Whether to attach a translator (False serves originals only)

    Returns:
        ArticleOrchestrator ready to render
    """
    return ArticleOrchestrator(
        compiler=MarkdownCompiler(),
        cache=build_cache(config),
        translator=build_translator(config) if translate else None,
        post_store=PostStore(config.posts_dir),
        concurrency=config.translation_concurrency,
    )
