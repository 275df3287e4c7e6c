"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from folio.posts.models import Post
from folio.rendering.compiler import MarkdownCompiler
from folio.translation.cache import MemoryTranslationCache
from folio.translation.translator import Translator
from folio.utils.exceptions import TranslationError


class FakeTranslator(Translator):
    """Deterministic translator: prefixes text with the target language.

    Texts containing any string in ``fail_on`` raise TranslationError.
    Every call is recorded in ``calls``.
    """

    def __init__(self, fail_on: tuple[str, ...] = (), fail_all: bool = False) -> None:
        self.fail_on = fail_on
        self.fail_all = fail_all
        self.calls: list[tuple[str, str]] = []

    async def translate(self, text: str, target_lang: str) -> str:
        self.calls.append((text, target_lang))
        if self.fail_all or any(marker in text for marker in self.fail_on):
            raise TranslationError("translation backend unavailable", is_retryable=True)
        return f"[{target_lang}] {text}"


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    """Return an empty posts directory."""
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def write_post(posts_dir: Path) -> Callable[..., Path]:
    """Return a helper that writes a post source file with front matter."""

    def _write(
        slug: str,
        title: str = "Hello",
        date: str = "2024-01-01",
        description: str = "A post",
        body: str = "Some text.",
        lang: str | None = "en",
        tags: str | None = None,
        extension: str = ".md",
    ) -> Path:
        lines = ["---", f"title: {title}", f"date: {date}", f"description: {description}"]
        if lang is not None:
            lines.append(f"lang: {lang}")
        if tags is not None:
            lines.append(f"tags: {tags}")
        lines.append("---")
        path = posts_dir / f"{slug}{extension}"
        path.write_text("\n".join(lines) + "\n\n" + body + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Return a factory for in-memory posts."""

    def _make(
        slug: str = "hello-world",
        title: str = "Hello World",
        content: str = "# Intro\n\nSome text.",
        lang: str | None = "en",
        mtime: float = 1000.0,
        date: str = "2024-01-01",
    ) -> Post:
        return Post(
            slug=slug,
            title=title,
            date=date,
            description="A post",
            content=content,
            mtime=mtime,
            lang=lang,
        )

    return _make


@pytest.fixture
def make_translator() -> Callable[..., FakeTranslator]:
    """Return a factory for fake translators (optionally failing)."""
    return FakeTranslator


@pytest.fixture
def compiler() -> MarkdownCompiler:
    """Return a markdown compiler with default extensions."""
    return MarkdownCompiler()


@pytest.fixture
def memory_cache() -> MemoryTranslationCache:
    """Return an empty in-memory translation cache."""
    return MemoryTranslationCache()
