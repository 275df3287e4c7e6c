"""Translation cache keyed by (slug, target language).

An entry is only served while its ``source_mtime`` matches the current
modification time of the post source file. Reads never raise (a corrupt or
unreadable entry is a miss) and writes never raise (a failed write is logged
and reported as False).
"""

import hashlib
import json
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from folio.utils.filename_utils import sanitize_filename

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached translation of one post into one language.

    Attributes:
        title: Translated title
        content: Translated and repaired markdown body
        source_mtime: Modification time of the post source when translated
    """

    title: str
    content: str
    source_mtime: float


class CachedTranslationRecord(BaseModel):
    """On-disk schema of a file cache entry."""

    model_config = ConfigDict(extra="ignore")

    slug: str
    target_lang: str
    title: str
    content: str
    source_mtime: float


class TranslationCache(ABC):
    """Abstract translation cache.

    Implementations must never raise from ``get`` or ``put``.
    """

    @abstractmethod
    def _read(self, slug: str, target_lang: str) -> CacheEntry | None:
        """Return the stored entry regardless of freshness.

        Raises:
            CacheError: Or any storage error; treated as a miss by ``get``
        """
        pass

    @abstractmethod
    def _write(self, slug: str, target_lang: str, entry: CacheEntry) -> None:
        """Persist an entry, replacing any previous one.

        Raises:
            CacheError: Or any storage error; logged by ``put``
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        pass

    @abstractmethod
    def _storage_errors(self) -> tuple[type[Exception], ...]:
        """Exception types that mean the storage medium failed."""
        pass

    def get(self, slug: str, target_lang: str, current_mtime: float) -> CacheEntry | None:
        """Look up a fresh translation.

        Args:
            slug: Post slug
            target_lang: Target language code
            current_mtime: Current modification time of the post source

        Returns:
            The entry if present and fresh, otherwise None
        """
        try:
            entry = self._read(slug, target_lang)
        except self._storage_errors() as e:
            logger.warning(
                "cache_read_failed",
                slug=slug,
                target_lang=target_lang,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if entry is None:
            logger.debug("translation_cache_miss", slug=slug, target_lang=target_lang)
            return None

        if entry.source_mtime != current_mtime:
            logger.info(
                "translation_cache_stale",
                slug=slug,
                target_lang=target_lang,
                cached_mtime=entry.source_mtime,
                current_mtime=current_mtime,
            )
            return None

        logger.debug("translation_cache_hit", slug=slug, target_lang=target_lang)
        return entry

    def put(self, slug: str, target_lang: str, entry: CacheEntry) -> bool:
        """Store a translation, overwriting any previous entry for the key.

        Args:
            slug: Post slug
            target_lang: Target language code
            entry: Translation to store

        Returns:
            True if persisted, False if the write failed
        """
        try:
            self._write(slug, target_lang, entry)
        except self._storage_errors() as e:
            logger.warning(
                "cache_write_failed",
                slug=slug,
                target_lang=target_lang,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        logger.info("translation_cached", slug=slug, target_lang=target_lang)
        return True


class MemoryTranslationCache(TranslationCache):
    """Process-local cache, lost on restart."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], CacheEntry] = {}

    def _read(self, slug: str, target_lang: str) -> CacheEntry | None:
        return self._entries.get((slug, target_lang))

    def _write(self, slug: str, target_lang: str, entry: CacheEntry) -> None:
        self._entries[(slug, target_lang)] = entry

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def _storage_errors(self) -> tuple[type[Exception], ...]:
        return ()

    def __len__(self) -> int:
        return len(self._entries)


def cache_key_filename(slug: str, target_lang: str) -> str:
    """Build a deterministic, filesystem-safe file name for a cache key.

    The readable prefix is lossy (non-ASCII slugs sanitize to the same
    stem), so a short hash of the exact key keeps names collision-free.

    Args:
        slug: Post slug
        target_lang: Target language code

    Returns:
        File name such as ``hello-world.zh.3f2a9c1b0d4e.json``
    """
    digest = hashlib.sha256(f"{slug}\0{target_lang}".encode()).hexdigest()[:12]
    try:
        stem = sanitize_filename(slug, max_length=80)
    except ValueError:
        stem = "post"
    lang = sanitize_filename(target_lang, max_length=16) if target_lang.strip() else "xx"
    return f"{stem}.{lang}.{digest}.json"


class FileTranslationCache(TranslationCache):
    """One JSON document per (slug, language) in a cache directory.

    Writes go to a temporary file that is atomically renamed into place, so
    a crashed write never leaves a truncated entry behind.
    """

    DEFAULT_CACHE_DIR = Path(".cache/translations")

    def __init__(self, cache_dir: str | Path | None = None) -> None:
        """Initialize cache.

        The directory is created lazily on first write so that a read-only
        deployment can still serve reads.

        Args:
            cache_dir: Directory for cache files. Defaults to .cache/translations
        """
        self.cache_dir = Path(cache_dir) if cache_dir else self.DEFAULT_CACHE_DIR

    def path_for(self, slug: str, target_lang: str) -> Path:
        return self.cache_dir / cache_key_filename(slug, target_lang)

    def _read(self, slug: str, target_lang: str) -> CacheEntry | None:
        path = self.path_for(slug, target_lang)
        if not path.is_file():
            return None

        record = CachedTranslationRecord.model_validate(
            json.loads(path.read_text(encoding="utf-8"))
        )
        if record.slug != slug or record.target_lang != target_lang:
            raise ValueError(f"Cache file {path.name} belongs to another key")

        return CacheEntry(
            title=record.title,
            content=record.content,
            source_mtime=record.source_mtime,
        )

    def _write(self, slug: str, target_lang: str, entry: CacheEntry) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        record = CachedTranslationRecord(
            slug=slug,
            target_lang=target_lang,
            title=entry.title,
            content=entry.content,
            source_mtime=entry.source_mtime,
        )

        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(record.model_dump_json(indent=2))
            os.replace(tmp_name, self.path_for(slug, target_lang))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear(self) -> int:
        if not self.cache_dir.is_dir():
            return 0
        count = 0
        for path in self.cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
            count += 1
        return count

    def _storage_errors(self) -> tuple[type[Exception], ...]:
        return (OSError, ValueError, PydanticValidationError)
