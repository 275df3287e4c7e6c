"""Database-backed translation cache using SQLAlchemy."""

from datetime import UTC, datetime

import structlog
from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from folio.models.translation_entry import TranslationEntry
from folio.translation.cache import CacheEntry, TranslationCache

logger = structlog.get_logger(__name__)


class DatabaseTranslationCache(TranslationCache):
    """Translation cache stored in the ``translation_cache`` table.

    The schema is managed by Alembic (``folio db-upgrade``). A missing table
    or an unreachable database degrades to cache misses and failed writes.
    """

    def __init__(self, database_url: str | None = None, engine: Engine | None = None) -> None:
        """Initialize cache.

        Args:
            database_url: SQLAlchemy URL, used when no engine is given
            engine: Existing engine (takes precedence over database_url)

        Raises:
            ValueError: If neither database_url nor engine is provided
        """
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required")
            engine = create_engine(database_url)

        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def _read(self, slug: str, target_lang: str) -> CacheEntry | None:
        with self._session_factory() as session:
            row = self._find(session, slug, target_lang)
            if row is None:
                return None
            return CacheEntry(
                title=row.title,
                content=row.content,
                source_mtime=row.source_mtime,
            )

    def _write(self, slug: str, target_lang: str, entry: CacheEntry) -> None:
        with self._session_factory() as session:
            try:
                row = self._find(session, slug, target_lang)
                if row:
                    row.title = entry.title
                    row.content = entry.content
                    row.source_mtime = entry.source_mtime
                    row.updated_at = datetime.now(UTC)
                else:
                    session.add(
                        TranslationEntry(
                            slug=slug,
                            target_lang=target_lang,
                            title=entry.title,
                            content=entry.content,
                            source_mtime=entry.source_mtime,
                        )
                    )
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise

    def clear(self) -> int:
        with self._session_factory() as session:
            result = session.execute(delete(TranslationEntry))
            session.commit()
            removed = result.rowcount or 0

        logger.warning("translation_cache_cleared", removed=removed)
        return removed

    def count(self) -> int:
        """Return the number of cached translations."""
        with self._session_factory() as session:
            stmt = select(func.count()).select_from(TranslationEntry)
            return session.execute(stmt).scalar() or 0

    def _storage_errors(self) -> tuple[type[Exception], ...]:
        return (SQLAlchemyError,)

    @staticmethod
    def _find(session: Session, slug: str, target_lang: str) -> TranslationEntry | None:
        stmt = select(TranslationEntry).where(
            TranslationEntry.slug == slug,
            TranslationEntry.target_lang == target_lang,
        )
        return session.execute(stmt).scalar_one_or_none()
