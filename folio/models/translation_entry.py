"""TranslationEntry model for the database-backed translation cache."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from folio.models.base import Base


class TranslationEntry(Base):
    """A translated post, one row per (slug, target language).

    Attributes:
        id: Unique identifier (UUID)
        slug: Post slug
        target_lang: Language the post was translated into
        title: Translated title
        content: Translated markdown body
        source_mtime: Modification time of the source file at translation time
        updated_at: When the row was last written
    """

    __tablename__ = "translation_cache"
    __table_args__ = (UniqueConstraint("slug", "target_lang", name="uq_translation_cache_key"),)

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    target_lang: Mapped[str] = mapped_column(String(16), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Freshness fingerprint
    source_mtime: Mapped[float] = mapped_column(Float, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<TranslationEntry(slug='{self.slug}', target_lang='{self.target_lang}')>"
