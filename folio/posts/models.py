"""Data models for blog posts."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PostSummary:
    """Post metadata shown in the article list.

    Attributes:
        slug: Stable identifier derived from the source filename
        title: Post title
        date: Publication date as an ISO string (YYYY-MM-DD)
        description: Short summary line
        tags: Ordered labels without duplicates
        lang: Authored language code, None when the post is never translated
    """

    slug: str
    title: str
    date: str
    description: str
    tags: list[str] = field(default_factory=list)
    lang: str | None = None


@dataclass
class Post:
    """A single article with its full markdown body.

    Built fresh from disk on every request. Only the translated derivative
    of a post is ever persisted.

    Attributes:
        slug: Stable identifier derived from the source filename
        title: Post title
        date: Publication date as an ISO string
        description: Short summary line
        content: Raw markdown body
        mtime: Source file modification time, used as the cache fingerprint
        tags: Ordered labels without duplicates
        lang: Authored language code, None when the post is never translated
        source_path: File the post was read from
    """

    slug: str
    title: str
    date: str
    description: str
    content: str
    mtime: float
    tags: list[str] = field(default_factory=list)
    lang: str | None = None
    source_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate post data after initialization.

        Raises:
            ValueError: If any required field is invalid
        """
        if not self.slug or not self.slug.strip():
            raise ValueError("Slug cannot be empty")
        if not self.title or not self.title.strip():
            raise ValueError("Title cannot be empty")

    def summary(self) -> PostSummary:
        """Return the metadata-only view of this post."""
        return PostSummary(
            slug=self.slug,
            title=self.title,
            date=self.date,
            description=self.description,
            tags=list(self.tags),
            lang=self.lang,
        )
