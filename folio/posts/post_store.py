"""Post store for blog articles.

Loads markdown files with YAML front matter from the posts directory and
converts them to Post objects. Always reads fresh from disk.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any

import structlog
import yaml

from folio.common.constants import POST_EXTENSIONS
from folio.posts.models import Post, PostSummary
from folio.utils.exceptions import PostFormatError, PostNotFoundError

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ["title", "date", "description"]


class PostStore:
    """Read posts from a directory of ``.md`` / ``.mdx`` files.

    Both extensions share one slug namespace; when both exist for a slug
    the ``.mdx`` file wins.

    Example:
        >>> store = PostStore("posts")
        >>> for summary in store.list_posts():
        ...     print(summary.date, summary.title)
        >>> post = store.load_post("hello-world")
    """

    DEFAULT_POSTS_PATH = Path("posts")

    def __init__(self, posts_path: str | Path | None = None) -> None:
        """Initialize store.

        Args:
            posts_path: Directory holding post source files. Defaults to posts/
        """
        self.posts_path = Path(posts_path) if posts_path else self.DEFAULT_POSTS_PATH
        self.logger = logger.bind(component="post_store")

    def list_posts(self) -> list[PostSummary]:
        """List metadata for every valid post.

        Returns:
            Summaries sorted by date descending, equal dates by slug ascending.
            Empty if the posts directory does not exist.
        """
        if not self.posts_path.is_dir():
            self.logger.warning("posts_directory_missing", posts_path=str(self.posts_path))
            return []

        summaries: list[PostSummary] = []
        skipped = 0

        for slug, file_path in self._discover().items():
            try:
                frontmatter, _ = self._read(file_path)
                summaries.append(self._build_summary(slug, frontmatter))
            except (OSError, PostFormatError) as e:
                skipped += 1
                self.logger.warning(
                    "post_skipped",
                    file_path=str(file_path),
                    error=str(e),
                    error_type=type(e).__name__,
                )

        # Two stable sorts: secondary key first
        summaries.sort(key=lambda s: s.slug)
        summaries.sort(key=lambda s: s.date, reverse=True)

        self.logger.info("posts_listed", count=len(summaries), skipped=skipped)
        return summaries

    def load_post(self, slug: str) -> Post:
        """Load a single post with its full body and modification time.

        Args:
            slug: Post identifier (filename without extension)

        Returns:
            Post instance

        Raises:
            PostNotFoundError: If no source file exists for the slug
            PostFormatError: If the front matter is missing or invalid
        """
        file_path = self.resolve_path(slug)
        if file_path is None:
            raise PostNotFoundError(slug)

        try:
            frontmatter, content = self._read(file_path)
            mtime = file_path.stat().st_mtime
        except FileNotFoundError as e:
            # Removed between lookup and read
            raise PostNotFoundError(slug) from e

        summary = self._build_summary(slug, frontmatter)

        return Post(
            slug=slug,
            title=summary.title,
            date=summary.date,
            description=summary.description,
            content=content,
            mtime=mtime,
            tags=summary.tags,
            lang=summary.lang,
            source_path=file_path,
        )

    def resolve_path(self, slug: str) -> Path | None:
        """Find the source file for a slug.

        Args:
            slug: Post identifier

        Returns:
            Path of the ``.mdx`` or ``.md`` file, or None if neither exists
        """
        if not slug or "/" in slug or "\\" in slug or slug.startswith("."):
            return None

        for extension in POST_EXTENSIONS:
            candidate = self.posts_path / f"{slug}{extension}"
            if candidate.is_file():
                return candidate
        return None

    def _discover(self) -> dict[str, Path]:
        """Map each slug to its source file, honoring extension priority."""
        found: dict[str, Path] = {}
        for extension in reversed(POST_EXTENSIONS):
            for file_path in sorted(self.posts_path.glob(f"*{extension}")):
                if file_path.is_file():
                    found[file_path.stem] = file_path
        return found

    def _read(self, file_path: Path) -> tuple[dict[str, Any], str]:
        """Read and split a post file.

        Raises:
            OSError: If the file cannot be read
            PostFormatError: If the file is not UTF-8 or the front matter is invalid
        """
        try:
            text = file_path.read_text(encoding="utf-8")
            frontmatter, content = self._parse_frontmatter(text)
        except (UnicodeDecodeError, yaml.YAMLError, ValueError) as e:
            raise PostFormatError(f"{file_path.name}: {e}") from e

        missing = [
            name
            for name in REQUIRED_FIELDS
            if frontmatter.get(name) is None or str(frontmatter[name]).strip() == ""
        ]
        if missing:
            raise PostFormatError(
                f"{file_path.name}: missing front matter field(s): {', '.join(missing)}"
            )

        return frontmatter, content

    def _parse_frontmatter(self, content: str) -> tuple[dict[str, Any], str]:
        """Parse YAML front matter from markdown content.

        Args:
            content: Full file content including front matter

        Returns:
            Tuple of (frontmatter_dict, content_without_frontmatter)

        Raises:
            ValueError: If front matter is missing or not a mapping
        """
        lines = content.split("\n")

        # Handle optional \r from CRLF files
        if not lines or lines[0].lstrip("\ufeff").rstrip("\r") != "---":
            raise ValueError("Missing YAML front matter (file must start with '---')")

        closing_index = None
        for i in range(1, len(lines)):
            if lines[i].rstrip("\r") == "---":
                closing_index = i
                break

        if closing_index is None:
            raise ValueError("Invalid YAML front matter (missing closing '---')")

        frontmatter_str = "\n".join(line.rstrip("\r") for line in lines[1:closing_index])
        frontmatter = yaml.safe_load(frontmatter_str)

        if not isinstance(frontmatter, dict):
            raise ValueError("YAML front matter must be a mapping")

        content_lines = [line.rstrip("\r") for line in lines[closing_index + 1 :]]
        markdown_content = "\n".join(content_lines).strip("\n")

        return frontmatter, markdown_content

    def _build_summary(self, slug: str, frontmatter: dict[str, Any]) -> PostSummary:
        try:
            tags = _normalize_tags(frontmatter.get("tags"))
        except TypeError as e:
            raise PostFormatError(f"{slug}: {e}") from e

        return PostSummary(
            slug=slug,
            title=str(frontmatter["title"]).strip(),
            date=_normalize_date(frontmatter["date"]),
            description=str(frontmatter["description"]).strip(),
            tags=tags,
            lang=_normalize_lang(frontmatter.get("lang")),
        )


def _normalize_date(value: Any) -> str:
    """Render YAML date/datetime values as ISO strings."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def _normalize_tags(value: Any) -> list[str]:
    """Accept a YAML list or a comma separated string; drop blanks and duplicates.

    Raises:
        TypeError: For any other YAML value (number, mapping, ...)
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw: list[Any] = value.split(",")
    elif isinstance(value, list | tuple):
        raw = list(value)
    else:
        raise TypeError(
            f"tags must be a list or a comma separated string, not {type(value).__name__}"
        )

    tags: list[str] = []
    for item in raw:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _normalize_lang(value: Any) -> str | None:
    """Reduce a language tag to its primary subtag (``zh-CN`` -> ``zh``)."""
    if value is None:
        return None
    lang = str(value).strip().lower().replace("_", "-")
    if not lang:
        return None
    return lang.split("-", 1)[0]
