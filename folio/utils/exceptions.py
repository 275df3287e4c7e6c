"""Custom exception hierarchy for the application."""


class FolioError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, is_retryable: bool = False) -> None:
        """Initialize exception.

        Args:
            message: Error message
            is_retryable: Whether the operation can be retried
        """
        super().__init__(message)
        self.message = message
        self.is_retryable = is_retryable


class ConfigurationError(FolioError):
    """Configuration or environment setup error."""

    pass


class PostNotFoundError(FolioError):
    """No source file exists for the requested post slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


class PostFormatError(FolioError):
    """Post source file has missing or invalid front matter."""

    pass


class TranslationError(FolioError):
    """Text translation failed (timeout, provider error, empty result)."""

    pass


class CompileError(FolioError):
    """Markdown could not be compiled into renderable output."""

    pass


class CacheError(FolioError):
    """Translation cache read or write error."""

    pass


class LLMProviderError(FolioError):
    """LLM provider API error."""

    pass


class ValidationError(FolioError):
    """Input validation error."""

    pass
