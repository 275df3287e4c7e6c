"""Configuration management for environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

from folio.common.constants import (
    CACHE_BACKENDS,
    DEFAULT_POSTS_PER_PAGE,
    SUPPORTED_LANGUAGES,
)
from folio.utils.exceptions import ConfigurationError


def get_required_env(key: str) -> str:
    """Get a required environment variable or raise.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ConfigurationError: If variable is not set or empty
    """
    value = os.getenv(key)
    if not value or not value.strip():
        raise ConfigurationError(f"{key} environment variable is not set")
    return value


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Load configuration from .env file and environment.

        Raises:
            ConfigurationError: If a value is present but invalid
        """
        env_path = Path(".env")
        if env_path.exists():
            load_dotenv(env_path)

        # Content and storage
        self.posts_dir = Path(os.getenv("POSTS_DIR", "posts"))
        self.cache_backend = os.getenv("CACHE_BACKEND", "file").strip().lower()
        self.cache_dir = Path(os.getenv("CACHE_DIR", ".cache/translations"))
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///data/folio.db")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ConfigurationError(
                f"Invalid CACHE_BACKEND: {self.cache_backend}. "
                f"Expected one of: {', '.join(CACHE_BACKENDS)}"
            )

        # Languages
        self.supported_languages = self._get_languages(
            "SUPPORTED_LANGUAGES", ",".join(SUPPORTED_LANGUAGES)
        )
        self.default_language = os.getenv("DEFAULT_LANGUAGE", "en").strip().lower()
        if self.default_language not in self.supported_languages:
            raise ConfigurationError(
                f"DEFAULT_LANGUAGE '{self.default_language}' is not in SUPPORTED_LANGUAGES"
            )

        # Translation calls
        self.translation_timeout_seconds = self._get_float("TRANSLATION_TIMEOUT_SECONDS", 30.0)
        self.translation_max_retries = self._get_int("TRANSLATION_MAX_RETRIES", 3)
        self.translation_backoff_seconds = self._get_float("TRANSLATION_BACKOFF_SECONDS", 2.0)
        self.translation_concurrency = self._get_int("TRANSLATION_CONCURRENCY", 8, minimum=1)
        self.llm_default_model = os.getenv("LLM_DEFAULT_MODEL", "gpt-4.1")

        # Presentation
        self.posts_per_page = self._get_int(
            "POSTS_PER_PAGE", DEFAULT_POSTS_PER_PAGE, minimum=1
        )

        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    def _get_int(self, key: str, default: int, minimum: int = 0) -> int:
        """Parse an integer environment variable.

        Raises:
            ConfigurationError: If the value is not an integer or is below minimum
        """
        raw = os.getenv(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            value = int(raw)
        except ValueError as e:
            raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from e
        if value < minimum:
            raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
        return value

    def _get_float(self, key: str, default: float) -> float:
        """Parse a non-negative float environment variable.

        Raises:
            ConfigurationError: If the value is not a number or is negative
        """
        raw = os.getenv(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            value = float(raw)
        except ValueError as e:
            raise ConfigurationError(f"{key} must be a number, got '{raw}'") from e
        if value < 0:
            raise ConfigurationError(f"{key} must not be negative, got {value}")
        return value

    def _get_languages(self, key: str, default: str) -> list[str]:
        raw = os.getenv(key, default)
        languages = [code.strip().lower() for code in raw.split(",") if code.strip()]
        if not languages:
            raise ConfigurationError(f"{key} must list at least one language code")
        return languages

    @staticmethod
    def get_optional(key: str, default: str | None = None) -> str | None:
        """Get optional environment variable with default value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Environment variable value or default
        """
        return os.getenv(key, default)
