"""Provider interface, request/response types and retry policy."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


@dataclass
class GenerationOptions:
    """Options for one generation request.

    Args:
        model: Model identifier (e.g., "gpt-4.1", "claude-sonnet-4-5")
        temperature: Sampling temperature (low values keep translations literal)
        max_tokens: Output ceiling; hitting it is treated as a failed translation
        system_prompt: Optional system instructions sent ahead of the prompt
    """

    model: str
    temperature: float = 0.2
    max_tokens: int = 4096
    system_prompt: str | None = None


@dataclass
class LLMResponse:
    """Completed generation with usage accounting."""

    text: str
    provider: str
    model: str
    tokens_prompt: int
    tokens_completion: int
    cost_usd: float
    latency_ms: int


@dataclass
class RetryPolicy:
    """Exponential backoff for transient provider errors.

    Args:
        max_retries: Retries after the first attempt (0 disables retrying)
        backoff_seconds: Wait before the first retry; doubles on each retry
    """

    max_retries: int = 3
    backoff_seconds: float = 2.0

    def wait_times(self) -> list[float]:
        """Waits between attempts, e.g. [2, 4, 8] for the defaults."""
        return [self.backoff_seconds * (2**i) for i in range(self.max_retries)]

    async def run(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        retry_on: tuple[type[BaseException], ...],
        provider: str,
        **kwargs: Any,
    ) -> Any:
        """Await ``func`` and retry it on the given exception types.

        Any other exception propagates immediately.

        Raises:
            Exception: The last transient error once the retries are spent
        """
        waits: list[float | None] = [*self.wait_times(), None]

        for attempt, wait in enumerate(waits, start=1):
            try:
                return await func(*args, **kwargs)
            except retry_on as e:
                if wait is None:
                    logger.error(
                        "provider_retry_exhausted",
                        provider=provider,
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                logger.warning(
                    "provider_retrying",
                    provider=provider,
                    attempt=attempt,
                    wait_seconds=wait,
                    error=str(e),
                )
                await asyncio.sleep(wait)


class LLMProvider(ABC):
    """Interface shared by the OpenAI and Anthropic providers."""

    @abstractmethod
    async def generate(self, prompt: str, options: GenerationOptions) -> LLMResponse:
        """Generate a text response.

        Args:
            prompt: User prompt
            options: Generation configuration

        Returns:
            LLMResponse with generated text and usage

        Raises:
            LLMProviderError: On any provider failure; ``is_retryable`` is set
                for rate limits and connection problems
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Provider identifier ("openai", "anthropic")."""
        pass
