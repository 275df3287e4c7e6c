"""OpenAI chat completions provider."""

import time
from typing import Any

import structlog
from openai import (
    APIConnectionError,
    AsyncOpenAI,
    AuthenticationError,
    RateLimitError,
)

from folio.llm.base_provider import GenerationOptions, LLMProvider, LLMResponse, RetryPolicy
from folio.llm.pricing import pricing_calculator
from folio.utils.config import get_required_env
from folio.utils.exceptions import LLMProviderError

logger = structlog.get_logger(__name__)

# APITimeoutError subclasses APIConnectionError
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (RateLimitError, APIConnectionError)


class OpenAIProvider(LLMProvider):
    """Provider for gpt-* models via ``chat.completions``.

    Transient errors (rate limits, connection problems) are retried with the
    configured backoff. Every failure leaves as ``LLMProviderError``; a
    completion cut off at ``max_tokens`` counts as a failure, since a
    truncated translation would silently drop text.
    """

    DEFAULT_MODEL = "gpt-4.1"

    def __init__(self, api_key: str | None = None, retry_policy: RetryPolicy | None = None) -> None:
        """Initialize OpenAI provider.

        Args:
            api_key: API key (defaults to OPENAI_API_KEY)
            retry_policy: Backoff for transient errors

        Raises:
            ConfigurationError: If no API key is available
        """
        self.client = AsyncOpenAI(api_key=api_key or get_required_env("OPENAI_API_KEY"))
        self.retry_policy = retry_policy or RetryPolicy()

        logger.info(
            "openai_provider_initialized",
            default_model=self.DEFAULT_MODEL,
            max_retries=self.retry_policy.max_retries,
        )

    def get_provider_name(self) -> str:
        return "openai"

    async def generate(self, prompt: str, options: GenerationOptions) -> LLMResponse:
        model = options.model or self.DEFAULT_MODEL
        started = time.perf_counter()

        try:
            completion = await self.retry_policy.run(
                self.client.chat.completions.create,
                retry_on=TRANSIENT_ERRORS,
                provider=self.get_provider_name(),
                model=model,
                messages=self._messages(prompt, options),
                temperature=options.temperature,
                max_tokens=options.max_tokens,
            )
        except AuthenticationError as e:
            raise LLMProviderError(f"OpenAI rejected the API key: {e}") from e
        except TRANSIENT_ERRORS as e:
            raise LLMProviderError(f"OpenAI unavailable: {e}", is_retryable=True) from e
        except Exception as e:
            logger.error("openai_generation_failed", model=model, error=str(e), exc_info=True)
            raise LLMProviderError(f"OpenAI generation failed: {e}") from e

        choice = completion.choices[0]
        if choice.finish_reason == "length":
            logger.warning("openai_output_truncated", model=model, max_tokens=options.max_tokens)
            raise LLMProviderError(f"OpenAI output truncated at {options.max_tokens} tokens")

        usage = completion.usage
        tokens_prompt = usage.prompt_tokens if usage else 0
        tokens_completion = usage.completion_tokens if usage else 0
        response = LLMResponse(
            text=choice.message.content or "",
            provider=self.get_provider_name(),
            model=model,
            tokens_prompt=tokens_prompt,
            tokens_completion=tokens_completion,
            cost_usd=pricing_calculator.calculate_cost(model, tokens_prompt, tokens_completion),
            latency_ms=int((time.perf_counter() - started) * 1000),
        )

        logger.info(
            "openai_generation_success",
            model=model,
            tokens_prompt=response.tokens_prompt,
            tokens_completion=response.tokens_completion,
            cost_usd=response.cost_usd,
            latency_ms=response.latency_ms,
        )
        return response

    @staticmethod
    def _messages(prompt: str, options: GenerationOptions) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages
