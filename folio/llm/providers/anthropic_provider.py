"""Anthropic messages API provider."""

import time

import structlog
from anthropic import (
    APIConnectionError,
    AsyncAnthropic,
    AuthenticationError,
    InternalServerError,
    RateLimitError,
)

from folio.llm.base_provider import GenerationOptions, LLMProvider, LLMResponse, RetryPolicy
from folio.llm.pricing import pricing_calculator
from folio.utils.config import get_required_env
from folio.utils.exceptions import LLMProviderError

logger = structlog.get_logger(__name__)

# InternalServerError covers 5xx including 529 "overloaded"
TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    RateLimitError,
    APIConnectionError,
    InternalServerError,
)


class AnthropicProvider(LLMProvider):
    """Provider for claude-* models via ``messages.create``.

    Error contract matches OpenAIProvider: transient errors are retried,
    everything surfaces as LLMProviderError, and ``stop_reason ==
    "max_tokens"`` is a failure.
    """

    SUPPORTED_MODELS = ["claude-sonnet-4-5", "claude-haiku-4-5"]
    DEFAULT_MODEL = "claude-sonnet-4-5"

    def __init__(self, api_key: str | None = None, retry_policy: RetryPolicy | None = None) -> None:
        """Initialize Anthropic provider.

        Args:
            api_key: API key (defaults to ANTHROPIC_API_KEY)
            retry_policy: Backoff for transient errors

        Raises:
            ConfigurationError: If no API key is available
        """
        self.client = AsyncAnthropic(api_key=api_key or get_required_env("ANTHROPIC_API_KEY"))
        self.retry_policy = retry_policy or RetryPolicy()

        logger.info(
            "anthropic_provider_initialized",
            supported_models=self.SUPPORTED_MODELS,
            default_model=self.DEFAULT_MODEL,
            max_retries=self.retry_policy.max_retries,
        )

    def get_provider_name(self) -> str:
        return "anthropic"

    async def generate(self, prompt: str, options: GenerationOptions) -> LLMResponse:
        model = options.model or self.DEFAULT_MODEL
        started = time.perf_counter()

        extra = {"system": options.system_prompt} if options.system_prompt else {}
        try:
            message = await self.retry_policy.run(
                self.client.messages.create,
                retry_on=TRANSIENT_ERRORS,
                provider=self.get_provider_name(),
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                **extra,
            )
        except AuthenticationError as e:
            raise LLMProviderError(f"Anthropic rejected the API key: {e}") from e
        except TRANSIENT_ERRORS as e:
            raise LLMProviderError(f"Anthropic unavailable: {e}", is_retryable=True) from e
        except Exception as e:
            logger.error("anthropic_generation_failed", model=model, error=str(e), exc_info=True)
            raise LLMProviderError(f"Anthropic generation failed: {e}") from e

        if message.stop_reason == "max_tokens":
            logger.warning("anthropic_output_truncated", model=model, max_tokens=options.max_tokens)
            raise LLMProviderError(f"Anthropic output truncated at {options.max_tokens} tokens")

        tokens_prompt = message.usage.input_tokens
        tokens_completion = message.usage.output_tokens
        response = LLMResponse(
            text="".join(b.text for b in message.content if getattr(b, "type", "") == "text"),
            provider=self.get_provider_name(),
            model=model,
            tokens_prompt=tokens_prompt,
            tokens_completion=tokens_completion,
            cost_usd=pricing_calculator.calculate_cost(model, tokens_prompt, tokens_completion),
            latency_ms=int((time.perf_counter() - started) * 1000),
        )

        logger.info(
            "anthropic_generation_success",
            model=model,
            tokens_prompt=response.tokens_prompt,
            tokens_completion=response.tokens_completion,
            cost_usd=response.cost_usd,
            latency_ms=response.latency_ms,
        )
        return response
