"""Multi-LLM router for provider selection and request routing."""

from collections.abc import Callable

import structlog

from folio.llm.base_provider import GenerationOptions, LLMProvider, LLMResponse, RetryPolicy
from folio.llm.providers.anthropic_provider import AnthropicProvider
from folio.llm.providers.openai_provider import OpenAIProvider
from folio.utils.exceptions import LLMProviderError

logger = structlog.get_logger(__name__)

MODEL_PREFIXES: dict[str, str] = {
    "claude-": "anthropic",
    "gpt-": "openai",
}


class MultiLLMRouter:
    """Multi-LLM router with model-based provider selection.

    Providers are created lazily on first use, so only the API key of the
    provider actually routed to is required. No fallback logic: a failing
    provider fails the request.

    Model-to-provider mapping:
    - claude-* → AnthropicProvider
    - gpt-* → OpenAIProvider
    """

    DEFAULT_MODEL = "gpt-4.1"

    def __init__(
        self,
        default_model: str | None = None,
        retry_policy: RetryPolicy | None = None,
        providers: dict[str, LLMProvider] | None = None,
    ) -> None:
        """Initialize router.

        Args:
            default_model: Model used when options do not name one
            retry_policy: Backoff handed to lazily created providers
            providers: Pre-built providers by name (skips lazy creation)

        Raises:
            LLMProviderError: If the default model has an unknown prefix
        """
        self.default_model = default_model or self.DEFAULT_MODEL
        self.retry_policy = retry_policy or RetryPolicy()
        self.providers: dict[str, LLMProvider] = dict(providers or {})
        self._factories: dict[str, Callable[[], LLMProvider]] = {
            "openai": lambda: OpenAIProvider(retry_policy=self.retry_policy),
            "anthropic": lambda: AnthropicProvider(retry_policy=self.retry_policy),
        }

        # Validate default model at initialization (fail fast)
        self._provider_name_for_model(self.default_model)

        logger.info(
            "llm_router_initialized",
            default_model=self.default_model,
            preloaded_providers=list(self.providers.keys()),
        )

    def _provider_name_for_model(self, model: str) -> str:
        for prefix, name in MODEL_PREFIXES.items():
            if model.startswith(prefix):
                return name
        raise LLMProviderError(
            f"Unknown model: {model}. Model name must start with 'claude-' or 'gpt-'"
        )

    def _get_provider_for_model(self, model: str) -> LLMProvider:
        """Resolve (and create on first use) the provider for a model.

        Args:
            model: Model identifier (e.g., "gpt-4.1", "claude-sonnet-4-5")

        Returns:
            LLMProvider instance for the model

        Raises:
            LLMProviderError: If model prefix not recognized
            ConfigurationError: If the provider's API key is missing
        """
        name = self._provider_name_for_model(model)
        if name not in self.providers:
            self.providers[name] = self._factories[name]()
            logger.debug("provider_registered", provider_name=name)
        return self.providers[name]

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> LLMResponse:
        """Generate a text response.

        Args:
            prompt: User prompt to generate response for
            options: Optional generation options (uses defaults if not specified)

        Returns:
            LLMResponse with generated text and metadata

        Raises:
            LLMProviderError: If generation fails or model not recognized
            ConfigurationError: If the routed provider has no API key
        """
        if options is None:
            options = GenerationOptions(model=self.default_model)

        model = options.model or self.default_model
        selected_provider = self._get_provider_for_model(model)

        logger.info(
            "routing_generation_request",
            provider=selected_provider.get_provider_name(),
            model=model,
            prompt_length=len(prompt),
        )

        return await selected_provider.generate(prompt, options)
