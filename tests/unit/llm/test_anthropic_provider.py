"""Unit tests for Anthropic provider."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from anthropic import (
    APIConnectionError,
    AuthenticationError,
    InternalServerError,
    RateLimitError,
)

from folio.llm.base_provider import GenerationOptions, RetryPolicy
from folio.llm.providers.anthropic_provider import AnthropicProvider
from folio.utils.exceptions import ConfigurationError, LLMProviderError


def _message(*texts: str, stop_reason: str = "end_turn") -> MagicMock:
    response = MagicMock()
    response.content = [MagicMock(type="text", text=text) for text in texts]
    response.stop_reason = stop_reason
    response.usage = MagicMock(input_tokens=100, output_tokens=50)
    return response


def _status_error(error_cls: type) -> Exception:
    return error_cls(message="upstream said no", response=MagicMock(), body=None)


class TestAnthropicProvider:
    """Test AnthropicProvider implementation."""

    @pytest.fixture
    def provider(self) -> AnthropicProvider:
        """Create Anthropic provider instance with instant retries."""
        with patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"}):
            return AnthropicProvider(retry_policy=RetryPolicy(max_retries=2, backoff_seconds=0))

    @pytest.fixture
    def create(self, provider: AnthropicProvider):
        """Patch messages.create and yield the mock."""
        with patch.object(provider.client.messages, "create", new=AsyncMock()) as mock:
            yield mock

    def test_initialization_without_api_key_fails(self) -> None:
        """Test initialization fails without API key."""
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
                AnthropicProvider()

    async def test_system_prompt_passed_separately(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test the system prompt goes in the ``system`` field, not the messages."""
        create.return_value = _message("你好")
        options = GenerationOptions(
            model="claude-haiku-4-5", system_prompt="Translate into Chinese."
        )

        result = await provider.generate("Hello", options)

        assert result.text == "你好"
        assert result.provider == "anthropic"
        assert result.model == "claude-haiku-4-5"
        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "Translate into Chinese."
        assert kwargs["messages"] == [{"role": "user", "content": "Hello"}]

    async def test_only_text_blocks_joined(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test that text blocks are concatenated and other blocks ignored."""
        message = _message("第一段", "第二段")
        message.content.append(MagicMock(type="thinking", text="ignored"))
        create.return_value = message

        result = await provider.generate("Hello", GenerationOptions(model="claude-sonnet-4-5"))

        assert result.text == "第一段第二段"

    async def test_default_model_omits_empty_system(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test generation uses default model and omits an empty system prompt."""
        create.return_value = _message("Response")

        result = await provider.generate("Test prompt", GenerationOptions(model=""))

        assert create.call_args.kwargs["model"] == "claude-sonnet-4-5"
        assert "system" not in create.call_args.kwargs
        assert result.model == "claude-sonnet-4-5"

    async def test_max_tokens_stop_is_failure(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test that hitting max_tokens is reported instead of returning partial text."""
        create.return_value = _message("半句", stop_reason="max_tokens")

        with pytest.raises(LLMProviderError, match="truncated"):
            await provider.generate("long text", GenerationOptions(model="claude-sonnet-4-5"))

    async def test_overloaded_retried_then_recovers(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test that a 5xx (overloaded) response is retried."""
        create.side_effect = [_status_error(InternalServerError), _message("Response")]

        result = await provider.generate(
            "Test prompt", GenerationOptions(model="claude-sonnet-4-5")
        )

        assert result.text == "Response"
        assert create.await_count == 2

    async def test_connection_errors_exhaust_retries(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test retry logic exhausts the policy and reports a retryable error."""
        create.side_effect = APIConnectionError(message="Connection error", request=MagicMock())

        with pytest.raises(LLMProviderError, match="Anthropic unavailable") as exc_info:
            await provider.generate("Test prompt", GenerationOptions(model="claude-sonnet-4-5"))

        assert exc_info.value.is_retryable is True
        assert create.await_count == 3

    async def test_rate_limit_is_retryable(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test that a persistent rate limit is reported as retryable."""
        create.side_effect = _status_error(RateLimitError)

        with pytest.raises(LLMProviderError) as exc_info:
            await provider.generate("Test prompt", GenerationOptions(model="claude-sonnet-4-5"))

        assert exc_info.value.is_retryable is True

    async def test_authentication_error_not_retried(
        self, provider: AnthropicProvider, create: AsyncMock
    ) -> None:
        """Test authentication errors fail fast."""
        create.side_effect = _status_error(AuthenticationError)

        with pytest.raises(LLMProviderError, match="rejected the API key") as exc_info:
            await provider.generate("Test prompt", GenerationOptions(model="claude-sonnet-4-5"))

        assert exc_info.value.is_retryable is False
        assert create.await_count == 1


class TestRetryPolicy:
    """Test the shared backoff runner."""

    def test_wait_times(self) -> None:
        """Test exponential backoff schedule."""
        assert RetryPolicy().wait_times() == [2.0, 4.0, 8.0]
        assert RetryPolicy(max_retries=0).wait_times() == []

    async def test_run_sleeps_between_attempts(self) -> None:
        """Test the runner waits the scheduled time before each retry."""
        func = AsyncMock(side_effect=[ConnectionError("a"), ConnectionError("b"), "ok"])
        policy = RetryPolicy(max_retries=3, backoff_seconds=0.5)

        with patch("folio.llm.base_provider.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await policy.run(func, "x", retry_on=(ConnectionError,), provider="test", y=1)

        assert result == "ok"
        assert [c.args[0] for c in sleep.await_args_list] == [0.5, 1.0]
        func.assert_awaited_with("x", y=1)

    async def test_run_does_not_retry_other_errors(self) -> None:
        """Test exceptions outside ``retry_on`` propagate on the first attempt."""
        func = AsyncMock(side_effect=KeyError("nope"))

        with pytest.raises(KeyError):
            await RetryPolicy(backoff_seconds=0).run(
                func, retry_on=(ConnectionError,), provider="t"
            )

        assert func.await_count == 1

    async def test_run_without_retries_raises_first_error(self) -> None:
        """Test a zero-retry policy makes exactly one attempt."""
        func = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(ConnectionError):
            await RetryPolicy(max_retries=0).run(func, retry_on=(ConnectionError,), provider="t")

        assert func.await_count == 1
