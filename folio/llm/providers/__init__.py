"""LLM provider implementations."""

from folio.llm.providers.anthropic_provider import AnthropicProvider
from folio.llm.providers.openai_provider import OpenAIProvider

__all__ = ["AnthropicProvider", "OpenAIProvider"]
