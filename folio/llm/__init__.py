"""LLM module for multi-provider language model integration."""

from folio.llm.base_provider import GenerationOptions, LLMProvider, LLMResponse, RetryPolicy
from folio.llm.llm_router import MultiLLMRouter
from folio.llm.pricing import PricingCalculator, pricing_calculator
from folio.llm.prompt_builder import PromptBuilder

__all__ = [
    "GenerationOptions",
    "LLMProvider",
    "LLMResponse",
    "MultiLLMRouter",
    "PricingCalculator",
    "pricing_calculator",
    "PromptBuilder",
    "RetryPolicy",
]
