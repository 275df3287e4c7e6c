"""Cost estimates for translation calls."""

import structlog

logger = structlog.get_logger(__name__)


class PricingCalculator:
    """Estimate USD cost from token usage.

    Dated snapshots (``gpt-4.1-2025-04-14``) are priced as their model
    family via the longest matching prefix. Unknown models cost 0.0 and log
    a warning rather than failing the translation they belong to.
    """

    # USD per 1K tokens
    PRICING: dict[str, dict[str, float]] = {
        "gpt-4.1": {"input": 0.002, "output": 0.008},
        "gpt-4.1-mini": {"input": 0.0004, "output": 0.0016},
        "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
        "claude-sonnet-4-5": {"input": 0.003, "output": 0.015},
        "claude-haiku-4-5": {"input": 0.001, "output": 0.005},
    }

    def price_for(self, model: str) -> dict[str, float] | None:
        """Price entry for a model or its snapshot, None when unknown."""
        if model in self.PRICING:
            return self.PRICING[model]
        families = [name for name in self.PRICING if model.startswith(f"{name}-")]
        return self.PRICING[max(families, key=len)] if families else None

    def calculate_cost(self, model: str, prompt_tokens: int, completion_tokens: int = 0) -> float:
        """Calculate cost for a generation request.

        Args:
            model: Model identifier as sent to the provider
            prompt_tokens: Tokens in the prompt
            completion_tokens: Tokens in the completion

        Returns:
            Estimated cost in USD
        """
        pricing = self.price_for(model)
        if pricing is None:
            logger.warning("model_pricing_unknown", model=model)
            return 0.0

        return (prompt_tokens * pricing["input"] + completion_tokens * pricing["output"]) / 1000


pricing_calculator = PricingCalculator()
