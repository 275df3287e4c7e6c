"""Text translation primitive.

``Translator.translate(text, target_lang)`` returns translated text or
raises ``TranslationError``. The default implementation asks an LLM through
the multi-provider router, bounded by a per-call timeout.
"""

import asyncio
import re
from abc import ABC, abstractmethod

import structlog

from folio.llm.base_provider import GenerationOptions
from folio.llm.llm_router import MultiLLMRouter
from folio.llm.prompt_builder import PromptBuilder
from folio.utils.exceptions import FolioError, TranslationError

logger = structlog.get_logger(__name__)

# A whole response wrapped in one fence, e.g. ```markdown ... ```
WRAPPING_FENCE_RE = re.compile(r"\A\s*```[\w-]*[ \t]*\n(.*)\n```\s*\Z", re.DOTALL)


class Translator(ABC):
    """Translate a text string into a target language."""

    @abstractmethod
    async def translate(self, text: str, target_lang: str) -> str:
        """Translate text.

        Args:
            text: Text to translate
            target_lang: Target language code (e.g., "zh", "en")

        Returns:
            Translated text

        Raises:
            TranslationError: If translation fails for any reason
        """
        pass


class LLMTranslator(Translator):
    """Translator backed by an LLM.

    Attributes:
        router: Router used to reach the provider
        prompt_builder: Renders the translation prompts
        timeout_seconds: Bound on a single call including retries (0 disables)
        model: Model override (defaults to the router's default model)
    """

    def __init__(
        self,
        router: MultiLLMRouter,
        prompt_builder: PromptBuilder | None = None,
        timeout_seconds: float = 30.0,
        model: str | None = None,
    ) -> None:
        self.router = router
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.timeout_seconds = timeout_seconds
        self.model = model

    async def translate(self, text: str, target_lang: str) -> str:
        if not text.strip():
            return text

        options = GenerationOptions(
            model=self.model or self.router.default_model,
            system_prompt=self.prompt_builder.build_system_prompt(target_lang),
        )
        prompt = self.prompt_builder.build_user_prompt(text, target_lang)

        try:
            response = await asyncio.wait_for(
                self.router.generate(prompt, options),
                timeout=self.timeout_seconds or None,
            )
        except TimeoutError as e:
            raise TranslationError(
                f"Translation timed out after {self.timeout_seconds}s", is_retryable=True
            ) from e
        except FolioError as e:
            raise TranslationError(
                f"Translation failed: {e.message}", is_retryable=e.is_retryable
            ) from e
        except Exception as e:
            # Unexpected errors outside the provider contract
            raise TranslationError(f"Translation failed: {e}") from e

        translated = self._unwrap(response.text, original=text).strip()
        if not translated:
            raise TranslationError("Translation returned empty text")

        logger.debug(
            "text_translated",
            target_lang=target_lang,
            source_length=len(text),
            translated_length=len(translated),
        )
        return translated

    @staticmethod
    def _unwrap(response_text: str, original: str) -> str:
        """Drop a code fence the model wrapped around its whole answer."""
        if original.lstrip().startswith("```"):
            return response_text
        match = WRAPPING_FENCE_RE.match(response_text)
        return match.group(1) if match else response_text
