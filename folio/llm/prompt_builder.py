"""Prompt template loading and rendering for translation requests."""

from pathlib import Path

import structlog

from folio.common.constants import TRANSLATION_TARGETS
from folio.utils.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

# Templates ship inside the package
DEFAULT_PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

SYSTEM_TEMPLATE = "translate-system.md"
USER_TEMPLATE = "translate-user.md"


class PromptBuilder:
    """Load and render translation prompt templates.

    Templates support ``{placeholder}`` substitution via ``str.format``.
    """

    def __init__(self, prompts_dir: Path | None = None) -> None:
        """Initialize PromptBuilder with template directory.

        Args:
            prompts_dir: Directory containing prompt templates.
                        Defaults to the packaged folio/prompts/

        Raises:
            ConfigurationError: If the directory does not exist
        """
        self.prompts_dir = prompts_dir or DEFAULT_PROMPTS_DIR

        if not self.prompts_dir.exists():
            raise ConfigurationError(f"Prompts directory not found: {self.prompts_dir}")

        self._template_cache: dict[str, str] = {}

    def _load_template(self, template_name: str) -> str:
        """Load a template file from the prompts directory.

        Raises:
            ConfigurationError: If template file not found
        """
        if template_name in self._template_cache:
            return self._template_cache[template_name]

        template_path = self.prompts_dir / template_name

        if not template_path.exists():
            raise ConfigurationError(f"Template file not found: {template_path}")

        content = template_path.read_text(encoding="utf-8")
        self._template_cache[template_name] = content

        logger.debug("template_loaded", template=template_name)
        return content

    @staticmethod
    def language_name(target_lang: str) -> str:
        """Describe a language code for the model (``zh`` -> Simplified Chinese)."""
        return TRANSLATION_TARGETS.get(target_lang, target_lang)

    def build_system_prompt(self, target_lang: str) -> str:
        """Render the translator instructions for a target language."""
        template = self._load_template(SYSTEM_TEMPLATE)
        return template.format(language=self.language_name(target_lang)).strip()

    def build_user_prompt(self, text: str, target_lang: str) -> str:
        """Render the request carrying the text to translate."""
        template = self._load_template(USER_TEMPLATE)
        return template.format(language=self.language_name(target_lang), text=text)
