"""Markdown compilation to HTML fragments."""

import markdown as md_lib
import structlog

from folio.utils.exceptions import CompileError

logger = structlog.get_logger(__name__)

# Markdown extensions for article bodies
MD_EXTENSIONS = [
    "extra",  # tables, fenced code, footnotes, attribute lists
    "sane_lists",
    "toc",  # heading anchors
]

MD_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "toc": {"permalink": False},
}


class MarkdownCompiler:
    """Compile markdown into an HTML fragment (no <html>/<body> wrapper).

    Any failure inside the markdown library surfaces as ``CompileError``.
    """

    def __init__(
        self,
        extensions: list[str] | None = None,
        extension_configs: dict[str, dict[str, object]] | None = None,
    ) -> None:
        self.extensions = extensions if extensions is not None else list(MD_EXTENSIONS)
        self.extension_configs = (
            extension_configs if extension_configs is not None else dict(MD_EXTENSION_CONFIGS)
        )

    def compile(self, text: str) -> str:
        """Compile markdown to HTML.

        Args:
            text: Markdown source

        Returns:
            HTML fragment

        Raises:
            CompileError: If the markdown cannot be compiled
        """
        try:
            return md_lib.markdown(
                text,
                extensions=self.extensions,
                extension_configs=self.extension_configs,
            )
        except Exception as e:
            logger.warning("markdown_compile_failed", error=str(e), error_type=type(e).__name__)
            raise CompileError(f"Markdown compilation failed: {e}") from e
