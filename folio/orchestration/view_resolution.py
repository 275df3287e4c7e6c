"""Decide which article variant to show and what banner/toggle goes with it."""

from dataclasses import dataclass
from enum import Enum

from folio.common.constants import BANNER_TEXT, LANGUAGE_NAMES, TOGGLE_LABELS

ORIGINAL_FLAGS = {"original", "1", "true", "yes"}


class ViewMode(str, Enum):
    """Variant requested by the reader."""

    TRANSLATED = "translated"
    ORIGINAL = "original"


class BannerKind(str, Enum):
    """Banner shown above the article."""

    NONE = "none"
    TRANSLATED = "translated"  # showing a machine translation
    AVAILABLE = "available"  # showing the original, a translation exists


@dataclass(frozen=True)
class ViewState:
    """Resolved presentation state for one article request.

    Attributes:
        show_translated: Whether the translated variant is displayed
        banner: Which banner to show
        toggle_mode: Mode the toggle link switches to (None when there is no toggle)
        toggle_href: Query string for the toggle link, relative to the article URL
        banner_text: Localized banner message (empty when no banner)
        toggle_label: Localized toggle link text (empty when no toggle)
    """

    show_translated: bool
    banner: BannerKind
    toggle_mode: ViewMode | None = None
    toggle_href: str | None = None
    banner_text: str = ""
    toggle_label: str = ""


def parse_view_mode(value: str | None) -> ViewMode:
    """Map a request flag (``?view=original``, ``?original=1``) to a ViewMode."""
    if value is not None and value.strip().lower() in ORIGINAL_FLAGS:
        return ViewMode.ORIGINAL
    return ViewMode.TRANSLATED


def translation_applies(post_lang: str | None, target_lang: str, view_mode: ViewMode) -> bool:
    """Whether a request should be served a translation at all."""
    return post_lang is not None and post_lang != target_lang and view_mode is ViewMode.TRANSLATED


def resolve_view(
    target_lang: str,
    post_lang: str | None,
    view_mode: ViewMode,
    translated: bool,
) -> ViewState:
    """Compute banner and toggle state.

    - Post without a language, or already in the target language: no banner.
    - Translated content shown: "translated by AI" banner, toggle to original.
    - Original requested explicitly for a foreign-language post: "translation
      available" banner, toggle to translated.
    - Translation requested but unavailable (failed): no banner, so the reader
      is not offered a toggle that would land on the same content.

    Args:
        target_lang: Reader's language
        post_lang: Post's authored language (None = never translated)
        view_mode: Requested variant
        translated: Whether translated content is actually being served

    Returns:
        ViewState
    """
    if post_lang is None or post_lang == target_lang:
        return ViewState(show_translated=False, banner=BannerKind.NONE)

    if translated:
        return ViewState(
            show_translated=True,
            banner=BannerKind.TRANSLATED,
            toggle_mode=ViewMode.ORIGINAL,
            toggle_href=f"?view={ViewMode.ORIGINAL.value}",
            banner_text=_localized(BANNER_TEXT["translated"], target_lang),
            toggle_label=_localized(TOGGLE_LABELS["original"], target_lang),
        )

    if view_mode is ViewMode.ORIGINAL:
        language = _localized(LANGUAGE_NAMES.get(post_lang, {}), target_lang) or post_lang
        return ViewState(
            show_translated=False,
            banner=BannerKind.AVAILABLE,
            toggle_mode=ViewMode.TRANSLATED,
            toggle_href=f"?view={ViewMode.TRANSLATED.value}",
            banner_text=_localized(BANNER_TEXT["available"], target_lang).format(
                language=language
            ),
            toggle_label=_localized(TOGGLE_LABELS["translated"], target_lang),
        )

    return ViewState(show_translated=False, banner=BannerKind.NONE)


def _localized(messages: dict[str, str], lang: str) -> str:
    return messages.get(lang) or messages.get("en", "")
