"""Unit tests for view resolution (banner and toggle state)."""

import pytest

from folio.orchestration.view_resolution import (
    BannerKind,
    ViewMode,
    parse_view_mode,
    resolve_view,
    translation_applies,
)


class TestResolveView:
    """Test banner and toggle decisions."""

    def test_post_in_reader_language_has_no_banner(self) -> None:
        """Test that a post already in the target language shows no banner."""
        view = resolve_view("en", "en", ViewMode.TRANSLATED, translated=False)

        assert view.banner is BannerKind.NONE
        assert view.show_translated is False
        assert view.toggle_href is None

    def test_post_without_language_has_no_banner(self) -> None:
        """Test that untranslatable posts never show a banner."""
        view = resolve_view("zh", None, ViewMode.ORIGINAL, translated=False)

        assert view.banner is BannerKind.NONE

    def test_translated_banner_with_toggle_to_original(self) -> None:
        """Test the banner shown above machine-translated content."""
        view = resolve_view("en", "zh", ViewMode.TRANSLATED, translated=True)

        assert view.show_translated is True
        assert view.banner is BannerKind.TRANSLATED
        assert view.toggle_mode is ViewMode.ORIGINAL
        assert view.toggle_href == "?view=original"
        assert "translated by AI" in view.banner_text
        assert view.toggle_label == "View original"

    def test_translated_banner_localized(self) -> None:
        """Test that banner copy follows the reader's language."""
        view = resolve_view("zh", "en", ViewMode.TRANSLATED, translated=True)

        assert "AI" in view.banner_text
        assert view.toggle_label == "查看原文"

    def test_original_requested_shows_available_banner(self) -> None:
        """Test the banner offering a translation while showing the original."""
        view = resolve_view("zh", "en", ViewMode.ORIGINAL, translated=False)

        assert view.show_translated is False
        assert view.banner is BannerKind.AVAILABLE
        assert view.toggle_mode is ViewMode.TRANSLATED
        assert view.toggle_href == "?view=translated"
        assert "英文" in view.banner_text
        assert view.toggle_label == "查看翻译"

    def test_failed_translation_shows_no_banner(self) -> None:
        """Test that a failed translation falls back silently."""
        view = resolve_view("en", "zh", ViewMode.TRANSLATED, translated=False)

        assert view.banner is BannerKind.NONE
        assert view.show_translated is False

    def test_unknown_reader_language_falls_back_to_english_copy(self) -> None:
        """Test that banner copy defaults to English."""
        view = resolve_view("fr", "zh", ViewMode.TRANSLATED, translated=True)

        assert view.toggle_label == "View original"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ViewMode.TRANSLATED),
        ("", ViewMode.TRANSLATED),
        ("translated", ViewMode.TRANSLATED),
        ("original", ViewMode.ORIGINAL),
        ("ORIGINAL", ViewMode.ORIGINAL),
        ("1", ViewMode.ORIGINAL),
        ("true", ViewMode.ORIGINAL),
        ("yes", ViewMode.ORIGINAL),
        ("0", ViewMode.TRANSLATED),
    ],
)
def test_parse_view_mode(value: str | None, expected: ViewMode) -> None:
    """Test mapping request flags to a view mode."""
    assert parse_view_mode(value) is expected


def test_translation_applies() -> None:
    """Test when a request should be served a translation."""
    assert translation_applies("zh", "en", ViewMode.TRANSLATED) is True
    assert translation_applies("en", "en", ViewMode.TRANSLATED) is False
    assert translation_applies(None, "en", ViewMode.TRANSLATED) is False
    assert translation_applies("zh", "en", ViewMode.ORIGINAL) is False
