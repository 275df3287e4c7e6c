"""Unit tests for filename sanitization utilities."""

import pytest

from folio.utils.filename_utils import sanitize_filename


class TestSanitizeFilename:
    """Test cases for sanitize_filename function."""

    def test_plain_slug_unchanged(self) -> None:
        """Test that an already-safe slug passes through."""
        assert sanitize_filename("hello-world") == "hello-world"
        assert sanitize_filename("post_2024") == "post_2024"

    def test_lowercases(self) -> None:
        """Test that the result is lowercased."""
        assert sanitize_filename("Hello-World") == "hello-world"

    def test_spaces_slashes_colons_to_hyphens(self) -> None:
        """Test that separators become single hyphens."""
        assert sanitize_filename("a b") == "a-b"
        assert sanitize_filename("notes/2024") == "notes-2024"
        assert sanitize_filename("part: one") == "part-one"

    def test_special_character_removal(self) -> None:
        """Test that special characters are removed."""
        assert sanitize_filename("what?!now") == "whatnow"
        assert sanitize_filename("c++ tips") == "c-tips"

    def test_unicode_normalization(self) -> None:
        """Test that accented characters are folded to ASCII."""
        assert sanitize_filename("Château") == "chateau"
        assert sanitize_filename("naïve") == "naive"

    def test_non_latin_only_raises(self) -> None:
        """Test that a name with no ASCII equivalent raises ValueError."""
        with pytest.raises(ValueError, match="empty filename"):
            sanitize_filename("上海笔记")

    def test_empty_raises(self) -> None:
        """Test that empty and whitespace-only names raise ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            sanitize_filename("")
        with pytest.raises(ValueError, match="cannot be empty"):
            sanitize_filename("   ")

    def test_truncation(self) -> None:
        """Test that long names are truncated without trailing separators."""
        result = sanitize_filename("a" * 10 + "-" + "b" * 10, max_length=11)
        assert result == "a" * 10
