"""Unit tests for heuristic markdown repair."""

import pytest

from folio.translation.repair import repair_markdown


@pytest.mark.parametrize(
    ("damaged", "expected"),
    [
        ("#Title", "# Title"),
        ("###Section", "### Section"),
        ("-item", "- item"),
        ("*item", "* item"),
        (">quote", "> quote"),
        (">>nested", ">> nested"),
        ("＃标题", "# 标题"),
        ("＃＃小节", "## 小节"),
        ("  -indented", "  - indented"),
    ],
)
def test_repairs_collapsed_markers(damaged: str, expected: str) -> None:
    """Test that a missing space after a block marker is restored."""
    assert repair_markdown(damaged) == expected


@pytest.mark.parametrize(
    "correct",
    [
        "# Title",
        "- item",
        "* item",
        "> quote",
        "---",
        "***",
        "*emphasis* at line start",
        "**bold** at line start",
        "Plain paragraph with a # inside and a - dash.",
        "",
        "####### seven hashes is not a heading",
    ],
)
def test_noop_on_correct_input(correct: str) -> None:
    """Test that already-correct markdown is left alone."""
    assert repair_markdown(correct) == correct


def test_multiline_document() -> None:
    """Test that every line is repaired independently."""
    damaged = "#Heading\n\nText line.\n-one\n-two\n>said"

    assert repair_markdown(damaged) == "# Heading\n\nText line.\n- one\n- two\n> said"


def test_idempotent() -> None:
    """Test that repairing twice equals repairing once."""
    damaged = "##Title\n-item\n>quote"

    once = repair_markdown(damaged)

    assert repair_markdown(once) == once
