"""Heuristic repair of markdown damaged by machine translation.

Translation engines often collapse the space after a block marker, turning
``# Title`` into ``#Title`` or ``- item`` into ``-item``, which then renders
as plain text. Only ever applied to prose segments, never to code.
"""

import re

FULLWIDTH_HEADER_RE = re.compile(r"^([ \t]{0,3})(＃+)", re.MULTILINE)
HEADER_RE = re.compile(r"^([ \t]{0,3}#{1,6})(?=[^\s#])", re.MULTILINE)
DASH_ITEM_RE = re.compile(r"^([ \t]*-)(?=[^\s-])", re.MULTILINE)
STAR_ITEM_RE = re.compile(r"^([ \t]*\*)(?=[^\s*])(.*)$", re.MULTILINE)
BLOCKQUOTE_RE = re.compile(r"^([ \t]*>+)(?=[^\s>])", re.MULTILINE)


def _fix_star_item(match: re.Match[str]) -> str:
    marker, rest = match.group(1), match.group(2)
    # "*emphasis*" at line start is not a list item
    if "*" in rest:
        return match.group(0)
    return f"{marker} {rest}"


def repair_markdown(text: str) -> str:
    """Restore missing spaces after header, list and blockquote markers.

    Pure and total; already-correct input is returned unchanged.

    Args:
        text: Translated prose markdown

    Returns:
        Repaired markdown
    """
    text = FULLWIDTH_HEADER_RE.sub(lambda m: m.group(1) + "#" * len(m.group(2)), text)
    text = HEADER_RE.sub(r"\1 ", text)
    text = DASH_ITEM_RE.sub(r"\1 ", text)
    text = STAR_ITEM_RE.sub(_fix_star_item, text)
    text = BLOCKQUOTE_RE.sub(r"\1 ", text)
    return text
