"""Code-block-safe splitting of markdown bodies.

Partitions a markdown body into alternating prose and fenced-code segments
so that only prose is ever sent for translation. The partition is lossless:
``join_segments(split_segments(body)) == body`` for every body.
"""

import re
from dataclasses import dataclass
from enum import Enum

import structlog

logger = structlog.get_logger(__name__)

# Any indentation (fences nest inside list items), a run of backticks, an info
# string without backticks
FENCE_OPEN_RE = re.compile(r"^([ \t]*)(`{3,})[^`]*$")
FENCE_CLOSE_RE = re.compile(r"^([ \t]*)(`{3,})[ \t]*$")

# A closing fence may sit up to three columns right of its opening fence
CLOSE_INDENT_SLACK = 3


class SegmentKind(str, Enum):
    """Segment classification."""

    PROSE = "prose"
    CODE = "code"


@dataclass(frozen=True)
class Segment:
    """A fragment of an article body.

    Attributes:
        kind: PROSE (translatable) or CODE (verbatim)
        text: Raw fragment text
        unterminated: True for a prose tail that starts at an unmatched opening fence
    """

    kind: SegmentKind
    text: str
    unterminated: bool = False

    @property
    def is_code(self) -> bool:
        return self.kind is SegmentKind.CODE

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


def split_segments(body: str) -> list[Segment]:
    """Split a markdown body into ordered prose and code segments.

    A code segment runs from the start of an opening fence line to the end of
    its closing fence line (fence markers included, line break excluded). An
    opening fence without a closing fence turns the whole remaining tail into
    a single prose segment flagged ``unterminated``.

    Args:
        body: Markdown text

    Returns:
        Segments in document order
    """
    segments: list[Segment] = []
    lines = body.splitlines(keepends=True)

    # Character offset of each line start
    offsets: list[int] = []
    position = 0
    for line in lines:
        offsets.append(position)
        position += len(line)

    prose_start = 0
    i = 0
    while i < len(lines):
        opening = FENCE_OPEN_RE.match(lines[i].rstrip("\r\n"))
        if opening is None:
            i += 1
            continue

        fence_length = len(opening.group(2))
        closing_index = _find_closing_fence(
            lines, i + 1, fence_length, _indent_width(opening.group(1))
        )

        if closing_index is None:
            logger.warning(
                "unmatched_code_fence",
                line_number=i + 1,
                tail_length=len(body) - prose_start,
            )
            segments.append(Segment(SegmentKind.PROSE, body[prose_start:], unterminated=True))
            return segments

        code_start = offsets[i]
        closing_line = lines[closing_index]
        code_end = offsets[closing_index] + len(closing_line.rstrip("\r\n"))

        if code_start > prose_start:
            segments.append(Segment(SegmentKind.PROSE, body[prose_start:code_start]))
        segments.append(Segment(SegmentKind.CODE, body[code_start:code_end]))

        prose_start = code_end
        i = closing_index + 1

    if prose_start < len(body):
        segments.append(Segment(SegmentKind.PROSE, body[prose_start:]))

    return segments


def _find_closing_fence(
    lines: list[str], start: int, fence_length: int, open_indent: int
) -> int | None:
    for j in range(start, len(lines)):
        closing = FENCE_CLOSE_RE.match(lines[j].rstrip("\r\n"))
        if (
            closing
            and len(closing.group(2)) >= fence_length
            and _indent_width(closing.group(1)) <= open_indent + CLOSE_INDENT_SLACK
        ):
            return j
    return None


def _indent_width(indent: str) -> int:
    return len(indent.expandtabs(4))


def join_segments(segments: list[Segment]) -> str:
    """Concatenate segments verbatim (inverse of split_segments)."""
    return "".join(segment.text for segment in segments)


def has_unterminated_fence(segments: list[Segment]) -> bool:
    """Check whether splitting hit an unmatched opening fence."""
    return any(segment.unterminated for segment in segments)


def reassemble(segments: list[Segment]) -> str:
    """Join segments after translation, keeping code fences on their own lines.

    Translated prose may lose the line breaks that separated it from a
    neighbouring code block; a newline is inserted wherever a fence would
    otherwise share a line with prose.

    Args:
        segments: Segments in document order

    Returns:
        Reassembled markdown
    """
    parts: list[str] = []
    previous: Segment | None = None

    for segment in segments:
        if previous is not None and segment.text:
            last = parts[-1] if parts else ""
            if segment.is_code and last and not last.endswith("\n"):
                parts.append("\n")
            elif previous.is_code and not segment.text.startswith(("\n", "\r\n")):
                parts.append("\n")
        parts.append(segment.text)
        if segment.text:
            previous = segment

    return "".join(parts)
