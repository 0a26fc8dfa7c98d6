"""Document scanner: splits prose from ``$``-delimited math spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from typmath.errors import MalformedMath
from typmath.source import Span

if TYPE_CHECKING:
    from typmath.ast_nodes import MathNode
    from typmath.errors import MathError

DELIMITER = "$"
ESCAPE = "\\"


class SegmentKind(Enum):
    TEXT = "text"
    MATH = "math"


@dataclass(frozen=True)
class Segment:
    """A slice of the document.

    ``content`` is exactly ``text[span.start:span.end]``; for math segments
    it includes both delimiters. ``tree`` and ``error`` are filled in by
    ``parse_document``.
    """

    kind: SegmentKind
    content: str
    span: Span
    tree: MathNode | None = None
    error: MathError | None = field(default=None, compare=False)

    @property
    def is_math(self) -> bool:
        return self.kind is SegmentKind.MATH

    @property
    def body(self) -> str:
        """The text handed to the math parser (delimiters stripped)."""
        if self.is_math:
            return self.content[1:-1]
        return self.content

    @property
    def body_start(self) -> int:
        return self.span.start + 1 if self.is_math else self.span.start

    @property
    def display(self) -> bool:
        """True for block math such as ``$ x $``."""
        body = self.body
        return self.is_math and len(body) >= 2 and body[0].isspace() and body[-1].isspace()


def scan(text: str) -> list[Segment]:
    """Split ``text`` into ordered Text and Math segments.

    Raises ``MalformedMath`` at the opening delimiter when a math span is
    never closed.
    """
    segments: list[Segment] = []
    text_start = 0
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch == ESCAPE:
            pos += 2
            continue
        if ch != DELIMITER:
            pos += 1
            continue

        close = _find_closing(text, pos + 1)
        if close < 0:
            raise MalformedMath("unterminated math span", pos).measured(text)
        if pos > text_start:
            segments.append(_segment(SegmentKind.TEXT, text, text_start, pos))
        segments.append(_segment(SegmentKind.MATH, text, pos, close + 1))
        pos = close + 1
        text_start = pos

    if len(text) > text_start:
        segments.append(_segment(SegmentKind.TEXT, text, text_start, len(text)))
    return segments


def _find_closing(text: str, pos: int) -> int:
    """Return the offset of the next unescaped delimiter, or -1."""
    while pos < len(text):
        ch = text[pos]
        if ch == ESCAPE:
            pos += 2
            continue
        if ch == DELIMITER:
            return pos
        pos += 1
    return -1


def _segment(kind: SegmentKind, text: str, start: int, end: int) -> Segment:
    return Segment(kind, text[start:end], Span(start, end))
