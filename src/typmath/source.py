"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A half-open range ``[start, end)`` of code point offsets."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def shifted(self, delta: int) -> Span:
        return Span(self.start + delta, self.end + delta)


class SourceText:
    """Document text with offset to line/column translation."""

    def __init__(self, content: str, filename: str = "<stdin>") -> None:
        self.content = content
        self.filename = filename
        # Lines end at "\n" only, matching _line_starts and LSP positions.
        self.lines = [line.rstrip("\r") for line in content.split("\n")]
        self._line_starts = [0]
        for i, ch in enumerate(content):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: Path) -> SourceText:
        return cls(path.read_text(encoding="utf-8"), str(path))

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (line, column) of an offset."""
        offset = max(0, min(offset, len(self.content)))
        idx = bisect_right(self._line_starts, offset) - 1
        return idx + 1, offset - self._line_starts[idx] + 1

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def span_text(self, span: Span) -> str:
        return self.content[span.start:span.end]
