"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """An inclusive range of character offsets within a source text."""

    start: int
    end: int

    def text(self, source: str) -> str:
        """Extract the text covered by the span."""
        return source[self.start : self.end + 1]

    def __str__(self) -> str:
        return f"{self.start}..={self.end}"


class SourceText:
    """Source contents with offset to line/column mapping."""

    def __init__(self, content: str, filename: str = "<stdin>") -> None:
        self.content = content
        self.filename = filename
        self.lines = content.splitlines()
        self._line_starts = [0]
        for i, ch in enumerate(content):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: Path) -> SourceText:
        return cls(path.read_text(), str(path))

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (line, column) of an offset."""
        offset = max(0, min(offset, len(self.content)))
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    def offset(self, line: int, col: int) -> int:
        """Return the offset of a 1-indexed (line, column)."""
        if line < 1:
            return 0
        if line > len(self._line_starts):
            return len(self.content)
        return min(self._line_starts[line - 1] + col - 1, len(self.content))

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def span_text(self, span: Span) -> str:
        return span.text(self.content)
