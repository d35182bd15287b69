"""Offset to line/column conversion over an immutable source snapshot."""

from __future__ import annotations

from bisect import bisect_right


class LineIndex:
    """Zero-based line/column lookup for document offsets.

    Line breaks are ``\\n``, ``\\r\\n`` or a lone ``\\r``, matching how editors
    number lines.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        starts = [0]
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == "\r":
                if i + 1 < n and text[i + 1] == "\n":
                    i += 1
                starts.append(i + 1)
            elif ch == "\n":
                starts.append(i + 1)
            i += 1
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> int:
        offset = max(0, min(offset, len(self._text)))
        return bisect_right(self._starts, offset) - 1

    def position(self, offset: int) -> tuple[int, int]:
        """Return ``(line, column)`` for *offset*, clamped to the text."""
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._starts, offset) - 1
        return line, offset - self._starts[line]

    def offset(self, line: int, column: int) -> int:
        """Inverse of :meth:`position`; out-of-range values are clamped."""
        line = max(0, min(line, len(self._starts) - 1))
        start = self._starts[line]
        return min(start + max(column, 0), self._line_end(line))

    def line_prefix(self, offset: int) -> str:
        """Text of the line containing *offset*, up to (excluding) *offset*."""
        line, column = self.position(offset)
        start = self._starts[line]
        return self._text[start : start + column]

    def _line_end(self, line: int) -> int:
        if line + 1 < len(self._starts):
            end = self._starts[line + 1] - 1
            if end > 0 and self._text[end] == "\n" and self._text[end - 1] == "\r":
                end -= 1
            return end
        return len(self._text)
