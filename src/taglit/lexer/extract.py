"""Literal content extraction."""

from __future__ import annotations

from dataclasses import dataclass

from taglit.lexer.leaders import LeaderMatch
from taglit.lexer.scanner import find_closing_backtick


@dataclass(frozen=True)
class ExtractedLiteral:
    """Text between an opening backtick and its matching closing backtick.

    ``source_span`` is ``(absolute_offset, closing_backtick_offset)`` so that
    ``content == source[start:end]`` always holds.
    """

    content: str
    absolute_offset: int
    source_span: tuple[int, int]
    leader_offset: int

    @property
    def start(self) -> int:
        return self.source_span[0]

    @property
    def end(self) -> int:
        return self.source_span[1]


def extract_literal(
    text: str, match: LeaderMatch, end: int | None = None
) -> ExtractedLiteral | None:
    """Extract the literal opened at ``match.backtick_offset``.

    Returns ``None`` for unterminated literals; the caller skips them, the
    document is usually mid-edit.
    """
    start = match.content_start
    close = find_closing_backtick(text, start, end)
    if close is None:
        return None
    return ExtractedLiteral(
        content=text[start:close],
        absolute_offset=start,
        source_span=(start, close),
        leader_offset=match.leader_offset,
    )
