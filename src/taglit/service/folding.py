"""Fold ranges for multi-line HTML literals."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from taglit.lexer.leaders import LeaderMatcher
from taglit.lexer.lines import LineIndex
from taglit.lexer.scanner import CommentTracker, find_closing_backtick
from taglit.models.diagnostics import FoldRange
from taglit.service.languages import CancellationSignal, is_cancelled, is_supported

logger = logging.getLogger("taglit.folding")

MIN_FOLD_LINES = 2


class FoldingProvider:
    """One range per literal spanning at least three lines, outermost only.

    A range starts on the leader's line and ends on the closing backtick's
    line.
    """

    def __init__(self, leaders: Iterable[str] | None = None) -> None:
        self.matcher = LeaderMatcher(leaders)

    def fold_ranges(
        self,
        text: str,
        language_id: str = "javascript",
        cancel: CancellationSignal | None = None,
    ) -> list[FoldRange]:
        """Return fold ranges; ``[]`` when cancelled or for unsupported languages."""
        if not is_supported(language_id):
            return []

        index = LineIndex(text)
        comments = CommentTracker(text)
        ranges: list[FoldRange] = []

        for match in self.matcher.finditer(text):
            if is_cancelled(cancel):
                logger.debug("Folding cancelled")
                return []
            if comments.is_inside(match.backtick_offset):
                continue

            close = find_closing_backtick(text, match.content_start)
            if close is None:
                continue
            start_line = index.line_of(match.leader_offset)
            end_line = index.line_of(close)
            if end_line - start_line >= MIN_FOLD_LINES:
                ranges.append(FoldRange(start_line=start_line, end_line=end_line))

        return outermost(ranges)


def outermost(ranges: list[FoldRange]) -> list[FoldRange]:
    """Drop every range strictly contained in another one."""

    def _contains(outer: FoldRange, inner: FoldRange) -> bool:
        return (
            outer.start_line <= inner.start_line
            and outer.end_line >= inner.end_line
            and (outer.start_line < inner.start_line or outer.end_line > inner.end_line)
        )

    return [r for r in ranges if not any(_contains(other, r) for other in ranges if other is not r)]
