"""Lexical layer: context scanner, leader matching, literal extraction."""

from taglit.lexer.extract import ExtractedLiteral, extract_literal
from taglit.lexer.leaders import DEFAULT_LEADERS, InvalidLeaderError, LeaderMatch, LeaderMatcher
from taglit.lexer.lines import LineIndex
from taglit.lexer.scanner import (
    CommentTracker,
    Context,
    ScanState,
    find_closing_backtick,
    find_interpolation_end,
    is_inside_block_comment,
    iter_interpolations,
)

__all__ = [
    "DEFAULT_LEADERS",
    "CommentTracker",
    "Context",
    "ExtractedLiteral",
    "InvalidLeaderError",
    "LeaderMatch",
    "LeaderMatcher",
    "LineIndex",
    "ScanState",
    "extract_literal",
    "find_closing_backtick",
    "find_interpolation_end",
    "is_inside_block_comment",
    "iter_interpolations",
]
