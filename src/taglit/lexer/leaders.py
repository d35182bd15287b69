"""Leader matching: finds the backticks that open HTML-bearing literals."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from taglit.lexer.scanner import CommentTracker

logger = logging.getLogger("taglit.lexer")

DEFAULT_LEADERS: tuple[str, ...] = ("html", "dom")

_IDENTIFIER = r"[a-zA-Z_$][a-zA-Z0-9_$]*"
_ANNOTATION = r"/\*\s*html\s*\*/\s*"
_LEADER_NAME = re.compile(rf"^{_IDENTIFIER}$")


class InvalidLeaderError(ValueError):
    """Raised when a configured leader name is not a JS identifier."""


@dataclass(frozen=True)
class LeaderMatch:
    """One candidate literal start.

    ``leader_offset`` is where the leader (name or annotation) begins,
    ``backtick_offset`` is the opening backtick.
    """

    leader_offset: int
    backtick_offset: int

    @property
    def content_start(self) -> int:
        return self.backtick_offset + 1


def normalize_leaders(leaders: Iterable[str] | None) -> tuple[str, ...]:
    """Deduplicate leader names preserving order; empty input means defaults."""
    if leaders is None:
        return DEFAULT_LEADERS
    seen: dict[str, None] = {}
    for name in leaders:
        name = name.strip()
        if not name:
            continue
        if not _LEADER_NAME.match(name):
            raise InvalidLeaderError(f"Leader '{name}' is not a valid identifier")
        seen.setdefault(name, None)
    return tuple(seen) or DEFAULT_LEADERS


class LeaderMatcher:
    """Compiles the configured leaders into a single alternation.

    Matches, immediately followed by a backtick:

    * a leader name, optionally followed by whitespace (``html` ``)
    * an identifier plus an ``/* html */`` annotation (``css /* html */ `` ``)
    * the bare annotation (``/* html */ `` ``)
    """

    def __init__(self, leaders: Iterable[str] | None = None) -> None:
        self.leaders = normalize_leaders(leaders)
        names = "|".join(re.escape(name) for name in self.leaders)
        self.pattern = re.compile(
            rf"((?<![\w$])(?:{names})\s*|\b{_IDENTIFIER}\s*{_ANNOTATION}|{_ANNOTATION})`"
        )

    def search(self, text: str, pos: int = 0, endpos: int | None = None) -> LeaderMatch | None:
        """First raw match in ``text[pos:endpos]`` (comment membership unchecked)."""
        if endpos is None:
            endpos = len(text)
        m = self.pattern.search(text, pos, endpos)
        if m is None:
            return None
        return LeaderMatch(leader_offset=m.start(), backtick_offset=m.end() - 1)

    def finditer(self, text: str, pos: int = 0, endpos: int | None = None) -> Iterator[LeaderMatch]:
        """Every non-overlapping raw match, left to right."""
        if endpos is None:
            endpos = len(text)
        for m in self.pattern.finditer(text, pos, endpos):
            yield LeaderMatch(leader_offset=m.start(), backtick_offset=m.end() - 1)

    def confirmed(
        self,
        text: str,
        pos: int = 0,
        endpos: int | None = None,
        comments: CommentTracker | None = None,
    ) -> Iterator[LeaderMatch]:
        """Raw matches whose backtick is not inside a block comment."""
        if comments is None:
            comments = CommentTracker(text)
        for match in self.finditer(text, pos, endpos):
            if comments.is_inside(match.backtick_offset):
                logger.debug("Skipping leader at %d: inside block comment", match.leader_offset)
                continue
            yield match
