"""Nested-literal resolution: find inner literals and collapse them for the parent."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from taglit.html.catalog import is_void
from taglit.html.cleaned import CleanedText
from taglit.lexer.extract import ExtractedLiteral, extract_literal
from taglit.lexer.leaders import LeaderMatcher
from taglit.lexer.scanner import CommentTracker, find_interpolation_end, iter_interpolations

logger = logging.getLogger("taglit.html")

DEFAULT_MAX_NESTING_DEPTH = 20
FALLBACK_STRUCTURE = "<span></span>"

_LEADING_TAG = re.compile(r"<([a-zA-Z][a-zA-Z0-9-]*)[^>]*>")


@dataclass(frozen=True)
class CollapsedLiteral:
    """A nested literal and the element that stands in for it in its parent."""

    original_content: str
    outer_structure: str


@dataclass(frozen=True)
class NestedSite:
    """An interpolation of the parent literal that holds nested literals.

    ``start`` is the ``$`` offset, ``end`` the offset just past the closing
    brace, both in document coordinates.
    """

    start: int
    end: int
    literals: tuple[ExtractedLiteral, ...]


def _skip_whitespace(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos].isspace():
        pos += 1
    return pos


class NestedLiteralResolver:
    """Walks a literal's interpolations, depth-first, innermost literal first.

    ``max_depth`` bounds how many literal levels are collapsed into their
    parents.  Deeper literals are still yielded and validated, uncollapsed;
    in their parent the interpolation holding them is treated as a plain
    expression.
    """

    def __init__(self, matcher: LeaderMatcher, max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> None:
        self.matcher = matcher
        self.max_depth = max_depth

    def find_nested(
        self,
        source: str,
        literal: ExtractedLiteral,
        comments: CommentTracker | None = None,
    ) -> list[NestedSite]:
        """Direct child literals of *literal*, grouped by enclosing interpolation."""
        sites: list[NestedSite] = []
        for dollar, brace in iter_interpolations(source, literal.start, literal.end):
            found: list[ExtractedLiteral] = []
            pos = dollar + 2
            while True:
                match = self.matcher.search(source, pos, brace)
                if match is None:
                    break
                if comments is not None and comments.is_inside(match.backtick_offset):
                    pos = match.content_start
                    continue
                nested = extract_literal(source, match, brace)
                if nested is None:
                    pos = match.content_start
                    continue
                found.append(nested)
                pos = nested.end + 1
            if found:
                sites.append(NestedSite(start=dollar, end=brace + 1, literals=tuple(found)))
        return sites

    def outer_structure(self, source: str, start: int, end: int, depth: int = 0) -> str:
        """Minimal element standing in for the literal content ``source[start:end]``.

        Leading interpolations are skipped; one that itself holds a literal
        yields that literal's structure (``${ok ? html`<li>..</li>` : ''}``).
        """
        pos = _skip_whitespace(source, start, end)
        while source.startswith("${", pos, end):
            close = find_interpolation_end(source, pos + 2, end)
            if close is None:
                break
            match = self.matcher.search(source, pos + 2, close)
            if match is not None and depth < self.max_depth:
                inner = extract_literal(source, match, close)
                if inner is not None:
                    return self.outer_structure(source, inner.start, inner.end, depth + 1)
            pos = _skip_whitespace(source, close + 1, end)

        m = _LEADING_TAG.match(source, pos, end)
        if m is None:
            return FALLBACK_STRUCTURE
        name = m.group(1)
        if m.group(0).endswith("/>") or is_void(name):
            return f"<{name}/>"
        return f"<{name}></{name}>"

    def collapse(self, source: str, literal: ExtractedLiteral) -> CollapsedLiteral:
        return CollapsedLiteral(
            original_content=literal.content,
            outer_structure=self.outer_structure(source, literal.start, literal.end),
        )

    def resolve(
        self,
        source: str,
        literal: ExtractedLiteral,
        comments: CommentTracker | None = None,
        depth: int = 0,
    ) -> Iterator[tuple[ExtractedLiteral, CleanedText]]:
        """Yield ``(literal, collapsed text)`` for *literal* and all its descendants.

        Descendants come first, so callers validate innermost literals before
        their ancestors.  Each yielded text still contains plain
        ``${...}`` expressions.
        """
        edits: list[tuple[int, int, str]] = []
        if depth < self.max_depth:
            for site in self.find_nested(source, literal, comments):
                for nested in site.literals:
                    yield from self.resolve(source, nested, comments, depth + 1)
                collapsed = self.collapse(source, site.literals[0])
                start = site.start - literal.start
                end = site.end - literal.start
                edits.append((start, end, collapsed.outer_structure))
        else:
            logger.debug(
                "Nesting depth %d reached at offset %d; inner literals not collapsed",
                depth,
                literal.start,
            )
            yield from self._uncollapsed_descendants(source, literal, comments)
        cleaned = CleanedText.from_source(source, literal.start, literal.end).rewrite(edits)
        yield literal, cleaned

    def _uncollapsed_descendants(
        self,
        source: str,
        literal: ExtractedLiteral,
        comments: CommentTracker | None,
    ) -> Iterator[tuple[ExtractedLiteral, CleanedText]]:
        """Every descendant of *literal* as plain text, each after its own descendants."""
        found: list[ExtractedLiteral] = []
        pending = [literal]
        while pending:
            current = pending.pop()
            for site in self.find_nested(source, current, comments):
                found.extend(site.literals)
                pending.extend(site.literals)
        for nested in reversed(found):
            yield nested, CleanedText.from_source(source, nested.start, nested.end)
