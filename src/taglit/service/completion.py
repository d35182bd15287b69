"""Tag and attribute completions inside HTML literals."""

from __future__ import annotations

import re
from collections.abc import Iterable

from taglit.html.catalog import ELEMENTS, attributes_for
from taglit.lexer.extract import extract_literal
from taglit.lexer.leaders import LeaderMatcher
from taglit.lexer.lines import LineIndex
from taglit.lexer.scanner import CommentTracker
from taglit.models.diagnostics import Completion, CompletionKind
from taglit.service.languages import is_supported

_TYPING_TAG = re.compile(r"<[a-zA-Z]*$")
_TYPING_ATTRIBUTE = re.compile(r"<([a-zA-Z]+)\s+[^>]*$")


class CompletionProvider:
    def __init__(self, leaders: Iterable[str] | None = None) -> None:
        self.matcher = LeaderMatcher(leaders)

    def is_inside_literal(self, text: str, offset: int) -> bool:
        """True when *offset* lies between a literal's backticks.

        A literal still missing its closing backtick extends to the end of
        the text.
        """
        comments = CommentTracker(text)
        pos = 0
        while True:
            match = self.matcher.search(text, pos)
            if match is None or match.backtick_offset >= offset:
                return False
            if comments.is_inside(match.backtick_offset):
                pos = match.content_start
                continue
            literal = extract_literal(text, match)
            if literal is None or offset <= literal.end:
                return True
            pos = literal.end + 1

    def complete(self, text: str, offset: int, language_id: str = "javascript") -> list[Completion]:
        if not is_supported(language_id) or not self.is_inside_literal(text, offset):
            return []

        prefix = LineIndex(text).line_prefix(offset)
        if _TYPING_TAG.search(prefix):
            return tag_completions()
        m = _TYPING_ATTRIBUTE.search(prefix)
        if m:
            return attribute_completions(m.group(1))
        return []


def tag_completions() -> list[Completion]:
    return [
        Completion(
            label=tag,
            kind=CompletionKind.TAG,
            insert_text=f"{tag}$1>$2</{tag}>",
            documentation=f"HTML <{tag}> element",
        )
        for tag in ELEMENTS
    ]


def attribute_completions(element: str) -> list[Completion]:
    items: list[Completion] = []
    for attr in attributes_for(element):
        # Prefix attributes (data-, aria-) leave a stop for the suffix.
        insert = f'{attr}$1="$2"' if attr.endswith("-") else f'{attr}="$1"'
        items.append(
            Completion(
                label=attr,
                kind=CompletionKind.ATTRIBUTE,
                insert_text=insert,
                documentation=f"HTML {attr} attribute",
            )
        )
    return items
