"""Replaces ``${...}`` expressions with a neutral token before tag scanning."""

from __future__ import annotations

from taglit.html.cleaned import CleanedText
from taglit.lexer.scanner import iter_interpolations

PLACEHOLDER = "placeholder"


def substitute_interpolations(cleaned: CleanedText, placeholder: str = PLACEHOLDER) -> CleanedText:
    """Replace every remaining top-level ``${...}`` span with *placeholder*.

    Must run after nested-literal collapsing: interpolations holding a
    literal have already become that literal's outer structure.  Running it
    on its own output is a no-op.
    """
    text = cleaned.text
    if "${" not in text:
        return cleaned
    edits = [(start, close + 1, placeholder) for start, close in iter_interpolations(text)]
    return cleaned.rewrite(edits)


def substitute_text(text: str, placeholder: str = PLACEHOLDER) -> str:
    """String-only variant of :func:`substitute_interpolations`."""
    return substitute_interpolations(CleanedText.of(text), placeholder).text
