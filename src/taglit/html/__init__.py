"""HTML layer: nested-literal collapsing, interpolation placeholders, tag balance."""

from taglit.html.catalog import ATTRIBUTES, ELEMENTS, VOID_ELEMENTS, attributes_for, is_void
from taglit.html.cleaned import CleanedText
from taglit.html.collapse import (
    DEFAULT_MAX_NESTING_DEPTH,
    CollapsedLiteral,
    NestedLiteralResolver,
    NestedSite,
)
from taglit.html.interpolation import PLACEHOLDER, substitute_interpolations, substitute_text
from taglit.html.tags import TagBalanceValidator, TagKind, TagToken, tokenize

__all__ = [
    "ATTRIBUTES",
    "DEFAULT_MAX_NESTING_DEPTH",
    "ELEMENTS",
    "PLACEHOLDER",
    "VOID_ELEMENTS",
    "CleanedText",
    "CollapsedLiteral",
    "NestedLiteralResolver",
    "NestedSite",
    "TagBalanceValidator",
    "TagKind",
    "TagToken",
    "attributes_for",
    "is_void",
    "substitute_interpolations",
    "substitute_text",
    "tokenize",
]
