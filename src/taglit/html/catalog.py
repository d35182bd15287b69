"""Static HTML lookup tables: void elements, completable elements, attributes."""

from __future__ import annotations

VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

ELEMENTS: tuple[str, ...] = (
    "div",
    "span",
    "p",
    "a",
    "button",
    "input",
    "form",
    "label",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "ul",
    "ol",
    "li",
    "nav",
    "header",
    "footer",
    "section",
    "article",
    "aside",
    "main",
    "table",
    "thead",
    "tbody",
    "tr",
    "td",
    "th",
    "img",
    "video",
    "audio",
    "canvas",
    "svg",
)

# "*" applies to every element.
ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "*": ("class", "id", "style", "title", "data-", "aria-"),
    "a": ("href", "target", "rel"),
    "button": ("type", "disabled", "onclick"),
    "input": ("type", "value", "placeholder", "name", "required", "disabled"),
    "form": ("action", "method", "enctype"),
    "img": ("src", "alt", "width", "height"),
    "label": ("for",),
}


def is_void(name: str) -> bool:
    """Void lookup ignores case; tag matching elsewhere does not."""
    return name.lower() in VOID_ELEMENTS


def attributes_for(element: str) -> list[str]:
    """Wildcard attributes followed by the element's own, deduplicated."""
    merged: dict[str, None] = dict.fromkeys(ATTRIBUTES["*"])
    merged.update(dict.fromkeys(ATTRIBUTES.get(element, ())))
    return list(merged)
