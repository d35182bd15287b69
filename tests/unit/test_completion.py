"""Tests for literal detection and tag/attribute completions."""

from __future__ import annotations

from taglit.html.catalog import ELEMENTS
from taglit.models.diagnostics import CompletionKind
from taglit.service.completion import CompletionProvider, attribute_completions, tag_completions


class TestIsInsideLiteral:
    def test_inside(self, completion: CompletionProvider) -> None:
        text = "const v = html`<p></p>`;"
        assert completion.is_inside_literal(text, text.index("</p>"))

    def test_before_closing_backtick_is_inside(self, completion: CompletionProvider) -> None:
        text = "const v = html`<p></p>`;"
        assert completion.is_inside_literal(text, text.rindex("`"))

    def test_after_literal(self, completion: CompletionProvider) -> None:
        text = "const v = html`<p></p>`; <"
        assert not completion.is_inside_literal(text, len(text))

    def test_before_literal(self, completion: CompletionProvider) -> None:
        text = "const v = html`<p></p>`;"
        assert not completion.is_inside_literal(text, 3)

    def test_unterminated_extends_to_end(self, completion: CompletionProvider) -> None:
        text = "html`<ul><"
        assert completion.is_inside_literal(text, len(text))

    def test_second_literal(self, completion: CompletionProvider) -> None:
        text = "html`a`; x; dom`<b>`"
        assert not completion.is_inside_literal(text, text.index("x;"))
        assert completion.is_inside_literal(text, text.index("<b>"))

    def test_commented_out_literal(self, completion: CompletionProvider) -> None:
        text = "/* html`<p>` */ x"
        assert not completion.is_inside_literal(text, text.index("<p>") + 1)


class TestComplete:
    def test_tag_completions_after_open_angle(self, completion: CompletionProvider) -> None:
        text = "const v = html`\n  <di\n`;"
        items = completion.complete(text, text.index("<di") + 3)
        assert [i.label for i in items] == list(ELEMENTS)
        assert items[0].insert_text == "div$1>$2</div>"
        assert all(i.kind is CompletionKind.TAG for i in items)

    def test_attribute_completions_in_open_tag(self, completion: CompletionProvider) -> None:
        text = 'const v = html`<a class="x" `;'
        items = completion.complete(text, text.rindex("`"))
        labels = [i.label for i in items]
        assert labels == [
            "class", "id", "style", "title", "data-", "aria-", "href", "target", "rel"
        ]
        assert all(i.kind is CompletionKind.ATTRIBUTE for i in items)

    def test_outside_literal(self, completion: CompletionProvider) -> None:
        text = "const v = html`<p></p>`; <"
        assert completion.complete(text, len(text)) == []

    def test_text_content_has_no_completions(self, completion: CompletionProvider) -> None:
        text = "html`<p>text"
        assert completion.complete(text, len(text)) == []

    def test_unsupported_language(self, completion: CompletionProvider) -> None:
        text = "html`<"
        assert completion.complete(text, len(text), language_id="python") == []


class TestCompletionItems:
    def test_tag_items_cover_elements(self) -> None:
        assert len(tag_completions()) == len(ELEMENTS)

    def test_prefix_attribute_snippet(self) -> None:
        items = {i.label: i for i in attribute_completions("div")}
        assert items["data-"].insert_text == 'data-$1="$2"'
        assert items["class"].insert_text == 'class="$1"'

    def test_element_specific_attributes(self) -> None:
        labels = [i.label for i in attribute_completions("img")]
        assert labels[-4:] == ["src", "alt", "width", "height"]

    def test_unknown_element_gets_global_attributes(self) -> None:
        labels = [i.label for i in attribute_completions("my-widget")]
        assert labels == ["class", "id", "style", "title", "data-", "aria-"]
