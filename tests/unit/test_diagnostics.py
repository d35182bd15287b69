"""Tests for document-level diagnostics."""

from __future__ import annotations

import threading

import pytest

from taglit.lexer import scanner
from taglit.models.diagnostics import DiagnosticCode, Severity
from taglit.service.diagnostics import DiagnosticProvider
from tests.conftest import SAMPLE_CLEAN, SAMPLE_COMPONENT


class TestSampleDocuments:
    def test_component_reports_mismatch(self, diagnostics: DiagnosticProvider) -> None:
        (diag,) = diagnostics.diagnose(SAMPLE_COMPONENT)
        assert diag.code is DiagnosticCode.MISMATCHED_CLOSING_TAG
        assert diag.message == "Expected closing tag </p> but found </span>"
        assert SAMPLE_COMPONENT[diag.start : diag.end] == "</span>"

    def test_component_span(self, diagnostics: DiagnosticProvider) -> None:
        (diag,) = diagnostics.diagnose(SAMPLE_COMPONENT)
        assert diag.span is not None
        assert diag.span.line == 10
        assert diag.span.column == 39
        assert diag.span.end_column == 46

    def test_clean_document(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose(SAMPLE_CLEAN) == []


class TestNestedLiterals:
    def test_custom_leaders_nested_example(self) -> None:
        provider = DiagnosticProvider(["outer", "inner"])
        text = "outer`<ul>${cond ? inner`<li>x</li>` : ''}</ul>`"
        assert provider.diagnose(text) == []

    def test_error_in_nested_literal_reported_once(self, diagnostics: DiagnosticProvider) -> None:
        text = "html`<ul>${ok ? html`<li>x</b>` : ''}</ul>`"
        (diag,) = diagnostics.diagnose(text)
        assert diag.code is DiagnosticCode.MISMATCHED_CLOSING_TAG
        assert diag.start == text.index("</b>")

    def test_unclosed_in_nested_literal(self, diagnostics: DiagnosticProvider) -> None:
        text = "html`<ul>${html`<li>`}</ul>`"
        (diag,) = diagnostics.diagnose(text)
        assert diag.severity is Severity.WARNING
        assert diag.message == "Unclosed tag <li>"
        assert diag.start == text.index("<li>")

    def test_outer_offsets_survive_collapse(self, diagnostics: DiagnosticProvider) -> None:
        text = "html`<div>${ok ? html`<b></b>` : ''}</span>`"
        (diag,) = diagnostics.diagnose(text)
        assert diag.message == "Expected closing tag </div> but found </span>"
        assert (diag.start, diag.end) == (text.index("</span>"), text.index("</span>") + 7)

    @pytest.mark.parametrize(("levels", "max_depth"), [(25, 20), (5, 2), (3, 1)])
    def test_literals_below_depth_bound_still_validated(
        self, levels: int, max_depth: int
    ) -> None:
        text = "html`<b>`"
        for _ in range(levels - 1):
            text = f"html`<b>${{{text}}}`"
        provider = DiagnosticProvider(max_nesting_depth=max_depth)
        found = provider.diagnose(text)
        assert [d.message for d in found] == ["Unclosed tag <b>"] * levels
        opens = {i for i in range(len(text)) if text.startswith("<b>", i)}
        assert {d.start for d in found} == opens

    def test_list_mapping_in_attribute_context(self, diagnostics: DiagnosticProvider) -> None:
        text = "html`<select>${opts.map(o => html`<option value=${o}>${o}</option>`)}</select>`"
        assert diagnostics.diagnose(text) == []


class TestLexicalContexts:
    def test_commented_out_literal_ignored(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose("/* dom`<p>` */\nconst a = 1;") == []

    def test_unterminated_literal_skipped(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose("const a = html`<div>") == []

    def test_escaped_backtick(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose(r"html`<p>\`</p>`") == []

    def test_brace_in_string_inside_interpolation(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose('html`<p title="${"}"}">x</p>`') == []

    def test_annotation_leader(self, diagnostics: DiagnosticProvider) -> None:
        (diag,) = diagnostics.diagnose("const t = /* html */ `<p></i>`;")
        assert diag.code is DiagnosticCode.MISMATCHED_CLOSING_TAG

    def test_results_from_several_literals_merged(self, diagnostics: DiagnosticProvider) -> None:
        found = diagnostics.diagnose("html`</a>`; dom`<b>`")
        assert [d.code for d in found] == [
            DiagnosticCode.UNMATCHED_CLOSING_TAG,
            DiagnosticCode.UNCLOSED_TAG,
        ]


class TestGateAndCancellation:
    def test_unsupported_language(self, diagnostics: DiagnosticProvider) -> None:
        assert diagnostics.diagnose("html`</a>`", language_id="python") == []

    def test_typescript_supported(self, diagnostics: DiagnosticProvider) -> None:
        assert len(diagnostics.diagnose("html`</a>`", language_id="typescriptreact")) == 1

    def test_cancelled_before_start(self, diagnostics: DiagnosticProvider) -> None:
        cancel = threading.Event()
        cancel.set()
        assert diagnostics.diagnose("html`</a>`", cancel=cancel) == []

    def test_not_cancelled(self, diagnostics: DiagnosticProvider) -> None:
        assert len(diagnostics.diagnose("html`</a>`", cancel=threading.Event())) == 1


class TestValidationResult:
    def test_split_by_severity(self, diagnostics: DiagnosticProvider) -> None:
        result = diagnostics.validate("html`</a>`; dom`<b>`")
        assert not result.valid
        assert len(result.errors) == 1
        assert len(result.warnings) == 1

    def test_warnings_only_is_valid(self, diagnostics: DiagnosticProvider) -> None:
        result = diagnostics.validate("html`<b>`")
        assert result.valid
        assert result.errors == []


TABLE_BLOCK = (
    "/* rows */ html`<table>${rows.map(r => html`<tr>${r.cells.map("
    "c => html`<td>${c}</td>`)}</tr>`)}</table>`;\n"
)


class TestScanCost:
    @staticmethod
    def _steps(monkeypatch: pytest.MonkeyPatch, text: str) -> int:
        calls = 0
        original = scanner.step

        def counting(*args: object) -> int:
            nonlocal calls
            calls += 1
            return original(*args)  # type: ignore[arg-type]

        monkeypatch.setattr(scanner, "step", counting)
        assert DiagnosticProvider().diagnose(text) == []
        monkeypatch.setattr(scanner, "step", original)
        return calls

    def test_nested_blocks_scale_linearly(self, monkeypatch: pytest.MonkeyPatch) -> None:
        small = self._steps(monkeypatch, TABLE_BLOCK * 50)
        large = self._steps(monkeypatch, TABLE_BLOCK * 100)
        assert large <= 2 * small + len(TABLE_BLOCK)
