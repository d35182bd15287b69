"""Document-level tag validation across every HTML literal."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from taglit.html.collapse import DEFAULT_MAX_NESTING_DEPTH, NestedLiteralResolver
from taglit.html.interpolation import substitute_interpolations
from taglit.html.tags import TagBalanceValidator
from taglit.lexer.extract import extract_literal
from taglit.lexer.leaders import LeaderMatcher
from taglit.lexer.lines import LineIndex
from taglit.lexer.scanner import CommentTracker
from taglit.models.diagnostics import Diagnostic, SourceSpan, ValidationResult
from taglit.service.languages import CancellationSignal, is_cancelled, is_supported

logger = logging.getLogger("taglit.diagnostics")


class DiagnosticProvider:
    """Validates tag balance in each literal of a document.

    Each literal, nested ones included, is validated on its own; the
    results are merged into one list for the document.  Unterminated
    literals are skipped silently.
    """

    def __init__(
        self,
        leaders: Iterable[str] | None = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        self.matcher = LeaderMatcher(leaders)
        self.resolver = NestedLiteralResolver(self.matcher, max_depth=max_nesting_depth)
        self.validator = TagBalanceValidator()

    def diagnose(
        self,
        text: str,
        language_id: str = "javascript",
        cancel: CancellationSignal | None = None,
    ) -> list[Diagnostic]:
        """Return all diagnostics for *text*, or ``[]`` for unsupported languages.

        On cancellation the diagnostics gathered so far are returned.
        """
        if not is_supported(language_id):
            return []

        diagnostics: list[Diagnostic] = []
        comments = CommentTracker(text)
        literal_count = 0
        pos = 0
        while True:
            if is_cancelled(cancel):
                logger.debug("Validation cancelled after %d literals", literal_count)
                break
            match = self.matcher.search(text, pos)
            if match is None:
                break
            if comments.is_inside(match.backtick_offset):
                pos = match.content_start
                continue
            literal = extract_literal(text, match)
            if literal is None:
                logger.debug("Unterminated literal at offset %d", match.backtick_offset)
                pos = match.content_start
                continue

            for _inner, collapsed in self.resolver.resolve(text, literal, comments):
                literal_count += 1
                cleaned = substitute_interpolations(collapsed)
                diagnostics.extend(self.validator.validate(cleaned))
            pos = literal.end + 1

        logger.debug(
            "Validated %d literals: %d diagnostics", literal_count, len(diagnostics)
        )
        return _with_spans(text, diagnostics)

    def validate(
        self,
        text: str,
        language_id: str = "javascript",
        cancel: CancellationSignal | None = None,
    ) -> ValidationResult:
        return ValidationResult.from_diagnostics(self.diagnose(text, language_id, cancel))


def _with_spans(text: str, diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    if not diagnostics:
        return diagnostics
    index = LineIndex(text)
    out: list[Diagnostic] = []
    for diag in diagnostics:
        line, column = index.position(diag.start)
        end_line, end_column = index.position(diag.end)
        span = SourceSpan(line=line, column=column, end_line=end_line, end_column=end_column)
        out.append(diag.model_copy(update={"span": span}))
    return out
