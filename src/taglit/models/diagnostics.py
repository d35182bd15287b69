"""Structured diagnostics, fold ranges and completions with source positions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(StrEnum):
    UNMATCHED_CLOSING_TAG = "UNMATCHED_CLOSING_TAG"
    MISMATCHED_CLOSING_TAG = "MISMATCHED_CLOSING_TAG"
    UNCLOSED_TAG = "UNCLOSED_TAG"


class SourceSpan(BaseModel):
    """Zero-based line/column location of a diagnostic."""

    line: int
    column: int
    end_line: int
    end_column: int


class Diagnostic(BaseModel):
    """A tag-balance finding inside one literal.

    ``start``/``end`` are offsets into the original document.
    """

    code: DiagnosticCode
    message: str
    severity: Severity
    start: int
    end: int
    span: SourceSpan | None = None


class ValidationResult(BaseModel):
    """All diagnostics for one document, split by severity."""

    valid: bool
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []

    @classmethod
    def from_diagnostics(cls, diagnostics: list[Diagnostic]) -> ValidationResult:
        errors = [d for d in diagnostics if d.severity is Severity.ERROR]
        warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
        return cls(valid=not errors, errors=errors, warnings=warnings)


class FoldRange(BaseModel):
    """Zero-based inclusive line range of a foldable literal."""

    start_line: int
    end_line: int


class CompletionKind(StrEnum):
    TAG = "tag"
    ATTRIBUTE = "attribute"


class Completion(BaseModel):
    """A completion candidate; ``insert_text`` uses ``$1``-style snippet stops."""

    label: str
    kind: CompletionKind
    insert_text: str
    documentation: str = ""
