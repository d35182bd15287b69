"""Pydantic models for taglit results."""

from taglit.models.diagnostics import (
    Completion,
    CompletionKind,
    Diagnostic,
    DiagnosticCode,
    FoldRange,
    Severity,
    SourceSpan,
    ValidationResult,
)

__all__ = [
    "Completion",
    "CompletionKind",
    "Diagnostic",
    "DiagnosticCode",
    "FoldRange",
    "Severity",
    "SourceSpan",
    "ValidationResult",
]
