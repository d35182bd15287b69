"""Service layer: document-level providers, open-document store and sessions."""

from taglit.service.completion import CompletionProvider
from taglit.service.diagnostics import DiagnosticProvider
from taglit.service.document_store import DocumentNotFoundError, DocumentStore, DocumentSummary
from taglit.service.folding import FoldingProvider
from taglit.service.languages import SUPPORTED_LANGUAGES, CancellationSignal
from taglit.service.session_manager import SessionInfo, SessionManager, SessionNotFoundError

__all__ = [
    "SUPPORTED_LANGUAGES",
    "CancellationSignal",
    "CompletionProvider",
    "DiagnosticProvider",
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentSummary",
    "FoldingProvider",
    "SessionInfo",
    "SessionManager",
    "SessionNotFoundError",
]
