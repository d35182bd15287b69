"""In-memory registry of open documents, keyed by URI, with cached diagnostics."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from taglit.html.collapse import DEFAULT_MAX_NESTING_DEPTH
from taglit.models.diagnostics import Completion, Diagnostic, FoldRange
from taglit.service.completion import CompletionProvider
from taglit.service.diagnostics import DiagnosticProvider
from taglit.service.folding import FoldingProvider
from taglit.service.languages import is_supported

logger = logging.getLogger("taglit.service")

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class DocumentNotFoundError(KeyError):
    """Raised when a document URI is not open in the store."""


@dataclass
class _Document:
    uri: str
    language_id: str
    version: int
    text: str
    diagnostics: list[Diagnostic]


@dataclass
class DocumentSummary:
    """Short summary for listing documents."""

    uri: str
    language_id: str
    version: int
    length: int
    diagnostic_count: int


# ---------------------------------------------------------------------------
# DocumentStore
# ---------------------------------------------------------------------------


class DocumentStore:
    """Open-document registry.  Thread-safe via ``threading.Lock``.

    Diagnostics are recomputed whenever a document is opened or changed and
    served from the cache until the next change.  Folding and completion
    are computed on demand from the stored snapshot.
    """

    def __init__(
        self,
        leaders: Iterable[str] | None = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        self._lock = threading.Lock()
        self._documents: dict[str, _Document] = {}

        # Stateless providers, safe to share.
        leaders = list(leaders) if leaders is not None else None
        self._diagnostics = DiagnosticProvider(leaders, max_nesting_depth=max_nesting_depth)
        self._folding = FoldingProvider(leaders)
        self._completion = CompletionProvider(leaders)

    # -- helpers -------------------------------------------------------------

    def _get(self, uri: str) -> _Document:
        with self._lock:
            try:
                return self._documents[uri]
            except KeyError:
                raise DocumentNotFoundError(f"No document open with uri '{uri}'") from None

    @staticmethod
    def _summary(doc: _Document) -> DocumentSummary:
        return DocumentSummary(
            uri=doc.uri,
            language_id=doc.language_id,
            version=doc.version,
            length=len(doc.text),
            diagnostic_count=len(doc.diagnostics),
        )

    # -- public API ----------------------------------------------------------

    def open(self, uri: str, text: str, language_id: str, version: int = 0) -> DocumentSummary:
        """Open (or replace) a document and compute its diagnostics."""
        diagnostics = self._diagnostics.diagnose(text, language_id)
        doc = _Document(uri, language_id, version, text, diagnostics)
        with self._lock:
            self._documents[uri] = doc
        logger.debug("Opened %s (%s): %d diagnostics", uri, language_id, len(diagnostics))
        return self._summary(doc)

    def change(self, uri: str, text: str, version: int | None = None) -> DocumentSummary:
        """Replace the text of an open document.  Raises ``DocumentNotFoundError``."""
        current = self._get(uri)
        new_version = version if version is not None else current.version + 1
        diagnostics = self._diagnostics.diagnose(text, current.language_id)
        doc = _Document(uri, current.language_id, new_version, text, diagnostics)
        with self._lock:
            if uri not in self._documents:
                raise DocumentNotFoundError(f"No document open with uri '{uri}'")
            self._documents[uri] = doc
        return self._summary(doc)

    def close(self, uri: str) -> None:
        """Close a document, dropping its diagnostics."""
        with self._lock:
            try:
                del self._documents[uri]
            except KeyError:
                raise DocumentNotFoundError(f"No document open with uri '{uri}'") from None

    def describe(self, uri: str) -> DocumentSummary:
        return self._summary(self._get(uri))

    def text(self, uri: str) -> str:
        return self._get(uri).text

    def list_documents(self) -> list[DocumentSummary]:
        with self._lock:
            docs = list(self._documents.values())
        return [self._summary(d) for d in docs]

    def diagnostics(self, uri: str) -> list[Diagnostic]:
        return list(self._get(uri).diagnostics)

    def fold_ranges(self, uri: str) -> list[FoldRange]:
        doc = self._get(uri)
        return self._folding.fold_ranges(doc.text, doc.language_id)

    def completions(self, uri: str, offset: int) -> list[Completion]:
        doc = self._get(uri)
        return self._completion.complete(doc.text, offset, doc.language_id)

    def is_inside_literal(self, uri: str, offset: int) -> bool:
        doc = self._get(uri)
        if not is_supported(doc.language_id):
            return False
        return self._completion.is_inside_literal(doc.text, offset)
