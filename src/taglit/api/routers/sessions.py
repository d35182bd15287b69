"""Session-scoped endpoints: open documents, cached diagnostics, folding, completions."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from taglit.api.deps import get_session_manager, get_settings
from taglit.api.schemas import (
    CompletionResponse,
    DiagnosticsResponse,
    DocumentChangeRequest,
    DocumentOpenRequest,
    DocumentResponse,
    FoldingResponse,
    SessionCreateRequest,
    SessionListResponse,
    SessionResponse,
)
from taglit.lexer.leaders import InvalidLeaderError
from taglit.models.diagnostics import Severity
from taglit.service.document_store import DocumentNotFoundError, DocumentStore, DocumentSummary
from taglit.service.session_manager import SessionInfo, SessionManager, SessionNotFoundError

router = APIRouter()


# -- helpers -----------------------------------------------------------------


def _get_store(session_id: str, mgr: SessionManager) -> DocumentStore:
    """Resolve session_id to DocumentStore, raise 404 if missing/expired."""
    try:
        return mgr.get_store(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found") from None


def _document_404(uri: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Document '{uri}' not open")


def _session_response(info: SessionInfo) -> SessionResponse:
    return SessionResponse(**asdict(info))


def _document_response(summary: DocumentSummary) -> DocumentResponse:
    return DocumentResponse(**asdict(summary))


# -- session CRUD ------------------------------------------------------------


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    body: SessionCreateRequest | None = None,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> SessionResponse:
    """Create a new session, optionally with its own leader names."""
    metadata = body.metadata if body else {}
    leaders = body.leaders if body else None
    try:
        info = mgr.create_session(metadata=metadata, leaders=leaders)
    except InvalidLeaderError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return _session_response(info)


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    request: Request,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> SessionListResponse:
    if get_settings(request).disable_session_list:
        raise HTTPException(status_code=403, detail="Session listing is disabled")
    return SessionListResponse(sessions=[_session_response(s) for s in mgr.list_sessions()])


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> SessionResponse:
    try:
        info = mgr.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found") from None
    return _session_response(info)


@router.delete("/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> None:
    """Close a session and drop its documents."""
    try:
        mgr.close_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found") from None


# -- documents ---------------------------------------------------------------


@router.post("/{session_id}/documents", response_model=DocumentResponse, status_code=201)
async def open_document(
    session_id: str,
    body: DocumentOpenRequest,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> DocumentResponse:
    """Open (or replace) a document; its diagnostics are computed immediately."""
    store = _get_store(session_id, mgr)
    summary = store.open(body.uri, body.text, body.language_id, body.version)
    return _document_response(summary)


@router.get("/{session_id}/documents", response_model=list[DocumentResponse])
async def list_documents(
    session_id: str,
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> list[DocumentResponse]:
    store = _get_store(session_id, mgr)
    return [_document_response(d) for d in store.list_documents()]


@router.put("/{session_id}/documents", response_model=DocumentResponse)
async def change_document(
    session_id: str,
    body: DocumentChangeRequest,
    uri: str = Query(...),
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> DocumentResponse:
    """Replace the text of an open document and recompute its diagnostics."""
    store = _get_store(session_id, mgr)
    try:
        summary = store.change(uri, body.text, body.version)
    except DocumentNotFoundError:
        raise _document_404(uri) from None
    return _document_response(summary)


@router.delete("/{session_id}/documents", status_code=204)
async def close_document(
    session_id: str,
    uri: str = Query(...),
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> None:
    store = _get_store(session_id, mgr)
    try:
        store.close(uri)
    except DocumentNotFoundError:
        raise _document_404(uri) from None


# -- analysis ----------------------------------------------------------------


@router.get("/{session_id}/diagnostics", response_model=DiagnosticsResponse)
async def document_diagnostics(
    session_id: str,
    uri: str = Query(...),
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> DiagnosticsResponse:
    """Cached diagnostics of an open document."""
    store = _get_store(session_id, mgr)
    try:
        found = store.diagnostics(uri)
    except DocumentNotFoundError:
        raise _document_404(uri) from None
    return DiagnosticsResponse(
        valid=not any(d.severity is Severity.ERROR for d in found),
        diagnostics=found,
    )


@router.get("/{session_id}/folding", response_model=FoldingResponse)
async def document_folding(
    session_id: str,
    uri: str = Query(...),
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> FoldingResponse:
    store = _get_store(session_id, mgr)
    try:
        ranges = store.fold_ranges(uri)
    except DocumentNotFoundError:
        raise _document_404(uri) from None
    return FoldingResponse(ranges=ranges)


@router.get("/{session_id}/completions", response_model=CompletionResponse)
async def document_completions(
    session_id: str,
    uri: str = Query(...),
    offset: int = Query(..., ge=0),
    mgr: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> CompletionResponse:
    store = _get_store(session_id, mgr)
    try:
        inside = store.is_inside_literal(uri, offset)
        items = store.completions(uri, offset) if inside else []
    except DocumentNotFoundError:
        raise _document_404(uri) from None
    return CompletionResponse(inside_literal=inside, items=items)
