"""API request/response Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from taglit.models.diagnostics import Completion, Diagnostic, FoldRange


class AnalyzeRequest(BaseModel):
    """Request body for the stateless /analyze endpoints."""

    text: str = Field(description="Full document text")
    language_id: str = Field(default="javascript", description="Editor language identifier")
    leaders: list[str] | None = Field(
        default=None, description="Leader names; server defaults when omitted"
    )


class CompletionRequest(AnalyzeRequest):
    """Request body for POST /analyze/completions."""

    offset: int = Field(ge=0, description="Cursor offset in the document")


class DiagnosticsResponse(BaseModel):
    valid: bool
    diagnostics: list[Diagnostic] = []


class FoldingResponse(BaseModel):
    ranges: list[FoldRange] = []


class CompletionResponse(BaseModel):
    inside_literal: bool
    items: list[Completion] = []


class ElementsResponse(BaseModel):
    elements: list[str]
    void_elements: list[str]


class AttributesResponse(BaseModel):
    attributes: dict[str, list[str]]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""


# ---------------------------------------------------------------------------
# Session schemas
# ---------------------------------------------------------------------------


class SessionCreateRequest(BaseModel):
    """Request body for POST /sessions."""

    metadata: dict[str, str] = Field(default_factory=dict)
    leaders: list[str] | None = None


class SessionResponse(BaseModel):
    session_id: str
    created_at: datetime
    last_accessed_at: datetime
    document_count: int
    leaders: list[str]
    metadata: dict[str, str] = Field(default_factory=dict)


class SessionListResponse(BaseModel):
    sessions: list[SessionResponse]


class DocumentOpenRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/documents."""

    uri: str
    text: str
    language_id: str = "javascript"
    version: int = 0


class DocumentChangeRequest(BaseModel):
    """Request body for PUT /sessions/{session_id}/documents/{uri}."""

    text: str
    version: int | None = None


class DocumentResponse(BaseModel):
    uri: str
    language_id: str
    version: int
    length: int
    diagnostic_count: int
