"""Stateless analysis endpoints: POST /analyze/{diagnostics,folding,completions}."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taglit.api.deps import get_settings
from taglit.api.schemas import (
    AnalyzeRequest,
    CompletionRequest,
    CompletionResponse,
    DiagnosticsResponse,
    FoldingResponse,
)
from taglit.lexer.leaders import InvalidLeaderError
from taglit.models.diagnostics import Severity
from taglit.service.completion import CompletionProvider
from taglit.service.diagnostics import DiagnosticProvider
from taglit.service.folding import FoldingProvider
from taglit.service.languages import is_supported
from taglit.settings import Settings

router = APIRouter()


def _leaders(body: AnalyzeRequest, settings: Settings) -> list[str]:
    return body.leaders if body.leaders else settings.literal_leaders


@router.post("/diagnostics", response_model=DiagnosticsResponse)
async def diagnostics(
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> DiagnosticsResponse:
    """Tag-balance diagnostics for every HTML literal in the text."""
    try:
        provider = DiagnosticProvider(
            _leaders(body, settings), max_nesting_depth=settings.max_nesting_depth
        )
    except InvalidLeaderError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    found = provider.diagnose(body.text, body.language_id)
    return DiagnosticsResponse(
        valid=not any(d.severity is Severity.ERROR for d in found),
        diagnostics=found,
    )


@router.post("/folding", response_model=FoldingResponse)
async def folding(
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> FoldingResponse:
    """Fold ranges for literals spanning three or more lines."""
    try:
        provider = FoldingProvider(_leaders(body, settings))
    except InvalidLeaderError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return FoldingResponse(ranges=provider.fold_ranges(body.text, body.language_id))


@router.post("/completions", response_model=CompletionResponse)
async def completions(
    body: CompletionRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> CompletionResponse:
    """Tag or attribute completions at ``offset``."""
    try:
        provider = CompletionProvider(_leaders(body, settings))
    except InvalidLeaderError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    inside = is_supported(body.language_id) and provider.is_inside_literal(body.text, body.offset)
    items = provider.complete(body.text, body.offset, body.language_id) if inside else []
    return CompletionResponse(inside_literal=inside, items=items)
