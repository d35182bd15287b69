"""Catalog endpoints: GET /catalog/elements, GET /catalog/attributes."""

from __future__ import annotations

from fastapi import APIRouter

from taglit.api.schemas import AttributesResponse, ElementsResponse
from taglit.html.catalog import ATTRIBUTES, ELEMENTS, VOID_ELEMENTS

router = APIRouter()


@router.get("/elements", response_model=ElementsResponse)
async def list_elements() -> ElementsResponse:
    """Element names offered as completions, plus the void element set."""
    return ElementsResponse(elements=list(ELEMENTS), void_elements=sorted(VOID_ELEMENTS))


@router.get("/attributes", response_model=AttributesResponse)
async def list_attributes() -> AttributesResponse:
    """Attribute names per element; ``"*"`` applies to every element."""
    return AttributesResponse(attributes={k: list(v) for k, v in ATTRIBUTES.items()})
