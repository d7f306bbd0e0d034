"""Unified search across job competitions, guidance articles and exam calendars."""

from fastapi import APIRouter, Depends, Query

from tawjih.config import get_settings
from tawjih.schemas.search import SearchPageOut
from tawjih.services.gateway import Gateway, get_gateway
from tawjih.services.search_engine import SearchEngine, SearchFilters

router = APIRouter(prefix="/search", tags=["search"])


@router.get("")
async def search_content(
    gateway: Gateway = Depends(get_gateway),
    q: str = Query("", description="Free-text query"),
    type: str = Query("all", description="job, guidance, exam or all"),
    sector: str | None = Query(None, description="Sector contains"),
    region: str | None = Query(None, description="Region contains"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """Ranked search. An empty query answers with ``success: false`` and no results."""
    settings = get_settings()
    engine = SearchEngine(
        gateway,
        overfetch=settings.search_overfetch_factor,
        max_query_length=settings.search_max_query_length,
    )
    result = await engine.search(
        q,
        SearchFilters(type=type, sector=sector or None, region=region or None),
        page=page,
        limit=limit,
    )

    data = SearchPageOut.model_validate(result).model_dump(mode="json", by_alias=True)
    if result.query_required:
        return {"success": False, "message": "Search query is required", "data": data}
    return {"success": True, "data": data}
