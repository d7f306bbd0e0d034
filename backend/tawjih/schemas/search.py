"""Pydantic schemas for the unified search payload (camelCase on the wire)."""

from datetime import datetime
from typing import Any

from tawjih.schemas.common import CamelModel


class SearchHighlights(CamelModel):
    title: list[str] = []
    content: list[str] = []


class SearchResultOut(CamelModel):
    id: Any
    title: str
    description: str
    type: str
    url: str
    score: int
    highlights: SearchHighlights
    sector: str
    region: str
    created_at: datetime | None = None
    featured: bool = False
    closing_date: datetime | None = None
    exam_date: datetime | None = None


class SearchPageOut(CamelModel):
    results: list[SearchResultOut] = []
    total: int = 0
    page: int = 1
    total_pages: int = 0
    suggestions: list[str] = []
    query: str = ""
