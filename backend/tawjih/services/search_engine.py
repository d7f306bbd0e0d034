"""Relevance search: score and rank jobs, guidance and exams against free text.

There is no full-text index: for each requested content type the engine pulls
``limit * overfetch`` published candidates, scores them in memory with
``score_item`` and merges everything into one ranked, paginated list.

Scoring (case-insensitive substring matching):

    title contains query            +10
      title equals query            +20
      title starts with query       +15
    body contains query             +5, +2 per extra occurrence (bonus capped at 10)
    sector contains query           +7
    region contains query           +7
    featured                        +3
    created within 7 days           +2
    job closing within 0-7 days     +5

An item that hits none of title/body/sector/region scores 0 and is dropped,
whatever its featured/recency bonuses would have been.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from tawjih.services.content_types import CONTENT_TYPES, ContentKind, kinds_for
from tawjih.services.gateway import ContentFilter, Gateway
from tawjih.services.sanitize import sanitize_string

logger = logging.getLogger(__name__)

HIGHLIGHT_CONTEXT = 50
MAX_HIGHLIGHTS = 3
MAX_SUGGESTIONS = 5
DESCRIPTION_LENGTH = 200
RECENT_DAYS = 7
CLOSING_SOON_DAYS = 7
SECONDS_PER_DAY = 86400


@dataclass(slots=True)
class SearchFilters:
    type: str | None = None
    sector: str | None = None
    region: str | None = None


@dataclass(slots=True)
class RankedResult:
    id: Any
    title: str
    description: str
    type: str
    url: str
    score: int
    highlights: dict[str, list[str]]
    sector: str
    region: str
    created_at: datetime | None
    featured: bool
    closing_date: datetime | None = None
    exam_date: datetime | None = None


@dataclass(slots=True)
class SearchPage:
    results: list[RankedResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
    suggestions: list[str] = field(default_factory=list)
    query: str = ""
    query_required: bool = False


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _whole_days(delta_seconds: float) -> int:
    return math.floor(delta_seconds / SECONDS_PER_DAY)


def score_item(item: Any, query: str, kind: ContentKind, now: datetime | None = None) -> int:
    """Relevance of one content row for ``query``. Pure: no storage access."""
    needle = query.lower()
    if not needle:
        return 0
    now = now or datetime.now(timezone.utc)

    title = (getattr(item, "title_ar", None) or "").lower()
    body = (getattr(item, "body_ar", None) or "").lower()
    sector = (getattr(item, "sector", None) or "").lower()
    region = (getattr(item, "region", None) or "").lower()

    score = 0
    matched = False

    if needle in title:
        matched = True
        score += 10
        if title == needle:
            score += 20
        if title.startswith(needle):
            score += 15

    if needle in body:
        matched = True
        score += 5
        extra = body.count(needle) - 1
        score += min(extra * 2, 10)

    if needle in sector:
        matched = True
        score += 7

    if needle in region:
        matched = True
        score += 7

    if not matched:
        return 0

    if getattr(item, "featured", False):
        score += 3

    created_at = _as_utc(getattr(item, "created_at", None))
    if created_at is not None and _whole_days((now - created_at).total_seconds()) <= RECENT_DAYS:
        score += 2

    if kind is ContentKind.JOB:
        closing = _as_utc(getattr(item, "closing_date", None))
        if closing is not None:
            days_left = _whole_days((closing - now).total_seconds())
            if 0 <= days_left <= CLOSING_SOON_DAYS:
                score += 5

    return score


def highlight(text: str | None, query: str) -> list[str]:
    """Up to three excerpts around each case-insensitive match, the match wrapped in <mark>."""
    if not text or not query:
        return []
    excerpts = []
    for match in re.finditer(re.escape(query), text, re.IGNORECASE):
        start = max(0, match.start() - HIGHLIGHT_CONTEXT)
        end = min(len(text), match.end() + HIGHLIGHT_CONTEXT)
        excerpts.append(
            f"{text[start:match.start()]}<mark>{match.group(0)}</mark>{text[match.end():end]}"
        )
        if len(excerpts) == MAX_HIGHLIGHTS:
            break
    return excerpts


def suggest(results: list[RankedResult], query: str) -> list[str]:
    """Distinct sector/region values that contain the query, in result order."""
    needle = query.lower()
    seen: list[str] = []
    for result in results:
        for value in (result.sector, result.region):
            if value and needle in value.lower() and value not in seen:
                seen.append(value)
    return seen[:MAX_SUGGESTIONS]


class SearchEngine:
    def __init__(
        self,
        gateway: Gateway,
        overfetch: int = 2,
        max_query_length: int = 100,
        clock: Callable[[], datetime] | None = None,
    ):
        self.gateway = gateway
        self.overfetch = overfetch
        self.max_query_length = max_query_length
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> SearchPage:
        filters = filters or SearchFilters()
        cleaned = sanitize_string(query or "", self.max_query_length).strip()
        if not cleaned:
            return SearchPage(page=page, query_required=True)

        now = self._clock()
        results: list[RankedResult] = []
        for kind in kinds_for(filters.type):
            results.extend(await self._search_kind(kind, cleaned, filters, limit, now))

        # Stable: equal scores keep job, guidance, exam retrieval order
        results.sort(key=lambda r: r.score, reverse=True)

        total = len(results)
        skip = (page - 1) * limit
        logger.info("Search q=%r type=%s matched=%d", cleaned, filters.type or "all", total)
        return SearchPage(
            results=results[skip:skip + limit],
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
            suggestions=suggest(results, cleaned),
            query=cleaned,
        )

    async def _search_kind(
        self,
        kind: ContentKind,
        query: str,
        filters: SearchFilters,
        limit: int,
        now: datetime,
    ) -> list[RankedResult]:
        info = CONTENT_TYPES[kind]
        candidates = await self.gateway.content(kind).find_many(
            ContentFilter(published=True, sector_contains=filters.sector, region_contains=filters.region),
            order_by=(("featured", "desc"), (info.recency_field, info.recency_dir)),
            take=limit * self.overfetch,
        )

        ranked = []
        for item in candidates:
            score = score_item(item, query, kind, now)
            if score <= 0:
                continue
            body = item.body_ar or ""
            ranked.append(
                RankedResult(
                    id=item.id,
                    title=item.title_ar,
                    description=body[:DESCRIPTION_LENGTH] + "...",
                    type=kind.value,
                    url=f"{info.url_prefix}/{item.slug_ar}",
                    score=score,
                    highlights={
                        "title": highlight(item.title_ar, query),
                        "content": highlight(body, query),
                    },
                    sector=item.sector,
                    region=item.region,
                    created_at=item.created_at,
                    featured=bool(item.featured),
                    closing_date=getattr(item, "closing_date", None),
                    exam_date=getattr(item, "exam_date", None),
                )
            )
        return ranked
