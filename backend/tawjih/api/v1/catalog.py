"""Public listing/detail endpoints plus slug-based admin edits for each content type.

One router per content type is built from ``CONTENT_TYPES``:
``/jobs``, ``/guidance`` and ``/exams`` share the same shape.
"""

import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from tawjih.config import get_settings
from tawjih.dependencies.auth import require_admin
from tawjih.dependencies.runtime import get_response_cache
from tawjih.schemas.common import Pagination
from tawjih.schemas.content import CREATE_SCHEMAS, ContentUpdate
from tawjih.services.auth_service import AuthIdentity
from tawjih.services.cache import TTLCache, cache_key
from tawjih.services.content_router import ContentRouter
from tawjih.services.content_service import create_values, serialize, slug_taken, update_values
from tawjih.services.content_types import CONTENT_TYPES, ContentKind
from tawjih.services.gateway import ContentFilter, Gateway, get_gateway

logger = logging.getLogger(__name__)

NO_STORE = "no-store, no-cache, must-revalidate, max-age=0"


def build_catalog_router(kind: ContentKind) -> APIRouter:
    info = CONTENT_TYPES[kind]
    create_schema = CREATE_SCHEMAS[kind]
    router = APIRouter(prefix=info.url_prefix, tags=[info.collection])

    @router.get("")
    async def list_content(
        gateway: Gateway = Depends(get_gateway),
        cache: TTLCache = Depends(get_response_cache),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        sector: str | None = Query(None, description="Filter by sector"),
        region: str | None = Query(None, description="Filter by region"),
        featured: bool | None = Query(None, description="Only featured items"),
        school_level: str | None = Query(None, description="Exam calendars only"),
    ):
        filters = ContentFilter(
            published=True,
            sector=sector or None,
            region=region or None,
            featured=True if featured else None,
            school_level=(school_level or None) if kind is ContentKind.EXAM else None,
        )
        key = cache_key(
            info.url_prefix,
            {
                "page": page,
                "limit": limit,
                "sector": filters.sector,
                "region": filters.region,
                "featured": filters.featured,
                "school_level": filters.school_level,
            },
        )
        cached = cache.get(key)
        if cached is not None:
            return cached

        collection = gateway.content(kind)
        items = await collection.find_many(
            filters,
            order_by=((info.recency_field, info.recency_dir),),
            skip=(page - 1) * limit,
            take=limit,
        )
        total = await collection.count(filters)
        payload = {
            "success": True,
            "data": [serialize(kind, item) for item in items],
            "pagination": Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)).model_dump(),
        }
        cache.set(key, payload, get_settings().cache_list_ttl_seconds)
        return payload

    @router.get("/{slug}")
    async def get_content(
        slug: str,
        gateway: Gateway = Depends(get_gateway),
        cache: TTLCache = Depends(get_response_cache),
    ):
        key = cache_key(f"{info.url_prefix}/{slug}")
        cached = cache.get(key)
        if cached is not None:
            return cached

        record = await gateway.content(kind).find_first(slug_ar=slug, published=True)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{info.label} not found")

        payload = {"success": True, "data": serialize(kind, record)}
        cache.set(key, payload, get_settings().cache_detail_ttl_seconds)
        return payload

    @router.post("", status_code=201)
    async def create_content(
        data: create_schema,
        response: Response,
        _admin: AuthIdentity = Depends(require_admin),
        gateway: Gateway = Depends(get_gateway),
        cache: TTLCache = Depends(get_response_cache),
    ):
        if await slug_taken(gateway, kind, data.slug_ar):
            raise HTTPException(status_code=409, detail="Slug already exists")

        record = await gateway.content(kind).create(create_values(kind, data))
        cache.clear()
        logger.info("Created %s %s (%s)", kind.value, record.id, record.slug_ar)
        response.headers["Cache-Control"] = NO_STORE
        return {"success": True, "message": f"{info.label} created", "data": serialize(kind, record)}

    @router.put("/{slug}")
    async def update_content(
        slug: str,
        data: ContentUpdate,
        response: Response,
        _admin: AuthIdentity = Depends(require_admin),
        gateway: Gateway = Depends(get_gateway),
        cache: TTLCache = Depends(get_response_cache),
    ):
        collection = gateway.content(kind)
        record = await collection.find_first(slug_ar=slug)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{info.label} not found")
        if data.slug_ar and data.slug_ar != slug and await slug_taken(gateway, kind, data.slug_ar):
            raise HTTPException(status_code=409, detail="Slug already exists")

        record = await collection.update(record.id, update_values(kind, data))
        cache.clear()
        response.headers["Cache-Control"] = NO_STORE
        return {"success": True, "message": f"{info.label} updated", "data": serialize(kind, record)}

    @router.delete("/{slug}")
    async def delete_content(
        slug: str,
        response: Response,
        _admin: AuthIdentity = Depends(require_admin),
        gateway: Gateway = Depends(get_gateway),
        cache: TTLCache = Depends(get_response_cache),
    ):
        record = await gateway.content(kind).find_first(slug_ar=slug)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{info.label} not found")

        result = await ContentRouter(gateway).apply_delete(record.id, kind)
        if result is None:
            raise HTTPException(status_code=404, detail=f"{info.label} not found")
        cache.clear()
        response.headers["Cache-Control"] = NO_STORE
        return {"success": True, "message": f"{info.label} deleted"}

    return router


jobs_router = build_catalog_router(ContentKind.JOB)
guidance_router = build_catalog_router(ContentKind.GUIDANCE)
exams_router = build_catalog_router(ContentKind.EXAM)
