"""Admin API: authentication, content management, uploads and first-run setup."""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, Request, Response, UploadFile

from tawjih.config import get_settings
from tawjih.dependencies.auth import (
    clear_auth_cookie,
    get_current_identity,
    require_admin,
    set_auth_cookie,
)
from tawjih.dependencies.runtime import enforce_rate_limit, get_response_cache
from tawjih.schemas.account import AdminLoginIn, AdminRead, AdminSetupIn, UploadRead
from tawjih.schemas.content import AdminContentCreate
from tawjih.services.auth_service import AuthIdentity, create_token, hash_password, verify_password
from tawjih.services.cache import TTLCache
from tawjih.services.content_router import ContentRouter, RoutedResult
from tawjih.services.content_service import (
    ContentValidationError,
    admin_payload_values,
    serialize,
    slug_taken,
    summarize,
)
from tawjih.services.content_types import ContentKind, kinds_for
from tawjih.services.gateway import ContentFilter, Gateway, get_gateway
from tawjih.services.sanitize import sanitize_email, sanitize_string
from tawjih.services.uploads import UploadRejected, store_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

NO_STORE = "no-store, no-cache, must-revalidate, max-age=0"
MIN_ADMIN_PASSWORD_LENGTH = 8


# --- Auth ---


@router.post("/auth/login", dependencies=[Depends(enforce_rate_limit)])
async def admin_login(
    data: AdminLoginIn,
    response: Response,
    gateway: Gateway = Depends(get_gateway),
):
    """Log in with username or email; sets the auth cookie and returns the token."""
    raw = data.username
    if "@" in raw:
        admin = await gateway.admins.find_first(email=sanitize_email(raw))
    else:
        username = sanitize_string(raw, 100)
        admin = await gateway.admins.find_first(username=username)
        if admin is None:
            admin = await gateway.admins.find_first(email=username.lower())

    if admin is None or not verify_password(data.password, admin.password):
        logger.info("Failed admin login for %r", raw)
        raise HTTPException(status_code=401, detail="Invalid username or password")

    token = create_token(str(admin.id), admin.email, "admin")
    set_auth_cookie(response, token)
    logger.info("Admin %s logged in", admin.username)
    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "admin": {"id": str(admin.id), "username": admin.username, "email": admin.email, "role": "admin"},
            "token": token,
        },
    }


@router.post("/auth/logout")
async def admin_logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Logout successful"}


@router.get("/auth/me", dependencies=[Depends(enforce_rate_limit)])
async def admin_me(
    identity: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
):
    admin = await gateway.admins.get(UUID(identity.user_id))
    if admin is None:
        raise HTTPException(status_code=404, detail="Admin not found")
    return {"success": True, "data": {"admin": AdminRead.model_validate(admin).model_dump(mode="json")}}


# --- Content ---


@router.post("/content", status_code=201)
async def create_content(
    data: AdminContentCreate,
    response: Response,
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    cache: TTLCache = Depends(get_response_cache),
):
    """Create a job, guidance article or exam entry from the flat admin form."""
    try:
        kind, values = admin_payload_values(data)
    except ContentValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if await slug_taken(gateway, kind, values["slug_ar"]):
        raise HTTPException(status_code=409, detail="Slug already exists")

    record = await gateway.content(kind).create(values)
    cache.clear()
    logger.info("Admin created %s %s", kind.value, record.id)
    response.headers["Cache-Control"] = NO_STORE
    return {"success": True, "data": serialize(kind, record)}


@router.get("/content/list")
async def list_content(
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    type: str = Query("all", description="job, guidance, exam or all"),
    q: str | None = Query(None, description="Title contains"),
    sector: str | None = Query(None),
    region: str | None = Query(None),
    limit: int = Query(100, ge=1, le=200),
):
    """Every row, published or not, newest first."""
    filters = ContentFilter(
        title_contains=q or None,
        sector_contains=sector or None,
        region_contains=region or None,
    )
    rows = []
    for kind in kinds_for(type):
        items = await gateway.content(kind).find_many(filters, order_by=(("created_at", "desc"),), take=limit)
        rows.extend((kind, item) for item in items)

    rows.sort(key=lambda row: row[1].created_at, reverse=True)
    return {"success": True, "data": [summarize(kind, item) for kind, item in rows[:limit]]}


def _routed_response(result: RoutedResult | None, response: Response, cache: TTLCache) -> dict:
    if result is None:
        raise HTTPException(status_code=404, detail="Not found")
    cache.clear()
    response.headers["Cache-Control"] = NO_STORE
    return {"success": True, "data": summarize(result.kind, result.record)}


@router.patch("/content/{content_id}")
async def update_content(
    content_id: UUID,
    response: Response,
    fields: dict[str, Any] = Body(...),
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    cache: TTLCache = Depends(get_response_cache),
):
    """Patch published/featured/title on whichever collection owns the id."""
    result = await ContentRouter(gateway).apply_update(content_id, fields)
    return _routed_response(result, response, cache)


@router.delete("/content/{content_id}")
async def delete_content(
    content_id: UUID,
    response: Response,
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    cache: TTLCache = Depends(get_response_cache),
):
    result = await ContentRouter(gateway).apply_delete(content_id)
    return _routed_response(result, response, cache)


@router.patch("/content/{kind}/{content_id}")
async def update_typed_content(
    kind: ContentKind,
    content_id: UUID,
    response: Response,
    fields: dict[str, Any] = Body(...),
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    cache: TTLCache = Depends(get_response_cache),
):
    result = await ContentRouter(gateway).apply_update(content_id, fields, kind=kind)
    return _routed_response(result, response, cache)


@router.delete("/content/{kind}/{content_id}")
async def delete_typed_content(
    kind: ContentKind,
    content_id: UUID,
    response: Response,
    _admin: AuthIdentity = Depends(require_admin),
    gateway: Gateway = Depends(get_gateway),
    cache: TTLCache = Depends(get_response_cache),
):
    result = await ContentRouter(gateway).apply_delete(content_id, kind=kind)
    return _routed_response(result, response, cache)


# --- Uploads ---


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    _admin: AuthIdentity = Depends(require_admin),
):
    settings = get_settings()
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB",
        )

    try:
        name = store_upload(settings.upload_dir, file.filename or "upload", file.content_type, data)
    except UploadRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return {
        "success": True,
        "data": UploadRead(
            url=f"{settings.upload_url_prefix}/{name}",
            name=name,
            size=len(data),
            type=file.content_type or "",
        ).model_dump(),
    }


# --- Setup ---


async def _table_stats(gateway: Gateway) -> dict[str, int]:
    return {
        "admins": await gateway.admins.count(),
        "jobCompetitions": await gateway.content(ContentKind.JOB).count(),
        "schoolGuidance": await gateway.content(ContentKind.GUIDANCE).count(),
        "examCalendars": await gateway.content(ContentKind.EXAM).count(),
        "users": await gateway.users.count(),
    }


@router.get("/setup")
async def setup_status(gateway: Gateway = Depends(get_gateway)):
    """Database status: admin accounts and row counts."""
    admins = await gateway.admins.find_many()
    return {
        "success": True,
        "message": "Database status check",
        "data": {
            "hasAdmin": bool(admins),
            "admins": [AdminRead.model_validate(a).model_dump(mode="json") for a in admins],
            "tableStats": await _table_stats(gateway),
        },
    }


@router.post("/setup")
async def setup_database(
    data: AdminSetupIn,
    request: Request,
    gateway: Gateway = Depends(get_gateway),
):
    """Create the first admin from configured credentials.

    ``force`` replaces an existing admin and needs an admin token.
    """
    if data.action != "setup-database":
        raise HTTPException(status_code=400, detail='Invalid action. Use "setup-database"')

    existing = await gateway.admins.find_first()
    if existing is not None and not data.force:
        return {
            "success": False,
            "message": "Admin user already exists",
            "data": {"hasAdmin": True, "admin": AdminRead.model_validate(existing).model_dump(mode="json")},
        }
    if existing is not None:
        identity = get_current_identity(request)
        if identity is None or not identity.is_admin:
            raise HTTPException(status_code=401, detail="Unauthorized")

    settings = get_settings()
    password = settings.admin_password
    if not password or len(password) < MIN_ADMIN_PASSWORD_LENGTH:
        logger.error("ADMIN_PASSWORD is missing or shorter than %d characters", MIN_ADMIN_PASSWORD_LENGTH)
        raise HTTPException(status_code=500, detail="Admin password not configured properly or too weak")

    if existing is not None:
        await gateway.admins.delete(existing.id)

    admin = await gateway.admins.create(
        {
            "username": settings.admin_username,
            "email": sanitize_email(settings.admin_email),
            "password": hash_password(password),
        }
    )
    logger.info("Bootstrapped admin %s", admin.username)
    return {
        "success": True,
        "message": "Database setup completed successfully",
        "data": {
            "admin": AdminRead.model_validate(admin).model_dump(mode="json"),
            "tableStats": await _table_stats(gateway),
        },
    }
