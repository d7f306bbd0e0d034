"""Public user accounts: auth, profile, bookmarks and saved jobs."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from tawjih.dependencies.auth import clear_auth_cookie, require_user_api, set_auth_cookie
from tawjih.dependencies.runtime import enforce_rate_limit
from tawjih.models.user import DEFAULT_PREFERENCES
from tawjih.schemas.account import (
    BookmarkCreate,
    BookmarkRead,
    LoginIn,
    RegisterIn,
    SavedJobCreate,
    SavedJobRead,
    UserRead,
    UserUpdate,
)
from tawjih.services.auth_service import AuthIdentity, create_token, hash_password, verify_password
from tawjih.services.content_service import find_published
from tawjih.services.content_types import ContentKind, parse_kind
from tawjih.services.gateway import Gateway, get_gateway
from tawjih.services.sanitize import sanitize_email, sanitize_string

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _user_payload(user) -> dict:
    return UserRead.model_validate(user).model_dump(mode="json")


async def _load_user(gateway: Gateway, identity: AuthIdentity):
    user = await gateway.users.get(UUID(identity.user_id))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# --- Auth ---


@router.post("/auth/register", status_code=201, dependencies=[Depends(enforce_rate_limit)])
async def register(data: RegisterIn, gateway: Gateway = Depends(get_gateway)):
    email = sanitize_email(data.email)
    if await gateway.users.find_first(email=email) is not None:
        raise HTTPException(status_code=409, detail="User already exists with this email")

    user = await gateway.users.create(
        {
            "name": sanitize_string(data.name, 50),
            "email": email,
            "password_hash": hash_password(data.password),
            "role": "user",
            "preferences": dict(DEFAULT_PREFERENCES),
        }
    )
    logger.info("Registered user %s", user.id)
    return {"success": True, "message": "User registered successfully", "data": _user_payload(user)}


@router.post("/auth/login", dependencies=[Depends(enforce_rate_limit)])
async def login(data: LoginIn, response: Response, gateway: Gateway = Depends(get_gateway)):
    user = await gateway.users.find_first(email=sanitize_email(data.email))
    if user is None or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_token(str(user.id), user.email, user.role)
    set_auth_cookie(response, token)
    return {
        "success": True,
        "message": "Login successful",
        "data": {"user": _user_payload(user), "token": token},
    }


@router.post("/auth/logout")
async def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Logout successful"}


@router.get("/auth/me", dependencies=[Depends(enforce_rate_limit)])
async def me(
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    user = await _load_user(gateway, identity)
    return {"success": True, "data": {"user": _user_payload(user)}}


@router.patch("/me")
async def update_me(
    data: UserUpdate,
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    """Update name, email and/or preferences (merged over the stored ones)."""
    user = await _load_user(gateway, identity)

    values = {}
    if data.name is not None:
        values["name"] = sanitize_string(data.name, 50)
    if data.email is not None:
        email = sanitize_email(data.email)
        if email != user.email:
            if await gateway.users.find_first(email=email) is not None:
                raise HTTPException(status_code=409, detail="Email already in use")
            values["email"] = email
    if data.preferences is not None:
        merged = dict(user.preferences or DEFAULT_PREFERENCES)
        merged.update(data.preferences.model_dump(exclude_none=True))
        values["preferences"] = merged

    if values:
        user = await gateway.users.update(user.id, values)
    return {"success": True, "message": "Profile updated", "data": _user_payload(user)}


# --- Bookmarks ---


@router.get("/bookmarks")
async def list_bookmarks(
    type: str | None = Query(None, description="job, guidance or exam"),
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    criteria = {"user_id": UUID(identity.user_id)}
    kind = parse_kind(type)
    if kind is not None:
        criteria["target_type"] = kind.value
    bookmarks = await gateway.bookmarks.find_many(order_by=(("created_at", "desc"),), **criteria)
    return {"success": True, "data": [BookmarkRead.model_validate(b).model_dump(mode="json") for b in bookmarks]}


@router.post("/bookmarks", status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    user_id = UUID(identity.user_id)
    existing = await gateway.bookmarks.find_first(
        user_id=user_id, target_type=data.target_type.value, target_id=data.target_id
    )
    if existing is not None:
        raise HTTPException(status_code=409, detail="Bookmark already exists")

    if await find_published(gateway, data.target_type, data.target_id) is None:
        raise HTTPException(status_code=404, detail="Target not found or not published")

    bookmark = await gateway.bookmarks.create(
        {"user_id": user_id, "target_type": data.target_type.value, "target_id": data.target_id}
    )
    return {
        "success": True,
        "message": "Bookmark created successfully",
        "data": BookmarkRead.model_validate(bookmark).model_dump(mode="json"),
    }


@router.delete("/bookmarks/{bookmark_id}")
async def delete_bookmark(
    bookmark_id: UUID,
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    bookmark = await gateway.bookmarks.get(bookmark_id)
    if bookmark is None:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    if str(bookmark.user_id) != identity.user_id:
        raise HTTPException(status_code=403, detail="Forbidden")

    await gateway.bookmarks.delete(bookmark_id)
    return {"success": True, "message": "Bookmark deleted successfully"}


# --- Saved jobs ---


@router.get("/saved-jobs")
async def list_saved_jobs(
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    saved = await gateway.saved_jobs.find_many(
        order_by=(("created_at", "desc"),), user_id=UUID(identity.user_id)
    )
    return {"success": True, "data": [SavedJobRead.model_validate(s).model_dump(mode="json") for s in saved]}


@router.post("/saved-jobs", status_code=201)
async def save_job(
    data: SavedJobCreate,
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    user_id = UUID(identity.user_id)
    if await find_published(gateway, ContentKind.JOB, data.job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found or not published")
    if await gateway.saved_jobs.find_first(user_id=user_id, job_id=data.job_id) is not None:
        raise HTTPException(status_code=409, detail="Job already saved")

    saved = await gateway.saved_jobs.create({"user_id": user_id, "job_id": data.job_id})
    return {
        "success": True,
        "message": "Job saved successfully",
        "data": SavedJobRead.model_validate(saved).model_dump(mode="json"),
    }


@router.delete("/saved-jobs/{saved_id}")
async def delete_saved_job(
    saved_id: UUID,
    identity: AuthIdentity = Depends(require_user_api),
    gateway: Gateway = Depends(get_gateway),
):
    saved = await gateway.saved_jobs.find_first(id=saved_id, user_id=UUID(identity.user_id))
    if saved is None:
        raise HTTPException(status_code=404, detail="Saved job not found")

    await gateway.saved_jobs.delete(saved_id)
    return {"success": True, "message": "Saved job deleted successfully"}
