"""Authentication dependencies for FastAPI routes."""

from fastapi import HTTPException, Request, Response

from tawjih.config import get_settings
from tawjih.services.auth_service import AuthIdentity, decode_token


def read_token(request: Request) -> str | None:
    """Token from the auth cookie, falling back to an ``Authorization: Bearer`` header."""
    token = request.cookies.get(get_settings().auth_cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_current_identity(request: Request) -> AuthIdentity | None:
    """Return the caller's verified identity or None."""
    token = read_token(request)
    if not token:
        return None
    return decode_token(token)


def require_user_api(request: Request) -> AuthIdentity:
    """Return the signed-in identity or raise 401."""
    identity = get_current_identity(request)
    if identity is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return identity


def require_admin(request: Request) -> AuthIdentity:
    """Admin-only endpoints; anything short of an admin token is a 401."""
    identity = get_current_identity(request)
    if identity is None or not identity.is_admin:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return identity


def set_auth_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.environment == "production",
        samesite="strict",
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(get_settings().auth_cookie_name, path="/")
