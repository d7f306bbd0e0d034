"""Authentication helpers: bcrypt password hashing and signed JWT credentials."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from jwt.exceptions import InvalidTokenError

from tawjih.config import get_settings

logger = logging.getLogger(__name__)

JWT_ALG = "HS256"
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    user_id: str
    email: str
    role: str  # user, admin

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a bcrypt hash. Non-bcrypt values never match."""
    if not hashed or not hashed.startswith(BCRYPT_PREFIXES):
        logger.warning("Refusing to verify a password against a non-bcrypt value")
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def create_token(user_id: str, email: str, role: str) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.token_expire_days)
    payload = {"userId": user_id, "email": email, "role": role, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALG)


def decode_token(token: str) -> AuthIdentity | None:
    """Verify a token and extract the identity; invalid or expired tokens give None."""
    try:
        payload = jwt.decode(token, get_settings().secret_key, algorithms=[JWT_ALG])
    except InvalidTokenError as exc:
        logger.info("Token verification failed: %s", exc)
        return None

    user_id = payload.get("userId")
    role = payload.get("role")
    if not user_id or role not in ("user", "admin"):
        return None
    return AuthIdentity(user_id=str(user_id), email=payload.get("email", ""), role=role)
