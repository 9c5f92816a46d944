"""
Blog API — Password Hashing and Bearer Tokens
===============================================

What:  Thin wrappers around passlib (argon2) and python-jose (HS256 JWT).
How:   Pure, synchronous functions. Hashing is CPU-bound, so async callers
       go through `run_in_threadpool` (see services/auth_service.py).

Token claims:
    {"id": <int>, "email": <str>, "exp": <unix time>}
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from blogapi.config import Settings
from blogapi.exceptions import ForbiddenError
from blogapi.schemas.auth import Identity

# argon2 has no 72-byte input limit, unlike bcrypt
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a mismatch or for a stored value passlib cannot identify."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    email: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a token embedding the caller's identity.

    Args:
        expires_delta: lifetime override; defaults to
            `settings.access_token_expire_minutes`. Negative values yield
            an already-expired token.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    claims: Dict[str, Any] = {"id": user_id, "email": email, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity:
    """
    Verify signature and expiry, then extract the identity claims.

    Raises:
        ForbiddenError: for any token that does not verify or lacks
            integer `id` / string `email` claims.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise ForbiddenError(reason=str(e))

    user_id = payload.get("id")
    email = payload.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        raise ForbiddenError(reason="token is missing identity claims")
    return Identity(id=user_id, email=email)
