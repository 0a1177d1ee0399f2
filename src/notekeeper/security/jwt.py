"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, NamedTuple, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings

TOKEN_TYPE = "access"


class TokenIdentity(NamedTuple):
    """Identity carried by a verified session token."""

    user_id: UUID
    email: str


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` into a JWT that expires after ``expires_delta``."""
    settings = get_settings()
    to_encode = data.copy()

    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(days=settings.access_token_expire_days)

    to_encode.update({"exp": expire, "iat": now, "type": TOKEN_TYPE})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def issue_access_token(user_id: UUID, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a session token binding the user's id and email."""
    return create_access_token({"sub": str(user_id), "email": email}, expires_delta)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a token; None if malformed, expired or forged."""
    if not token:
        return None
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    # Verify token type
    if payload.get("type") != TOKEN_TYPE:
        return None
    return payload


def verify_access_token(token: str) -> Optional[TokenIdentity]:
    """Return the identity in a valid token, or None."""
    payload = decode_access_token(token)
    if not payload:
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not isinstance(email, str):
        return None

    try:
        return TokenIdentity(UUID(user_id), email)
    except ValueError:
        return None
