"""
Password hashing and JWT helpers.
"""

import datetime as dt
import hashlib
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.config import settings
from app.exceptions import UnauthorizedError

ACCESS_TOKEN = "access"
PASSWORD_RESET_TOKEN = "password_reset"


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def verify_password(plain: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, plain)


def _encode(claims: Dict[str, Any], expires_in: dt.timedelta) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user) -> str:
    """Bearer token identifying `user` (subject, email and role claims)."""
    return _encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "role": getattr(user.role, "value", user.role),
            "typ": ACCESS_TOKEN,
        },
        dt.timedelta(minutes=settings.jwt_expires_minutes),
    )


def password_fingerprint(password_hash: Optional[str]) -> str:
    """Short digest of a stored hash; changes whenever the password does."""
    return hashlib.sha256((password_hash or "").encode("utf-8")).hexdigest()[:16]


def create_reset_token(user) -> str:
    """
    Short-lived token that only authorizes a password change.

    It carries a fingerprint of the current password hash, so it stops
    working once the password has been changed.
    """
    return _encode(
        {
            "sub": str(user.id),
            "typ": PASSWORD_RESET_TOKEN,
            "pwh": password_fingerprint(user.password_hash),
        },
        dt.timedelta(minutes=settings.password_reset_expires_minutes),
    )


def decode_token(token: str, purpose: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """
    Decode and verify a token.

    Raises:
        UnauthorizedError: If the token is malformed, expired, or issued for
            another purpose
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")

    if payload.get("typ") != purpose or "sub" not in payload:
        raise UnauthorizedError("Invalid token")
    return payload


__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_reset_token",
    "password_fingerprint",
    "decode_token",
    "ACCESS_TOKEN",
    "PASSWORD_RESET_TOKEN",
]
