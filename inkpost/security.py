"""
Inkpost Backend — Password Hashing & Identity Tokens
=====================================================

What:  Salted password hashing and the signed identity token carried in the
       `token` cookie.
How:   passlib's CryptContext (bcrypt) generates a fresh salt per hash and
       compares in constant time; python-jose signs/verifies HS256 JWTs.
Who:   UserService (hashing), auth routes (issuing), and every route that
       needs a logged-in user (get_current_identity dependency).

Token claims:
    {"username": "alice", "id": "<user uuid>", "exp": <optional unix time>}

    Tokens are stateless: nothing is stored server-side, so logout can only
    clear the client's cookie. ACCESS_TOKEN_EXPIRE_MINUTES bounds how long a
    leaked token stays usable (0 disables expiry).
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from inkpost.config import settings
from inkpost.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenIdentity:
    """The verified contents of an identity token."""
    user_id: uuid.UUID
    username: str


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ── Tokens ────────────────────────────────────────────────────────────────

def create_access_token(
    user_id: uuid.UUID,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed token embedding the user's id and username.

    Args:
        expires_delta: Override the configured lifetime (used in tests).
                       When None and ACCESS_TOKEN_EXPIRE_MINUTES is 0,
                       the token carries no `exp` claim.
    """
    claims = {"username": username, "id": str(user_id)}
    if expires_delta is None and settings.access_token_expire_minutes:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    if expires_delta is not None:
        claims["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: Optional[str]) -> TokenIdentity:
    """
    Verify a token's signature (and expiry, when present) and return its identity.

    Raises:
        AuthenticationError: Empty, malformed, tampered, expired, or missing claims.
    """
    if not token:
        raise AuthenticationError(message="Not authenticated")

    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected identity token: %s", str(e))
        raise AuthenticationError(message="Could not validate credentials")

    username = payload.get("username")
    raw_id = payload.get("id")
    if not username or not raw_id:
        raise AuthenticationError(message="Could not validate credentials")

    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError:
        raise AuthenticationError(message="Could not validate credentials")

    return TokenIdentity(user_id=user_id, username=username)


def get_current_identity(
    token: Optional[str] = Cookie(default=None, alias=settings.cookie_name),
) -> TokenIdentity:
    """
    FastAPI dependency: the identity of the caller, taken from the token cookie.

    Routes that declare this dependency answer 401 before their body runs
    when the cookie is missing or invalid.
    """
    return decode_access_token(token)


# ── Cookie helpers ────────────────────────────────────────────────────────

def set_token_cookie(response: Response, token: str) -> None:
    max_age = settings.access_token_expire_minutes * 60 or None
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def clear_token_cookie(response: Response) -> None:
    """Overwrite the identity cookie with an empty value."""
    response.set_cookie(
        key=settings.cookie_name,
        value="",
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
