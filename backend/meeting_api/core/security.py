"""
Security utilities for authentication.

Provides password hashing (bcrypt) and JWT bearer token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext
from pydantic import ValidationError

from meeting_api.core.config import settings
from meeting_api.schemas.auth import TokenPayload

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenError(Exception):
    """Raised when a bearer token cannot be accepted."""

    message = "Token verification failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class TokenExpiredError(TokenError):
    message = "Token expired"


class TokenInvalidError(TokenError):
    message = "Invalid token"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise (including when the
        stored hash is not a recognised bcrypt hash)
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Every call uses a fresh salt, so hashing the same password twice
    yields two different strings.
    """
    return pwd_context.hash(password)


def create_access_token(
    claims: dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        claims: Identity claims, {"userId", "email", "role"}
        expires_delta: Optional custom lifetime (defaults to
            ACCESS_TOKEN_EXPIRE_DAYS)

    Returns:
        The encoded JWT token string
    """
    to_encode = claims.copy()

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode.update({"iat": now, "exp": now + expires_delta})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and validate a JWT access token.

    Raises:
        TokenExpiredError: the signature is valid but the token expired
        TokenInvalidError: the token is malformed, tampered with, or its
            claims do not describe an identity
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except InvalidTokenError as exc:
        raise TokenInvalidError() from exc

    try:
        return TokenPayload.model_validate(payload)
    except ValidationError as exc:
        raise TokenInvalidError() from exc
