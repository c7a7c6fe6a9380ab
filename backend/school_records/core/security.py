"""
School Records - Security Module
JWT token handling and password hashing utilities
"""
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from school_records.core.config import settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def _encode(subject: str | int, token_type: str, expires_delta: timedelta, claims: dict[str, Any] | None = None) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(subject),
        "exp": now + expires_delta,
        "iat": now,
        "type": token_type,
    }
    if claims:
        to_encode.update(claims)
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    subject: str | int,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The token subject (the user ID)
        expires_delta: Optional custom expiration time
        additional_claims: Optional additional JWT claims (role, classes)

    Returns:
        Encoded JWT token string
    """
    return _encode(
        subject,
        ACCESS_TOKEN,
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        additional_claims,
    )


def create_refresh_token(subject: str | int) -> str:
    """Create a JWT refresh token with longer expiration."""
    # jti keeps tokens issued in the same second distinct
    return _encode(
        subject,
        REFRESH_TOKEN,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        {"jti": uuid4().hex},
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token, returning None if invalid."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> str | None:
    """
    Verify a token and return the subject if valid.

    Args:
        token: The JWT token to verify
        token_type: Expected token type ("access" or "refresh")

    Returns:
        User ID (subject) if valid, None otherwise
    """
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != token_type:
        return None

    return payload.get("sub")
