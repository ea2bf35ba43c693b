"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt), JWT session tokens and the opaque
tokens used for email verification.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from jobboard.core.config import parse_duration, settings

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Each call draws a fresh salt, so hashing the same password twice yields
    two different strings that both verify.
    """
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: The data to encode in the token (typically {"sub": account_id})
        expires_delta: Optional custom expiration time, defaults to the
            configured ``JWT_EXPIRATION``

    Returns:
        The encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = parse_duration(settings.JWT_EXPIRATION)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    return encoded_jwt


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT access token.

    Returns:
        The decoded token payload, or None if the signature or expiry is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
        return payload
    except InvalidTokenError:
        return None


def get_token_data(token: str) -> Optional[str]:
    """Extract the subject (account id) from a JWT token, or None if invalid."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    return payload.get("sub")


def generate_verify_token() -> str:
    """Opaque URL-safe token for email verification links."""
    return secrets.token_urlsafe(32)
