"""JWT signing/verification and password hashing.

Uses PyJWT for tokens and passlib with bcrypt for password hashing.  These
are the two cryptographic collaborators of the auth gate; nothing here
touches HTTP.
"""

from datetime import UTC, datetime, timedelta
from typing import Literal

import jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TokenFailureReason = Literal["missing", "invalid", "expired"]


class TokenVerificationError(Exception):
    """A bearer credential could not be verified.

    Attributes:
        reason: ``missing``, ``invalid`` or ``expired``.
    """

    def __init__(self, reason: TokenFailureReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Token {reason}")


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password to hash.

    Returns:
        The bcrypt-hashed password string.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash.

    Args:
        plain_password: The plaintext password to verify.
        hashed_password: The bcrypt hash to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    username: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 7 * 24 * 60,
) -> str:
    """Sign a JWT carrying the user's identity claims.

    Args:
        user_id: Numeric user id, stored as the ``sub`` claim.
        username: The user's login name.
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_minutes: Token lifetime in minutes.

    Returns:
        The encoded JWT string.
    """
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": str(user_id),
        "username": username,
        "exp": expire,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict:
    """Decode and validate a JWT token.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])


def verify_token(
    token: str | None,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict:
    """Verify a bearer credential and return its claims.

    Args:
        token: The raw JWT, or None when no credential was presented.
        secret_key: Secret key used for signing.
        algorithm: JWT signing algorithm.

    Returns:
        The decoded payload; ``sub`` and ``username`` are guaranteed present.

    Raises:
        TokenVerificationError: With reason ``missing``, ``expired`` or ``invalid``.
    """
    if not token:
        raise TokenVerificationError("missing", "No authorization token was found in the request")
    try:
        payload = decode_token(token, secret_key, algorithm)
    except jwt.ExpiredSignatureError as exc:
        raise TokenVerificationError("expired", "Authorization token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenVerificationError("invalid", "Authorization token is invalid") from exc

    if payload.get("sub") is None or payload.get("username") is None:
        raise TokenVerificationError("invalid", "Authorization token is missing identity claims")
    return payload
