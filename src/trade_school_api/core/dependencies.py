"""FastAPI dependency injection for sessions, repositories, and the auth gate.

The verified identity is returned from ``require_auth`` and received by the
route as an ordinary parameter; nothing is stored on global or request
state.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.database import get_session_factory
from trade_school_api.core.errors import AuthError
from trade_school_api.core.security import TokenVerificationError, verify_token
from trade_school_api.repositories.student_repository import StudentRepository
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository

bearer_scheme = HTTPBearer(auto_error=False, description="JWT obtained from POST /auth/login")


@dataclass(frozen=True)
class IdentityClaim:
    """Trusted identity decoded from a valid bearer token."""

    subject_id: int
    username: str


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_school_repository() -> TradeSchoolRepository:
    """Return a trade school repository bound to the process session factory."""
    return TradeSchoolRepository(get_session_factory())


def get_student_repository() -> StudentRepository:
    """Return a student repository bound to the process session factory."""
    return StudentRepository(get_session_factory())


def identity_from_token(token: str | None, settings: Settings) -> IdentityClaim:
    """Verify a raw token and extract the identity claim.

    Raises:
        TokenVerificationError: If the token is absent, expired or invalid.
    """
    payload = verify_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    try:
        subject_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise TokenVerificationError("invalid", "Token subject is not a user id") from exc
    return IdentityClaim(subject_id=subject_id, username=str(payload["username"]))


async def require_auth(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityClaim:
    """Reject the request unless it carries a valid bearer token.

    Returns:
        The caller's identity.

    Raises:
        AuthError: With the verifier's failure reason (missing/invalid/expired).
    """
    token = credentials.credentials if credentials is not None else None
    try:
        return identity_from_token(token, settings)
    except TokenVerificationError as exc:
        raise AuthError(exc.reason) from exc


async def optional_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> IdentityClaim | None:
    """Return the caller's identity if a valid token is present, else None.

    Used where an invalid credential is not an error (logout).
    """
    if credentials is None:
        return None
    try:
        return identity_from_token(credentials.credentials, settings)
    except TokenVerificationError:
        return None
