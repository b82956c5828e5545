"""Tests for the auth gate dependencies."""

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from trade_school_api.core.config import Settings
from trade_school_api.core.dependencies import IdentityClaim, optional_identity, require_auth
from trade_school_api.core.errors import AuthError
from trade_school_api.core.security import create_access_token


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestRequireAuth:
    """Tests for require_auth."""

    async def test_valid_token_yields_identity(self, settings: Settings, auth_token: str) -> None:
        identity = await require_auth(_bearer(auth_token), settings)
        assert identity == IdentityClaim(subject_id=1, username="admin")

    async def test_no_credentials(self, settings: Settings) -> None:
        with pytest.raises(AuthError) as exc_info:
            await require_auth(None, settings)
        assert exc_info.value.reason == "missing"
        assert exc_info.value.message == "Authentication token required. Please login first."

    async def test_garbage_token(self, settings: Settings) -> None:
        with pytest.raises(AuthError) as exc_info:
            await require_auth(_bearer("garbage"), settings)
        assert exc_info.value.reason == "invalid"
        assert exc_info.value.message == "Invalid or expired token. Please login again."

    async def test_expired_token(self, settings: Settings) -> None:
        token = create_access_token(1, "admin", settings.jwt_secret_key, expires_minutes=-5)
        with pytest.raises(AuthError) as exc_info:
            await require_auth(_bearer(token), settings)
        assert exc_info.value.reason == "expired"

    async def test_non_numeric_subject(self, settings: Settings) -> None:
        token = pyjwt.encode(
            {"sub": "abc", "username": "admin", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            settings.jwt_secret_key,
        )
        with pytest.raises(AuthError) as exc_info:
            await require_auth(_bearer(token), settings)
        assert exc_info.value.reason == "invalid"


class TestOptionalIdentity:
    """Tests for optional_identity."""

    async def test_absent(self, settings: Settings) -> None:
        assert await optional_identity(None, settings) is None

    async def test_invalid_is_not_an_error(self, settings: Settings) -> None:
        assert await optional_identity(_bearer("garbage"), settings) is None

    async def test_valid(self, settings: Settings, auth_token: str) -> None:
        identity = await optional_identity(_bearer(auth_token), settings)
        assert identity is not None
        assert identity.username == "admin"
