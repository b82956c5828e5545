"""Authentication API endpoints.

POST /auth/login, POST /auth/logout.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.dependencies import IdentityClaim, get_async_session, optional_identity
from trade_school_api.core.errors import AuthError
from trade_school_api.core.validation import conform_response
from trade_school_api.schemas.auth import LoginRequest, LoginResponse, LogoutResponse
from trade_school_api.schemas.common import ErrorEnvelope
from trade_school_api.services import auth_service

router = APIRouter(tags=["auth"])


@router.post(
    "/auth/login",
    responses={200: {"model": LoginResponse}, 400: {"model": ErrorEnvelope}, 401: {"model": ErrorEnvelope}},
)
async def login(
    body: LoginRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Authenticate with username and password and return a JWT."""
    user = await auth_service.authenticate_user(session, body.username, body.password)
    if user is None:
        raise AuthError("invalid", "Invalid username or password")
    return conform_response(LoginResponse, auth_service.login_payload(user, settings))


@router.post("/auth/logout", responses={200: {"model": LogoutResponse}})
async def logout(
    identity: Annotated[IdentityClaim | None, Depends(optional_identity)],
) -> dict:
    """Log out. Always succeeds; a token, if sent, is only used to name the user.

    Tokens are stateless, so the client discards its copy.
    """
    if identity is not None:
        message = f"Logged out successfully. User: {identity.username}"
    else:
        message = "Logout successful. Token was not provided or already invalid."
    return conform_response(LogoutResponse, {"message": message, "loggedOut": True})
