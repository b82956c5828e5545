"""Authentication request/response schemas."""

from typing import Annotated

from pydantic import Field, StringConstraints

from trade_school_api.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Login request with username and password."""

    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    password: str = Field(min_length=1)


class LoginUser(CamelModel):
    """Public identity of the logged-in user."""

    id: int = Field(gt=0)
    username: str


class LoginResponse(CamelModel):
    """Bearer token plus the identity it was issued for."""

    token: str
    user: LoginUser


class LogoutResponse(CamelModel):
    """Logout outcome; logout never fails."""

    message: str
    logged_out: bool
