"""Authentication and user management service.

Handles credential checks, token issuance, and user creation.
"""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trade_school_api.core.config import Settings
from trade_school_api.core.security import create_access_token, hash_password, verify_password
from trade_school_api.models.user import User


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User | None:
    """Authenticate a user by username and password.

    Unknown usernames and wrong passwords are indistinguishable to callers.

    Args:
        session: The database session.
        username: The username to authenticate.
        password: The plaintext password.

    Returns:
        The User if authentication succeeds, None otherwise.
    """
    user = await get_user_by_username(session, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info(f"Failed login attempt for '{username}'")
        return None
    return user


def login_payload(user: User, settings: Settings) -> dict:
    """Issue a token for an authenticated user.

    Args:
        user: The authenticated user.
        settings: Application settings (secret, algorithm, lifetime).

    Returns:
        Dict with ``token`` and public ``user`` identity.
    """
    token = create_access_token(
        user_id=user.id,
        username=user.username,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
    )
    return {"token": token, "user": {"id": user.id, "username": user.username}}


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    """Return the user with this username, if any."""
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, username: str, password: str) -> User:
    """Create a new user.

    Args:
        session: The database session.
        username: Unique login name.
        password: Plaintext password, stored as a bcrypt hash.

    Returns:
        The created User.

    Raises:
        ValueError: If the username already exists.
    """
    if await get_user_by_username(session, username) is not None:
        msg = f"User '{username}' already exists"
        raise ValueError(msg)

    user = User(username=username, hashed_password=hash_password(password))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info(f"Created user {user.id} ({username})")
    return user
