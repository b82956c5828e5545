"""Async database engine and session factory lifecycle.

The engine is created once per process in the application lifespan (or by a
CLI command) and disposed on shutdown.  Repositories receive the session
factory and open one short-lived session per datastore call, which lets the
pagination engine run its count and data reads on separate connections.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory.

    Raises:
        RuntimeError: If ``init_engine`` has not been called.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def init_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create the async engine and its session factory.

    Args:
        database_url: PostgreSQL async connection string.
        **kwargs: Extra keyword arguments for ``create_async_engine``.

    Returns:
        The created async engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    kwargs.setdefault("pool_size", 10)
    kwargs.setdefault("max_overflow", 5)
    kwargs.setdefault("pool_pre_ping", True)
    _engine = create_async_engine(database_url, **kwargs)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Dispose of the engine and release pooled connections."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
