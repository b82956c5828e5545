"""Generic async repository over one ORM model.

Each method opens its own short-lived session from the factory, so two
reads issued concurrently (the count and data halves of a page) never share
a connection.  Updates and deletes of a missing key raise
``RecordNotFoundError`` rather than returning a sentinel; translating that
signal is the service layer's job.
"""

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trade_school_api.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class RecordNotFoundError(LookupError):
    """The targeted record does not exist."""

    def __init__(self, model_name: str, key: Any) -> None:
        self.model_name = model_name
        self.key = key
        super().__init__(f"{model_name} {key} not found")


class SqlRepository(Generic[ModelT]):
    """CRUD and counting for a single mapped model."""

    model: ClassVar[type[Base]]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_many(
        self,
        *,
        where: Sequence[ColumnElement[bool]] = (),
        order_by: Sequence[Any] = (),
        skip: int = 0,
        take: int | None = None,
    ) -> list[ModelT]:
        """Return matching rows in the given order, sliced by skip/take."""
        stmt = select(self.model).where(*where).order_by(*order_by).offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def count(self, *, where: Sequence[ColumnElement[bool]] = ()) -> int:
        """Count rows matching all predicates."""
        stmt = select(func.count()).select_from(self.model).where(*where)
        async with self._session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    async def find_unique(self, key: Any) -> ModelT | None:
        """Look up one row by primary key."""
        async with self._session_factory() as session:
            return await session.get(self.model, key)

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        """Insert a row and return it with server defaults loaded."""
        record = self.model(**data)
        async with self._session_factory() as session:
            session.add(record)
            await session.commit()
            await session.refresh(record)
        return record

    async def update(self, key: Any, data: Mapping[str, Any]) -> ModelT:
        """Apply ``data`` to the row with primary key ``key``.

        Raises:
            RecordNotFoundError: If no such row exists.
        """
        async with self._session_factory() as session:
            record = await session.get(self.model, key)
            if record is None:
                raise RecordNotFoundError(self.model.__name__, key)
            for field_name, value in data.items():
                setattr(record, field_name, value)
            await session.commit()
            await session.refresh(record)
            return record

    async def delete(self, key: Any) -> None:
        """Delete the row with primary key ``key``.

        Raises:
            RecordNotFoundError: If no such row exists.
        """
        async with self._session_factory() as session:
            record = await session.get(self.model, key)
            if record is None:
                raise RecordNotFoundError(self.model.__name__, key)
            await session.delete(record)
            await session.commit()
