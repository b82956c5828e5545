"""Datastore access for trade schools."""

import uuid

from sqlalchemy import select, text

from trade_school_api.models.trade_school import TradeSchool
from trade_school_api.repositories.base import SqlRepository


class TradeSchoolRepository(SqlRepository[TradeSchool]):
    """Repository for the ``trade_schools`` table."""

    model = TradeSchool

    async def find_by_uuid(self, school_uuid: uuid.UUID) -> TradeSchool | None:
        """Look up a school by its public UUID."""
        async with self._session_factory() as session:
            result = await session.execute(select(TradeSchool).where(TradeSchool.uuid == school_uuid))
            return result.scalar_one_or_none()

    async def find_all_programs(self) -> list[list[str]]:
        """Return the ``programs`` array of every school (one list per school)."""
        stmt = select(TradeSchool.programs)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [list(programs or []) for programs in result.scalars().all()]

    async def ping(self) -> None:
        """Issue a trivial query; raises if the database is unreachable."""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))
