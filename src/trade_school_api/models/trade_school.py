"""TradeSchool model: one entry in the trade school directory.

Programs are stored as a PostgreSQL text array so that "offers program X"
is a single array-containment (``@>``) predicate served by a GIN index.
"""

from typing import TYPE_CHECKING
from uuid import UUID as PyUUID
from uuid import uuid4

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trade_school_api.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from trade_school_api.models.student import Student


class TradeSchool(Base, TimestampMixin):
    """A vocational or trade school.

    Attributes:
        id: Integer primary key used by the CRUD routes.
        uuid: Stable public identifier used to relate students.
        name: School name.
        location: Free-text location (city, state, "Multiple Locations", ...).
        programs: Programs offered, at least one.
        website: School website (http or https).
        accredited: Accreditation status.
    """

    __tablename__ = "trade_schools"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[PyUUID] = mapped_column(UUID(as_uuid=True), unique=True, nullable=False, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    programs: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    website: Mapped[str] = mapped_column(String(500), nullable=False)
    accredited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    students: Mapped[list["Student"]] = relationship(  # noqa: F821
        back_populates="school",
        lazy="noload",
    )

    __table_args__ = (
        Index("ix_trade_schools_name", "name"),
        Index("ix_trade_schools_programs", "programs", postgresql_using="gin"),
    )
