"""Student model: a person enrolled at a trade school."""

import enum
import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trade_school_api.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from trade_school_api.models.trade_school import TradeSchool


class EnrollmentStatus(enum.StrEnum):
    """Lifecycle states of a student's enrollment."""

    ENROLLED = "enrolled"
    GRADUATED = "graduated"
    WITHDRAWN = "withdrawn"
    SUSPENDED = "suspended"


class Student(Base, UUIDMixin, TimestampMixin):
    """A student enrolled in one program at one school."""

    __tablename__ = "students"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    enrolled_program: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=EnrollmentStatus.ENROLLED.value,
        server_default=EnrollmentStatus.ENROLLED.value,
    )
    enrollment_date: Mapped[date] = mapped_column(Date, nullable=False, server_default=func.current_date())
    school_uuid: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("trade_schools.uuid", ondelete="CASCADE"),
        nullable=False,
    )

    school: Mapped["TradeSchool"] = relationship(back_populates="students", lazy="noload")  # noqa: F821

    __table_args__ = (
        Index("ix_students_school_uuid", "school_uuid"),
        Index("ix_students_last_first", "last_name", "first_name"),
        Index("ix_students_status", "status"),
    )
