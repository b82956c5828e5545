"""Pydantic v2 schemas for student listings."""

import uuid
from datetime import date

from pydantic import AliasChoices, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from trade_school_api.models.student import EnrollmentStatus
from trade_school_api.schemas.common import CamelModel, PaginationMeta, PaginationQuery


class StudentListQuery(PaginationQuery):
    """Filters and paging for GET /students."""

    enrolled_program: str | None = Field(
        default=None,
        max_length=255,
        description="Case-insensitive substring of the enrolled program",
    )
    status: EnrollmentStatus | None = Field(default=None, description="Exact enrollment status")


class StudentResponse(CamelModel):
    """A student as returned by list endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    email: EmailStr
    enrolled_program: str
    status: EnrollmentStatus
    enrollment_date: date
    school_id: uuid.UUID = Field(
        validation_alias=AliasChoices("school_uuid", "school_id", "schoolId"),
        serialization_alias="schoolId",
        description="UUID of the school the student is enrolled at",
    )


class PaginatedStudentResponse(CamelModel):
    """One page of students."""

    data: list[StudentResponse]
    meta: PaginationMeta
