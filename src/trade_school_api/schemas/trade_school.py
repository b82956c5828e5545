"""Pydantic v2 schemas for trade school operations."""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import ConfigDict, Field, HttpUrl, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

from trade_school_api.schemas.common import CamelModel, PaginationMeta, PaginationQuery

ProgramName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SchoolListQuery(PaginationQuery):
    """Filters and paging for GET /schools."""

    program: str | None = Field(default=None, description="Exact program name the school must offer")
    location: str | None = Field(default=None, description="Case-insensitive substring of the location")


class SchoolCreateRequest(CamelModel):
    """Request body for creating a trade school."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    programs: list[ProgramName] = Field(min_length=1)
    website: HttpUrl
    accredited: bool = True


class SchoolUpdateRequest(CamelModel):
    """Request body for updating a trade school.

    All fields optional, but at least one must be provided.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    programs: list[ProgramName] | None = Field(default=None, min_length=1)
    website: HttpUrl | None = None
    accredited: bool | None = None

    @model_validator(mode="after")
    def require_one_field(self) -> "SchoolUpdateRequest":
        if not self.model_fields_set:
            msg = "At least one field must be provided"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SchoolResponse(CamelModel):
    """A trade school as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    uuid: UUID
    name: str
    location: str
    programs: list[str]
    website: str
    accredited: bool
    created_at: datetime
    updated_at: datetime


class PaginatedSchoolResponse(CamelModel):
    """One page of trade schools."""

    data: list[SchoolResponse]
    meta: PaginationMeta


class ProgramsResponse(CamelModel):
    """Distinct programs offered across all schools."""

    count: int = Field(ge=0)
    programs: list[str]


class StatsResponse(CamelModel):
    """Directory-wide statistics."""

    total_schools: int = Field(ge=0)
    accredited_schools: int = Field(ge=0)
    total_programs: int = Field(ge=0)


class HealthResponse(CamelModel):
    """API and database health."""

    status: Literal["healthy", "unhealthy"]
    database: Literal["connected", "disconnected"]
    timestamp: datetime
