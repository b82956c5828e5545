"""Common Pydantic v2 schemas shared across the API.

Provides the camelCase base model, pagination, and the error envelope.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trade_school_api.core.pagination import Page


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys; accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationQuery(CamelModel):
    """Query parameters for paginated endpoints.

    Values are only coerced to integers here; range correction happens in
    the pagination engine, which clamps instead of rejecting.
    """

    page: int = Field(default=1, description="Page number (1-based)")
    limit: int | None = Field(default=None, description="Records per page (clamped to the configured maximum)")


class PaginationMeta(CamelModel):
    """Pagination metadata included in paginated responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    total: int = Field(ge=0, description="Total number of matching records")
    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, description="Records per page")
    last_page: int = Field(ge=0, description="Number of the last page (0 when empty)")
    has_next_page: bool
    has_previous_page: bool


class ValidationErrorDetail(CamelModel):
    """One field-level validation failure."""

    field: str = Field(description="Dotted path of the offending field, or 'root'")
    message: str
    code: str = Field(description="Machine-readable reason")
    received_value: Any = Field(default=None, description="Raw input that failed validation")


class ErrorEnvelope(CamelModel):
    """Standard error response body for every failure path."""

    status_code: int
    error: str = Field(description="Error category label")
    message: str = Field(description="Human-readable error message")
    details: list[ValidationErrorDetail] | str | None = Field(
        default=None,
        description="Field errors for validation failures; stack trace outside production",
    )


class NotFoundResponse(BaseModel):
    """Minimal body returned when a referenced record does not exist."""

    error: str


def serialize_page(page: Page[Any], item_schema: type[BaseModel]) -> dict[str, Any]:
    """Render a Page of ORM objects as a ``{data, meta}`` JSON-ready dict."""
    return {
        "data": [item_schema.model_validate(item).model_dump(mode="json", by_alias=True) for item in page.data],
        "meta": PaginationMeta.model_validate(page.meta).model_dump(mode="json", by_alias=True),
    }
