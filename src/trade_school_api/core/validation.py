"""Request validation pipeline.

Schemas are plain pydantic models: each field declares its type and
constraints, and a single generic function (``validate_part``) interprets
them for any request part.  Failures are collected for every field, in
declaration order, and normalized into ``ValidationErrorDetail`` entries so
that FastAPI's own request validation, explicit ``validate_part`` calls and
stringified errors all produce the same 400 envelope.
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from fastapi.encoders import jsonable_encoder
from loguru import logger
from pydantic import BaseModel, ValidationError

from trade_school_api.schemas.common import ErrorEnvelope, ValidationErrorDetail

M = TypeVar("M", bound=BaseModel)

VALIDATION_ERROR_LABEL = "Validation Error"
GENERIC_VALIDATION_MESSAGE = "Invalid request data"
MISSING_CODE = "missing"

_REQUEST_PARTS = frozenset({"body", "query", "path", "header", "cookie"})


class RequestValidationFailed(Exception):
    """Raised when a request part does not satisfy its schema.

    ``str()`` of the exception is the JSON list of entries, so the failure
    survives being re-raised as a plain message and can be re-parsed by the
    error normalizer.
    """

    def __init__(self, entries: Sequence[ValidationErrorDetail], part: str | None = None) -> None:
        self.entries = list(entries)
        self.part = part
        super().__init__(json.dumps([e.model_dump(mode="json", exclude_none=True) for e in self.entries]))


def _field_path(error: Mapping[str, Any]) -> str:
    if "field" in error and isinstance(error["field"], str):
        return error["field"] or "root"
    loc = list(error.get("loc") or error.get("path") or ())
    if loc and loc[0] in _REQUEST_PARTS:
        loc = loc[1:]
    return ".".join(str(p) for p in loc) or "root"


def _received(error: Mapping[str, Any], code: str) -> Any:
    # For a missing field pydantic reports the enclosing object as input.
    if code == MISSING_CODE:
        return None
    raw = error.get("input", error.get("received_value", error.get("receivedValue")))
    try:
        return jsonable_encoder(raw)
    except (TypeError, ValueError):
        return repr(raw)


def to_error_entries(errors: Iterable[Mapping[str, Any]]) -> list[ValidationErrorDetail]:
    """Convert pydantic/FastAPI error dicts into validation error entries.

    Accepts the ``errors()`` list of a pydantic ``ValidationError`` or a
    FastAPI ``RequestValidationError``, as well as previously serialized
    entries (``field``/``message``/``code`` keys).

    Args:
        errors: Raw error mappings, in the order they were reported.

    Returns:
        One entry per error, order preserved.
    """
    entries = []
    for error in errors:
        code = str(error.get("type") or error.get("code") or "invalid_type")
        entries.append(
            ValidationErrorDetail(
                field=_field_path(error),
                message=str(error.get("msg") or error.get("message") or "Invalid value"),
                code=code,
                received_value=_received(error, code),
            )
        )
    return entries


def is_missing_field(entry: ValidationErrorDetail) -> bool:
    """Whether an entry reports an absent (or null) required value."""
    if entry.code == MISSING_CODE:
        return True
    return entry.code.endswith("_type") and entry.received_value is None


def summarize_errors(entries: Sequence[ValidationErrorDetail]) -> str:
    """Build the top-level message for a set of validation entries."""
    missing = [e.field for e in entries if is_missing_field(e)]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    return GENERIC_VALIDATION_MESSAGE


def build_validation_envelope(entries: Sequence[ValidationErrorDetail]) -> dict[str, Any]:
    """Render the 400 error envelope for a list of validation entries."""
    envelope = ErrorEnvelope(
        status_code=400,
        error=VALIDATION_ERROR_LABEL,
        message=summarize_errors(entries),
        details=list(entries),
    )
    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_serialized_errors(message: str | None) -> list[ValidationErrorDetail] | None:
    """Recover validation entries from a stringified error list.

    Args:
        message: An exception message that may hold a JSON array of errors.

    Returns:
        The parsed entries, or None if the message is not such an array.
    """
    if not message:
        return None
    text = message.strip()
    if not text.startswith("[") or not ('"type":' in text or '"code":' in text):
        return None
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, list) or not payload or not all(isinstance(item, dict) for item in payload):
        return None
    return to_error_entries(payload)


def validate_part(schema: type[M], raw: Any, part: str = "body") -> M:
    """Validate and coerce one request part against its schema.

    Args:
        schema: The pydantic model declaring the part's fields.
        raw: Untrusted input (parsed JSON body, query mapping, path params).
        part: Request part name, kept on the raised error for logging.

    Returns:
        The coerced model instance (e.g. ``"3"`` becomes ``3`` for int fields).

    Raises:
        RequestValidationFailed: Listing every violated field.
    """
    try:
        return schema.model_validate(raw)
    except ValidationError as exc:
        raise RequestValidationFailed(to_error_entries(exc.errors(include_url=False)), part=part) from exc


def conform_response(schema: type[BaseModel], payload: dict[str, Any]) -> dict[str, Any]:
    """Check an outbound payload against its response schema.

    A mismatch is logged and otherwise ignored: the payload is always
    returned unmodified.
    """
    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        logger.warning(f"Response validation error for {schema.__name__}: {exc.errors(include_url=False)}")
    return payload
