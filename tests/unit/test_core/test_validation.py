"""Tests for the request validation pipeline."""

import json

import pytest

from trade_school_api.core.validation import (
    RequestValidationFailed,
    build_validation_envelope,
    conform_response,
    is_missing_field,
    parse_serialized_errors,
    summarize_errors,
    to_error_entries,
    validate_part,
)
from trade_school_api.schemas.common import PaginationQuery, ValidationErrorDetail
from trade_school_api.schemas.trade_school import ProgramsResponse, SchoolCreateRequest

VALID_SCHOOL = {
    "name": "Tulsa Welding School",
    "location": "Tulsa, OK",
    "programs": ["Welding"],
    "website": "https://www.tws.edu",
}


class TestValidatePart:
    def test_coerces_query_strings(self) -> None:
        query = validate_part(PaginationQuery, {"page": "3", "limit": "20"}, part="query")
        assert query.page == 3
        assert query.limit == 20

    def test_defaults_applied(self) -> None:
        school = validate_part(SchoolCreateRequest, VALID_SCHOOL)
        assert school.accredited is True

    def test_reports_every_failing_field_in_order(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {"location": "", "website": "nope"})
        fields = [entry.field for entry in exc_info.value.entries]
        assert fields == ["name", "location", "programs", "website"]
        assert exc_info.value.part == "body"

    def test_missing_entries_have_no_received_value(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {})
        assert all(entry.code == "missing" for entry in exc_info.value.entries)
        assert all(entry.received_value is None for entry in exc_info.value.entries)

    def test_received_value_kept(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {**VALID_SCHOOL, "website": "ftp://example.com"})
        (entry,) = exc_info.value.entries
        assert entry.field == "website"
        assert entry.received_value == "ftp://example.com"

    def test_nested_field_path(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {**VALID_SCHOOL, "programs": ["Welding", ""]})
        assert exc_info.value.entries[0].field == "programs.1"

    def test_all_invalid_fields_reported_together(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {"name": "", "location": "X", "programs": [], "website": "ftp://x"})
        by_field = {entry.field: entry.code for entry in exc_info.value.entries}
        assert by_field == {"name": "string_too_short", "programs": "too_short", "website": "url_scheme"}

    def test_str_is_reparsable(self) -> None:
        with pytest.raises(RequestValidationFailed) as exc_info:
            validate_part(SchoolCreateRequest, {**VALID_SCHOOL, "name": ""})
        entries = parse_serialized_errors(str(exc_info.value))
        assert entries is not None
        assert entries[0].field == "name"
        assert entries[0].code == exc_info.value.entries[0].code


class TestSummaries:
    def test_missing_fields_listed(self) -> None:
        entries = [
            ValidationErrorDetail(field="name", message="Field required", code="missing"),
            ValidationErrorDetail(field="website", message="bad", code="url_parsing", received_value="x"),
            ValidationErrorDetail(field="location", message="null", code="string_type", received_value=None),
        ]
        assert is_missing_field(entries[2])
        assert summarize_errors(entries) == "Missing required fields: name, location"

    def test_generic_message_without_missing_fields(self) -> None:
        entries = [ValidationErrorDetail(field="page", message="bad", code="int_parsing", received_value="abc")]
        assert summarize_errors(entries) == "Invalid request data"

    def test_type_error_with_value_is_not_missing(self) -> None:
        entry = ValidationErrorDetail(field="name", message="bad", code="string_type", received_value=5)
        assert not is_missing_field(entry)

    def test_envelope_shape(self) -> None:
        entries = to_error_entries([{"type": "missing", "loc": ("body", "name"), "msg": "Field required"}])
        envelope = build_validation_envelope(entries)
        assert envelope == {
            "statusCode": 400,
            "error": "Validation Error",
            "message": "Missing required fields: name",
            "details": [{"field": "name", "message": "Field required", "code": "missing"}],
        }

    def test_root_field_for_model_level_errors(self) -> None:
        (entry,) = to_error_entries([{"type": "value_error", "loc": ("body",), "msg": "x", "input": {}}])
        assert entry.field == "root"


class TestParseSerializedErrors:
    @pytest.mark.parametrize(
        "message",
        [None, "", "boom", "[1, 2]", "[]", '{"type": "missing"}', '[{"type": "missing"'],
    )
    def test_rejects_non_error_lists(self, message: str | None) -> None:
        assert parse_serialized_errors(message) is None

    def test_accepts_code_path_message_shape(self) -> None:
        message = json.dumps([{"code": "too_small", "path": ["programs"], "message": "At least one program"}])
        (entry,) = parse_serialized_errors(message)
        assert entry.field == "programs"
        assert entry.message == "At least one program"


class TestConformResponse:
    def test_valid_payload_returned(self) -> None:
        payload = {"count": 1, "programs": ["Welding"]}
        assert conform_response(ProgramsResponse, payload) is payload

    def test_invalid_payload_still_returned(self) -> None:
        payload = {"count": "many"}
        assert conform_response(ProgramsResponse, payload) is payload
