"""Tests for trade school, student, and auth schemas."""

import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from trade_school_api.schemas.auth import LoginRequest, LogoutResponse
from trade_school_api.schemas.student import StudentListQuery, StudentResponse
from trade_school_api.schemas.trade_school import SchoolCreateRequest, SchoolUpdateRequest, StatsResponse


class TestSchoolCreateRequest:
    def test_accredited_defaults_true(self) -> None:
        req = SchoolCreateRequest(
            name="Lincoln Tech",
            location="Multiple Locations",
            programs=["HVAC"],
            website="https://www.lincolntech.edu",
        )
        assert req.accredited is True

    def test_programs_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            SchoolCreateRequest(name="A", location="B", programs=[], website="https://a.edu")

    def test_program_names_trimmed(self) -> None:
        req = SchoolCreateRequest(name="A", location="B", programs=["  CDL Training "], website="https://a.edu")
        assert req.programs == ["CDL Training"]

    def test_name_length_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SchoolCreateRequest(name="x" * 256, location="B", programs=["HVAC"], website="https://a.edu")

    def test_non_http_website_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SchoolCreateRequest(name="A", location="B", programs=["HVAC"], website="mailto:info@a.edu")

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SchoolCreateRequest.model_validate(
                {"name": "A", "location": "B", "programs": ["HVAC"], "website": "https://a.edu", "rating": 5}
            )


class TestSchoolUpdateRequest:
    def test_requires_at_least_one_field(self) -> None:
        with pytest.raises(ValidationError, match="At least one field must be provided"):
            SchoolUpdateRequest()

    def test_single_field(self) -> None:
        req = SchoolUpdateRequest(accredited=False)
        assert req.model_dump(exclude_unset=True) == {"accredited": False}

    def test_empty_programs_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SchoolUpdateRequest(programs=[])


class TestStudentSchemas:
    def test_query_uses_camel_case_names(self) -> None:
        query = StudentListQuery.model_validate({"enrolledProgram": "weld", "status": "graduated", "page": "2"})
        assert query.enrolled_program == "weld"
        assert query.status == "graduated"
        assert query.page == 2

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StudentListQuery.model_validate({"status": "expelled"})

    def test_response_exposes_school_id(self) -> None:
        school_uuid = uuid.uuid4()
        student = StudentResponse.model_validate(
            {
                "id": uuid.uuid4(),
                "first_name": "Grace",
                "last_name": "Hopper",
                "email": "grace@example.com",
                "enrolled_program": "CNC Machining",
                "status": "enrolled",
                "enrollment_date": date(2024, 1, 15),
                "school_uuid": school_uuid,
            }
        )
        dumped = student.model_dump(mode="json", by_alias=True)
        assert dumped["schoolId"] == str(school_uuid)
        assert dumped["firstName"] == "Grace"
        assert dumped["enrollmentDate"] == "2024-01-15"


class TestAuthSchemas:
    def test_username_trimmed(self) -> None:
        assert LoginRequest(username="  admin ", password="pw").username == "admin"

    @pytest.mark.parametrize("payload", [{"username": "   ", "password": "pw"}, {"username": "admin", "password": ""}])
    def test_blank_credentials_rejected(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            LoginRequest.model_validate(payload)

    def test_logout_serialised_in_camel_case(self) -> None:
        body = LogoutResponse(message="bye", logged_out=True).model_dump(by_alias=True)
        assert body == {"message": "bye", "loggedOut": True}

    def test_stats_serialised_in_camel_case(self) -> None:
        body = StatsResponse(total_schools=3, accredited_schools=2, total_programs=9).model_dump(by_alias=True)
        assert body == {"totalSchools": 3, "accreditedSchools": 2, "totalPrograms": 9}
