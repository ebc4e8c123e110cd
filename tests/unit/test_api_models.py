"""
Unit tests for API request/response models.

Tests Pydantic model validation for the identity and profile endpoints.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from onboard.api.models import (
    RegisterRequest,
    StudentProfileRequest,
    StudentProfileResponse,
    VerifyRequest,
)
from onboard.domain.ports import StudentProfile

VALID_PROFILE = {
    "fullName": "Ada Lovelace",
    "email": "Ada@Example.com",
    "dateOfBirth": "2001-12-10",
    "address": "12 St James's Square, London",
    "educationBackground": "A-levels, Mathematics",
}


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_email_and_password(self) -> None:
        request = RegisterRequest(email="user@example.com", password="p")
        assert request.email == "user@example.com"
        assert request.phone is None

    def test_phone_only(self) -> None:
        request = RegisterRequest(phone="555-0100", password="p")
        assert request.email is None
        assert request.phone == "555-0100"

    def test_neither_identifier_is_shape_valid(self) -> None:
        """The email-or-phone rule belongs to the service, not the model."""
        request = RegisterRequest(password="p")
        assert request.email is None
        assert request.phone is None

    def test_empty_strings_become_none(self) -> None:
        request = RegisterRequest.model_validate({"email": "", "phone": "  ", "password": "p"})
        assert request.email is None
        assert request.phone is None

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(email="not-an-email", password="p")
        assert "email" in str(exc_info.value)

    def test_display_name_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(email="Ada <a@x.com>", password="p")
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_missing_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="user@example.com")  # type: ignore[call-arg]

    def test_empty_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="user@example.com", password="")

    def test_password_over_72_bytes_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(email="user@example.com", password="é" * 37)
        assert "72 bytes" in str(exc_info.value)


class TestVerifyRequest:
    """Tests for VerifyRequest model."""

    def test_camel_case_field(self) -> None:
        request = VerifyRequest.model_validate({"emailOrPhone": "a@x.com"})
        assert request.email_or_phone == "a@x.com"
        assert request.code is None

    def test_snake_case_field_accepted(self) -> None:
        request = VerifyRequest.model_validate({"email_or_phone": "555", "code": "123456"})
        assert request.email_or_phone == "555"
        assert request.code == "123456"

    def test_missing_identifier_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VerifyRequest.model_validate({})


class TestStudentProfileRequest:
    """Tests for StudentProfileRequest model."""

    def test_valid_profile(self) -> None:
        request = StudentProfileRequest.model_validate(VALID_PROFILE)
        assert request.full_name == "Ada Lovelace"
        assert request.date_of_birth == date(2001, 12, 10)

    def test_email_kept_verbatim(self) -> None:
        request = StudentProfileRequest.model_validate(VALID_PROFILE)
        assert request.email == "Ada@Example.com"
        assert request.to_domain().email == "Ada@Example.com"

    @pytest.mark.parametrize(
        "field", ["fullName", "email", "dateOfBirth", "address", "educationBackground"]
    )
    def test_each_field_required(self, field: str) -> None:
        data = {k: v for k, v in VALID_PROFILE.items() if k != field}
        with pytest.raises(ValidationError) as exc_info:
            StudentProfileRequest.model_validate(data)
        assert exc_info.value.errors()[0]["loc"] == (field,)

    @pytest.mark.parametrize(
        ("field", "limit"), [("fullName", 100), ("address", 300), ("educationBackground", 200)]
    )
    def test_length_limits(self, field: str, limit: int) -> None:
        StudentProfileRequest.model_validate({**VALID_PROFILE, field: "x" * limit})
        with pytest.raises(ValidationError):
            StudentProfileRequest.model_validate({**VALID_PROFILE, field: "x" * (limit + 1)})

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StudentProfileRequest.model_validate({**VALID_PROFILE, "fullName": "   "})

    def test_malformed_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            StudentProfileRequest.model_validate({**VALID_PROFILE, "email": "ada-at-example"})
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_display_name_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            StudentProfileRequest.model_validate(
                {**VALID_PROFILE, "email": "Ada Lovelace <ada@example.com>"}
            )
        assert exc_info.value.errors()[0]["loc"] == ("email",)

    def test_malformed_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StudentProfileRequest.model_validate({**VALID_PROFILE, "dateOfBirth": "10/12/2001"})

    def test_future_date_of_birth_rejected(self) -> None:
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        with pytest.raises(ValidationError):
            StudentProfileRequest.model_validate({**VALID_PROFILE, "dateOfBirth": tomorrow})


class TestStudentProfileResponse:
    """Tests for StudentProfileResponse serialization."""

    def test_serializes_camel_case(self) -> None:
        profile = StudentProfile(
            id=7,
            full_name="Ada Lovelace",
            email="ada@example.com",
            date_of_birth=date(2001, 12, 10),
            address="London",
            education_background="A-levels",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

        data = StudentProfileResponse.from_domain(profile).model_dump(mode="json", by_alias=True)

        assert data["id"] == 7
        assert data["fullName"] == "Ada Lovelace"
        assert data["dateOfBirth"] == "2001-12-10"
        assert data["educationBackground"] == "A-levels"
        assert data["createdAt"].startswith("2026-01-01T00:00:00")
