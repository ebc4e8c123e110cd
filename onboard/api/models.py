"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
JSON field names are camelCase; requests also accept snake_case names.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from onboard.domain.ports import NewStudentProfile, StudentProfile


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either naming."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _plain_email(value: str) -> str:
    """Validate a bare address; the `Name <addr>` form is rejected."""
    _, address = validate_email(value)
    if address.lower() != value.strip().lower():
        raise ValueError("must be a plain email address")
    return value


class RegisterRequest(CamelModel):
    """Request model for identity registration."""

    email: str | None = Field(None, max_length=254, description="Email address")
    phone: str | None = Field(None, max_length=32, description="Phone number")
    password: str = Field(..., min_length=1, description="User password")

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_is_absent(cls, value: object) -> object:
        """The intake form submits empty strings for unused fields."""
        return _blank_to_none(value)

    @field_validator("email")
    @classmethod
    def well_formed_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _plain_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        """bcrypt only considers the first 72 bytes."""
        if len(value.encode()) > 72:
            raise ValueError("must be at most 72 bytes")
        return value


class VerifyRequest(CamelModel):
    """Request model for identity verification."""

    email_or_phone: str = Field(..., min_length=1, description="Registered email or phone")
    code: str | None = Field(None, description="Verification code sent at registration")


class MessageResponse(BaseModel):
    """Response model for successful register/verify calls."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failure."""

    error: str
    errors: dict[str, list[str]]


class StudentProfileRequest(CamelModel):
    """Request model for profile intake."""

    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    date_of_birth: date
    address: str = Field(..., min_length=1, max_length=300)
    education_background: str = Field(..., min_length=1, max_length=200)

    @field_validator("full_name", "address", "education_background")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _reject_blank(value)

    @field_validator("email")
    @classmethod
    def well_formed_email(cls, value: str) -> str:
        """Validate the address but store it exactly as submitted."""
        return _plain_email(value)

    @field_validator("date_of_birth")
    @classmethod
    def not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("must not be in the future")
        return value

    def to_domain(self) -> NewStudentProfile:
        return NewStudentProfile(
            full_name=self.full_name,
            email=self.email,
            date_of_birth=self.date_of_birth,
            address=self.address,
            education_background=self.education_background,
        )


class StudentProfileResponse(CamelModel):
    """A stored student profile."""

    id: int
    full_name: str
    email: str
    date_of_birth: date
    address: str
    education_background: str
    created_at: datetime

    @classmethod
    def from_domain(cls, profile: StudentProfile) -> "StudentProfileResponse":
        return cls(
            id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            date_of_birth=profile.date_of_birth,
            address=profile.address,
            education_background=profile.education_background,
            created_at=profile.created_at,
        )
